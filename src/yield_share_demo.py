from __future__ import annotations

import logging
import os
import sys
import warnings
from pathlib import Path

from yield_share import (
    ConstantGrowthSource,
    RateScheduleCSVSource,
    Visualizer,
    ledger_config,
    load_config,
    load_schedule,
    open_ledger,
    simulate,
)
from yield_share.reporting import ledger_report, summarise_claims, timeline_report


def main() -> None:
    """Run the demo using configuration from file or environment variables."""
    logging.basicConfig(level=os.getenv("YIELD_SHARE_LOG_LEVEL", "INFO"))
    cfg_file = os.getenv("YIELD_SHARE_CONFIG") or (sys.argv[1] if len(sys.argv) > 1 else None)
    cfg = load_config(cfg_file)

    pool_cfg = cfg.get("pool", {})
    decimals = int(pool_cfg.get("decimals", 6))
    initial_rate = pool_cfg.get("initial_rate")
    initial_rate = int(initial_rate) if initial_rate else 10**decimals

    # Load rate schedule
    sources = []
    if rates_csv := cfg.get("rates_csv"):
        sources.append(RateScheduleCSVSource(str(rates_csv)))
    schedule = load_schedule(sources)
    if not schedule:
        warnings.warn(
            "No rate observations loaded; falling back to 5 bps/day synthetic growth.",
            stacklevel=2,
        )
        schedule = ConstantGrowthSource(initial_rate, bps_per_period=5, periods=30).fetch()

    scenario = cfg.get("scenario", {})
    amount = int(scenario.get("amount", 1_000)) * 10**decimals
    asset, pool, ledger = open_ledger(
        decimals=decimals,
        initial_rate=initial_rate,
        config=ledger_config(cfg),
        symbol=str(pool_cfg.get("symbol", "USDC")),
    )
    result = simulate(
        ledger,
        pool,
        schedule,
        donator=str(scenario.get("donator")),
        receiver=str(scenario.get("receiver")),
        amount=amount,
        claim_every=int(scenario.get("claim_every", 1)),
    )

    scale = 10**decimals
    print(f"Observations replayed: {len(result.timeline)}")
    print(f"Yield claimed by receiver: {result.total_claimed / scale:,.6f} {asset.symbol}")
    if result.returned_at_stop is not None:
        print(f"Returned to donator at stop: {result.returned_at_stop / scale:,.6f} {asset.symbol}")
    else:
        print(f"Position not unwound: {result.stop_error}")

    # Outputs
    out = cfg.get("output", {})
    outdir = Path(out.get("outdir") or "") if out.get("outdir") else None
    show = bool(out.get("show", True)) if not outdir else False
    charts = out.get("charts", [])

    if outdir:
        ledger_report(ledger, outdir)
        timeline_report(result, outdir)

    if "timeline" in charts:
        Visualizer.position_timeline(
            result.timeline,
            decimals=decimals,
            save_path=str(outdir / "position_timeline.png") if outdir else None,
            show=show,
        )
    if "claims" in charts:
        Visualizer.bar_claims(
            summarise_claims(ledger.events),
            decimals=decimals,
            save_path=str(outdir / "claims_by_receiver.png") if outdir else None,
            show=show,
        )


if __name__ == "__main__":
    main()
