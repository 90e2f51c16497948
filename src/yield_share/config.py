"""Configuration for the ledger, the simulated pool and the demo run."""

from __future__ import annotations

import copy
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from .conversion import Rounding
from .core import DEFAULT_DECIMALS, DUST_DIVISOR

logger = logging.getLogger(__name__)


def default_dust_threshold(decimals: int) -> int:
    """One ten-thousandth of a whole asset unit, in base units."""

    return 10**decimals // DUST_DIVISOR


@dataclass(frozen=True)
class LedgerConfig:
    """Tunables of :class:`~yield_share.ledger.YieldShareLedger`.

    Attributes
    ----------
    dust_threshold:
        Absolute buffer in asset base units added to principal before the
        claimable share delta is computed.
    rounding:
        Rounding applied when converting principal plus dust back into the
        shares retained for the donator.
    """

    dust_threshold: int = default_dust_threshold(DEFAULT_DECIMALS)
    rounding: Rounding = Rounding.DOWN

    def __post_init__(self) -> None:
        if self.dust_threshold < 0:
            raise ValueError(f"dust_threshold must be non-negative, got {self.dust_threshold}")

    @classmethod
    def from_mapping(cls, raw: dict[str, Any], *, decimals: int = DEFAULT_DECIMALS) -> "LedgerConfig":
        dust = raw.get("dust_threshold")
        return cls(
            dust_threshold=int(dust) if dust is not None else default_dust_threshold(decimals),
            rounding=Rounding(str(raw.get("rounding", Rounding.DOWN.value)).lower()),
        )


_DEFAULTS: dict[str, Any] = {
    "ledger": {"dust_threshold": None, "rounding": "down"},
    "pool": {"decimals": DEFAULT_DECIMALS, "initial_rate": None, "symbol": "USDC"},
    "rates_csv": str(Path(__file__).resolve().parents[1] / "sample_rates.csv"),
    "scenario": {
        "donator": "0xd0na70r",
        "receiver": "0x7ece1ver",
        "amount": 1_000,  # whole asset units
        "claim_every": 7,  # claim on every n-th rate observation; 0 disables
    },
    "output": {"outdir": None, "show": True, "charts": ["timeline", "claims"]},
}


def load_config(path: str | Path | None) -> dict[str, Any]:
    """Load configuration from a TOML file and merge with defaults.

    Parameters
    ----------
    path:
        Optional path to a configuration file. When ``None`` or missing, the
        built-in defaults are used.

    Returns
    -------
    dict[str, Any]
        Configuration dictionary with file overrides and environment overrides
        (``YIELD_SHARE_DUST_THRESHOLD``, ``YIELD_SHARE_OUTDIR``,
        ``YIELD_SHARE_RATES_CSV``) applied.
    """

    cfg = copy.deepcopy(_DEFAULTS)
    cfg_path = Path(path) if path else None

    if cfg_path and cfg_path.is_file():
        with open(cfg_path, "rb") as f:
            file_cfg = tomllib.load(f)
        for k, v in file_cfg.items():
            if isinstance(v, dict) and k in cfg and isinstance(cfg[k], dict):
                cast(dict, cfg[k]).update(v)
            else:
                cfg[k] = v
    elif cfg_path:
        logger.warning("Config file not found at %s. Using defaults.", cfg_path)

    if dust_env := os.getenv("YIELD_SHARE_DUST_THRESHOLD"):
        try:
            cfg["ledger"]["dust_threshold"] = int(dust_env)
        except ValueError:
            logger.warning("Ignoring non-integer YIELD_SHARE_DUST_THRESHOLD=%r", dust_env)
    if outdir_env := os.getenv("YIELD_SHARE_OUTDIR"):
        cfg["output"]["outdir"] = outdir_env
    if rates_env := os.getenv("YIELD_SHARE_RATES_CSV"):
        cfg["rates_csv"] = rates_env

    return cfg


def ledger_config(cfg: dict[str, Any]) -> LedgerConfig:
    """Build a :class:`LedgerConfig` from a loaded configuration dictionary."""

    decimals = int(cfg.get("pool", {}).get("decimals", DEFAULT_DECIMALS))
    return LedgerConfig.from_mapping(cfg.get("ledger", {}), decimals=decimals)


__all__ = ["LedgerConfig", "default_dust_threshold", "load_config", "ledger_config"]
