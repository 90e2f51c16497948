"""Matplotlib-based chart helpers for YieldShare."""

from __future__ import annotations

import pandas as pd


class Visualizer:
    """Collection of static helpers that turn ledger outputs into charts."""

    @staticmethod
    def _plt():
        try:
            import matplotlib.pyplot as plt
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(
                "matplotlib is required for visualization. Install via pip."
            ) from exc
        return plt

    @staticmethod
    def bar_claims(
        df: pd.DataFrame,
        title: str = "Claimed yield per receiver",
        x_col: str = "receiver",
        y_col: str = "total_claimed",
        *,
        decimals: int = 0,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Bar chart of claim totals, scaled from base units to whole units."""
        if df.empty:
            return
        plt = Visualizer._plt()
        scale = 10**decimals
        plt.figure(figsize=(10, 6))
        plt.bar(df[x_col], [float(v) / scale for v in df[y_col]])
        plt.title(title)
        plt.ylabel("Claimed (asset units)")
        plt.xticks(rotation=45, ha="right")
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()

    @staticmethod
    def position_timeline(
        timeline: pd.DataFrame,
        title: str = "Principal vs. share value",
        *,
        decimals: int = 0,
        save_path: str | None = None,
        show: bool = True,
    ) -> pd.DataFrame:
        """Plot principal, share value and cumulative claimed yield over time.

        Returns the scaled frame that was plotted.
        """
        cols = [c for c in ("principal", "share_value", "cumulative_claimed") if c in timeline]
        if timeline.empty or not cols:
            return pd.DataFrame()
        scaled = timeline.loc[:, cols].astype(float) / 10**decimals
        Visualizer.line_chart(
            scaled,
            title=title,
            ylabel="Asset units",
            save_path=save_path,
            show=show,
        )
        return scaled

    @staticmethod
    def line_chart(
        data: pd.DataFrame | pd.Series,
        *,
        title: str,
        ylabel: str,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Plot time-series data as a line chart."""
        df = data.to_frame() if isinstance(data, pd.Series) else data
        if df.empty:
            return
        plt = Visualizer._plt()
        plt.figure(figsize=(10, 6))
        for col in df.columns:
            plt.plot(df.index, df[col], label=col)
        if len(df.columns) > 1:
            plt.legend()
        plt.xlabel("Date")
        plt.ylabel(ylabel)
        plt.title(title)
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()


__all__ = ["Visualizer"]
