#!/usr/bin/env python3
"""
Forecast Chart Rendering

Line chart of weekly inflows, outflows, net and cumulative cash flow.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend

import matplotlib.pyplot as plt  # noqa: E402

from .aggregator import weeks_to_dataframe  # noqa: E402
from .models import ForecastWeek  # noqa: E402


@dataclass
class ChartConfig:
    """Output configuration for forecast charts."""

    figure_size: tuple[int, int] = (12, 6)
    dpi: int = 150
    output_format: str = "png"
    title: str = "Cash Flow Forecast"


class ForecastChart:
    """Renders aggregated forecast weeks to an image file."""

    def __init__(self, config: ChartConfig | None = None):
        self.config = config or ChartConfig()

    def render(self, weeks: Sequence[ForecastWeek], output_dir: Path) -> Path:
        """
        Render the chart and write it to output_dir.

        Args:
            weeks: Aggregated forecast weeks
            output_dir: Directory for the chart file (created if missing)

        Returns:
            Path to the generated chart

        Raises:
            ValueError: If there are no weeks to plot
        """
        if not weeks:
            raise ValueError("No forecast weeks to chart")

        df = weeks_to_dataframe(weeks)
        labels = [f"Week {n}" for n in df.index]

        output_dir.mkdir(parents=True, exist_ok=True)

        fig, ax = plt.subplots(figsize=self.config.figure_size)
        ax.plot(labels, df["inflows"], color="#10b981", marker="o", label="Inflows")
        ax.plot(labels, df["outflows"], color="#ef4444", marker="o", label="Outflows")
        ax.plot(labels, df["net_cash_flow"], color="#3b82f6", marker="o", linewidth=2, label="Net Cash Flow")
        ax.plot(
            labels,
            df["cumulative_cash_flow"],
            color="#8b5cf6",
            marker="o",
            linewidth=2,
            linestyle="--",
            label="Cumulative Cash Flow",
        )
        ax.axhline(y=0, color="gray", linestyle=":", linewidth=1)

        ax.set_title(self.config.title, fontsize=12, fontweight="bold")
        ax.set_ylabel("Amount", fontsize=10)
        ax.legend(loc="best", fontsize=8)
        ax.grid(True, alpha=0.3)
        ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: f"${x:,.0f}"))
        if len(labels) > 8:
            plt.setp(ax.get_xticklabels(), rotation=45, ha="right")

        fig.tight_layout()

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        output_file = output_dir / f"{timestamp}_cash_flow_forecast.{self.config.output_format}"

        fig.savefig(output_file, dpi=self.config.dpi, bbox_inches="tight")
        plt.close(fig)

        return output_file
