# chart adapter: draws an AnalysisReport with matplotlib and saves it to disk

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import matplotlib.pyplot as plt
from .models import AnalysisReport


@dataclass(frozen=True)
class ChartStyle:
    # colours and ranges of the classic annual temperature chart
    raw_color: str = "#3b9cd0"
    smooth_color: str = "#f29100"
    max_color: str = "#960000"
    min_color: str = "#323296"
    mean_color: str = "#960096"
    axis_color: str = "#c8c8c8"
    grid_color: str = "#e6e6e6"
    x_range: Tuple[float, float] = (0, 364)
    y_range: Tuple[float, float] = (-20, 40)
    title: str = "Mean Temperature of {city} in {year}"
    x_label: str = "Days"
    y_label: str = "°C"
    figsize: Tuple[float, float] = (10, 5)
    marker_size: float = 40


def render_chart(report: AnalysisReport, path: Path | str, style: ChartStyle = ChartStyle()) -> Path:
    # raw, smoothed and mean series plus min/max markers, written to path
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    s = report.summary
    coords = report.series.coordinates

    fig, ax = plt.subplots(figsize=style.figsize)
    try:
        ax.plot(coords, report.series.samples, color=style.raw_color, label="Temperature")
        ax.plot(
            report.smoothed.coordinates,
            report.smoothed.samples,
            color=style.smooth_color,
            label="Temperature smoothed",
        )
        ax.plot(report.mean_line.coordinates, report.mean_line.samples, color=style.mean_color, label="Mean Temperature")
        ax.scatter([coords[s.max_index]], [s.max], color=style.max_color, s=style.marker_size, zorder=3, label="Max Temperature")
        ax.scatter([coords[s.min_index]], [s.min], color=style.min_color, s=style.marker_size, zorder=3, label="Min Temperature")

        ax.set_xlim(*style.x_range)
        ax.set_ylim(*style.y_range)
        ax.set_xlabel(style.x_label)
        ax.set_ylabel(style.y_label)
        ax.set_title(style.title.format(city=report.metadata.city, year=report.metadata.year))
        ax.grid(True, color=style.grid_color)
        for spine in ax.spines.values():
            spine.set_color(style.axis_color)
        ax.legend(loc="upper right", fontsize="small")
        fig.tight_layout()
        fig.savefig(path)
    finally:
        plt.close(fig)
    return path
