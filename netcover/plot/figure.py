"""Matplotlib rendering of stations, reach rings and device links."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Circle

from ..core.model import NetworkModel


# ------------------------------------------------------------------
# Style
# ------------------------------------------------------------------

PLOT_BGCOLOR = "#000000"
MARKER_BGCOLOR = "#b0c4de"
STATION_TXTCOLOR = "#7fffd4"
STATION_BGCOLOR = "#008000"
DEVICE_ACTIVE_BORDER_COLOR = "#ffffff"


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------

def _draw_stations(ax: plt.Axes, model: NetworkModel) -> None:  # type: ignore[name-defined]
    """Draw each station with its reach ring; idle (reach 0) stations are dimmed."""
    index = model.coverage
    for i, st in enumerate(model.stations):
        alpha = 1.0 if st.reach else 0.5
        ax.add_patch(Circle(
            (st.x, st.y), st.reach,
            facecolor=STATION_TXTCOLOR, edgecolor=STATION_TXTCOLOR,
            alpha=0.15, linewidth=1.0,
        ))
        ax.plot(
            st.x, st.y, "s", color=STATION_BGCOLOR, markersize=12, alpha=alpha,
            markeredgecolor="white" if index.served_by(i) else STATION_BGCOLOR,
        )
        ax.annotate(
            str(i + 1), (st.x, st.y),
            fontsize=8, color=STATION_TXTCOLOR, alpha=alpha,
            ha="center", va="center", fontweight="bold",
        )


def _draw_devices(ax: plt.Axes, model: NetworkModel, show_links: bool) -> None:  # type: ignore[name-defined]
    index = model.coverage
    for i, dev in enumerate(model.devices):
        assignment = index.assignment_for(i)
        if show_links and assignment is not None:
            st = model.stations[assignment.station_index]
            ax.plot([dev.x, st.x], [dev.y, st.y], linewidth=0.8, color="white", linestyle="--", alpha=0.6)
        active = bool(assignment and assignment.speed)
        ax.plot(
            dev.x, dev.y, "o", color=MARKER_BGCOLOR, markersize=10,
            markeredgecolor=DEVICE_ACTIVE_BORDER_COLOR if active else MARKER_BGCOLOR,
            markeredgewidth=2 if active else 1,
        )
        ax.annotate(str(i + 1), (dev.x, dev.y), fontsize=7, color="black", ha="center", va="center")


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def plot_network(
    model: NetworkModel,
    save_path: Optional[str | Path] = None,
    show_links: bool = True,
    figsize: Tuple[int, int] = (8, 8),
) -> plt.Figure:  # type: ignore[name-defined]
    """Square plot of the model, scaled to its current max point.

    The y axis grows downwards, matching pixel projections.
    """
    fig, ax = plt.subplots(figsize=figsize)
    ax.set_facecolor(PLOT_BGCOLOR)
    ax.set_xlim(0, model.max_point)
    ax.set_ylim(model.max_point, 0)
    ax.set_aspect("equal")

    _draw_stations(ax, model)
    _draw_devices(ax, model, show_links)

    stats = model.stats()
    ax.set_title(
        f"Coverage: {stats['assigned_devices']}/{stats['total_devices']} devices "
        f"({stats['coverage_pct']}%)"
    )
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    fig.tight_layout()
    if save_path:
        fig.savefig(str(save_path), dpi=150)
    return fig
