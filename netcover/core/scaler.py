"""Map logical coordinates onto a square plot measured in pixels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .config import MARKER_DIAM_PX, MAX_ALLOWED_PLOT_POINT, MIN_PLOT_LENGTH_PT
from .entities import Device, Station
from .errors import ConfigurationError
from .geometry import Point, scale_point


@dataclass(frozen=True)
class PixelOffset:
    """Top-left offset of a marker inside the plot."""

    left_px: float
    top_px: float


def max_plot_point(
    stations: Sequence[Station],
    devices: Sequence[Device],
    min_extent: int = MIN_PLOT_LENGTH_PT,
    max_coord: int = MAX_ALLOWED_PLOT_POINT,
) -> int:
    """Largest ``x``/``y`` across all entities, floored at *min_extent*.

    Reach is not included: a ring may extend past the plot edge.

    Raises
    ------
    ConfigurationError
        If the result exceeds *max_coord*.
    """
    coords: Iterable[float] = (c for p in (*stations, *devices) for c in (p.x, p.y))
    result = max(coords, default=min_extent)
    result = max(result, min_extent)
    if result > max_coord:
        raise ConfigurationError(
            f"Maximum point is {max_coord} but {result} was provided"
        )
    return result


def project(
    point: Point,
    max_point: float,
    plot_length_px: Optional[float],
    marker_diameter_px: float = MARKER_DIAM_PX,
) -> Optional[PixelOffset]:
    """Pixel offset that centres a marker of *marker_diameter_px* on *point*.

    Returns ``None`` while the plot has not been measured yet.
    """
    if not plot_length_px:
        return None
    radius = marker_diameter_px / 2
    return PixelOffset(
        left_px=scale_point(point.x, max_point) * plot_length_px - radius,
        top_px=scale_point(point.y, max_point) * plot_length_px - radius,
    )


def ring_radius_px(
    reach: float, max_point: float, plot_length_px: Optional[float]
) -> Optional[float]:
    """Radius in pixels of a station's coverage ring, or ``None`` before layout."""
    if not plot_length_px:
        return None
    return scale_point(reach, max_point) * plot_length_px
