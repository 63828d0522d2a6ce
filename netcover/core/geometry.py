"""Distance and scaling helpers."""

from __future__ import annotations

import math
from typing import Protocol, Sequence

import numpy as np

from .errors import PreconditionError


class Point(Protocol):
    x: float
    y: float


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points.

    NaN and infinite coordinates propagate through the arithmetic unchanged.
    """
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)


def distance_matrix(devices: Sequence[Point], stations: Sequence[Point]) -> np.ndarray:
    """Distances from every device to every station.

    Returns an array of shape ``(len(devices), len(stations))``.
    """
    dev = np.array([(d.x, d.y) for d in devices], dtype=np.float64).reshape(-1, 2)
    sta = np.array([(s.x, s.y) for s in stations], dtype=np.float64).reshape(-1, 2)
    dx = dev[:, 0][:, np.newaxis] - sta[:, 0][np.newaxis, :]
    dy = dev[:, 1][:, np.newaxis] - sta[:, 1][np.newaxis, :]
    return np.sqrt(dx**2 + dy**2)


def scale_point(value: float, max_point: float) -> float:
    """Fraction of the plot extent covered by *value* (``value / max_point``).

    Raises
    ------
    PreconditionError
        If *max_point* is not strictly positive.
    """
    if not max_point > 0:
        raise PreconditionError(f"max_point must be positive, got {max_point}")
    return value / max_point
