"""Plot bounds and marker geometry shared by the model and the renderers."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigurationError


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
MAX_ALLOWED_PLOT_POINT: int = 1000
"""Largest coordinate (and reach) any station or device may use."""

MIN_PLOT_LENGTH_PT: int = 20
"""Smallest plot extent, so a handful of points near the origin is not over-zoomed."""

MARKER_DIAM_PX: int = 16
MARKER_BORDER_PX: int = 1


@dataclass(frozen=True)
class NetworkConfig:
    """Bounds used by :class:`~netcover.core.model.NetworkModel`.

    Parameters
    ----------
    max_coord : int
        Inclusive upper bound for ``x``, ``y`` and ``reach``.
    min_plot_extent : int
        Floor applied to the derived max point.
    marker_diameter_px : int
        Rendered marker size; projections are offset by half of it.
    """

    max_coord: int = MAX_ALLOWED_PLOT_POINT
    min_plot_extent: int = MIN_PLOT_LENGTH_PT
    marker_diameter_px: int = MARKER_DIAM_PX

    def __post_init__(self) -> None:
        if self.max_coord <= 0:
            raise ConfigurationError(f"max_coord must be positive, got {self.max_coord}")
        if self.min_plot_extent <= 0:
            raise ConfigurationError(
                f"min_plot_extent must be positive, got {self.min_plot_extent}"
            )
        if self.min_plot_extent > self.max_coord:
            raise ConfigurationError(
                f"min_plot_extent ({self.min_plot_extent}) exceeds max_coord ({self.max_coord})"
            )
        if self.marker_diameter_px < 0:
            raise ConfigurationError(
                f"marker_diameter_px must be non-negative, got {self.marker_diameter_px}"
            )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "NetworkConfig":
        """Build a config from ``NETCOVER_*`` environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        return cls(
            max_coord=_int_var(env, "NETCOVER_MAX_COORD", MAX_ALLOWED_PLOT_POINT),
            min_plot_extent=_int_var(env, "NETCOVER_MIN_PLOT_EXTENT", MIN_PLOT_LENGTH_PT),
            marker_diameter_px=_int_var(env, "NETCOVER_MARKER_DIAM_PX", MARKER_DIAM_PX),
        )


def _int_var(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
