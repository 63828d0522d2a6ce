"""Session object holding the current stations and devices."""

from __future__ import annotations

import logging
import math
from dataclasses import fields, replace
from typing import Any, Iterable, Mapping, Optional, Tuple

from . import store
from .config import NetworkConfig
from .coverage import CoverageIndex, coverage_stats, resolve
from .entities import Device, Station, coerce, default_device, default_station
from .errors import ConfigurationError, PreconditionError
from .scaler import PixelOffset, max_plot_point, project, ring_radius_px

logger = logging.getLogger(__name__)


class NetworkModel:
    """Stations, devices and the data derived from them.

    The station and device tuples are replaced, never mutated, on every
    change. :attr:`coverage` and :attr:`max_point` are recomputed lazily and
    cached against the identity of the tuples they were computed from.

    Parameters
    ----------
    stations, devices : iterable
        :class:`Station` / :class:`Device` instances or mappings with the
        same keys.
    config : NetworkConfig
        Coordinate bound and plot constants.

    Raises
    ------
    ConfigurationError
        If any ``x``, ``y`` or ``reach`` is not an integer in
        ``[0, config.max_coord]``.
    """

    def __init__(
        self,
        stations: Iterable[Any] = (),
        devices: Iterable[Any] = (),
        config: Optional[NetworkConfig] = None,
    ) -> None:
        self.config = config or NetworkConfig()
        self._stations: Tuple[Station, ...] = tuple(
            _load(coerce(Station, s), i, self.config.max_coord) for i, s in enumerate(stations)
        )
        self._devices: Tuple[Device, ...] = tuple(
            _load(coerce(Device, d), i, self.config.max_coord) for i, d in enumerate(devices)
        )
        self._plot_length_px: Optional[float] = None

        self._coverage_key: Optional[tuple] = None
        self._coverage: Optional[CoverageIndex] = None
        self._max_point_key: Optional[tuple] = None
        self._max_point: Optional[int] = None

        # Fail before anything is rendered
        max_point = self.max_point
        logger.info(
            "Loaded %d station(s) and %d device(s), max point %d",
            len(self._stations), len(self._devices), max_point,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], config: Optional[NetworkConfig] = None) -> "NetworkModel":
        """Build a model from ``{"stations": [...], "devices": [...]}``."""
        return cls(data.get("stations", ()), data.get("devices", ()), config=config)

    # ------------------------------------------------------------------
    # Current state
    # ------------------------------------------------------------------

    @property
    def stations(self) -> Tuple[Station, ...]:
        return self._stations

    @property
    def devices(self) -> Tuple[Device, ...]:
        return self._devices

    @property
    def plot_length_px(self) -> Optional[float]:
        return self._plot_length_px

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    @property
    def coverage(self) -> CoverageIndex:
        key = (self._stations, self._devices)
        if self._coverage is None or not _same(self._coverage_key, key):
            self._coverage = resolve(self._stations, self._devices)
            self._coverage_key = key
        return self._coverage

    @property
    def max_point(self) -> int:
        key = (self._stations, self._devices)
        if self._max_point is None or not _same(self._max_point_key, key):
            self._max_point = max_plot_point(
                self._stations,
                self._devices,
                min_extent=self.config.min_plot_extent,
                max_coord=self.config.max_coord,
            )
            self._max_point_key = key
        return self._max_point

    def station_projection(self, index: int) -> Optional[PixelOffset]:
        return self._project(self._stations, index)

    def device_projection(self, index: int) -> Optional[PixelOffset]:
        return self._project(self._devices, index)

    def station_ring_radius_px(self, index: int) -> Optional[float]:
        store.check_index(self._stations, index)
        return ring_radius_px(self._stations[index].reach, self.max_point, self._plot_length_px)

    def stats(self) -> dict:
        return coverage_stats(self.coverage, len(self._stations), len(self._devices))

    def _project(self, items: tuple, index: int) -> Optional[PixelOffset]:
        store.check_index(items, index)
        return project(
            items[index], self.max_point, self._plot_length_px,
            marker_diameter_px=self.config.marker_diameter_px,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_station(self) -> int:
        """Append a default station and return its index."""
        self._stations = store.add(self._stations, default_station())
        logger.info("Added station %d", len(self._stations) - 1)
        return len(self._stations) - 1

    def add_device(self) -> int:
        """Append a default device and return its index."""
        self._devices = store.add(self._devices, default_device())
        logger.info("Added device %d", len(self._devices) - 1)
        return len(self._devices) - 1

    def remove_station(self, index: int) -> None:
        self._stations = store.remove(self._stations, index)
        logger.info("Removed station %d", index)

    def remove_device(self, index: int) -> None:
        self._devices = store.remove(self._devices, index)
        logger.info("Removed device %d", index)

    def edit_station_field(self, index: int, field: str, value: Any) -> bool:
        """Set ``stations[index].<field>``; return ``False`` if *value* was rejected."""
        updated = store.update_field(self._stations, index, field, value, self.config.max_coord)
        accepted = updated is not self._stations
        self._stations = updated
        return accepted

    def edit_device_field(self, index: int, field: str, value: Any) -> bool:
        """Set ``devices[index].<field>``; return ``False`` if *value* was rejected."""
        updated = store.update_field(self._devices, index, field, value, self.config.max_coord)
        accepted = updated is not self._devices
        self._devices = updated
        return accepted

    def report_plot_width_px(self, px: Optional[float]) -> None:
        """Record the rendered plot's side length; ``None`` means not laid out."""
        if px is not None and not (math.isfinite(px) and px >= 0):
            raise PreconditionError(f"Plot width must be finite and non-negative, got {px}")
        self._plot_length_px = px

    # ------------------------------------------------------------------
    # Presentation view
    # ------------------------------------------------------------------

    def snapshot(self) -> dict:
        """Everything a renderer needs, as plain JSON-compatible data."""
        index = self.coverage
        stations = []
        for i, s in enumerate(self._stations):
            served = sorted(index.served_by(i))
            stations.append({
                "index": i,
                "label": i + 1,
                "x": s.x,
                "y": s.y,
                "reach": s.reach,
                "transmitting": s.reach > 0,
                "devices": served,
                "has_connections": bool(served),
                "position_px": _offset_dict(self.station_projection(i)),
                "ring_radius_px": self.station_ring_radius_px(i),
            })
        devices = []
        for i, d in enumerate(self._devices):
            assignment = index.assignment_for(i)
            devices.append({
                "index": i,
                "label": i + 1,
                "x": d.x,
                "y": d.y,
                "speed": assignment.speed if assignment else None,
                "station_index": assignment.station_index if assignment else None,
                "is_active": bool(assignment and assignment.speed),
                "position_px": _offset_dict(self.device_projection(i)),
            })
        return {
            "max_point": self.max_point,
            "max_coord": self.config.max_coord,
            "plot_length_px": self._plot_length_px,
            "stations": stations,
            "devices": devices,
            "stats": self.stats(),
        }


def _same(a: Optional[tuple], b: tuple) -> bool:
    return a is not None and all(x is y for x, y in zip(a, b))


def _load(item, index: int, max_coord: int):
    values = {}
    for f in fields(item):
        raw = getattr(item, f.name)
        value = store.validate_value(raw, max_coord)
        if value is None:
            raise ConfigurationError(
                f"{type(item).__name__} {index}: {f.name} must be an integer in "
                f"[0, {max_coord}], got {raw!r}"
            )
        values[f.name] = value
    return replace(item, **values)


def _offset_dict(offset: Optional[PixelOffset]) -> Optional[dict]:
    if offset is None:
        return None
    return {"left_px": offset.left_px, "top_px": offset.top_px}
