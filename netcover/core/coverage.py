"""Device-to-station assignment."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Sequence

import numpy as np

from .entities import Device, Station
from .geometry import distance_matrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    """The station serving one device, and the speed it gets."""

    station_index: int
    speed: int


@dataclass(frozen=True)
class CoverageIndex:
    """Bidirectional device ↔ station view of one coverage computation.

    Only assigned devices appear in :attr:`device_to_assignment`, and only
    stations serving at least one device appear in
    :attr:`station_to_devices`. Both are keyed by list position, so any
    removal from the station or device list invalidates the index.
    """

    device_to_assignment: Dict[int, Assignment] = field(default_factory=dict)
    station_to_devices: Dict[int, FrozenSet[int]] = field(default_factory=dict)

    def assignment_for(self, device_index: int) -> Optional[Assignment]:
        return self.device_to_assignment.get(device_index)

    def served_by(self, station_index: int) -> FrozenSet[int]:
        return self.station_to_devices.get(station_index, frozenset())

    @property
    def is_empty(self) -> bool:
        return not self.device_to_assignment

    def to_dict(self) -> dict:
        """JSON-friendly form (string keys, sorted device lists)."""
        return {
            "devices": {
                str(i): {"station_index": a.station_index, "speed": a.speed}
                for i, a in sorted(self.device_to_assignment.items())
            },
            "stations": {
                str(j): sorted(devs) for j, devs in sorted(self.station_to_devices.items())
            },
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def connection_speed(distance: float, reach: float) -> Optional[int]:
    """Speed a station of *reach* offers at *distance*, or ``None`` if out of range.

    speed = round((reach - distance)²), rounding halves up. It is 0 exactly on
    the reach boundary and ``reach²`` on top of the station. A NaN distance is
    out of range, as in :func:`resolve`.
    """
    if not distance <= reach:
        return None
    return _round_half_up((reach - distance) ** 2)


def resolve(stations: Sequence[Station], devices: Sequence[Device]) -> CoverageIndex:
    """Assign every device to its fastest in-range station.

    Ties on speed go to the lowest station index. Devices with no station in
    range are left out of the result. Devices with non-finite coordinates are
    never in range.
    """
    if not stations or not devices:
        return CoverageIndex()

    dist = distance_matrix(devices, stations)
    reach = np.array([s.reach for s in stations], dtype=np.float64)[np.newaxis, :]

    in_range = dist <= reach
    # Valid speeds are >= 0, so -1 marks "no connection"
    speeds = np.where(in_range, np.floor((reach - dist) ** 2 + 0.5), -1.0)
    # argmax returns the first maximum, i.e. the lowest station index
    best = np.argmax(speeds, axis=1)
    best_speed = speeds[np.arange(len(devices)), best]

    device_to_assignment: Dict[int, Assignment] = {}
    served: Dict[int, set] = {}
    for device_index, (station_index, speed) in enumerate(zip(best, best_speed)):
        if speed < 0:
            continue
        device_to_assignment[device_index] = Assignment(int(station_index), int(speed))
        served.setdefault(int(station_index), set()).add(device_index)

    logger.debug(
        "Resolved %d/%d devices across %d stations",
        len(device_to_assignment), len(devices), len(stations),
    )
    return CoverageIndex(
        device_to_assignment=device_to_assignment,
        station_to_devices={j: frozenset(devs) for j, devs in served.items()},
    )


def coverage_stats(index: CoverageIndex, n_stations: int, n_devices: int) -> dict:
    """Return basic coverage statistics."""
    assigned = len(index.device_to_assignment)
    speeds = [a.speed for a in index.device_to_assignment.values()]
    return {
        "total_devices": n_devices,
        "assigned_devices": assigned,
        "unassigned_devices": n_devices - assigned,
        "coverage_pct": round(100.0 * assigned / n_devices, 2) if n_devices else 0.0,
        "mean_speed": round(float(np.mean(speeds)), 2) if speeds else 0.0,
        "idle_stations": n_stations - len(index.station_to_devices),
    }
