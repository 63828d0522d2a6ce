"""Station and Device records."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Tuple, Type, TypeVar, Union


@dataclass(frozen=True)
class Station:
    """Fixed emitter serving every device within ``reach``.

    ``reach == 0`` is valid: only a device sitting exactly on the station
    can connect, at speed 0.
    """

    x: int
    y: int
    reach: int = 0


@dataclass(frozen=True)
class Device:
    """Receiver looking for the best station in range."""

    x: int
    y: int


Entity = Union[Station, Device]
E = TypeVar("E", Station, Device)


def default_station() -> Station:
    return Station(x=0, y=0, reach=0)


def default_device() -> Device:
    return Device(x=0, y=0)


def field_names(kind: Type[Entity]) -> Tuple[str, ...]:
    """Editable field names of *kind*, in declaration order."""
    return tuple(f.name for f in fields(kind))


def coerce(kind: Type[E], item: Any) -> E:
    """Return *item* as a *kind* instance.

    Accepts an existing instance or a mapping with the right keys; extra keys
    in a mapping are ignored.
    """
    if isinstance(item, kind):
        return item
    if isinstance(item, Mapping):
        names = field_names(kind)
        missing = [n for n in names if n not in item and not (kind is Station and n == "reach")]
        if missing:
            raise ValueError(f"{kind.__name__} is missing field(s): {', '.join(missing)}")
        return kind(**{n: item[n] for n in names if n in item})
    raise TypeError(f"Cannot build {kind.__name__} from {type(item).__name__}")
