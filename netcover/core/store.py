"""Copy-on-write operations over station and device tuples.

Every function returns a new tuple and leaves its input untouched. Elements
are identified by position only: :func:`remove` renumbers everything after
the removed element, so index-keyed data derived from the old tuple (a
:class:`~netcover.core.coverage.CoverageIndex`, pixel projections) must be
recomputed rather than patched.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import replace
from typing import Any, Optional, Sequence, Tuple

from .config import MAX_ALLOWED_PLOT_POINT
from .entities import E, field_names
from .errors import PreconditionError

logger = logging.getLogger(__name__)


def check_index(items: Sequence, index: int) -> None:
    """Raise :class:`PreconditionError` unless *index* addresses an element of *items*."""
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise PreconditionError(f"Index must be an integer, got {index!r}")
    if not 0 <= index < len(items):
        raise PreconditionError(f"Index {index} out of range for {len(items)} item(s)")


def validate_value(raw_value: Any, max_coord: int = MAX_ALLOWED_PLOT_POINT) -> Optional[int]:
    """Parse a form value into a coordinate, or return ``None`` if it is invalid.

    Numbers and numeric strings are accepted when they are finite, integral
    and within ``[0, max_coord]``. Booleans are rejected.
    """
    if isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, str):
        try:
            value = float(raw_value.strip())
        except ValueError:
            return None
    elif isinstance(raw_value, numbers.Real):
        value = float(raw_value)
    else:
        return None

    if not math.isfinite(value) or value != math.floor(value):
        return None
    if not 0 <= value <= max_coord:
        return None
    return int(value)


def add(items: Sequence[E], default_item: E) -> Tuple[E, ...]:
    """Append *default_item*."""
    return (*items, default_item)


def remove(items: Sequence[E], index: int) -> Tuple[E, ...]:
    """Drop the element at *index*; later elements shift down by one.

    Raises
    ------
    PreconditionError
        If *index* is outside ``[0, len(items))``.
    """
    check_index(items, index)
    return tuple(items[:index]) + tuple(items[index + 1:])


def update_field(
    items: Sequence[E],
    index: int,
    field: str,
    raw_value: Any,
    max_coord: int = MAX_ALLOWED_PLOT_POINT,
) -> Tuple[E, ...]:
    """Set one field of one element.

    An invalid *raw_value* (see :func:`validate_value`) is rejected silently:
    *items* is returned as is. Otherwise a new tuple is returned in which only
    the element at *index* is replaced; every other element is the same
    object as before.

    Raises
    ------
    PreconditionError
        If *index* is out of range or the element has no field *field*.
    """
    check_index(items, index)
    current = items[index]
    if field not in field_names(type(current)):
        raise PreconditionError(f"{type(current).__name__} has no field {field!r}")

    value = validate_value(raw_value, max_coord)
    if value is None:
        logger.debug("Rejected %s[%d].%s = %r", type(current).__name__, index, field, raw_value)
        return items if isinstance(items, tuple) else tuple(items)

    changed = replace(current, **{field: value})
    return tuple(items[:index]) + (changed,) + tuple(items[index + 1:])
