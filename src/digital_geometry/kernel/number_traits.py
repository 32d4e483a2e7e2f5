"""
Numeric trait registry.

Scalar types are never modified to carry their identity elements: ZERO/ONE
and conversions live in a separate registry keyed by the type itself, so
third-party numeric types can be registered after the fact.
"""

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, Optional

import numpy as np

logger = logging.getLogger(__name__)

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


@dataclass(frozen=True)
class NumberTraits:
    """
    Named constants and conversions of one scalar type.

    min_value / max_value are None for unbounded types (Python int, Fraction).
    """
    name: str
    zero: Any  # additive identity
    one: Any  # multiplicative identity
    is_signed: bool
    is_bounded: bool
    is_integer: bool
    min_value: Optional[Any] = None
    max_value: Optional[Any] = None

    def cast_to_double(self, value: Any) -> float:
        return float(value)

    def cast_to_int64(self, value: Any) -> int:
        """Convert to a Python int, checking it fits in 64 signed bits."""
        result = int(value)
        if result < INT64_MIN or result > INT64_MAX:
            raise OverflowError(f"{value!r} does not fit in int64")
        return result

    def is_even(self, value: Any) -> bool:
        if not self.is_integer:
            raise TypeError(f"parity is undefined for {self.name}")
        return int(value) % 2 == 0

    def is_odd(self, value: Any) -> bool:
        return not self.is_even(value)


_REGISTRY: Dict[type, NumberTraits] = {}


def register_number_traits(number_type: type, traits: NumberTraits) -> None:
    """Add (or replace) the traits of ``number_type``."""
    if number_type in _REGISTRY:
        logger.debug(f"Replacing NumberTraits for {number_type.__name__}")
    _REGISTRY[number_type] = traits


def has_number_traits(number_type: type) -> bool:
    return number_type in _REGISTRY


def number_traits(number_type: type) -> NumberTraits:
    """
    Look up the traits of a scalar type.

    Raises:
        KeyError: if nothing is registered for ``number_type``
    """
    try:
        return _REGISTRY[number_type]
    except KeyError:
        name = getattr(number_type, "__name__", repr(number_type))
        raise KeyError(f"No NumberTraits registered for {name}") from None


def number_type(name: str) -> type:
    """Reverse lookup of a registered type by its traits name (e.g. "int64")."""
    for registered, traits in _REGISTRY.items():
        if traits.name == name:
            return registered
    raise KeyError(f"Unknown number type name: {name!r}")


def cast_to_double(value: Any) -> float:
    """Cast ``value`` to float through the traits of its own type."""
    return number_traits(type(value)).cast_to_double(value)


def _numpy_integer_traits(np_type: type) -> NumberTraits:
    info = np.iinfo(np_type)
    return NumberTraits(
        name=np.dtype(np_type).name,
        zero=np_type(0),
        one=np_type(1),
        is_signed=info.min < 0,
        is_bounded=True,
        is_integer=True,
        min_value=np_type(info.min),
        max_value=np_type(info.max),
    )


def _numpy_float_traits(np_type: type) -> NumberTraits:
    info = np.finfo(np_type)
    return NumberTraits(
        name=np.dtype(np_type).name,
        zero=np_type(0),
        one=np_type(1),
        is_signed=True,
        is_bounded=True,
        is_integer=False,
        min_value=np_type(info.min),
        max_value=np_type(info.max),
    )


register_number_traits(int, NumberTraits(
    name="int", zero=0, one=1, is_signed=True, is_bounded=False, is_integer=True
))
register_number_traits(float, NumberTraits(
    name="float", zero=0.0, one=1.0, is_signed=True, is_bounded=True, is_integer=False,
    min_value=float(np.finfo(np.float64).min), max_value=float(np.finfo(np.float64).max)
))
register_number_traits(Fraction, NumberTraits(
    name="fraction", zero=Fraction(0), one=Fraction(1),
    is_signed=True, is_bounded=False, is_integer=False
))

for _np_type in (np.int8, np.int16, np.int32, np.int64,
                 np.uint8, np.uint16, np.uint32, np.uint64):
    register_number_traits(_np_type, _numpy_integer_traits(_np_type))

for _np_type in (np.float32, np.float64):
    register_number_traits(_np_type, _numpy_float_traits(_np_type))
