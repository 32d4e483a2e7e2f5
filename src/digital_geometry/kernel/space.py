"""
Digital spaces and their point types.

A space bundles a dimension with its associated types:
- Integer: scalar used for coordinates and radii (a signed CommutativeRing model)
- Point: vector of Integer components
- RealPoint: vector of float components

Points are numpy backed. Python int components are kept in an object
array so coordinates stay arbitrary precision.
"""

import logging
from collections.abc import Sequence
from functools import lru_cache
from typing import Any, Iterator, Type

import numpy as np

from ..common.config import Config, DEFAULT_CONFIG
from .concepts import Concept, SignedCommutativeRing, concept_assert
from .number_traits import number_traits, number_type

logger = logging.getLogger(__name__)


def _storage_dtype(component: type) -> Any:
    if isinstance(component, type) and issubclass(component, np.generic):
        return np.dtype(component)
    if component is float:
        return np.float64
    return object


class PointVector:
    """
    Fixed-dimension vector over a component type.

    Use point_vector_type(dimension, component) to get a concrete class;
    the base class itself has no dimension.
    """

    dimension: int = 0
    component: type = int

    __slots__ = ("_coords",)

    def __init__(self, *coords: Any):
        if len(coords) == 1 and isinstance(coords[0], (PointVector, Sequence, np.ndarray)):
            coords = tuple(coords[0])
        if len(coords) != self.dimension:
            raise ValueError(
                f"{type(self).__name__} expects {self.dimension} coordinates, got {len(coords)}"
            )
        self._coords = np.array(
            [self.component(c) for c in coords], dtype=_storage_dtype(self.component)
        )

    # ----- constructors -----

    @classmethod
    def diagonal(cls, value: Any) -> "PointVector":
        """Point with ``value`` repeated on every axis."""
        return cls(*([value] * cls.dimension))

    @classmethod
    def zero(cls) -> "PointVector":
        return cls.diagonal(number_traits(cls.component).zero)

    # ----- container protocol -----

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[Any]:
        return iter(self._coords)

    def __getitem__(self, index: int) -> Any:
        return self._coords[index]

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        if dtype is None:
            return self._coords.copy()
        return self._coords.astype(dtype)

    def to_array(self) -> np.ndarray:
        """Coordinates as a float64 array."""
        traits = number_traits(self.component)
        return np.array([traits.cast_to_double(c) for c in self._coords], dtype=np.float64)

    # ----- arithmetic -----

    def _coerce(self, other: Any) -> "PointVector":
        if isinstance(other, PointVector):
            if other.dimension != self.dimension:
                raise ValueError(f"Dimension mismatch: {self.dimension} vs {other.dimension}")
            return other
        return type(self)(other)

    def __add__(self, other: Any) -> "PointVector":
        other = self._coerce(other)
        return type(self)(*(a + b for a, b in zip(self._coords, other._coords)))

    def __sub__(self, other: Any) -> "PointVector":
        other = self._coerce(other)
        return type(self)(*(a - b for a, b in zip(self._coords, other._coords)))

    def __neg__(self) -> "PointVector":
        return type(self)(*(-c for c in self._coords))

    def __mul__(self, scalar: Any) -> "PointVector":
        return type(self)(*(c * scalar for c in self._coords))

    __rmul__ = __mul__

    # ----- norms -----

    def norm(self) -> float:
        """Euclidean norm."""
        return float(np.linalg.norm(self.to_array()))

    def norm1(self) -> Any:
        return self.component(sum(abs(c) for c in self._coords))

    def norm_inf(self) -> Any:
        return self.component(max(abs(c) for c in self._coords))

    # ----- coordinate-wise order -----

    def inf(self, other: "PointVector") -> "PointVector":
        """Coordinate-wise minimum."""
        other = self._coerce(other)
        return type(self)(*(min(a, b) for a, b in zip(self._coords, other._coords)))

    def sup(self, other: "PointVector") -> "PointVector":
        """Coordinate-wise maximum."""
        other = self._coerce(other)
        return type(self)(*(max(a, b) for a, b in zip(self._coords, other._coords)))

    def is_lower(self, other: "PointVector") -> bool:
        """True if every coordinate is <= the matching one of ``other``."""
        other = self._coerce(other)
        return all(a <= b for a, b in zip(self._coords, other._coords))

    def is_upper(self, other: "PointVector") -> bool:
        other = self._coerce(other)
        return all(a >= b for a, b in zip(self._coords, other._coords))

    # ----- comparison / display -----

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, PointVector):
            return other.dimension == self.dimension and tuple(self) == tuple(other)
        if isinstance(other, (Sequence, np.ndarray)):
            return len(other) == self.dimension and tuple(self) == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __str__(self) -> str:
        return "(" + ", ".join(str(c) for c in self._coords) + ")"

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self}"


@lru_cache(maxsize=None)
def point_vector_type(dimension: int, component: type) -> Type[PointVector]:
    """Concrete PointVector class for ``dimension`` coordinates of type ``component``."""
    if dimension < 1:
        raise ValueError(f"dimension must be >= 1, got {dimension}")
    return type(
        f"PointVector{dimension}[{component.__name__}]",
        (PointVector,),
        {"dimension": dimension, "component": component, "__slots__": ()},
    )


class SpaceND:
    """
    Digital space of a given dimension over a signed Integer ring.

    Equal (and hashing equal) when dimension and Integer match, so
    specializations keyed on a space are shared between equal spaces.
    """

    def __init__(self, dimension: int, integer: type = int):
        if dimension < 1:
            raise ValueError(f"dimension must be >= 1, got {dimension}")
        concept_assert(SignedCommutativeRing, integer)

        self.dimension = dimension
        self.Integer = integer
        self.Point = point_vector_type(dimension, integer)
        self.RealPoint = point_vector_type(dimension, float)

        logger.info(f"Created space Z^{dimension} over {integer.__name__}")

    @classmethod
    def from_config(cls, config: Config = DEFAULT_CONFIG) -> "SpaceND":
        """Build the default space described by ``config``."""
        return cls(config.default_dimension, number_type(config.integer_type))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SpaceND):
            return NotImplemented
        return (self.dimension, self.Integer) == (other.dimension, other.Integer)

    def __hash__(self) -> int:
        return hash((SpaceND, self.dimension, self.Integer))

    def __repr__(self) -> str:
        return f"SpaceND({self.dimension}, {self.Integer.__name__})"


class DigitalSpace(Concept):
    """
    A space usable by generic shapes.

    Associated types: dimension, Point, RealPoint, Integer. Integer must be a
    signed CommutativeRing; Point must offer diagonal(), +, - and norm().
    """

    @classmethod
    def usage(cls, candidate: Any) -> None:
        for attribute in ("dimension", "Point", "RealPoint", "Integer"):
            if not hasattr(candidate, attribute):
                cls.fail(candidate, f"missing associated type `{attribute}`")

        SignedCommutativeRing.check(candidate.Integer)

        one = cls.expression(candidate, "Integer(1)", lambda: candidate.Integer(1))
        p = cls.expression(candidate, "Point.diagonal(one)", lambda: candidate.Point.diagonal(one))
        cls.expression(candidate, "p + p", lambda: p + p)
        difference = cls.expression(candidate, "p - p", lambda: p - p)
        cls.expression(candidate, "(p - p).norm()", lambda: float(difference.norm()))


Z2 = SpaceND(2)
Z3 = SpaceND(3)
