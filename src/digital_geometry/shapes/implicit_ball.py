"""
Implicit ball in a digital space of any dimension.

The ball of center c and radius r is represented by the field

    f(p) = r - |p - c|

positive inside, zero on the sphere, negative outside. The inside test is
strict (f(p) > 0): boundary points are outside, so a radius-0 ball is empty.

A negative radius is accepted and gives a field that is negative
everywhere.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, ClassVar, TextIO, Tuple, Type

import numpy as np

from ..kernel.concepts import concept_assert
from ..kernel.number_traits import number_traits
from ..kernel.space import DigitalSpace
from .implicit_shape import ImplicitShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False, repr=False)
class ImplicitBall:
    """
    Ball shape given by its center and integer radius.

    Must be specialized on a space before construction:

        Ball = ImplicitBall[Z2]
        ball = Ball((0, 0), 5)

    Instances are immutable and carry no attributes besides center and
    radius; copy with copy.copy(ball) or
    ImplicitBall[space](ball.center, ball.radius).
    """
    __slots__ = ("center", "radius")

    center: Any  # space.Point
    radius: Any  # space.Integer

    space: ClassVar[Any] = None

    def __class_getitem__(cls, space: Any) -> Type["ImplicitBall"]:
        return _specialize(space)

    @classmethod
    def for_space(cls, space: Any) -> Type["ImplicitBall"]:
        """Same as ImplicitBall[space]."""
        return _specialize(space)

    def __post_init__(self):
        space = type(self).space
        if space is None:
            raise TypeError("ImplicitBall must be specialized on a space, e.g. ImplicitBall[Z2]")
        object.__setattr__(self, "center", space.Point(self.center))
        object.__setattr__(self, "radius", space.Integer(self.radius))

    # ----- copying -----

    def __getstate__(self) -> Tuple[Any, Any]:
        return self.center, self.radius

    def __setstate__(self, state: Tuple[Any, Any]) -> None:
        center, radius = state
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "radius", radius)

    # ----- field -----

    def _radius_as_double(self) -> float:
        return number_traits(self.space.Integer).cast_to_double(self.radius)

    def __call__(self, point: Any) -> float:
        """Signed field value at ``point``: radius minus distance to the center."""
        if not isinstance(point, (self.space.Point, self.space.RealPoint)):
            point = self.space.Point(point)
        return self._radius_as_double() - (point - self.center).norm()

    def is_inside(self, point: Any) -> bool:
        """Strict interior test; points on the sphere are outside."""
        return self(point) > 0.0

    def evaluate(self, points: np.ndarray) -> np.ndarray:
        """
        Field values for a batch of points.

        Args:
            points: (N, dimension) array of coordinates

        Returns:
            (N,) float array, element-wise equal to ball(p)
        """
        points = np.atleast_2d(np.asarray(points, dtype=np.float64))
        if points.shape[-1] != self.space.dimension:
            raise ValueError(
                f"Expected points of dimension {self.space.dimension}, got shape {points.shape}"
            )
        traits = number_traits(self.space.Integer)
        center = np.array([traits.cast_to_double(c) for c in self.center], dtype=np.float64)
        return self._radius_as_double() - np.linalg.norm(points - center, axis=-1)

    def contains(self, points: np.ndarray) -> np.ndarray:
        """Strict inside mask for a batch of points."""
        return self.evaluate(points) > 0.0

    # ----- bounds -----

    @property
    def lower_bound(self) -> Any:
        """Lowest corner of the bounding hypercube."""
        return self.center - self.space.Point.diagonal(self.radius)

    @property
    def upper_bound(self) -> Any:
        """Highest corner of the bounding hypercube."""
        return self.center + self.space.Point.diagonal(self.radius)

    @property
    def bounds(self) -> Tuple[Any, Any]:
        """Return (lower_bound, upper_bound). Not tight: the box is circumscribed."""
        return self.lower_bound, self.upper_bound

    # ----- interface -----

    def is_valid(self) -> bool:
        return True

    def display(self, out: TextIO) -> None:
        out.write(str(self))

    def __str__(self) -> str:
        return f"[ImplicitBall] center = {self.center} radius = {self.radius}"

    def __repr__(self) -> str:
        return f"ImplicitBall[{self.space!r}](center={self.center}, radius={self.radius})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ImplicitBall):
            return NotImplemented
        return (self.space, self.center, self.radius) == (other.space, other.center, other.radius)

    def __hash__(self) -> int:
        return hash((self.space, self.center, self.radius))


@lru_cache(maxsize=None)
def _specialize(space: Any) -> Type[ImplicitBall]:
    concept_assert(DigitalSpace, space)
    specialized = type(
        f"ImplicitBall[{space!r}]",
        (ImplicitBall,),
        {"space": space, "__slots__": (), "__module__": __name__},
    )
    concept_assert(ImplicitShape, specialized)
    logger.debug(f"Specialized ImplicitBall on {space!r}")
    return specialized
