"""
Tests for the implicit ball.

Tests cover:
- Signed field, strict inside test and bounding corners
- Degenerate radii (zero, negative)
- Specialization on spaces and the ImplicitShape contract
- Immutability, copying and display
- Batched evaluation
"""

import copy
import dataclasses
import io
import itertools
from concurrent.futures import ThreadPoolExecutor

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from digital_geometry.kernel.concepts import ConceptCheckError
from digital_geometry.kernel.space import SpaceND, Z2, Z3
from digital_geometry.shapes.implicit_ball import ImplicitBall
from digital_geometry.shapes.implicit_shape import ImplicitShape


# ============== Fixtures ==============

@pytest.fixture
def ball_2d():
    """Radius 5 ball at the origin of Z2."""
    return ImplicitBall[Z2]((0, 0), 5)


@pytest.fixture
def ball_3d():
    """Radius 3 ball off the origin in Z3."""
    return ImplicitBall[Z3]((1, -2, 4), 3)


def grid_points(space, low, high):
    """All integer points of the cube [low, high]^d."""
    axes = [range(low, high + 1)] * space.dimension
    return [space.Point(*coords) for coords in itertools.product(*axes)]


# ============== Field Tests ==============

class TestField:
    """Test the signed field and the inside predicate."""

    def test_concrete_scenario(self, ball_2d):
        """Boundary is zero and outside; one step in is inside."""
        assert ball_2d((5, 0)) == 0.0
        assert ball_2d.is_inside((5, 0)) is False

        assert ball_2d((4, 0)) == 1.0
        assert ball_2d.is_inside((4, 0)) is True

        assert ball_2d((6, 0)) == -1.0
        assert ball_2d.is_inside((6, 0)) is False

    def test_field_is_radius_minus_distance(self, ball_3d):
        """No clamping: the field is exactly r - |p - c|."""
        center = np.array([1.0, -2.0, 4.0])
        for point in grid_points(Z3, -6, 6)[::7]:
            expected = 3.0 - float(np.linalg.norm(point.to_array() - center))
            assert ball_3d(point) == pytest.approx(expected, abs=1e-12)

    def test_field_returns_float(self, ball_2d):
        assert isinstance(ball_2d(Z2.Point(1, 1)), float)

    def test_pythagorean_boundary(self, ball_2d):
        """(3, 4) lies exactly on the radius-5 sphere."""
        assert ball_2d((3, 4)) == 0.0
        assert ball_2d.is_inside((3, -4)) is False

    def test_inside_matches_field_sign(self, ball_3d):
        """is_inside is exactly field > 0."""
        for point in grid_points(Z3, -3, 8):
            assert ball_3d.is_inside(point) == (ball_3d(point) > 0)

    def test_center_inside_for_positive_radius(self):
        """The center is inside whenever radius > 0."""
        for radius in (1, 2, 10):
            ball = ImplicitBall[Z2]((3, 3), radius)
            assert ball.is_inside((3, 3))

    def test_real_point_query(self, ball_2d):
        """RealPoints are evaluated without rounding."""
        assert ball_2d(Z2.RealPoint(0.5, 0.0)) == 4.5

    def test_arbitrary_precision_center(self):
        """Far-away centers keep exact differences."""
        far = 10**20
        ball = ImplicitBall[Z2]((far, 0), 5)

        assert ball((far + 4, 0)) == 1.0
        assert ball.is_inside((far + 4, 0))

    def test_fixed_width_space(self):
        """Works over numpy integer spaces too."""
        ball = ImplicitBall[SpaceND(2, np.int64)]((0, 0), 5)

        assert ball((4, 0)) == 1.0
        assert ball.lower_bound == (-5, -5)


# ============== Degenerate Radius Tests ==============

class TestDegenerateRadius:
    """Test zero and negative radii."""

    def test_zero_radius_is_empty(self):
        """A point ball contains nothing, not even its center."""
        ball = ImplicitBall[Z2]((0, 0), 0)

        assert ball((0, 0)) == 0.0
        assert ball.is_inside((0, 0)) is False
        assert ball.lower_bound == ball.upper_bound == (0, 0)

    def test_negative_radius_field_everywhere_negative(self):
        """Negative radius gives an empty shape, no error."""
        ball = ImplicitBall[Z2]((1, 1), -2)

        for point in grid_points(Z2, -4, 4):
            assert ball(point) < 0
            assert not ball.is_inside(point)

    def test_negative_radius_bounds_are_swapped(self):
        """Bounds follow the formula even when inverted."""
        ball = ImplicitBall[Z2]((0, 0), -2)

        assert ball.lower_bound == (2, 2)
        assert ball.upper_bound == (-2, -2)
        assert ball.is_valid()


# ============== Bounds Tests ==============

class TestBounds:
    """Test the bounding hypercube."""

    def test_concrete_scenario(self, ball_2d):
        assert ball_2d.lower_bound == (-5, -5)
        assert ball_2d.upper_bound == (5, 5)
        assert ball_2d.bounds == (Z2.Point(-5, -5), Z2.Point(5, 5))

    def test_bounds_are_points(self, ball_3d):
        assert isinstance(ball_3d.lower_bound, Z3.Point)
        assert isinstance(ball_3d.upper_bound, Z3.Point)

    def test_symmetric_about_center(self, ball_3d):
        """Both corners are radius away from the center on every axis."""
        radius = Z3.Point.diagonal(ball_3d.radius)

        assert ball_3d.upper_bound - ball_3d.center == radius
        assert ball_3d.center - ball_3d.lower_bound == radius

    def test_inside_points_within_bounds(self, ball_3d):
        """Every inside point lies in the bounding box."""
        lower, upper = ball_3d.bounds
        inside = [p for p in grid_points(Z3, -4, 9) if ball_3d.is_inside(p)]

        assert inside
        for point in inside:
            assert lower.is_lower(point)
            assert point.is_lower(upper)

    def test_box_is_not_tight(self, ball_2d):
        """Box corners are outside the ball."""
        assert not ball_2d.is_inside(ball_2d.upper_bound)
        assert not ball_2d.is_inside(ball_2d.lower_bound)


# ============== Specialization Tests ==============

class MissingIntegerSpace:
    """Malformed space: no Integer type."""
    dimension = 2
    Point = Z2.Point
    RealPoint = Z2.RealPoint


class UnsignedIntegerSpace:
    """Well-formed apart from its unsigned Integer."""
    dimension = 2
    Integer = np.uint32
    Point = Z2.Point
    RealPoint = Z2.RealPoint


class TestSpecialization:
    """Test binding the ball to a space."""

    def test_specialization_is_cached(self):
        """Equal spaces share the specialized class."""
        assert ImplicitBall[Z2] is ImplicitBall[SpaceND(2)]
        assert ImplicitBall.for_space(Z2) is ImplicitBall[Z2]
        assert ImplicitBall[Z2] is not ImplicitBall[Z3]

    def test_specialization_is_subclass(self):
        assert issubclass(ImplicitBall[Z2], ImplicitBall)
        assert ImplicitBall[Z2].space == Z2

    def test_unspecialized_construction_rejected(self):
        """The generic ball has no space."""
        with pytest.raises(TypeError, match="specialized"):
            ImplicitBall((0, 0), 5)

    def test_malformed_space_rejected(self):
        """Specializing on a malformed space fails before construction."""
        with pytest.raises(ConceptCheckError, match="Integer"):
            ImplicitBall[MissingIntegerSpace]

    def test_unsigned_space_rejected(self):
        """Balls need a signed Integer for lower corners and negative radii."""
        with pytest.raises(ConceptCheckError, match="signed"):
            ImplicitBall[UnsignedIntegerSpace]

    def test_models_implicit_shape(self):
        """Specialized balls are implicit shapes."""
        assert ImplicitShape.is_model(ImplicitBall[Z3])
        assert ImplicitShape.is_model(int) is False

    def test_center_dimension_checked(self):
        """Centers must live in the ball's space."""
        with pytest.raises(ValueError):
            ImplicitBall[Z3]((0, 0), 1)


# ============== Value Semantics Tests ==============

class TestValueSemantics:
    """Test construction, immutability and copying."""

    def test_no_default_construction(self):
        """Center and radius are required."""
        with pytest.raises(TypeError):
            ImplicitBall[Z2]()

    def test_arguments_coerced(self, ball_2d):
        """Center becomes a Point, radius an Integer."""
        assert isinstance(ball_2d.center, Z2.Point)
        assert isinstance(ball_2d.radius, int)

    def test_assignment_forbidden(self, ball_2d):
        """Center and radius cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            ball_2d.radius = 6
        with pytest.raises(dataclasses.FrozenInstanceError):
            ball_2d.center = Z2.Point(1, 1)

    def test_extra_attributes_forbidden(self, ball_2d):
        """A ball has no attributes besides center and radius."""
        with pytest.raises(AttributeError):
            ball_2d.extra = 1
        with pytest.raises(AttributeError):
            ball_2d.__dict__

        assert not hasattr(ball_2d, "extra")

    def test_copy(self, ball_2d):
        """Copies are equal, distinct values."""
        copied = copy.copy(ball_2d)

        assert copied == ball_2d
        assert copied is not ball_2d
        assert copied((4, 0)) == ball_2d((4, 0))

    def test_deepcopy(self, ball_3d):
        """Deep copies keep the space and stay immutable."""
        copied = copy.deepcopy(ball_3d)

        assert copied == ball_3d
        assert type(copied) is type(ball_3d)
        assert copied.center is not ball_3d.center
        with pytest.raises(dataclasses.FrozenInstanceError):
            copied.radius = 1

    def test_copy_construction(self, ball_2d):
        rebuilt = ImplicitBall[Z2](ball_2d.center, ball_2d.radius)
        assert rebuilt == ball_2d
        assert hash(rebuilt) == hash(ball_2d)

    def test_inequality(self, ball_2d):
        assert ball_2d != ImplicitBall[Z2]((0, 0), 4)
        assert ball_2d != ImplicitBall[Z2]((0, 1), 5)


# ============== Display Tests ==============

class TestDisplay:
    """Test textual output."""

    def test_display_writes_to_stream(self, ball_2d):
        out = io.StringIO()
        ball_2d.display(out)

        assert out.getvalue() == "[ImplicitBall] center = (0, 0) radius = 5"

    def test_str_matches_display(self, ball_3d):
        out = io.StringIO()
        ball_3d.display(out)

        assert str(ball_3d) == out.getvalue()
        assert "ImplicitBall" in repr(ball_3d)


# ============== Batched Evaluation Tests ==============

class TestEvaluate:
    """Test vectorized field evaluation."""

    def test_matches_pointwise(self, ball_3d):
        """evaluate agrees with the point-wise field."""
        points = grid_points(Z3, -3, 6)
        coords = np.array([p.to_array() for p in points])

        values = ball_3d.evaluate(coords)

        assert values.shape == (len(points),)
        np.testing.assert_allclose(values, [ball_3d(p) for p in points], atol=1e-12)

    def test_contains_matches_is_inside(self, ball_2d):
        """contains agrees with is_inside, boundary excluded."""
        coords = np.array([[5, 0], [4, 0], [6, 0], [0, 0], [3, 4]])

        mask = ball_2d.contains(coords)

        np.testing.assert_array_equal(mask, [False, True, False, True, False])

    def test_single_point(self, ball_2d):
        """A 1D input is treated as one point."""
        np.testing.assert_allclose(ball_2d.evaluate([4, 0]), [1.0])

    def test_wrong_dimension(self, ball_2d):
        with pytest.raises(ValueError):
            ball_2d.evaluate(np.zeros((4, 3)))


# ============== Concurrency Tests ==============

class TestConcurrentReads:
    """Queries have no shared mutable state."""

    def test_parallel_queries(self, ball_3d):
        points = grid_points(Z3, -2, 5)
        expected = [ball_3d(p) for p in points]

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(ball_3d, points))

        assert results == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
