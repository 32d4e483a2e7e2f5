"""
Concept checks for generic geometry code.

A concept is a named set of valid expressions a candidate (usually a scalar
type) must support. Generic code asserts the concepts it needs at the point
where it is specialized (``SpaceND(...)``, ``ImplicitBall[space]``), so a
type that is not a model is rejected before any query runs, never in the
middle of one.

Contracts:
- EqualityComparable, LessThanComparable: baseline requirements
- SignedInteger: integral, signed, with registered traits
- CommutativeRing: unitary commutative ring with ZERO/ONE in NumberTraits
- SignedCommutativeRing: CommutativeRing with negative values (space Integer)

The algebraic laws (associativity, distributivity, identities) cannot be
certified by the valid expressions alone; ``check_ring_laws`` samples them
at runtime on request.
"""

import logging
import numbers
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Set, Tuple, Type

import numpy as np

from ..common.config import Config, DEFAULT_CONFIG
from .number_traits import number_traits

logger = logging.getLogger(__name__)


def _name(candidate: Any) -> str:
    return getattr(candidate, "__name__", repr(candidate))


class ConceptCheckError(TypeError):
    """A candidate does not model a required concept."""

    def __init__(self, concept: Type["Concept"], candidate: Any, reason: str):
        self.concept = concept
        self.candidate = candidate
        self.reason = reason
        super().__init__(f"{_name(candidate)} is not a model of {concept.__name__}: {reason}")


class Concept:
    """
    Base class of all concepts.

    Subclasses list the concepts they refine in ``refines`` and exercise
    their valid expressions in ``usage``. ``specialize`` registers an
    explicit override for a single candidate, which replaces both the
    refinements and the usage check for it.
    """

    refines: Tuple[Type["Concept"], ...] = ()

    _specializations: Dict[Any, Callable[[Any], None]] = {}
    _certified: Set[Any] = set()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._specializations = {}
        cls._certified = set()

    @classmethod
    def usage(cls, candidate: Any) -> None:
        """Exercise the valid expressions of the concept on ``candidate``."""

    @classmethod
    def specialize(cls, candidate: Any) -> Callable[[Callable[[Any], None]], Callable[[Any], None]]:
        """Decorator registering the check to use for exactly ``candidate``."""
        def decorator(func: Callable[[Any], None]) -> Callable[[Any], None]:
            cls._specializations[candidate] = func
            cls._certified.discard(candidate)
            return func
        return decorator

    @classmethod
    def check(cls, candidate: Any) -> None:
        """
        Certify ``candidate`` as a model of this concept.

        Raises:
            ConceptCheckError: naming the first valid expression that failed
        """
        if candidate in cls._certified:
            return

        override = cls._specializations.get(candidate)
        try:
            if override is not None:
                override(candidate)
            else:
                for parent in cls.refines:
                    parent.check(candidate)
                cls.usage(candidate)
        except ConceptCheckError:
            logger.debug(f"{_name(candidate)} rejected by {cls.__name__}")
            raise
        except Exception as exc:
            logger.debug(f"{_name(candidate)} rejected by {cls.__name__}")
            raise ConceptCheckError(cls, candidate, f"{type(exc).__name__}: {exc}") from exc

        cls._certified.add(candidate)
        logger.debug(f"{_name(candidate)} certified as {cls.__name__}")

    @classmethod
    def is_model(cls, candidate: Any) -> bool:
        try:
            cls.check(candidate)
        except ConceptCheckError:
            return False
        return True

    @classmethod
    def fail(cls, candidate: Any, reason: str) -> None:
        raise ConceptCheckError(cls, candidate, reason)

    @classmethod
    def expression(cls, candidate: Any, text: str, evaluate: Callable[[], Any]) -> Any:
        """Evaluate one valid expression, reporting any failure against its text."""
        try:
            return evaluate()
        except Exception as exc:
            raise ConceptCheckError(
                cls, candidate, f"`{text}` failed ({type(exc).__name__}: {exc})"
            ) from exc

    @classmethod
    def convertible(cls, candidate: type, text: str, evaluate: Callable[[], Any]) -> Any:
        """Evaluate an expression and check its result converts back to ``candidate``."""
        value = cls.expression(candidate, text, evaluate)
        converted = cls.expression(
            candidate, f"{_name(candidate)}({text})", lambda: candidate(value)
        )
        if not isinstance(converted, candidate):
            cls.fail(candidate, f"`{text}` is not convertible to {_name(candidate)}")
        return converted


def concept_assert(concept: Type[Concept], *candidates: Any) -> None:
    """Require every candidate to model ``concept``."""
    for candidate in candidates:
        concept.check(candidate)


class EqualityComparable(Concept):
    """``==`` and ``!=`` are defined and agree on distinct values."""

    @classmethod
    def usage(cls, candidate: type) -> None:
        a = cls.expression(candidate, f"{_name(candidate)}(1)", lambda: candidate(1))
        b = cls.expression(candidate, f"{_name(candidate)}(2)", lambda: candidate(2))
        if not cls.expression(candidate, "a == a", lambda: bool(a == candidate(1))):
            cls.fail(candidate, "`a == a` is false")
        if not cls.expression(candidate, "a != b", lambda: bool(a != b)):
            cls.fail(candidate, "`a != b` is false")


class LessThanComparable(Concept):
    """Strict and non-strict ordering comparisons are defined and consistent."""

    @classmethod
    def usage(cls, candidate: type) -> None:
        a = cls.expression(candidate, f"{_name(candidate)}(1)", lambda: candidate(1))
        b = cls.expression(candidate, f"{_name(candidate)}(2)", lambda: candidate(2))
        ordered = (
            cls.expression(candidate, "a < b", lambda: bool(a < b)),
            cls.expression(candidate, "b > a", lambda: bool(b > a)),
            cls.expression(candidate, "a <= b", lambda: bool(a <= b)),
            cls.expression(candidate, "b >= a", lambda: bool(b >= a)),
            not cls.expression(candidate, "b < a", lambda: bool(b < a)),
        )
        if not all(ordered):
            cls.fail(candidate, "ordering of 1 and 2 is inconsistent")


class SignedInteger(Concept):
    """Integral type whose NumberTraits declare it signed."""

    refines = (EqualityComparable, LessThanComparable)

    @classmethod
    def usage(cls, candidate: type) -> None:
        if not (isinstance(candidate, type) and issubclass(candidate, numbers.Integral)):
            cls.fail(candidate, "not an integral type")
        traits = cls.expression(
            candidate, f"number_traits({_name(candidate)})", lambda: number_traits(candidate)
        )
        if not (traits.is_integer and traits.is_signed):
            cls.fail(candidate, "NumberTraits does not declare a signed integer")
        if not cls.expression(candidate, "-ONE < ZERO", lambda: bool(-traits.one < traits.zero)):
            cls.fail(candidate, "`-ONE < ZERO` is false")


class CommutativeRing(Concept):
    """
    Unitary commutative ring.

    Valid expressions, for a, b of type T:
    - T(i) for a primitive integer i
    - a + b, a - b, a * b, -a, each convertible to T
    - number_traits(T).zero and number_traits(T).one, convertible to T

    Expected but not checked here: a + (-a) == ZERO, a * ONE == a.
    """

    refines = (EqualityComparable, LessThanComparable)

    @classmethod
    def usage(cls, candidate: type) -> None:
        name = _name(candidate)
        a = cls.convertible(candidate, f"{name}(3)", lambda: candidate(3))
        b = cls.convertible(candidate, f"{name}(2)", lambda: candidate(2))

        cls.convertible(candidate, "a + b", lambda: a + b)
        cls.convertible(candidate, "-a", lambda: -a)
        cls.convertible(candidate, "a - b", lambda: a - b)
        cls.convertible(candidate, "a * b", lambda: a * b)

        _check_identities(cls, candidate)


def _check_identities(concept: Type[Concept], candidate: type) -> None:
    name = _name(candidate)
    traits = concept.expression(candidate, f"number_traits({name})", lambda: number_traits(candidate))
    concept.convertible(candidate, f"number_traits({name}).zero", lambda: traits.zero)
    concept.convertible(candidate, f"number_traits({name}).one", lambda: traits.one)


@CommutativeRing.specialize(int)
def _arbitrary_precision_ring(candidate: type) -> None:
    # int is the arbitrary-precision integer: closure comes with SignedInteger
    SignedInteger.check(candidate)
    _check_identities(CommutativeRing, candidate)


class SignedCommutativeRing(Concept):
    """
    CommutativeRing whose NumberTraits declare it signed.

    Excludes unsigned fixed-width integers: p - q and -radius must stay
    representable.
    """

    refines = (CommutativeRing,)

    @classmethod
    def usage(cls, candidate: type) -> None:
        name = _name(candidate)
        traits = cls.expression(candidate, f"number_traits({name})", lambda: number_traits(candidate))
        if not traits.is_signed:
            cls.fail(candidate, f"number_traits({name}) does not declare a signed type")
        if not cls.expression(candidate, "-ONE < ZERO", lambda: bool(-traits.one < traits.zero)):
            cls.fail(candidate, "`-ONE < ZERO` is false")


# ============== Runtime law checking ==============

@dataclass
class RingLawReport:
    """Outcome of sampling the ring axioms on one type."""
    number_type: type
    n_samples: int
    violations: List[str] = field(default_factory=list)  # law names, each once

    @property
    def passed(self) -> bool:
        return not self.violations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number_type": _name(self.number_type),
            "n_samples": self.n_samples,
            "violations": list(self.violations),
            "passed": self.passed,
        }


def _ring_laws(zero: Any, one: Any) -> Dict[str, Callable[[Any, Any, Any], bool]]:
    return {
        "additive commutativity": lambda x, y, z: x + y == y + x,
        "additive associativity": lambda x, y, z: (x + y) + z == x + (y + z),
        "multiplicative commutativity": lambda x, y, z: x * y == y * x,
        "multiplicative associativity": lambda x, y, z: (x * y) * z == x * (y * z),
        "distributivity": lambda x, y, z: x * (y + z) == x * y + x * z,
        "additive identity": lambda x, y, z: x + zero == x,
        "additive inverse": lambda x, y, z: x + (-x) == zero,
        "multiplicative identity": lambda x, y, z: x * one == x,
    }


def check_ring_laws(candidate: type, config: Config = DEFAULT_CONFIG) -> RingLawReport:
    """
    Sample the commutative ring axioms on ``candidate``.

    The type must already model CommutativeRing. Samples are integers in
    [-config.ring_law_bound, config.ring_law_bound], narrowed to the
    representable range of bounded integer types.

    Args:
        candidate: Scalar type to check
        config: Sample count, bound and seed

    Returns:
        RingLawReport listing every violated law
    """
    concept_assert(CommutativeRing, candidate)
    traits = number_traits(candidate)
    zero, one = candidate(traits.zero), candidate(traits.one)

    high = config.ring_law_bound
    low = -high
    if traits.is_integer and traits.is_bounded:
        high = min(high, int(traits.max_value))
        low = max(low, int(traits.min_value))

    rng = np.random.default_rng(config.ring_law_seed)
    raw = rng.integers(low, high, size=(config.ring_law_samples, 3), endpoint=True)

    laws = _ring_laws(zero, one)
    report = RingLawReport(number_type=candidate, n_samples=config.ring_law_samples)

    # wrap-around of fixed-width integers is still ring arithmetic
    with np.errstate(over="ignore"):
        for row in raw:
            x, y, z = (candidate(int(value)) for value in row)
            for law, holds in laws.items():
                if law not in report.violations and not bool(holds(x, y, z)):
                    report.violations.append(law)

    if report.passed:
        logger.info(f"{_name(candidate)}: ring laws hold on {report.n_samples} samples")
    else:
        logger.warning(f"{_name(candidate)}: ring laws violated: {', '.join(report.violations)}")
    return report
