"""
Implicit shape contract.

An implicit shape is a scalar field over a space: positive inside, zero on
the boundary, negative outside. Algorithms that only need "some implicit
shape" require this concept instead of a concrete class.
"""

from typing import Any

from ..kernel.concepts import Concept


class ImplicitShape(Concept):
    """Shape type exposing a field, an inside test and bounding corners."""

    required = ("__call__", "is_inside", "lower_bound", "upper_bound", "is_valid")

    @classmethod
    def usage(cls, candidate: Any) -> None:
        if not isinstance(candidate, type):
            cls.fail(candidate, "implicit shapes are checked on their type")
        for attribute in cls.required:
            # class bodies only: every type object has a metaclass __call__
            if not any(attribute in vars(klass) for klass in candidate.__mro__[:-1]):
                cls.fail(candidate, f"missing `{attribute}`")
