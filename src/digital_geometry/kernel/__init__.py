"""
Kernel: scalar contracts, numeric traits and digital spaces.
"""

from .number_traits import (
    NumberTraits, register_number_traits, has_number_traits,
    number_traits, number_type, cast_to_double,
)
from .concepts import (
    Concept, ConceptCheckError, concept_assert,
    EqualityComparable, LessThanComparable, SignedInteger, CommutativeRing,
    SignedCommutativeRing,
    RingLawReport, check_ring_laws,
)
from .space import PointVector, point_vector_type, SpaceND, DigitalSpace, Z2, Z3

__all__ = [
    'NumberTraits', 'register_number_traits', 'has_number_traits',
    'number_traits', 'number_type', 'cast_to_double',
    'Concept', 'ConceptCheckError', 'concept_assert',
    'EqualityComparable', 'LessThanComparable', 'SignedInteger', 'CommutativeRing',
    'SignedCommutativeRing',
    'RingLawReport', 'check_ring_laws',
    'PointVector', 'point_vector_type', 'SpaceND', 'DigitalSpace', 'Z2', 'Z3',
]
