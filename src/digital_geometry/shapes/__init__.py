"""
Implicit shapes.

Only the ball is provided; other shapes follow the same pattern and are
checked against ImplicitShape.
"""

from .implicit_shape import ImplicitShape
from .implicit_ball import ImplicitBall

__all__ = [
    'ImplicitShape',
    'ImplicitBall',
]
