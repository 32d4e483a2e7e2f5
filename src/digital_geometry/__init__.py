"""
Digital Geometry Kernel - generic scalar contracts and implicit shapes.

Two building blocks for digital-geometry algorithms:
- common: configuration and logging setup
- kernel: numeric traits, concept checks (CommutativeRing, ...) and spaces
- shapes: implicit shapes, evaluated as signed fields (ImplicitBall)

Usage:
    from digital_geometry.kernel import Z2
    from digital_geometry.shapes import ImplicitBall

    ball = ImplicitBall[Z2]((0, 0), 5)
    ball((4, 0))  # 1.0
"""

__version__ = "0.1.0"
