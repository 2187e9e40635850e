"""Mathematical utilities for the token swap engine.

This package provides mathematical primitives for curve calculations:
- PreciseNumber: 12-decimal fixed-point arithmetic with square roots
"""

from tokenswap.math.fixed_point import PreciseNumber

__all__ = ["PreciseNumber"]
