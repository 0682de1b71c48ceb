"""Element capabilities: zero value, exponential and power.

Matrix operations are written against these functions rather than a
fixed element type, so ints, floats, complex numbers, Decimal, Fraction
and numpy scalars all work where the operation makes sense for them.
"""

from densemat.elements.capabilities import (
    exp,
    power,
    zero,
)

__all__ = [
    "zero",
    "exp",
    "power",
]
