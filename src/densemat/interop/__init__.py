"""Interop with numpy and JAX.

Conversion to and from arrays, loading .npy/.npz files, and checking
or timing Matrix products against stored expected results.
"""

from densemat.interop.arrays import (
    from_array,
    to_array,
)
from densemat.interop.npy import (
    load_cases,
    load_npy,
    time_products,
    verify_products,
)

__all__ = [
    "from_array",
    "to_array",
    "load_npy",
    "load_cases",
    "verify_products",
    "time_products",
]
