"""The dense Matrix type and its module-level matmul."""

from densemat.matrix.core import (
    Matrix,
    matmul,
)

__all__ = [
    "Matrix",
    "matmul",
]
