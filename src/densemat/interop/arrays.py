"""Conversion between Matrix and numpy / jax arrays.

Arrays leave the matrix world as JAX arrays on the default device and
come back as Matrix instances holding plain Python scalars.

References:
    - JAX NumPy API: https://jax.readthedocs.io/en/latest/jax.numpy.html
"""

from __future__ import annotations

from typing import Any

import jax.numpy as jnp
import numpy as np
from jax import Array

from densemat.errors import RaggedRowsError
from densemat.matrix import Matrix


def from_array(array: Any) -> Matrix:
    """Build a Matrix from any 2-D numpy or JAX array.

    Args:
        array: Array-like of rank 2 with at least one row and column.

    Returns:
        Matrix whose cells are Python scalars (``float``, ``int``,
        ``bool`` or ``complex`` depending on dtype).

    Raises:
        RaggedRowsError: If the array is not rank 2 or is empty.

    Examples:
        >>> import jax.numpy as jnp
        >>> from_array(jnp.array([[1.0, 2.0], [3.0, 4.0]])).tolist()
        [[1.0, 2.0], [3.0, 4.0]]

    """
    host = np.asarray(array)
    if host.ndim != 2:
        raise RaggedRowsError(f"expected a 2-D array, got shape {host.shape}")
    return Matrix(host.tolist())


def to_array(matrix: Matrix, dtype: jnp.dtype | None = None) -> Array:
    """Copy a Matrix into a JAX array without consuming it.

    Args:
        matrix: Source matrix.
        dtype: Data type. Default jnp.float32.

    Returns:
        JAX array of shape ``matrix.shape``.

    Examples:
        >>> to_array(Matrix([[1, 2], [3, 4]])).shape
        (2, 2)

    """
    if dtype is None:
        dtype = jnp.float32
    return jnp.array(matrix.tolist(), dtype=dtype)
