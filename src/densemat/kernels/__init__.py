"""Row-list kernels behind the Matrix operations.

Every kernel works on plain row-major ``list[list]`` storage and takes
ownership of the lists it is handed, reusing them as output buffers
where the result shape allows.
"""

from densemat.kernels.elementwise import (
    add_rows,
    apply_in_place,
    broadcast_column,
    broadcast_mode,
    drain_rows,
    elementwise,
    multiply_rows,
    rows_shape,
)
from densemat.kernels.products import (
    matmul_rows,
    transpose_rows,
)
from densemat.kernels.reductions import (
    check_axis,
    dim_sum_rows,
    softmax_rows,
)

__all__ = [
    "rows_shape",
    "broadcast_mode",
    "elementwise",
    "broadcast_column",
    "add_rows",
    "multiply_rows",
    "apply_in_place",
    "drain_rows",
    "transpose_rows",
    "matmul_rows",
    "check_axis",
    "dim_sum_rows",
    "softmax_rows",
]
