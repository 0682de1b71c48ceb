"""densemat — a dense 2-D matrix value type over generic element types.

Modules:
    errors: Exception hierarchy (shape mismatch, invalid axis, consumption)
    config: Runtime settings and logging setup
    elements: Numeric capabilities (zero, exp, power) for element types
    kernels: Row-list algorithms (elementwise, broadcast, matmul, reductions)
    matrix: The Matrix type
    interop: jax/numpy conversion and .npy/.npz loading
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
