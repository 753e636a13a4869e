"""
Arithmetic mixin for Tensor.

Element-wise in-place arithmetic and the Python operators live in `_base`;
BLAS-style products (`addmm`, `addmv`, `addr`, `@`) and 2D correlation
(`xcorr2`, `conv2`) live in `_matrix` and delegate to the CPU kernels in
`infrastructure.ops`.

Public API
----------
- ``TensorMixinArithmetic``
"""

from ._base import TensorMixinArithmetic

__all__ = [
    TensorMixinArithmetic.__name__,
]
