"""
NumPy interop mixin for Tensor.

Public API
----------
- ``TensorMixinInterop``
"""

from ._base import TensorMixinInterop

__all__ = [
    TensorMixinInterop.__name__,
]
