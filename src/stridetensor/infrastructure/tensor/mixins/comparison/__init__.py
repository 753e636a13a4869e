"""
Comparison mixin for Tensor.

Public API
----------
- ``TensorMixinComparison``
"""

from ._base import TensorMixinComparison

__all__ = [
    TensorMixinComparison.__name__,
]
