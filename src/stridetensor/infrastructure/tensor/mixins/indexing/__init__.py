"""
Element access and slicing mixin for Tensor.

Public API
----------
- ``TensorMixinIndexing``
"""

from ._base import TensorMixinIndexing

__all__ = [
    TensorMixinIndexing.__name__,
]
