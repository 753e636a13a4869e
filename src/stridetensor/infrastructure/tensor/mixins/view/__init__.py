"""
View-algebra mixin for Tensor.

Public API
----------
- ``TensorMixinView``
"""

from ._base import TensorMixinView

__all__ = [
    TensorMixinView.__name__,
]
