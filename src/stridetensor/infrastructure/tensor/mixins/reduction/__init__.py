"""
Reduction mixin for Tensor.

Provides whole-tensor and per-dimension ``sum``, ``mean`` and ``max`` plus
``topk``, all built on the dimension-apply engine.

Public API
----------
- ``TensorMixinReduction``
"""

from ._base import TensorMixinReduction

__all__ = [
    TensorMixinReduction.__name__,
]
