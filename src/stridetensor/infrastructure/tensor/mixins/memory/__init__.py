"""
Memory and construction mixin for Tensor.

Covers factories (`zeros`, `ones`, `full`, `from_numpy`, `from_export`,
`from_payload`), bulk writes (`fill`, `zero`, `copy`, `clone`), random
initialization (`rand`, `randn`, `bernoulli`, `uniform`), NumPy
materialization and the `TensorExport` record.

Public API
----------
- ``TensorMixinMemory``
- ``TensorExport``
"""

from ._export import TensorExport
from ._base import TensorMixinMemory

__all__ = [
    TensorMixinMemory.__name__,
    TensorExport.__name__,
]
