"""
External CPU kernels operating on strided operand descriptors.
"""

from ._strided import StridedOperand

__all__ = [
    StridedOperand.__name__,
]
