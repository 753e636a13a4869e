"""
Matrix products and 2D correlation, delegated to external CPU kernels.

Tensors are handed to the kernels in `infrastructure.ops` as
`StridedOperand` descriptors `(storage, offset, sizes, strides)`, so any
view (transposed, narrowed, column-major) can be used as an operand without
materializing it first.

The accumulate-style methods follow one convention:

    self <- beta * src + alpha * product

where `src` defaults to `self`. Passing `src` copies it into `self` first
(resizing `self` to match); an empty `self` is resized to the product shape
and the previous contents are ignored.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Optional, Union

from typing_extensions import Self

from .....domain._errors import DataTypeMismatchError, InvalidSizeError, TensorValidationError
from .....domain._tensor import ITensor
from ....ops._strided import StridedOperand
from ....ops.blas_cpu import gemm, gemv, ger
from ....ops.correlate2d_cpu import conv2d, output_size, parse_mode, xcorr2d

Number = Union[int, float]


def _require_rank(t: ITensor, rank: int, what: str) -> None:
    if len(t._size) != rank:
        raise TensorValidationError(f"{what} must be {rank}D, got {len(t._size)}D")


def _require_type(t: ITensor, other: ITensor) -> None:
    if other.data_type is not t.data_type:
        raise DataTypeMismatchError(t.data_type.value, other.data_type.value)


class TensorMixinMatrix(ABC):
    """
    Mixin implementing BLAS-style products, `@` and 2D correlation.
    """

    def _prepare_output(
        self: ITensor, shape: tuple, src: Optional[ITensor], beta: Number
    ) -> Number:
        """Bring `self` to `shape`, seeding it from `src`; return the effective beta."""
        if src is not None and src is not self:
            _require_type(self, src)
            self.resize_as(src)
            self.copy(src)
        elif not self._size:
            self.resize(shape)
            return 0
        if tuple(self._size) != shape:
            raise InvalidSizeError(
                f"output must have size {shape}, got {tuple(self._size)}"
            )
        return beta

    def addmm(
        self: ITensor,
        mat1: ITensor,
        mat2: ITensor,
        *,
        beta: Number = 1,
        alpha: Number = 1,
        m: Optional[ITensor] = None,
    ) -> Self:
        """
        `self <- beta * m + alpha * (mat1 @ mat2)`, with `m` defaulting to
        `self`.

        Raises
        ------
        TensorValidationError
            If an operand is not 2D.
        InvalidSizeError
            If inner dimensions or the output size do not match.
        """
        _require_rank(mat1, 2, "mat1")
        _require_rank(mat2, 2, "mat2")
        _require_type(self, mat1)
        _require_type(self, mat2)
        if mat1._size[1] != mat2._size[0]:
            raise InvalidSizeError(
                f"size mismatch, mat1 {tuple(mat1._size)} @ mat2 {tuple(mat2._size)}"
            )
        shape = (mat1._size[0], mat2._size[1])
        beta = self._prepare_output(shape, m, beta)
        gemm(
            alpha,
            StridedOperand.of(mat1),
            StridedOperand.of(mat2),
            beta,
            StridedOperand.of(self),
        )
        return self

    def addmv(
        self: ITensor,
        mat: ITensor,
        vec: ITensor,
        *,
        beta: Number = 1,
        alpha: Number = 1,
        v: Optional[ITensor] = None,
    ) -> Self:
        """`self <- beta * v + alpha * (mat @ vec)`, with `v` defaulting to `self`."""
        _require_rank(mat, 2, "mat")
        _require_rank(vec, 1, "vec")
        _require_type(self, mat)
        _require_type(self, vec)
        if mat._size[1] != vec._size[0]:
            raise InvalidSizeError(
                f"size mismatch, mat {tuple(mat._size)} @ vec {tuple(vec._size)}"
            )
        beta = self._prepare_output((mat._size[0],), v, beta)
        gemv(
            alpha,
            StridedOperand.of(mat),
            StridedOperand.of(vec),
            beta,
            StridedOperand.of(self),
        )
        return self

    def addr(
        self: ITensor,
        vec1: ITensor,
        vec2: ITensor,
        *,
        beta: Number = 1,
        alpha: Number = 1,
        m: Optional[ITensor] = None,
    ) -> Self:
        """`self <- beta * m + alpha * outer(vec1, vec2)`."""
        _require_rank(vec1, 1, "vec1")
        _require_rank(vec2, 1, "vec2")
        _require_type(self, vec1)
        _require_type(self, vec2)
        beta = self._prepare_output((vec1._size[0], vec2._size[0]), m, beta)
        ger(
            alpha,
            StridedOperand.of(vec1),
            StridedOperand.of(vec2),
            beta,
            StridedOperand.of(self),
        )
        return self

    def __matmul__(self: ITensor, other: Any) -> Any:
        """
        Matrix product: 2D @ 2D and 2D @ 1D return new tensors, 1D @ 1D
        returns the dot product as a scalar.
        """
        if not isinstance(other, ITensor):
            return NotImplemented
        ranks = (len(self._size), len(other._size))
        if ranks == (2, 2):
            return self._new().addmm(self, other)
        if ranks == (2, 1):
            return self._new().addmv(self, other)
        if ranks == (1, 1):
            return self.dot(other)
        raise TensorValidationError(f"matmul is not defined for {ranks[0]}D @ {ranks[1]}D")

    def _correlate(self: ITensor, kernel: ITensor, mode: str, flip: bool) -> ITensor:
        _require_rank(self, 2, "input")
        _require_rank(kernel, 2, "kernel")
        _require_type(self, kernel)
        mode = parse_mode(mode)
        try:
            shape = output_size(tuple(self._size), tuple(kernel._size), mode)
        except ValueError as e:
            raise InvalidSizeError(str(e)) from None
        out = self._new(shape)
        run = conv2d if flip else xcorr2d
        run(StridedOperand.of(self), StridedOperand.of(kernel), StridedOperand.of(out), mode)
        return out

    def xcorr2(self: ITensor, kernel: ITensor, mode: str = "V") -> ITensor:
        """
        2D cross-correlation of this matrix with `kernel` into a new tensor.

        Parameters
        ----------
        kernel : Tensor
            2D kernel.
        mode : str
            'V' (valid, default) or 'F' (full).
        """
        return self._correlate(kernel, mode, flip=False)

    def conv2(self: ITensor, kernel: ITensor, mode: str = "V") -> ITensor:
        """2D convolution (flipped kernel) of this matrix with `kernel`."""
        return self._correlate(kernel, mode, flip=True)
