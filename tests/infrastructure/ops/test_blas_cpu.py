from __future__ import annotations

import unittest
import warnings

import numpy as np

from stridetensor.infrastructure.ops._strided import StridedOperand
from stridetensor.infrastructure.ops.blas_cpu import gemm, gemv, ger


def _operand(arr: np.ndarray) -> StridedOperand:
    """Describe a C-contiguous array as a strided operand over its flat buffer."""
    a = np.ascontiguousarray(arr)
    strides = tuple(s // a.itemsize for s in a.strides)
    return StridedOperand(a.reshape(-1), 0, a.shape, strides)


class TestStridedOperand(unittest.TestCase):
    def test_view_aliases_buffer(self) -> None:
        buf = np.arange(6, dtype=np.float32)
        op = StridedOperand(buf, 1, (2, 2), (1, 2))
        v = op.view()
        np.testing.assert_array_equal(v, [[1, 3], [2, 4]])
        v[0, 0] = 10.0
        self.assertEqual(buf[1], 10.0)

    def test_overlap_detection(self) -> None:
        buf = np.zeros(3)
        self.assertTrue(StridedOperand(buf, 0, (2, 3), (0, 1)).overlaps_itself())
        self.assertFalse(StridedOperand(buf, 0, (1, 3), (0, 1)).overlaps_itself())


class TestGemm(unittest.TestCase):
    def _run(self, dtype) -> None:
        rng = np.random.default_rng(0)
        a = rng.standard_normal((4, 5)).astype(dtype)
        b = rng.standard_normal((5, 3)).astype(dtype)
        c = rng.standard_normal((4, 3)).astype(dtype)
        expected = (0.5 * c + 2.0 * (a @ b)).astype(dtype)

        c_op = _operand(c)
        gemm(2.0, _operand(a), _operand(b), 0.5, c_op)
        tol = 1e-5 if dtype == np.float32 else 1e-12
        np.testing.assert_allclose(c_op.view(), expected, rtol=tol, atol=tol)
        self.assertEqual(c_op.data.dtype, np.dtype(dtype))

    def test_gemm_float32(self) -> None:
        self._run(np.float32)

    def test_gemm_float64(self) -> None:
        self._run(np.float64)

    def test_beta_zero_ignores_previous_contents(self) -> None:
        c = np.full((2, 2), np.nan)
        c_op = _operand(c)
        gemm(1.0, _operand(np.eye(2)), _operand(np.eye(2)), 0.0, c_op)
        np.testing.assert_array_equal(c_op.view(), np.eye(2))

    def test_transposed_operand(self) -> None:
        a = np.arange(6, dtype=np.float64)
        a_t = StridedOperand(a, 0, (3, 2), (1, 3))
        b = _operand(np.ones((2, 1)))
        c = _operand(np.zeros((3, 1)))
        gemm(1.0, a_t, b, 0.0, c)
        np.testing.assert_array_equal(c.view().ravel(), [3.0, 5.0, 7.0])

    def test_rejects_shape_mismatch(self) -> None:
        with self.assertRaises(ValueError):
            gemm(1.0, _operand(np.ones((2, 3))), _operand(np.ones((2, 3))), 0.0,
                 _operand(np.ones((2, 3))))
        with self.assertRaises(ValueError):
            gemm(1.0, _operand(np.ones(3)), _operand(np.ones((3, 1))), 0.0,
                 _operand(np.ones((1, 1))))

    def test_warns_on_overlapping_output(self) -> None:
        c = StridedOperand(np.zeros(2), 0, (2, 2), (0, 1))
        with self.assertWarns(RuntimeWarning):
            gemm(1.0, _operand(np.eye(2)), _operand(np.eye(2)), 0.0, c)

    def test_no_warning_for_regular_output(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            gemm(1.0, _operand(np.eye(2)), _operand(np.eye(2)), 0.0, _operand(np.zeros((2, 2))))


class TestGemvGer(unittest.TestCase):
    def test_gemv(self) -> None:
        a = np.array([[1.0, 2.0], [3.0, 4.0]])
        y = _operand(np.array([1.0, 1.0]))
        gemv(1.0, _operand(a), _operand(np.array([1.0, 1.0])), 1.0, y)
        np.testing.assert_array_equal(y.view(), [4.0, 8.0])

    def test_gemv_strided_vector(self) -> None:
        a = _operand(np.eye(2))
        x = StridedOperand(np.array([5.0, 0.0, 6.0]), 0, (2,), (2,))
        y = _operand(np.zeros(2))
        gemv(1.0, a, x, 0.0, y)
        np.testing.assert_array_equal(y.view(), [5.0, 6.0])

    def test_gemv_rejects_bad_sizes(self) -> None:
        with self.assertRaises(ValueError):
            gemv(1.0, _operand(np.eye(2)), _operand(np.ones(3)), 0.0, _operand(np.ones(2)))

    def test_ger(self) -> None:
        a = _operand(np.ones((2, 2), dtype=np.float32))
        ger(2.0, _operand(np.array([1.0, 2.0], np.float32)),
            _operand(np.array([3.0, 4.0], np.float32)), 1.0, a)
        np.testing.assert_array_equal(a.view(), [[7.0, 9.0], [13.0, 17.0]])
        self.assertEqual(a.view().dtype, np.float32)

    def test_ger_rejects_bad_sizes(self) -> None:
        with self.assertRaises(ValueError):
            ger(1.0, _operand(np.ones(2)), _operand(np.ones(2)), 0.0, _operand(np.ones((2, 3))))


if __name__ == "__main__":
    unittest.main()
