from __future__ import annotations

import unittest

import numpy as np

from stridetensor.infrastructure.ops._strided import StridedOperand
from stridetensor.infrastructure.ops.correlate2d_cpu import (
    conv2d,
    output_size,
    parse_mode,
    xcorr2d,
)


def _operand(arr: np.ndarray) -> StridedOperand:
    a = np.ascontiguousarray(arr)
    strides = tuple(s // a.itemsize for s in a.strides)
    return StridedOperand(a.reshape(-1), 0, a.shape, strides)


def _reference_xcorr(x: np.ndarray, k: np.ndarray) -> np.ndarray:
    kh, kw = k.shape
    oh, ow = x.shape[0] - kh + 1, x.shape[1] - kw + 1
    out = np.zeros((oh, ow), dtype=np.float64)
    for i in range(oh):
        for j in range(ow):
            out[i, j] = np.sum(x[i : i + kh, j : j + kw] * k)
    return out


class TestModes(unittest.TestCase):
    def test_parse_mode(self) -> None:
        self.assertEqual(parse_mode("v"), "V")
        self.assertEqual(parse_mode("Full"), "F")
        with self.assertRaises(ValueError):
            parse_mode("same")

    def test_output_size(self) -> None:
        self.assertEqual(output_size((5, 6), (2, 3), "V"), (4, 4))
        self.assertEqual(output_size((5, 6), (2, 3), "F"), (6, 8))
        self.assertEqual(output_size((2, 2), (3, 3), "F"), (4, 4))
        with self.assertRaises(ValueError):
            output_size((2, 2), (3, 1), "V")


class TestCorrelate(unittest.TestCase):
    def setUp(self) -> None:
        rng = np.random.default_rng(1)
        self.x = rng.standard_normal((6, 5))
        self.k = rng.standard_normal((3, 2))

    def test_xcorr_valid_matches_loop_reference(self) -> None:
        out = _operand(np.zeros((4, 4)))
        xcorr2d(_operand(self.x), _operand(self.k), out, "V")
        np.testing.assert_allclose(out.view(), _reference_xcorr(self.x, self.k), atol=1e-12)

    def test_xcorr_full_matches_padded_reference(self) -> None:
        out = _operand(np.zeros((8, 6)))
        xcorr2d(_operand(self.x), _operand(self.k), out, "F")
        padded = np.pad(self.x, ((2, 2), (1, 1)))
        np.testing.assert_allclose(out.view(), _reference_xcorr(padded, self.k), atol=1e-12)

    def test_conv_is_xcorr_with_flipped_kernel(self) -> None:
        out = _operand(np.zeros((4, 4)))
        conv2d(_operand(self.x), _operand(self.k), out)
        expected = _reference_xcorr(self.x, self.k[::-1, ::-1])
        np.testing.assert_allclose(out.view(), expected, atol=1e-12)

    def test_strided_input(self) -> None:
        x_t = StridedOperand(self.x.reshape(-1).copy(), 0, (5, 6), (1, 5))
        out = _operand(np.zeros((3, 5)))
        xcorr2d(x_t, _operand(self.k), out)
        np.testing.assert_allclose(out.view(), _reference_xcorr(self.x.T, self.k), atol=1e-12)

    def test_output_cast_to_operand_type(self) -> None:
        out = _operand(np.zeros((4, 4), dtype=np.float32))
        xcorr2d(_operand(self.x), _operand(self.k), out)
        self.assertEqual(out.view().dtype, np.float32)

    def test_rejects_wrong_output_size(self) -> None:
        with self.assertRaises(ValueError):
            xcorr2d(_operand(self.x), _operand(self.k), _operand(np.zeros((3, 3))))
        with self.assertRaises(ValueError):
            xcorr2d(_operand(np.ones(3)), _operand(self.k), _operand(np.zeros((1, 1))))


if __name__ == "__main__":
    unittest.main()
