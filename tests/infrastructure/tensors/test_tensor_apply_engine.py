import unittest
from unittest import TestCase

import numpy as np

from stridetensor import ElementCountMismatchError, Tensor
from stridetensor.infrastructure.tensor._apply import (
    apply1,
    apply2,
    apply3,
    element_offsets,
    strided_offsets,
)


class TestElementOffsets(TestCase):
    def test_contiguous_is_linear_range(self):
        t = Tensor((2, 3)).narrow(1, 2, 1)
        self.assertEqual(list(element_offsets(t)), [3, 4, 5])

    def test_strided_walk_matches_contiguous_range(self):
        t = Tensor((2, 3, 4))
        self.assertEqual(list(strided_offsets(t)), list(range(24)))

    def test_transposed_order(self):
        t = Tensor((2, 3)).t()
        self.assertEqual(list(element_offsets(t)), [0, 3, 1, 4, 2, 5])

    def test_zero_stride_repeats_slot(self):
        t = Tensor((2, 1)).expand((2, 3))
        self.assertEqual(list(element_offsets(t)), [0, 0, 0, 1, 1, 1])

    def test_empty_tensor_has_no_offsets(self):
        self.assertEqual(list(element_offsets(Tensor())), [])


class TestApply(TestCase):
    def test_apply1_visits_each_logical_element_once(self):
        t = Tensor.from_numpy(np.arange(12, dtype=np.float64).reshape(3, 4))
        view = t.narrow(2, 2, 2).t()
        seen = []
        apply1(view, lambda data, i: seen.append(float(data[i])))
        self.assertEqual(seen, [1.0, 5.0, 9.0, 2.0, 6.0, 10.0])

    def test_apply2_pairs_positions_in_row_major_order(self):
        a = Tensor.from_numpy(np.array([[1.0, 2.0], [3.0, 4.0]]))
        b = Tensor.from_numpy(np.array([10.0, 20.0, 30.0, 40.0]))
        pairs = []
        apply2(a.t(), b, lambda d1, i1, d2, i2: pairs.append((d1[i1], d2[i2])))
        self.assertEqual(pairs, [(1.0, 10.0), (3.0, 20.0), (2.0, 30.0), (4.0, 40.0)])

    def test_apply2_strided_and_contiguous_agree(self):
        src = Tensor.from_numpy(np.arange(6, dtype=np.float64).reshape(2, 3))
        out_strided = Tensor((3, 2)).t()
        out_contig = Tensor((2, 3))

        def _copy(d1, i1, d2, i2):
            d1[i1] = d2[i2] * 2

        apply2(out_strided, src, _copy)
        apply2(out_contig, src, _copy)
        np.testing.assert_array_equal(out_strided.to_numpy(), out_contig.to_numpy())

    def test_apply3(self):
        a = Tensor(3)
        b = Tensor.from_numpy(np.array([1.0, 2.0, 3.0], dtype=np.float32))
        c = Tensor.from_numpy(np.array([4.0, 5.0, 6.0], dtype=np.float32))

        def _sum(d1, i1, d2, i2, d3, i3):
            d1[i1] = d2[i2] + d3[i3]

        apply3(a, b, c, _sum)
        np.testing.assert_array_equal(a.to_numpy(), [5.0, 7.0, 9.0])

    def test_count_mismatch_raises_before_any_callback(self):
        calls = []
        with self.assertRaises(ElementCountMismatchError):
            apply2(Tensor(3), Tensor(4), lambda *args: calls.append(args))
        self.assertEqual(calls, [])

    def test_shapes_may_differ_with_equal_counts(self):
        a = Tensor((2, 3))
        b = Tensor.from_numpy(np.arange(6, dtype=np.float32))
        a.copy(b)
        np.testing.assert_array_equal(a.to_numpy(), [[0, 1, 2], [3, 4, 5]])


if __name__ == "__main__":
    unittest.main()
