import unittest
from unittest import TestCase

import numpy as np

from stridetensor import (
    DimensionOutOfRangeError,
    EmptyTensorError,
    InvalidSizeError,
    Tensor,
)


def _m() -> Tensor:
    return Tensor.from_numpy(np.array([[1.0, 5.0, 3.0], [4.0, 2.0, 6.0]]))


class TestSumMean(TestCase):
    def test_sum_all(self):
        self.assertEqual(_m().sum(), 21.0)

    def test_sum_of_empty_tensor_is_zero(self):
        self.assertEqual(Tensor().sum(), 0.0)

    def test_sum_along_dims_keeps_rank(self):
        t = _m()
        s1 = t.sum(1)
        self.assertEqual(s1.size(), (1, 3))
        np.testing.assert_array_equal(s1.to_numpy(), [[5.0, 7.0, 9.0]])
        s2 = t.sum(-1)
        self.assertEqual(s2.size(), (2, 1))
        np.testing.assert_array_equal(s2.to_numpy(), [[9.0], [12.0]])

    def test_sum_of_strided_view(self):
        t = _m().t()
        np.testing.assert_array_equal(t.sum(2).to_numpy(), [[5.0], [7.0], [9.0]])

    def test_sum_over_expanded_dimension_counts_repeats(self):
        t = Tensor.from_numpy(np.array([[2.0]])).expand((1, 4))
        self.assertEqual(t.sum(), 8.0)

    def test_mean(self):
        t = _m()
        self.assertEqual(t.mean(), 3.5)
        np.testing.assert_array_equal(t.mean(1).to_numpy(), [[2.5, 3.5, 4.5]])

    def test_mean_of_empty_tensor_raises(self):
        with self.assertRaises(EmptyTensorError):
            Tensor().mean()

    def test_bad_dimension(self):
        with self.assertRaises(DimensionOutOfRangeError):
            _m().sum(3)


class TestMax(TestCase):
    def test_max_all(self):
        self.assertEqual(_m().max(), 6.0)

    def test_max_along_dimension_returns_one_based_indices(self):
        values, indices = _m().max(2)
        self.assertEqual(values.size(), (2, 1))
        np.testing.assert_array_equal(values.to_numpy(), [[5.0], [6.0]])
        np.testing.assert_array_equal(indices.to_numpy(), [[2.0], [3.0]])

    def test_ties_report_first_position(self):
        t = Tensor.from_numpy(np.array([2.0, 7.0, 7.0, 1.0]))
        values, indices = t.max(1)
        self.assertEqual(values.value_at(1), 7.0)
        self.assertEqual(indices.value_at(1), 2.0)

    def test_max_of_empty_tensor_raises(self):
        with self.assertRaises(EmptyTensorError):
            Tensor().max()


class TestTopK(TestCase):
    def test_smallest_in_ascending_order(self):
        t = Tensor.from_numpy(np.array([4.0, 1.0, 3.0, 2.0]))
        values, indices = t.topk(2)
        np.testing.assert_array_equal(values.to_numpy(), [1.0, 2.0])
        np.testing.assert_array_equal(indices.to_numpy(), [2.0, 4.0])

    def test_largest_in_descending_order(self):
        t = Tensor.from_numpy(np.array([4.0, 1.0, 3.0, 2.0]))
        values, indices = t.topk(3, increasing=False)
        np.testing.assert_array_equal(values.to_numpy(), [4.0, 3.0, 2.0])
        np.testing.assert_array_equal(indices.to_numpy(), [1.0, 3.0, 4.0])

    def test_equal_values_keep_original_order(self):
        t = Tensor.from_numpy(np.array([3.0, 1.0, 3.0, 1.0]))
        _, asc = t.topk(2)
        np.testing.assert_array_equal(asc.to_numpy(), [2.0, 4.0])
        _, desc = t.topk(2, increasing=False)
        np.testing.assert_array_equal(desc.to_numpy(), [1.0, 3.0])

    def test_topk_along_first_dimension_of_matrix(self):
        values, indices = _m().topk(1, dim=1, increasing=False)
        self.assertEqual(values.size(), (1, 3))
        np.testing.assert_array_equal(values.to_numpy(), [[4.0, 5.0, 6.0]])
        np.testing.assert_array_equal(indices.to_numpy(), [[2.0, 1.0, 2.0]])

    def test_reuses_given_outputs(self):
        result = Tensor(7)
        indices = Tensor()
        values, idx = _m().topk(2, result=result, indices=indices)
        self.assertIs(values, result)
        self.assertIs(idx, indices)
        self.assertEqual(result.size(), (2, 2))
        np.testing.assert_array_equal(result.to_numpy(), [[1.0, 3.0], [2.0, 4.0]])

    def test_k_equal_to_extent_is_a_full_sort(self):
        t = Tensor.from_numpy(np.array([[3.0, 1.0, 2.0, 1.0], [0.0, 5.0, -1.0, 5.0]]))
        for increasing in (True, False):
            values, indices = t.topk(4, dim=2, increasing=increasing)
            self.assertEqual(values.size(), (2, 4))
            v = values.to_numpy()
            idx = indices.to_numpy().astype(int)
            for row in range(2):
                steps = np.diff(v[row])
                if increasing:
                    self.assertTrue(np.all(steps >= 0))
                else:
                    self.assertTrue(np.all(steps <= 0))
                self.assertEqual(sorted(idx[row].tolist()), [1, 2, 3, 4])
                np.testing.assert_array_equal(t.to_numpy()[row, idx[row] - 1], v[row])

        values, indices = t.topk(4, dim=2)
        np.testing.assert_array_equal(values.to_numpy(), [[1, 1, 2, 3], [-1, 0, 5, 5]])
        np.testing.assert_array_equal(indices.to_numpy(), [[2, 4, 3, 1], [3, 1, 2, 4]])
        values, indices = t.topk(4, dim=2, increasing=False)
        np.testing.assert_array_equal(values.to_numpy(), [[3, 2, 1, 1], [5, 5, 0, -1]])
        np.testing.assert_array_equal(indices.to_numpy(), [[1, 3, 2, 4], [2, 4, 1, 3]])

    def test_k_out_of_range(self):
        t = Tensor(3)
        with self.assertRaises(InvalidSizeError):
            t.topk(0)
        with self.assertRaises(InvalidSizeError):
            t.topk(4)


if __name__ == "__main__":
    unittest.main()
