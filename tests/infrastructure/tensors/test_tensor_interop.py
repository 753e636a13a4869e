import unittest
from unittest import TestCase

import numpy as np

from stridetensor import NotContiguousError, Tensor, TensorValidationError


def _m() -> Tensor:
    return Tensor.from_numpy(np.arange(6, dtype=np.float64).reshape(2, 3))


class TestToMatrix(TestCase):
    def test_row_major_alias(self):
        t = _m()
        self.assertTrue(t.is_row_major())
        m = t.to_matrix()
        self.assertEqual(m.shape, (2, 3))
        m[1, 2] = 50.0
        self.assertEqual(t.value_at(2, 3), 50.0)

    def test_column_major_alias(self):
        t = _m().t()
        self.assertTrue(t.is_column_major())
        self.assertFalse(t.is_row_major())
        np.testing.assert_array_equal(t.to_matrix(), np.arange(6).reshape(2, 3).T)

    def test_other_layouts_rejected(self):
        t = Tensor((4, 4)).narrow(2, 1, 2)
        with self.assertRaises(NotContiguousError):
            t.to_matrix()
        with self.assertRaises(TensorValidationError):
            Tensor(3).to_matrix()

    def test_narrowed_rows_keep_row_major(self):
        m = _m().narrow(1, 2, 1).to_matrix()
        np.testing.assert_array_equal(m, [[3, 4, 5]])


class TestToVector(TestCase):
    def test_alias(self):
        t = Tensor.from_numpy(np.array([1.0, 2.0, 3.0]))
        v = t.narrow(1, 2, 2).to_vector()
        v[0] = 7.0
        np.testing.assert_array_equal(t.to_numpy(), [1.0, 7.0, 3.0])

    def test_strided_vector_rejected(self):
        col = _m().select(2, 1)
        with self.assertRaises(NotContiguousError):
            col.to_vector()
        self.assertEqual(_m().narrow(1, 1, 1).select(2, 2).to_vector().tolist(), [1.0])

    def test_requires_vector(self):
        with self.assertRaises(TensorValidationError):
            _m().to_vector()


if __name__ == "__main__":
    unittest.main()
