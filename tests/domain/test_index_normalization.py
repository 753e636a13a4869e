from unittest import TestCase
import unittest

from stridetensor.domain import (
    DataType,
    DimensionOutOfRangeError,
    IndexOutOfRangeError,
    TensorValidationError,
    normalize_dim,
    normalize_index,
)


class TestNormalizeIndex(TestCase):
    def test_positive_indices_are_one_based(self):
        self.assertEqual(normalize_index(1, 5), 0)
        self.assertEqual(normalize_index(5, 5), 4)

    def test_negative_indices_count_from_the_end(self):
        self.assertEqual(normalize_index(-1, 5), 4)
        self.assertEqual(normalize_index(-5, 5), 0)

    def test_zero_is_out_of_range(self):
        with self.assertRaises(IndexOutOfRangeError):
            normalize_index(0, 5)

    def test_past_either_end_raises(self):
        with self.assertRaises(IndexOutOfRangeError):
            normalize_index(6, 5)
        with self.assertRaises(IndexOutOfRangeError):
            normalize_index(-6, 5)

    def test_error_carries_offending_values(self):
        with self.assertRaises(IndexOutOfRangeError) as cm:
            normalize_index(7, 3, "start index")
        self.assertEqual(cm.exception.index, 7)
        self.assertEqual(cm.exception.extent, 3)
        self.assertIn("start index", str(cm.exception))

    def test_index_error_is_catchable_as_builtin_families(self):
        with self.assertRaises(ValueError):
            normalize_index(9, 2)
        with self.assertRaises(IndexError):
            normalize_index(9, 2)


class TestNormalizeDim(TestCase):
    def test_dims_are_one_based_and_negative_aware(self):
        self.assertEqual(normalize_dim(1, 3), 0)
        self.assertEqual(normalize_dim(3, 3), 2)
        self.assertEqual(normalize_dim(-1, 3), 2)
        self.assertEqual(normalize_dim(-3, 3), 0)

    def test_out_of_range_dim_raises(self):
        for bad in (0, 4, -4):
            with self.assertRaises(DimensionOutOfRangeError):
                normalize_dim(bad, 3)

    def test_rank_zero_has_no_dimensions(self):
        with self.assertRaises(DimensionOutOfRangeError) as cm:
            normalize_dim(1, 0)
        self.assertIsInstance(cm.exception, TensorValidationError)
        self.assertEqual(cm.exception.n_dim, 0)


class TestDataType(TestCase):
    def test_parse_accepts_tags_and_aliases(self):
        self.assertIs(DataType.parse("float"), DataType.FLOAT)
        self.assertIs(DataType.parse("Float32"), DataType.FLOAT)
        self.assertIs(DataType.parse("double"), DataType.DOUBLE)
        self.assertIs(DataType.parse("float64"), DataType.DOUBLE)
        self.assertIs(DataType.parse(DataType.DOUBLE), DataType.DOUBLE)

    def test_parse_rejects_unknown_tags(self):
        with self.assertRaises(ValueError):
            DataType.parse("int32")

    def test_itemsize(self):
        self.assertEqual(DataType.FLOAT.itemsize, 4)
        self.assertEqual(DataType.DOUBLE.itemsize, 8)


if __name__ == "__main__":
    unittest.main()
