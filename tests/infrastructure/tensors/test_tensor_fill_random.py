import unittest
from unittest import TestCase

import numpy as np

from stridetensor import ElementCountMismatchError, RandomGenerator, Tensor


class TestFillCopy(TestCase):
    def test_fill_strided_view(self):
        t = Tensor((3, 3), data_type="double")
        t.t().narrow(1, 2, 1).fill(1.0)
        np.testing.assert_array_equal(t.to_numpy()[:, 1], [1.0, 1.0, 1.0])
        self.assertEqual(t.sum(), 3.0)

    def test_fill_expanded_view_writes_shared_slot(self):
        t = Tensor.from_numpy(np.array([[1.0], [2.0]]))
        t.expand((2, 4)).fill(3.0)
        np.testing.assert_array_equal(t.to_numpy(), [[3.0], [3.0]])

    def test_zero(self):
        t = Tensor.ones((2, 2))
        self.assertIs(t.zero(), t)
        self.assertEqual(t.sum(), 0.0)

    def test_copy_converts_element_type(self):
        dst = Tensor(3, data_type="float")
        dst.copy(Tensor.from_numpy(np.array([0.1, 0.2, 0.3])))
        np.testing.assert_array_equal(
            dst.to_numpy(), np.array([0.1, 0.2, 0.3], dtype=np.float32)
        )

    def test_copy_count_mismatch(self):
        with self.assertRaises(ElementCountMismatchError):
            Tensor(3).copy(Tensor(4))

    def test_clone_is_independent_and_contiguous(self):
        t = Tensor.from_numpy(np.arange(6, dtype=np.float32).reshape(2, 3)).t()
        c = t.clone()
        self.assertTrue(c.is_contiguous())
        self.assertEqual(c.storage_offset(), 1)
        c.fill(0.0)
        self.assertEqual(t.value_at(3, 2), 5.0)

    def test_copy_between_overlapping_strided_views(self):
        base = Tensor.from_numpy(np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]))
        t = base.t()
        t.narrow(1, 2, 2).copy(t.narrow(1, 1, 2))
        np.testing.assert_array_equal(
            t.to_numpy(), [[1.0, 4.0], [1.0, 4.0], [2.0, 5.0]]
        )

    def test_copy_between_overlapping_contiguous_views(self):
        t = Tensor.from_numpy(np.array([1.0, 2.0, 3.0, 4.0]))
        t.narrow(1, 2, 3).copy(t.narrow(1, 1, 3))
        np.testing.assert_array_equal(t.to_numpy(), [1.0, 1.0, 2.0, 3.0])

    def test_copy_from_numpy_into_strided_view(self):
        t = Tensor((2, 2), data_type="double")
        t.t().copy_from_numpy(np.array([[1.0, 2.0], [3.0, 4.0]]))
        np.testing.assert_array_equal(t.to_numpy(), [[1.0, 3.0], [2.0, 4.0]])
        with self.assertRaises(ElementCountMismatchError):
            t.copy_from_numpy(np.zeros(3))

    def test_to_numpy_returns_a_copy(self):
        t = Tensor.ones(2)
        a = t.to_numpy()
        a[0] = 9.0
        self.assertEqual(t.value_at(1), 1.0)
        self.assertEqual(Tensor().to_numpy().shape, (0,))


class TestRandom(TestCase):
    def test_same_seed_same_values(self):
        a = Tensor((2, 3)).rand(RandomGenerator(7))
        b = Tensor((2, 3)).rand(RandomGenerator(7))
        np.testing.assert_array_equal(a.to_numpy(), b.to_numpy())
        values = a.to_numpy()
        self.assertTrue(np.all((values >= 0.0) & (values < 1.0)))

    def test_randn_is_seeded(self):
        a = Tensor(50, data_type="double").randn(RandomGenerator(3))
        b = Tensor(50, data_type="double").randn(RandomGenerator(3))
        self.assertEqual(a, b)
        self.assertNotEqual(a, Tensor(50, data_type="double").randn(RandomGenerator(4)))

    def test_bernoulli_extremes(self):
        gen = RandomGenerator(0)
        self.assertEqual(Tensor(10).bernoulli(1.0, gen).sum(), 10.0)
        self.assertEqual(Tensor(10).bernoulli(0.0, gen).sum(), 0.0)
        values = Tensor(100).bernoulli(0.5, gen).to_numpy()
        self.assertTrue(set(values.tolist()) <= {0.0, 1.0})

    def test_bernoulli_probability_range(self):
        with self.assertRaises(ValueError):
            Tensor(2).bernoulli(1.5)

    def test_uniform_bounds(self):
        t = Tensor(1, data_type="double")
        for _ in range(20):
            self.assertTrue(0.0 <= t.uniform() < 1.0)
            self.assertTrue(1.0 <= t.uniform(3) < 3.0)
            self.assertTrue(-2.0 <= t.uniform(-2, 2) < 2.0)
        self.assertEqual(t.uniform(4, 4), 4.0)

    def test_uniform_argument_errors(self):
        t = Tensor(1)
        with self.assertRaises(ValueError):
            t.uniform(2, 1)
        with self.assertRaises(TypeError):
            t.uniform(1, 2, 3)

    def test_randperm_is_a_permutation(self):
        t = Tensor.randperm(6, data_type="double")
        self.assertEqual(t.size(), (6,))
        self.assertEqual(t.data_type, Tensor(data_type="double").data_type)
        self.assertEqual(sorted(t.to_numpy().tolist()), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        self.assertEqual(Tensor.randperm(1).to_numpy().tolist(), [1.0])

    def test_randperm_is_seeded(self):
        a = Tensor.randperm(20, generator=RandomGenerator(5))
        b = Tensor.randperm(20, generator=RandomGenerator(5))
        np.testing.assert_array_equal(a.to_numpy(), b.to_numpy())

    def test_randperm_requires_positive_count(self):
        with self.assertRaises(ValueError):
            Tensor.randperm(0)


if __name__ == "__main__":
    unittest.main()
