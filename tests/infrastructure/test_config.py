from unittest import TestCase
import unittest

from stridetensor import DataType, TensorConfig, get_config, reset_config


class TestTensorConfigFromEnv(TestCase):
    def test_defaults_when_nothing_is_set(self):
        cfg = TensorConfig.from_env({})
        self.assertIs(cfg.default_dtype, DataType.FLOAT)
        self.assertIsNone(cfg.seed)
        self.assertEqual(cfg.float_epsilon, 1e-5)
        self.assertEqual(cfg.double_epsilon, 1e-7)

    def test_reads_prefixed_variables(self):
        cfg = TensorConfig.from_env(
            {
                "STRIDETENSOR_DEFAULT_DTYPE": "double",
                "STRIDETENSOR_SEED": "42",
                "STRIDETENSOR_FLOAT_EPSILON": "1e-3",
                "STRIDETENSOR_DOUBLE_EPSILON": "1e-9",
            }
        )
        self.assertIs(cfg.default_dtype, DataType.DOUBLE)
        self.assertEqual(cfg.seed, 42)
        self.assertEqual(cfg.float_epsilon, 1e-3)
        self.assertEqual(cfg.double_epsilon, 1e-9)

    def test_blank_values_fall_back_to_defaults(self):
        cfg = TensorConfig.from_env({"STRIDETENSOR_SEED": "   "})
        self.assertIsNone(cfg.seed)

    def test_bad_values_raise(self):
        with self.assertRaises(ValueError):
            TensorConfig.from_env({"STRIDETENSOR_SEED": "abc"})
        with self.assertRaises(ValueError):
            TensorConfig.from_env({"STRIDETENSOR_DEFAULT_DTYPE": "int8"})
        with self.assertRaises(ValueError):
            TensorConfig.from_env({"STRIDETENSOR_FLOAT_EPSILON": "-1"})

    def test_epsilon_for(self):
        cfg = TensorConfig(float_epsilon=0.5, double_epsilon=0.25)
        self.assertEqual(cfg.epsilon_for(DataType.FLOAT), 0.5)
        self.assertEqual(cfg.epsilon_for(DataType.DOUBLE), 0.25)

    def test_config_is_immutable(self):
        cfg = TensorConfig()
        with self.assertRaises(AttributeError):
            cfg.seed = 1  # type: ignore[misc]


class TestCachedConfig(TestCase):
    def tearDown(self):
        reset_config()

    def test_get_config_is_cached_until_reset(self):
        reset_config()
        first = get_config()
        self.assertIs(get_config(), first)
        reset_config()
        self.assertIsNot(get_config(), first)


if __name__ == "__main__":
    unittest.main()
