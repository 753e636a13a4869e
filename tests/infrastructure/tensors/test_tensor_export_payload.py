import json
import unittest
from unittest import TestCase

import numpy as np

from stridetensor import DataType, DataTypeMismatchError, Tensor, TensorExport
from stridetensor.infrastructure.encoding._b64 import (
    payload_to_storage,
    storage_to_payload,
)


class TestExport(TestCase):
    def test_export_captures_geometry(self):
        t = Tensor.from_numpy(np.arange(6, dtype=np.float32).reshape(2, 3))
        e = t.t().narrow(1, 2, 2).export()
        self.assertIs(e.data_type, DataType.FLOAT)
        self.assertEqual(e.size, (2, 2))
        self.assertEqual(e.stride, (1, 3))
        self.assertEqual(e.storage_offset, 2)
        np.testing.assert_array_equal(e.storage, np.arange(6))

    def test_export_is_a_snapshot(self):
        t = Tensor.from_numpy(np.array([1.0, 2.0]))
        e = t.export()
        t.fill(0.0)
        np.testing.assert_array_equal(e.storage, [1.0, 2.0])

    def test_from_export_aliases_the_record_storage(self):
        storage = np.array([0.0, 1.0, 2.0, 3.0])
        e = TensorExport("double", (2,), (2,), storage, storage_offset=2)
        t = Tensor.from_export(e)
        np.testing.assert_array_equal(t.to_numpy(), [1.0, 3.0])
        t.fill(5.0)
        np.testing.assert_array_equal(storage, [0.0, 5.0, 2.0, 5.0])

    def test_record_validation(self):
        with self.assertRaises(ValueError):
            TensorExport("float", (2,), (1, 1), np.zeros(2, np.float32))
        with self.assertRaises(ValueError):
            TensorExport("float", (2,), (1,), np.zeros((1, 2), np.float32))
        with self.assertRaises(DataTypeMismatchError):
            TensorExport("float", (2,), (1,), np.zeros(2, np.float64))

    def test_empty_tensor_round_trip(self):
        t = Tensor.from_export(Tensor(data_type="double").export())
        self.assertEqual(t.dim(), 0)
        self.assertIs(t.data_type, DataType.DOUBLE)


class TestPayload(TestCase):
    def test_payload_survives_json(self):
        t = Tensor.from_numpy(np.arange(4, dtype=np.float32)).unfold(1, 2, 1)
        payload = json.loads(json.dumps(t.to_payload()))
        self.assertEqual(payload["size"], [3, 2])
        self.assertEqual(payload["stride"], [1, 1])
        back = Tensor.from_payload(payload)
        self.assertEqual(back.size(), (3, 2))
        self.assertEqual(back.stride(), (1, 1))
        np.testing.assert_array_equal(back.to_numpy(), t.to_numpy())
        self.assertEqual(back, t)

    def test_corrupt_storage_payload(self):
        payload = storage_to_payload(np.arange(3, dtype=np.float64))
        payload["length"] = 4
        with self.assertRaises(ValueError):
            payload_to_storage(payload)

    def test_decoded_storage_is_writable(self):
        arr = payload_to_storage(storage_to_payload(np.ones(2, dtype=np.float32)))
        arr[0] = 3.0
        self.assertEqual(arr.dtype, np.float32)

    def test_storage_payload_requires_1d(self):
        with self.assertRaises(ValueError):
            storage_to_payload(np.zeros((2, 2)))


if __name__ == "__main__":
    unittest.main()
