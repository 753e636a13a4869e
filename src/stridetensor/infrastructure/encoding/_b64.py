"""
JSON-safe base64 encoding of flat storage buffers and tensor exports.

A payload is a plain dict that survives `json.dumps`:

    {
      "data_type": "float" | "double",
      "size": [...],            # extents
      "stride": [...],          # element strides
      "storage_offset": 1,      # 1-based
      "storage": {"b64": "...", "dtype": "<f4", "length": n}
    }

The storage is encoded whole, so strided and overlapping views round-trip
with their geometry intact.
"""

from __future__ import annotations

import base64
from typing import Any, Dict

import numpy as np


def bytes_to_b64_str(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")


def b64_str_to_bytes(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"))


def storage_to_payload(arr: np.ndarray) -> Dict[str, Any]:
    """
    Encode a 1-D storage array.

    Raises
    ------
    ValueError
        If `arr` is not one-dimensional.
    """
    a = np.asarray(arr)
    if a.ndim != 1:
        raise ValueError(f"storage payload expects a 1-D array, got {a.ndim}D")
    return {
        "b64": bytes_to_b64_str(a.tobytes(order="C")),
        "dtype": a.dtype.str,
        "length": int(a.shape[0]),
    }


def payload_to_storage(payload: Dict[str, Any]) -> np.ndarray:
    """
    Decode a storage payload into a fresh, writable 1-D array.

    Raises
    ------
    ValueError
        If the decoded byte count disagrees with the recorded length.
    """
    raw = b64_str_to_bytes(str(payload["b64"]))
    dtype = np.dtype(str(payload["dtype"]))
    length = int(payload["length"])
    arr = np.frombuffer(raw, dtype=dtype)
    if arr.shape[0] != length:
        raise ValueError(
            f"corrupt storage payload: expected {length} elements, decoded {arr.shape[0]}"
        )
    # frombuffer views are read-only
    return np.array(arr, copy=True)


def export_to_payload(export: Any) -> Dict[str, Any]:
    """Encode a `TensorExport` record."""
    return {
        "data_type": export.data_type.value,
        "size": [int(s) for s in export.size],
        "stride": [int(s) for s in export.stride],
        "storage_offset": int(export.storage_offset),
        "storage": storage_to_payload(export.storage),
    }


def payload_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode a tensor payload into the keyword fields of a `TensorExport`.

    Raises
    ------
    KeyError
        If a required field is missing.
    """
    return {
        "data_type": str(payload["data_type"]),
        "size": tuple(int(s) for s in payload["size"]),
        "stride": tuple(int(s) for s in payload["stride"]),
        "storage_offset": int(payload["storage_offset"]),
        "storage": payload_to_storage(payload["storage"]),
    }
