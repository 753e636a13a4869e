"""
Process configuration read from environment variables.

Recognised variables
--------------------
STRIDETENSOR_DEFAULT_DTYPE
    Element type used when a tensor is built without an explicit numeric or
    data type. ``float`` (default) or ``double``.
STRIDETENSOR_SEED
    Optional integer seed for the default random generator. Unset means the
    generator is seeded from OS entropy.
STRIDETENSOR_FLOAT_EPSILON
    Relative tolerance for FLOAT element equality (default ``1e-5``).
STRIDETENSOR_DOUBLE_EPSILON
    Relative tolerance for DOUBLE element equality (default ``1e-7``).

The configuration is read once and cached; `reset_config()` drops the cache
so the next `get_config()` re-reads the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..domain.types._data_type import DataType

_ENV_PREFIX = "STRIDETENSOR_"


@dataclass(frozen=True)
class TensorConfig:
    """
    Immutable snapshot of the engine configuration.

    Attributes
    ----------
    default_dtype : DataType
        Element type for tensors built without an explicit type.
    seed : Optional[int]
        Seed of the default random generator, or None for OS entropy.
    float_epsilon : float
        Relative tolerance for FLOAT equality.
    double_epsilon : float
        Relative tolerance for DOUBLE equality.
    """

    default_dtype: DataType = DataType.FLOAT
    seed: Optional[int] = None
    float_epsilon: float = 1e-5
    double_epsilon: float = 1e-7

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TensorConfig":
        """
        Build a configuration from environment variables.

        Parameters
        ----------
        environ : Optional[Mapping[str, str]]
            Mapping to read from. Defaults to `os.environ`.

        Raises
        ------
        ValueError
            If a variable is set to an unparsable value.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            raw = env.get(_ENV_PREFIX + name, "")
            raw = raw.strip()
            return raw or None

        dtype_raw = _get("DEFAULT_DTYPE")
        seed_raw = _get("SEED")
        feps_raw = _get("FLOAT_EPSILON")
        deps_raw = _get("DOUBLE_EPSILON")

        try:
            seed = int(seed_raw) if seed_raw is not None else None
        except ValueError:
            raise ValueError(
                f"{_ENV_PREFIX}SEED must be an integer, got {seed_raw!r}"
            ) from None

        return cls(
            default_dtype=(
                DataType.parse(dtype_raw) if dtype_raw is not None else DataType.FLOAT
            ),
            seed=seed,
            float_epsilon=_parse_epsilon("FLOAT_EPSILON", feps_raw, 1e-5),
            double_epsilon=_parse_epsilon("DOUBLE_EPSILON", deps_raw, 1e-7),
        )

    def epsilon_for(self, data_type: DataType) -> float:
        """Return the equality tolerance configured for `data_type`."""
        if data_type is DataType.FLOAT:
            return self.float_epsilon
        return self.double_epsilon


def _parse_epsilon(name: str, raw: Optional[str], default: float) -> float:
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{_ENV_PREFIX}{name} must be a float, got {raw!r}") from None
    if not value > 0.0:
        raise ValueError(f"{_ENV_PREFIX}{name} must be positive, got {value}")
    return value


_CONFIG: Optional[TensorConfig] = None


def get_config() -> TensorConfig:
    """Return the cached process configuration, reading it on first use."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = TensorConfig.from_env()
    return _CONFIG


def reset_config() -> None:
    """Forget the cached configuration (the environment is re-read lazily)."""
    global _CONFIG
    _CONFIG = None
