"""
Explicit random generator handle.

`RandomGenerator` wraps a `numpy.random.Generator` and is the only source of
randomness used by the numerics. It is passed explicitly (bound to a numeric
at construction, or handed to `Tensor.rand(generator=...)`), so results are
reproducible under a fixed seed and independent callers never share hidden
state unless they choose to.

A lazily created default generator exists for convenience; it is seeded from
`STRIDETENSOR_SEED` when that variable is set.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .._config import get_config


class RandomGenerator:
    """
    Seedable scalar sampler.

    Parameters
    ----------
    seed : Optional[int], optional
        Seed for the underlying bit generator. None draws OS entropy.

    Notes
    -----
    Instances are not thread-safe; callers that share one generator across
    threads must serialize access themselves.
    """

    __slots__ = ("_seed", "_rng")

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def seed(self) -> Optional[int]:
        """Seed the generator was last (re)initialized with."""
        return self._seed

    def set_seed(self, seed: Optional[int]) -> "RandomGenerator":
        """Re-seed in place and return self."""
        self._seed = seed
        self._rng = np.random.default_rng(seed)
        return self

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        """Draw one value from Uniform[low, high)."""
        return float(self._rng.uniform(low, high))

    def normal(self, mean: float = 0.0, stdv: float = 1.0) -> float:
        """Draw one value from Normal(mean, stdv)."""
        return float(self._rng.normal(mean, stdv))

    def bernoulli(self, p: float) -> bool:
        """
        Return True with probability `p`.

        Raises
        ------
        ValueError
            If `p` is outside [0, 1].
        """
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"bernoulli probability must be in [0, 1], got {p}")
        return bool(self._rng.random() < p)

    def randperm(self, n: int) -> np.ndarray:
        """
        Return a random permutation of the integers 1..n (1-based positions).

        Raises
        ------
        ValueError
            If `n < 1`.
        """
        if n < 1:
            raise ValueError(f"randperm requires n >= 1, got {n}")
        return self._rng.permutation(np.arange(1, n + 1))

    def __repr__(self) -> str:
        return f"RandomGenerator(seed={self._seed!r})"


_DEFAULT: Optional[RandomGenerator] = None


def default_generator() -> RandomGenerator:
    """Return the process default generator, creating it on first use."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = RandomGenerator(get_config().seed)
    return _DEFAULT


def reset_default_generator() -> None:
    """Drop the default generator; the next call re-creates it from config."""
    global _DEFAULT
    _DEFAULT = None
