from ._generator import RandomGenerator, default_generator, reset_default_generator

__all__ = [
    RandomGenerator.__name__,
    default_generator.__name__,
    reset_default_generator.__name__,
]
