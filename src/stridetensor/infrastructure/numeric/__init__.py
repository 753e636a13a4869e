from ._numeric import DoubleNumeric, FloatNumeric, numeric_for, numeric_for_dtype

__all__ = [
    FloatNumeric.__name__,
    DoubleNumeric.__name__,
    numeric_for.__name__,
    numeric_for_dtype.__name__,
]
