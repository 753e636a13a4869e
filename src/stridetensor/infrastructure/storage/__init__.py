from ._array_storage import ArrayStorage, data_type_of, dtype_of

__all__ = [
    ArrayStorage.__name__,
    data_type_of.__name__,
    dtype_of.__name__,
]
