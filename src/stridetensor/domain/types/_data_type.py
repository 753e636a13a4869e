"""
Element type tags.

`DataType` is the caller-facing tag attached to tensors and exports. The
domain layer only knows the tag and its width; mapping a tag onto a concrete
buffer dtype and arithmetic is the job of the numeric capability in the
infrastructure layer.
"""

from enum import Enum


class DataType(Enum):
    """
    Enumeration of supported tensor element types.

    Attributes
    ----------
    FLOAT : DataType
        32-bit IEEE-754 floating point.
    DOUBLE : DataType
        64-bit IEEE-754 floating point.
    """

    FLOAT = "float"
    DOUBLE = "double"

    @property
    def itemsize(self) -> int:
        """Width of one element in bytes."""
        return 4 if self is DataType.FLOAT else 8

    @classmethod
    def parse(cls, value: "str | DataType") -> "DataType":
        """
        Normalize a user-facing tag into a `DataType`.

        Accepts the enum itself, its value (``"float"`` / ``"double"``) or the
        NumPy-style aliases ``"float32"`` / ``"float64"``.

        Raises
        ------
        ValueError
            If the tag is not recognised.
        """
        if isinstance(value, DataType):
            return value
        key = str(value).strip().lower()
        aliases = {
            "float": cls.FLOAT,
            "float32": cls.FLOAT,
            "f4": cls.FLOAT,
            "double": cls.DOUBLE,
            "float64": cls.DOUBLE,
            "f8": cls.DOUBLE,
        }
        if key not in aliases:
            raise ValueError(
                f"Invalid data type '{value}'. Expected 'float' or 'double'"
            )
        return aliases[key]
