"""Утилиты для генератора"""

from .file_utils import write_atomic
from .naming import pascal_case, python_identifier, snake_case, unique_name

__all__ = [
    "write_atomic",
    "snake_case",
    "pascal_case",
    "python_identifier",
    "unique_name",
]
