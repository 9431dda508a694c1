"""Генератор Python SDK из OpenAPI спецификаций"""

from .config import OpenApiConfig
from .exceptions import (
    DependencyFrozenError,
    DocumentError,
    GenerationError,
    OperationIdError,
)
from .generator import SdkGenerator, generate_file, generate_sdk

__all__ = [
    "OpenApiConfig",
    "SdkGenerator",
    "generate_sdk",
    "generate_file",
    "GenerationError",
    "DocumentError",
    "OperationIdError",
    "DependencyFrozenError",
]
