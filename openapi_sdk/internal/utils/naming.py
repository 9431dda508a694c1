"""Утилиты для работы с именами в генерируемом коде"""

import keyword
import re
from typing import Collection


def snake_case(name: str) -> str:
    """
    Преобразование имени в snake_case.

    Examples:
        >>> snake_case("ApplicationDto")
        'application_dto'
        >>> snake_case("HTTPValidationError")
        'http_validation_error'
        >>> snake_case("page-node")
        'page_node'
    """
    name = name.replace("-", "_")

    # HTTPValidationError -> HTTP_Validation_Error -> http_validation_error
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1)
    s3 = re.sub("([A-Z]+)([A-Z][a-z])", r"\1_\2", s2)
    s4 = re.sub("_+", "_", s3)
    return s4.lower()


def pascal_case(name: str) -> str:
    """
    Преобразование имени в PascalCase с сохранением уже заглавных букв.

    Examples:
        >>> pascal_case("application")
        'Application'
        >>> pascal_case("findAll")
        'FindAll'
        >>> pascal_case("list_2")
        'List2'
    """
    if not name:
        return ""

    parts = [part for part in re.sub(r"[^a-zA-Z0-9]", "_", name).split("_") if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def python_identifier(name: str, reserved: Collection[str] = ()) -> str:
    """
    Безопасный идентификатор Python из произвольного имени.

    Недопустимые символы заменяются на "_", ведущая цифра экранируется,
    ключевые слова и зарезервированные имена получают "_" в конце.
    """
    identifier = re.sub(r"\W", "_", name)
    if not identifier or identifier[0].isdigit():
        identifier = "_" + identifier

    while keyword.iskeyword(identifier) or identifier in reserved:
        identifier += "_"

    return identifier


def unique_name(name: str, taken: Collection[str], start: int = 2) -> str:
    """Первое свободное имя вида name, name_2, name_3, ..."""
    if name not in taken:
        return name

    index = start
    while f"{name}_{index}" in taken:
        index += 1
    return f"{name}_{index}"
