"""
Исключения генератора SDK
"""

from typing import Optional


class GenerationError(Exception):
    """Базовая ошибка генерации"""


class DocumentError(GenerationError):
    """Ошибка чтения или структуры OpenAPI документа"""

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class OperationIdError(GenerationError):
    """Отсутствующий или некорректный operationId"""

    def __init__(self, message: str, path: str, verb: str, operation_id=None):
        self.message = message
        self.path = path
        self.verb = verb
        self.operation_id = operation_id
        super().__init__(f"[{verb.upper()} {path}] {message}")


class DependencyFrozenError(GenerationError):
    """Попытка изменить набор зависимостей после эмиссии"""
