import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass
class Diagnostic:
    """Диагностическое сообщение генератора"""

    severity: Severity
    message: str
    path: Optional[str] = None
    verb: Optional[str] = None

    def __str__(self) -> str:
        location = f"[{self.verb.upper()} {self.path}] " if self.path and self.verb else ""
        return f"{self.severity.value}: {location}{self.message}"


class Diagnostics:
    """Сборщик диагностик одного запуска генерации.

    Каждое сообщение сразу пишется в лог и сохраняется,
    чтобы верхний уровень мог показать итог оператору.
    """

    def __init__(self):
        self.items: List[Diagnostic] = []

    def add(
        self,
        severity: Severity,
        message: str,
        path: Optional[str] = None,
        verb: Optional[str] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(severity=severity, message=message, path=path, verb=verb)
        self.items.append(diagnostic)
        logger.log(_LOG_LEVELS[severity], str(diagnostic))
        return diagnostic

    def info(self, message: str, path: str = None, verb: str = None) -> Diagnostic:
        return self.add(Severity.INFO, message, path, verb)

    def warning(self, message: str, path: str = None, verb: str = None) -> Diagnostic:
        return self.add(Severity.WARNING, message, path, verb)

    def error(self, message: str, path: str = None, verb: str = None) -> Diagnostic:
        return self.add(Severity.ERROR, message, path, verb)

    def by_severity(self, severity: Severity) -> List[Diagnostic]:
        return [item for item in self.items if item.severity == severity]

    @property
    def has_errors(self) -> bool:
        return any(item.severity == Severity.ERROR for item in self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
