import logging
from typing import Dict, List, Optional, Set

from ...exceptions import DependencyFrozenError
from ..utils.naming import snake_case
from .diagnostics import Diagnostics

logger = logging.getLogger(__name__)


class DependencySet:
    """Импорты генерируемого файла: модуль -> набор имен"""

    def __init__(self):
        self._modules: Dict[str, Set[str]] = {}
        self._frozen = False

    def add(self, module: str, symbol: str) -> bool:
        """Добавление пары (модуль, имя). Повторное добавление ничего не меняет"""
        if self._frozen:
            raise DependencyFrozenError(
                f"Набор зависимостей уже использован, нельзя добавить {module}.{symbol}"
            )

        symbols = self._modules.setdefault(module, set())
        if symbol in symbols:
            return False

        symbols.add(symbol)
        return True

    def freeze(self) -> "DependencySet":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def import_lines(self) -> List[str]:
        """Отсортированные строки импорта"""
        return [
            f"from {module} import {', '.join(sorted(symbols))}"
            for module, symbols in sorted(self._modules.items())
            if symbols
        ]

    def __len__(self) -> int:
        return sum(len(symbols) for symbols in self._modules.values())


class SchemaReferenceResolver:
    """Резолвер ссылок на схемы в имена моделей и модули импорта.

    Модели раскладываются по модулям по соглашению об именах:

    * ``ApplicationDto`` (оканчивается суффиксом) -> общий модуль ``.dto``
    * ``ApplicationDtoCreate`` (суффикс внутри имени) -> ``.dto_ext.application``
    * остальные имена не разрешаются
    """

    def __init__(
        self,
        value_object_suffix: str = "Dto",
        models_module: str = ".dto",
        models_ext_package: str = ".dto_ext",
        diagnostics: Diagnostics = None,
    ):
        self.value_object_suffix = value_object_suffix
        self.models_module = models_module
        self.models_ext_package = models_ext_package
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    @staticmethod
    def resolve_ref(ref) -> str:
        """
        Имя модели из ссылки вида ``#/components/schemas/<Name>``.

        Возвращает пустую строку, если ссылка не распознана.
        """
        if not isinstance(ref, str) or "/" not in ref:
            return ""

        name = ref.rsplit("/", 1)[1].replace("~1", "/").replace("~0", "~")
        if not name.isidentifier():
            return ""

        return name

    def module_for(self, model_name: str) -> Optional[str]:
        """Модуль, из которого импортируется модель, или None"""
        suffix = self.value_object_suffix
        if not model_name or not suffix:
            return None

        if model_name.endswith(suffix):
            return self.models_module

        index = model_name.find(suffix)
        if index > 0:
            prefix = model_name[:index]
            return f"{self.models_ext_package}.{snake_case(prefix)}"

        return None

    def record_dependency(self, deps: DependencySet, model_name: str) -> Optional[str]:
        """Регистрация импорта модели в наборе зависимостей"""
        module = self.module_for(model_name)
        if module is None:
            self.diagnostics.warning(
                f"Модель {model_name or '<пусто>'} не соответствует соглашению "
                f"*{self.value_object_suffix}[*], импорт не добавлен"
            )
            return None

        if deps.add(module, model_name):
            logger.debug("Импорт %s из %s", model_name, module)

        return module
