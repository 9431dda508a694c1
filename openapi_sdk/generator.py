"""
Главный модуль генератора - чистый интерфейс
"""

import logging
from typing import Any, Dict

from .config import OpenApiConfig
from .internal.generator.client_generator import ClientGenerator
from .internal.parser.openapi import OpenApiParser, load_openapi
from .internal.types.diagnostics import Diagnostics
from .internal.types.models import CodeFile
from .internal.types.schema_resolver import SchemaReferenceResolver
from .internal.utils.file_utils import write_atomic

logger = logging.getLogger(__name__)


class SdkGenerator:
    """Чистый интерфейс для генерации SDK клиента"""

    def __init__(
        self,
        openapi_spec: Dict[str, Any],
        config: OpenApiConfig = None,
        source: str = None,
    ):
        self.config = config or OpenApiConfig()
        self.source = source or self.config.source
        self.parser = OpenApiParser(openapi_spec, self.source)
        self.diagnostics = Diagnostics()

    def generate(self) -> CodeFile:
        """Генерация файла клиента"""
        document = self.parser.parse()

        resolver = SchemaReferenceResolver(
            value_object_suffix=self.config.value_object_suffix,
            models_module=self.config.models_module,
            models_ext_package=self.config.models_ext_package,
            diagnostics=self.diagnostics,
        )
        generator = ClientGenerator(
            document,
            file_name=self.config.output,
            client_name=self.config.client_name,
            resolver=resolver,
            diagnostics=self.diagnostics,
            strict=self.config.strict,
        )
        return generator.generate()

    def render(self) -> str:
        """Исходный текст файла клиента"""
        return str(self.generate())


def generate_sdk(
    openapi_spec: Dict[str, Any], config: OpenApiConfig = None, source: str = None
) -> str:
    """Создание исходного текста SDK из OpenAPI спецификации"""
    return SdkGenerator(openapi_spec, config, source).render()


def generate_file(config: OpenApiConfig) -> SdkGenerator:
    """
    Полный цикл: загрузка документа, генерация и запись файла.

    Файл записывается только после успешной генерации всего текста,
    при любой ошибке прежний файл остается без изменений.

    Returns:
        Генератор с диагностиками запуска
    """
    generator = SdkGenerator(load_openapi(config.source), config, config.source)
    content = generator.render()

    path = write_atomic(config.output, content)
    logger.info("SDK записан в %s", path)
    return generator
