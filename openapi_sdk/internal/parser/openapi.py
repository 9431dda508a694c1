import json
import logging
import os
from typing import Any, Dict, List, Optional

import httpx
import jsonref
from pydantic import ValidationError

from ...exceptions import DocumentError
from ..types.document import ApiDocument

logger = logging.getLogger(__name__)


def load_openapi(source: str) -> Dict[str, Any]:
    """Чтение OpenAPI документа из файла или по URL"""
    if source.startswith(("http://", "https://")):
        logger.debug("Загрузка спецификации по URL %s", source)
        try:
            response = httpx.get(source, follow_redirects=True)
            response.raise_for_status()
            openapi_dict = response.json()
        except httpx.HTTPError as e:
            raise DocumentError(f"Не удалось загрузить спецификацию: {e}", source) from e
        except ValueError as e:
            raise DocumentError(f"Ответ не является JSON: {e}", source) from e

    else:
        if not os.path.isfile(source):
            raise DocumentError("Файл спецификации не найден", source)

        try:
            with open(source, "r", encoding="utf-8") as f:
                openapi_dict = json.load(f)
        except OSError as e:
            raise DocumentError(f"Не удалось прочитать файл: {e}", source) from e
        except ValueError as e:
            raise DocumentError(f"Некорректный JSON: {e}", source) from e

    if not isinstance(openapi_dict, dict):
        raise DocumentError("Корень документа должен быть объектом", source)

    return openapi_dict


class OpenApiParser:
    """Парсер OpenAPI спецификации в типизированную модель документа"""

    def __init__(self, openapi_dict: Dict[str, Any], source: str = None):
        self.openapi_dict = openapi_dict
        self.source = source

    def parse(self) -> ApiDocument:
        """Проверка структуры и построение ApiDocument"""
        paths = self.openapi_dict.get("paths", {})
        if not isinstance(paths, dict):
            raise DocumentError("Раздел paths должен быть объектом", self.source)

        try:
            return ApiDocument.model_validate(
                {"paths": self._dereference_parameters(paths)}
            )
        except ValidationError as e:
            raise DocumentError(
                f"Некорректная структура документа: {e}", self.source
            ) from e

    def _dereference_parameters(self, paths: Dict[str, Any]) -> Dict[str, Any]:
        """Разрешение $ref в списках parameters через jsonref.

        Ссылки на схемы в requestBody и responses не трогаем: по их
        именам строятся типы и импорты.
        """
        components = self.openapi_dict.get("components", {})
        resolved_paths = {}

        for path, path_item in paths.items():
            if not isinstance(path_item, dict):
                resolved_paths[path] = path_item
                continue

            resolved_item = {}
            for key, operation in path_item.items():
                if isinstance(operation, dict) and operation.get("parameters"):
                    operation = dict(operation)
                    operation["parameters"] = self._resolve_parameters(
                        operation["parameters"], components, path
                    )
                resolved_item[key] = operation
            resolved_paths[path] = resolved_item

        return resolved_paths

    def _resolve_parameters(
        self, parameters: List[Any], components: Dict[str, Any], path: str
    ) -> List[Any]:
        if not isinstance(parameters, list):
            return parameters

        if not any(isinstance(p, dict) and "$ref" in p for p in parameters):
            return parameters

        # Ленивые прокси jsonref: загружается только то, к чему обращаемся
        document = jsonref.replace_refs(
            {"components": components, "parameters": parameters}
        )

        resolved = []
        for parameter in document["parameters"]:
            try:
                resolved.append(self._plain_parameter(parameter))
            except jsonref.JsonRefError as e:
                raise DocumentError(
                    f"Не удалось разрешить параметр в {path}: {e.message}", self.source
                ) from e
        return resolved

    @staticmethod
    def _plain_parameter(parameter: Any) -> Any:
        """Копия параметра без прокси jsonref"""
        if not hasattr(parameter, "get"):
            return parameter

        plain = {
            key: parameter.get(key)
            for key in ("name", "in", "required", "description")
            if parameter.get(key) is not None
        }

        schema = parameter.get("schema")
        if schema is not None:
            plain["schema"] = {
                key: schema.get(key)
                for key in ("type", "format", "enum")
                if schema.get(key) is not None
            }
            items = schema.get("items")
            if items is not None:
                plain["schema"]["items"] = {"type": items.get("type")}

        return plain


def load_document(source: str) -> ApiDocument:
    """Загрузка и проверка OpenAPI документа"""
    return OpenApiParser(load_openapi(source), source).parse()
