"""
Типизированная модель OpenAPI документа.

Проверяется один раз при загрузке, дальше по конвейеру
передаются только эти модели, а не сырые словари.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

HTTP_VERBS = ("get", "put", "post", "delete", "patch", "head", "options", "trace")

JSON_CONTENT_TYPE = "application/json"

_PRIMITIVE_TYPES = {
    "integer": "int",
    "number": "float",
    "string": "str",
    "boolean": "bool",
}


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


def python_type(schema: Optional[Dict[str, Any]]) -> str:
    """Тип Python для примитивной схемы параметра"""
    if not schema:
        return "Any"

    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        # OpenAPI 3.1: ["string", "null"]
        types = [t for t in schema_type if t != "null"]
        if not types:
            return "Any"
        inner = python_type({**schema, "type": types[0]})
        if "null" in schema_type and inner != "Any":
            return f"Optional[{inner}]"
        return inner
    if not isinstance(schema_type, str):
        return "Any"
    if schema_type in _PRIMITIVE_TYPES:
        return _PRIMITIVE_TYPES[schema_type]
    if schema_type == "array":
        return f"List[{python_type(schema.get('items'))}]"
    if schema_type == "object":
        return "Dict[str, Any]"
    return "Any"


class ParameterSpec(_DocumentModel):
    name: str
    location: Optional[str] = Field(default=None, alias="in")
    required: bool = False
    description: Optional[str] = None
    schema_: Dict[str, Any] = Field(default_factory=dict, alias="schema")

    @property
    def primitive_type(self) -> str:
        return python_type(self.schema_)


class MediaType(_DocumentModel):
    schema_: Optional[Dict[str, Any]] = Field(default=None, alias="schema")


class RequestBody(_DocumentModel):
    # #/components/requestBodies/<Name>
    ref: Optional[Any] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    required: bool = False
    content: Dict[str, MediaType] = {}

    @property
    def json_schema(self) -> Optional[Dict[str, Any]]:
        media = self.content.get(JSON_CONTENT_TYPE)
        return media.schema_ if media else None


class ResponseSpec(_DocumentModel):
    description: Optional[str] = None
    content: Dict[str, MediaType] = {}

    @property
    def json_schema(self) -> Optional[Dict[str, Any]]:
        media = self.content.get(JSON_CONTENT_TYPE)
        return media.schema_ if media else None


class Operation(_DocumentModel):
    """Одна операция (HTTP метод + путь)"""

    operation_id: Optional[Any] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    parameters: List[ParameterSpec] = []
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: Dict[str, ResponseSpec] = {}

    @field_validator("responses", mode="before")
    def responses_keys(cls, value):
        # В JSON ключи статусов иногда приходят числами
        if isinstance(value, dict):
            return {str(key): spec for key, spec in value.items()}
        return value

    def default_response_schema(self) -> Optional[Dict[str, Any]]:
        response = self.responses.get("default")
        return response.json_schema if response else None


class ApiDocument(_DocumentModel):
    """OpenAPI документ: путь -> HTTP метод -> операция"""

    paths: Dict[str, Dict[str, Operation]] = {}

    @field_validator("paths", mode="before")
    def operations_only(cls, value):
        if not isinstance(value, dict):
            return value

        paths = {}
        for path, path_item in value.items():
            if not isinstance(path_item, dict):
                paths[path] = path_item
                continue

            operations = {}
            for key, operation in path_item.items():
                if key.lower() in HTTP_VERBS:
                    operations[key.lower()] = operation
                else:
                    logger.debug("Пропущен ключ %s в пути %s", key, path)
            paths[path] = operations

        return paths

    def operations(self):
        """Все пары (путь, метод, операция) в порядке документа"""
        for path, path_item in self.paths.items():
            for verb, operation in path_item.items():
                yield path, verb, operation
