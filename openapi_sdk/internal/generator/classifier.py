"""
Группировка операций OpenAPI по контроллерам.

operationId вида ``<controller>_<method>`` делится по первому "_":
``application_findAll`` -> контроллер ``application``, метод ``findAll``.
"""

import logging
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ...exceptions import OperationIdError
from ..types.diagnostics import Diagnostics
from ..types.document import ApiDocument, Operation
from ..utils.naming import unique_name

logger = logging.getLogger(__name__)

ALLOWED_VERBS = ("get", "post", "put", "delete")

OPERATION_ID_SEPARATOR = "_"


class EnrichedOperation(BaseModel):
    """Операция вместе с методом, путем и разобранным operationId"""

    model_config = ConfigDict(frozen=True)

    operation: Operation
    verb: str
    path: str
    controller: str
    method: str
    operation_id: str


ControllerMap = Dict[str, Dict[str, EnrichedOperation]]


def split_operation_id(operation_id) -> Optional[Tuple[str, str]]:
    """Разбор operationId на (контроллер, метод), None если формат не подходит"""
    if not isinstance(operation_id, str):
        return None

    controller, separator, method = operation_id.partition(OPERATION_ID_SEPARATOR)
    if not separator or not controller or not method:
        return None

    return controller, method


def classify(
    document: ApiDocument, diagnostics: Diagnostics = None, strict: bool = False
) -> ControllerMap:
    """
    Построение карты контроллеров из документа.

    Args:
        document: Проверенный OpenAPI документ
        diagnostics: Сборщик диагностик запуска
        strict: Прерывать генерацию на некорректном operationId вместо пропуска

    Raises:
        OperationIdError: Некорректный operationId в строгом режиме
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    controllers: ControllerMap = {}

    for path, verb, operation in document.operations():
        if verb not in ALLOWED_VERBS:
            diagnostics.info(
                f"Метод {verb.upper()} не поддерживается, операция пропущена", path, verb
            )
            continue

        parts = split_operation_id(operation.operation_id)
        if parts is None:
            message = (
                f"operationId {operation.operation_id!r} не соответствует формату "
                f"<controller>{OPERATION_ID_SEPARATOR}<method>"
            )
            if strict:
                raise OperationIdError(message, path, verb, operation.operation_id)

            diagnostics.error(message + ", операция пропущена", path, verb)
            continue

        controller, method = parts
        methods = controllers.setdefault(controller, {})

        if method in methods:
            renamed = unique_name(method, methods)
            diagnostics.info(
                f"Метод {controller}.{method} уже существует, переименован в {renamed}",
                path,
                verb,
            )
            method = renamed

        methods[method] = EnrichedOperation(
            operation=operation,
            verb=verb,
            path=path,
            controller=controller,
            method=method,
            operation_id=operation.operation_id,
        )

    logger.debug(
        "Найдено контроллеров: %d, операций: %d",
        len(controllers),
        sum(len(methods) for methods in controllers.values()),
    )
    return controllers
