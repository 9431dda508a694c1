import logging
from typing import Dict, List, Optional, Set, Tuple

from pydantic import BaseModel

from ..types.diagnostics import Diagnostics
from ..types.models import (
    DispatchCall,
    Function,
    FunctionMetadata,
    Interface,
    InterfaceField,
    Parameter,
    Variable,
)
from ..types.schema_resolver import DependencySet, SchemaReferenceResolver
from ..utils.naming import pascal_case, python_identifier, unique_name
from .classifier import EnrichedOperation

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "Описание отсутствует"

# Имена общего кода клиента, с которыми не должны совпадать типы запросов
SCAFFOLD_NAMES = {
    "BaseObj",
    "RequestType",
    "Transport",
    "RequestInitType",
    "ControllerView",
    "Request",
}

# Свободные переменные тел методов внутри _build_<controller>
_CLOSURE_NAMES = {"self", "cast", "validate_payload"}


class SynthesizedController(BaseModel):
    """Объявления одного контроллера: типы параметров и методы операций"""

    name: str
    interfaces: List[Interface] = []
    methods: Dict[str, Function] = {}


class MethodSynthesizer:
    """Построение методов клиента из операций контроллера"""

    def __init__(
        self,
        resolver: SchemaReferenceResolver,
        diagnostics: Diagnostics = None,
        reserved_type_names: Set[str] = None,
    ):
        self.resolver = resolver
        self.diagnostics = diagnostics if diagnostics is not None else resolver.diagnostics
        self._type_names: Set[str] = set(SCAFFOLD_NAMES)
        if reserved_type_names:
            self._type_names.update(reserved_type_names)

    def synthesize(
        self,
        controller: str,
        operations: Dict[str, EnrichedOperation],
        deps: DependencySet,
    ) -> SynthesizedController:
        """Методы контроллера в порядке операций, deps пополняется импортами"""
        result = SynthesizedController(name=controller)
        validators: Set[str] = set()

        for method_key, enriched in operations.items():
            function, interface = self._synthesize_method(method_key, enriched, deps)
            if interface is not None:
                result.interfaces.append(interface)
            if function.code.validator:
                validators.add(function.code.validator)
            result.methods[method_key] = function

        # Имена вложенных функций назначаются после того, как известны
        # все модели, используемые в телах методов
        taken = set()
        for method_key, function in result.methods.items():
            name = python_identifier(method_key, reserved=_CLOSURE_NAMES | validators)
            function.name = unique_name(name, taken)
            taken.add(function.name)

        return result

    def _synthesize_method(
        self, method_key: str, enriched: EnrichedOperation, deps: DependencySet
    ) -> Tuple[Function, Optional[Interface]]:
        operation = enriched.operation
        path, verb = enriched.path, enriched.verb

        result_type = self._response_type(enriched, deps)
        has_data, data_type, validator = self._body_type(enriched, deps)
        interface = self._query_interface(method_key, enriched)

        parameters = []
        param_docs = {}

        if interface is not None:
            query = Parameter(name="query")
            if any(f.required for f in interface.members):
                query.set_type(interface.name)
            else:
                query.set_type(Variable(value=interface.name, wrap_name="Optional"))
                # Перед обязательным data значение по умолчанию недопустимо
                if not has_data:
                    query.set_default("None")
            parameters.append(query)
            param_docs["query"] = "Параметры запроса: " + ", ".join(
                f.name for f in interface.members
            )

        if has_data:
            parameters.append(Parameter(name="data").set_type(data_type or "Any"))
            body = operation.request_body
            param_docs["data"] = (body.description if body else None) or "Тело запроса"
            parameters.append(
                Parameter(name="validate").set_type("bool").set_default("False")
            )
            param_docs["validate"] = "Проверить тело запроса перед отправкой"

        if result_type:
            response = f"Optional[{result_type}]" if validator else result_type
            returns_doc = f"{result_type}: Ответ сервера"
        else:
            response = "Any"
            returns_doc = "Разобранный ответ сервера"

        function = Function(
            name=method_key,
            parameters=parameters,
            response=response,
            async_def=True,
            description=operation.description or operation.summary or NO_DESCRIPTION,
            param_docs=param_docs,
            returns_doc=returns_doc,
            metadata=FunctionMetadata(
                operation_id=enriched.operation_id,
                verb=verb,
                path=path,
                controller=enriched.controller,
                method_key=method_key,
            ),
            code=DispatchCall(
                method=verb,
                path=path,
                has_query=interface is not None,
                has_data=has_data,
                validator=validator,
                result_type=result_type,
            ),
        )

        logger.debug("Метод %s.%s: %s %s", enriched.controller, method_key, verb, path)
        return function, interface

    def _resolve_model(self, ref, what: str, enriched: EnrichedOperation) -> str:
        model_name = self.resolver.resolve_ref(ref)
        if not model_name:
            self.diagnostics.warning(
                f"Не удалось разрешить ссылку {ref!r} ({what}), тип не указан",
                enriched.path,
                enriched.verb,
            )
        return model_name

    def _response_type(
        self, enriched: EnrichedOperation, deps: DependencySet
    ) -> Optional[str]:
        """Тип результата по ответу default, только прямая ссылка на схему"""
        schema = enriched.operation.default_response_schema()
        if not schema or "$ref" not in schema:
            return None

        model_name = self._resolve_model(schema["$ref"], "ответ", enriched)
        if not model_name:
            return None

        self.resolver.record_dependency(deps, model_name)
        return model_name

    def _body_type(
        self, enriched: EnrichedOperation, deps: DependencySet
    ) -> Tuple[bool, Optional[str], Optional[str]]:
        """(есть ли тело, тип тела, модель для проверки)"""
        body = enriched.operation.request_body
        if body is None:
            return False, None, None

        if body.ref is not None:
            self.diagnostics.info(
                f"Тело запроса задано ссылкой {body.ref!r}, параметр data без типа",
                enriched.path,
                enriched.verb,
            )
            return True, None, None

        schema = body.json_schema
        if schema is None:
            self.diagnostics.info(
                "Тело запроса без application/json не поддерживается, параметр data не создан",
                enriched.path,
                enriched.verb,
            )
            return False, None, None

        if "$ref" not in schema:
            logger.debug("Встроенная схема тела %s %s, data без типа", enriched.verb, enriched.path)
            return True, None, None

        model_name = self._resolve_model(schema["$ref"], "тело запроса", enriched)
        if not model_name:
            return True, None, None

        module = self.resolver.record_dependency(deps, model_name)
        return True, model_name, model_name if module else None

    def _query_interface(
        self, method_key: str, enriched: EnrichedOperation
    ) -> Optional[Interface]:
        """TypedDict со всеми объявленными параметрами операции"""
        parameters = enriched.operation.parameters
        if not parameters:
            return None

        members = []
        seen = set()
        for parameter in parameters:
            if parameter.name in seen:
                self.diagnostics.info(
                    f"Параметр {parameter.name} объявлен повторно, используется первый",
                    enriched.path,
                    enriched.verb,
                )
                continue
            seen.add(parameter.name)
            members.append(
                InterfaceField(
                    name=parameter.name,
                    var_type=parameter.primitive_type,
                    required=parameter.required or parameter.location == "path",
                )
            )

        name = unique_name(
            f"{pascal_case(enriched.controller)}{pascal_case(method_key)}Query",
            self._type_names,
        )
        self._type_names.add(name)

        return Interface(
            name=name,
            members=members,
            description=(
                f"Параметры запроса {enriched.controller}.{method_key} "
                f"({enriched.verb.upper()} {enriched.path})"
            ),
        )
