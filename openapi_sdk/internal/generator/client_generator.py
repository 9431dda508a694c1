import logging
from typing import Dict, List, Set

from ..types.diagnostics import Diagnostics
from ..types.document import ApiDocument
from ..types.models import (
    Class,
    CodeBlock,
    CodeFile,
    Function,
    Parameter,
    Variable,
    indent,
    literal,
)
from ..types.schema_resolver import DependencySet, SchemaReferenceResolver
from ..utils.naming import python_identifier, unique_name
from .classifier import classify
from .method_synthesizer import MethodSynthesizer, SynthesizedController
from .templates import templates

logger = logging.getLogger(__name__)

# Публичные методы Request и имена, чьи приватные пары (_origin, _request)
# уже заняты базовым классом
_REQUEST_ATTRIBUTES = {"init", "send_request", "origin", "request"}

CONTROLLER_METHODS = "Dict[str, Callable[..., Awaitable[Any]]]"

# Порядок разделов файла: чем больше order, тем выше в файле
_ORDER_LOGGER = 100
_ORDER_SHARED_TYPES = 90
_ORDER_QUERY_TYPES = 80
_ORDER_SHARED_FUNCTIONS = 70
_ORDER_REQUEST_CLASS = 60
_ORDER_CLIENT_CLASS = 50


class ClientGenerator:
    """Генератор файла SDK клиента из OpenAPI документа"""

    def __init__(
        self,
        document: ApiDocument,
        file_name: str = "sdk.py",
        client_name: str = "ApiSDK",
        resolver: SchemaReferenceResolver = None,
        diagnostics: Diagnostics = None,
        strict: bool = False,
    ):
        self.document = document
        self.file_name = file_name
        self.client_name = client_name
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.resolver = resolver or SchemaReferenceResolver(diagnostics=self.diagnostics)
        self.strict = strict
        self.dependencies = DependencySet()

    def generate(self) -> CodeFile:
        """Основная генерация"""
        controllers = classify(self.document, self.diagnostics, strict=self.strict)

        synthesizer = MethodSynthesizer(
            self.resolver, self.diagnostics, reserved_type_names={self.client_name}
        )
        synthesized = [
            synthesizer.synthesize(name, operations, self.dependencies)
            for name, operations in controllers.items()
        ]

        code_file = CodeFile(file_name=self.file_name, docstring=templates.docstring)
        self._add_shared_types(code_file, synthesized)
        self._add_shared_functions(code_file)
        self._add_request_class(code_file)
        self._add_client_class(code_file, synthesized)
        self._add_imports(code_file)

        logger.info(
            "Сгенерировано контроллеров: %d, методов: %d, импортов моделей: %d",
            len(synthesized),
            sum(len(controller.methods) for controller in synthesized),
            len(self.dependencies),
        )
        return code_file

    def _add_shared_types(
        self, code_file: CodeFile, synthesized: List[SynthesizedController]
    ):
        """Общие типы и TypedDict параметров запросов"""
        code_file.add_code_block(templates.logger, order=_ORDER_LOGGER)
        code_file.add_code_block(templates.shared_types, order=_ORDER_SHARED_TYPES)

        for controller in synthesized:
            for interface in controller.interfaces:
                interface.order = _ORDER_QUERY_TYPES
                code_file.add_interface(interface)

    def _add_shared_functions(self, code_file: CodeFile):
        code_file.add_code_block(
            templates.shared_functions, order=_ORDER_SHARED_FUNCTIONS
        )

    def _add_request_class(self, code_file: CodeFile):
        code_file.add_code_block(templates.request_class, order=_ORDER_REQUEST_CLASS)

    def _add_client_class(
        self, code_file: CodeFile, synthesized: List[SynthesizedController]
    ):
        """Класс SDK: конструктор и пара свойств на каждый контроллер"""
        client_class = code_file.add_class(
            self.client_name,
            inherits=["Request"],
            description="SDK клиент",
            order=_ORDER_CLIENT_CLASS,
        )

        constructor = client_class.add_function(
            "__init__",
            parameters=[
                Parameter(name="self"),
                Parameter(
                    name="options",
                    var_type=Variable(value="RequestInitType", wrap_name="Optional"),
                    default=Variable(value="None"),
                ),
            ],
        )

        assignments = ["super().__init__(options)"]
        attributes = self._controller_attributes(synthesized)

        for controller in synthesized:
            attribute = attributes[controller.name]
            assignments.append(
                f"self._{attribute}: {CONTROLLER_METHODS} = self._build_{attribute}()"
            )

            client_class.add_function(
                attribute,
                parameters=[Parameter(name="self")],
                response="ControllerView",
                decorators=["@property"],
                description=f"Контроллер {controller.name}",
                code=CodeBlock(code=f"return ControllerView(self._{attribute})"),
            )
            client_class.add_function(self._controller_builder(controller, attribute))

        constructor.set_code_block("\n".join(assignments))

    @staticmethod
    def _controller_builder(controller: SynthesizedController, attribute: str) -> Function:
        """Метод _build_<controller>: вложенные функции операций и словарь методов"""
        entries = "".join(
            f'\n{indent(f"{literal(key)}: {function.name},")}'
            for key, function in controller.methods.items()
        )

        return Function(
            name=f"_build_{attribute}",
            parameters=[Parameter(name="self")],
            response=CONTROLLER_METHODS,
            inner_functions=list(controller.methods.values()),
            code=CodeBlock(code="return {" + entries + ("\n}" if entries else "}")),
        )

    def _controller_attributes(
        self, synthesized: List[SynthesizedController]
    ) -> Dict[str, str]:
        """Имена свойств контроллеров: идентификаторы Python без конфликтов"""
        attributes = {}
        taken: Set[str] = set()

        for controller in synthesized:
            name = python_identifier(controller.name, reserved=_REQUEST_ATTRIBUTES)
            attribute = unique_name(name, taken)
            if attribute != name:
                self.diagnostics.info(
                    f"Свойство контроллера {controller.name} переименовано в {attribute}"
                )
            taken.add(attribute)
            attributes[controller.name] = attribute

        return attributes

    def _add_imports(self, code_file: CodeFile):
        """Блок импортов: общий, сторонние библиотеки и модели из DependencySet"""
        self.dependencies.freeze()

        code_file.imports = (
            templates.future_imports
            + [""]
            + templates.stdlib_imports
            + [""]
            + templates.third_party_imports
        )

        model_imports = self.dependencies.import_lines()
        if model_imports:
            code_file.imports += [""] + model_imports
