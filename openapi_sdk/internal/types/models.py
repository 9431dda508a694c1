import json
import textwrap
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, field_validator

INDENT = "    "


def literal(value: str) -> str:
    """Строковый литерал Python в двойных кавычках"""
    return json.dumps(value)


def docstring(*paragraphs: Optional[str]) -> str:
    """Многострочный docstring из абзацев, пустые абзацы пропускаются"""
    text = "\n\n".join(p.strip() for p in paragraphs if p and p.strip())
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    return '"""\n' + text + '\n"""'


def indent(code: str) -> str:
    return textwrap.indent(code, INDENT)


class Variable(BaseModel):
    """Выражение типа: ``int``, ``Optional[ApplicationDto]``, ``Literal["get"]``"""

    value: List[Union["Variable", str]] = []
    wrap_name: Optional[str] = None

    @field_validator("value", mode="before")
    def value_check(cls, value):
        if not isinstance(value, list):
            return [value]
        return value

    def __str__(self):
        if self.wrap_name == "Literal":
            _value = ", ".join(literal(str(_)) for _ in self.value)
        else:
            _value = ", ".join(str(_) for _ in self.value)

        if self.wrap_name is None:
            return _value

        return f"{self.wrap_name}[{_value}]" if _value else "Any"


class Parameter(BaseModel):
    name: str

    default: Optional[Variable] = None
    var_type: Optional[Variable] = None

    def set_default(self, default: Union[str, Variable], **kwargs) -> "Parameter":
        if isinstance(default, str):
            default = Variable(value=default, **kwargs)

        self.default = default
        return self

    def set_type(self, var_type: Union[str, Variable], **kwargs) -> "Parameter":
        if isinstance(var_type, str):
            var_type = Variable(value=var_type, **kwargs)

        self.var_type = var_type
        return self

    def __str__(self):
        return (
            self.name
            + (f": {self.var_type}" if self.var_type else "")
            + (f" = {self.default}" if self.default else "")
        )


class CodeBlock(BaseModel):
    order: int = 0
    code: str = "pass"

    def __str__(self):
        return self.code.replace("\t", INDENT)


class DispatchCall(CodeBlock):
    """Тело метода операции: делегирование в Request.send_request"""

    method: str
    path: str
    has_query: bool = False
    has_data: bool = False
    validator: Optional[str] = None
    result_type: Optional[str] = None

    def __str__(self):
        lines = []
        if self.validator:
            lines.extend(
                [
                    f"if validate and not validate_payload({self.validator}, data):",
                    f"{INDENT}return None",
                ]
            )

        lines.append("request: RequestType = {")
        lines.append(f'{INDENT}"method": {literal(self.method)},')
        lines.append(f'{INDENT}"path": {literal(self.path)},')
        if self.has_query:
            lines.append(f'{INDENT}"query": query or {{}},')
        if self.has_data:
            lines.append(f'{INDENT}"data": data,')
        lines.append("}")

        if self.result_type:
            lines.append(
                f"return cast({literal(self.result_type)}, "
                "await self.send_request(request))"
            )
        else:
            lines.append("return await self.send_request(request)")

        return "\n".join(lines)


class InterfaceField(BaseModel):
    name: str
    var_type: str = "Any"
    required: bool = False

    def __str__(self):
        var_type = self.var_type if self.required else f"NotRequired[{self.var_type}]"
        return f"{literal(self.name)}: {var_type}"


class Interface(BaseModel):
    """TypedDict в функциональной форме: допускает любые имена ключей"""

    name: str
    members: List[InterfaceField] = []
    description: Optional[str] = None
    order: int = 0

    def __str__(self):
        lines = []
        if self.description:
            lines.extend(f"# {line}".rstrip() for line in self.description.splitlines())

        if not self.members:
            lines.append(f"{self.name} = TypedDict({literal(self.name)}, {{}})")
            return "\n".join(lines)

        lines.append(f"{self.name} = TypedDict(")
        lines.append(f"{INDENT}{literal(self.name)},")
        lines.append(f"{INDENT}{{")
        lines.extend(f"{INDENT * 2}{field}," for field in self.members)
        lines.append(f"{INDENT}}},")
        lines.append(")")
        return "\n".join(lines)


@dataclass
class FunctionMetadata:
    """Операция OpenAPI, из которой построена функция"""

    operation_id: Optional[str] = None
    verb: Optional[str] = None
    path: Optional[str] = None
    controller: Optional[str] = None
    method_key: Optional[str] = None


class Function(BaseModel):
    name: str
    parameters: List[Parameter] = []
    response: str = "None"

    async_def: bool = False
    decorators: List[str] = []

    description: Optional[str] = None
    param_docs: Dict[str, str] = {}
    returns_doc: Optional[str] = None

    metadata: Optional[FunctionMetadata] = None

    inner_functions: List["Function"] = []
    code: CodeBlock = CodeBlock(order=0, code="pass")

    order: int = 0

    def __str__(self) -> str:
        many_parameters = len(self.parameters) > 1

        if many_parameters:
            signature = (
                "\n" + "".join(f"{INDENT}{param},\n" for param in self.parameters)
            )
        else:
            signature = ", ".join(map(str, self.parameters))

        header = (
            f"{'async ' if self.async_def else ''}def {self.name}"
            f"({signature}) -> {self.response}:"
        )

        body = [part for part in [self._generate_docstring()] if part]
        body.extend(str(function) for function in self.inner_functions)
        body.append(str(self.code))

        return "\n".join(self.decorators + [header]) + "\n" + indent("\n\n".join(body))

    def _generate_docstring(self) -> str:
        """Docstring из описания, параметров и возвращаемого значения"""
        if not self.description and not self.param_docs:
            return ""

        sections = [self.description]

        if self.param_docs:
            sections.append(
                "\n".join(
                    ["Args:"]
                    + [f"{INDENT}{name}: {text}" for name, text in self.param_docs.items()]
                )
            )

        if self.returns_doc:
            sections.append(f"Returns:\n{INDENT}{self.returns_doc}")

        return docstring(*sections)

    def set_code_block(self, code_block: Union["CodeBlock", str]) -> "Function":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block)

        self.code = code_block
        return self


class Class(BaseModel):
    name: str

    description: Optional[str] = None
    functions: Dict[str, "Function"] = {}

    inherits: List[str] = []

    order: int = 0

    def __str__(self) -> str:
        header = (
            f"class {self.name}"
            + (f"({', '.join(self.inherits)})" if self.inherits else "")
            + ":"
        )

        members = [docstring(self.description)] if self.description else []
        members.extend(
            str(member)
            for member in sorted(
                self.functions.values(),
                key=lambda x: x.order,
                reverse=True,
            )
        )

        return header + "\n" + indent("\n\n".join(members) if members else "pass")

    def add_function(self, function: Union["Function", str], **kwargs) -> "Function":
        if isinstance(function, str):
            function = Function(name=function, **kwargs)

        self.functions[function.name] = function
        return function


class CodeFile(BaseModel):
    file_name: str

    docstring: Optional[str] = None
    imports: List[str] = []
    interfaces: Dict[str, "Interface"] = {}
    classes: Dict[str, "Class"] = {}
    code_blocks: List["CodeBlock"] = []

    def __str__(self):
        parts = []
        if self.docstring:
            parts.append(docstring(self.docstring))
        if self.imports:
            parts.append("\n".join(self.imports))

        parts.extend(
            str(member).strip("\n")
            for member in sorted(
                self.code_blocks
                + list(self.interfaces.values())
                + list(self.classes.values()),
                key=lambda x: x.order,
                reverse=True,
            )
        )

        return "\n\n\n".join(parts).replace("\t", INDENT) + "\n"

    def add_interface(self, interface: "Interface") -> "Interface":
        self.interfaces[interface.name] = interface
        return interface

    def add_class(self, cls: Union["Class", str], **kwargs) -> "Class":
        if isinstance(cls, str):
            cls = Class(name=cls, **kwargs)

        self.classes[cls.name] = cls
        return cls

    def add_code_block(
        self, code_block: Union["CodeBlock", str], **kwargs
    ) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self
