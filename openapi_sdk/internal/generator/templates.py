class Templates:
    """Шаблоны общего кода генерируемого клиента"""

    docstring = """Автоматически сгенерированный SDK клиент.

Не редактируйте вручную: файл полностью перезаписывается при генерации."""

    future_imports = ["from __future__ import annotations"]

    stdlib_imports = [
        "import logging",
        "import re",
        "from collections.abc import Mapping",
        "from types import MappingProxyType",
        "from typing import (",
        "    Any,",
        "    Awaitable,",
        "    Callable,",
        "    Dict,",
        "    Iterator,",
        "    List,",
        "    Literal,",
        "    NotRequired,",
        "    Optional,",
        "    Tuple,",
        "    TypedDict,",
        "    cast,",
        ")",
    ]

    third_party_imports = ["import aiohttp"]

    logger = """logger = logging.getLogger(__name__)"""

    shared_types = """BaseObj = Dict[str, Any]


class RequestType(TypedDict, total=False):
    \"\"\"Параметры запроса\"\"\"

    method: Literal["get", "post", "put", "delete"]
    path: str
    query: BaseObj
    data: Any
    headers: BaseObj
    # Ключи query, подставленные в путь
    path_params: List[str]


Transport = Callable[[RequestType], Awaitable[Any]]


class RequestInitType(TypedDict, total=False):
    \"\"\"Параметры инициализации SDK\"\"\"

    origin: str
    request: Transport


class ControllerView(Mapping):
    \"\"\"Представление методов контроллера только для чтения\"\"\"

    __slots__ = ("_methods",)

    def __init__(self, methods: Dict[str, Callable[..., Awaitable[Any]]]) -> None:
        object.__setattr__(self, "_methods", MappingProxyType(methods))

    def __getitem__(self, name: str) -> Callable[..., Awaitable[Any]]:
        return self._methods[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._methods[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Контроллер доступен только для чтения")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Контроллер доступен только для чтения")

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._methods))"""

    shared_functions = """def _serialize(value: Any) -> Any:
    \"\"\"Подготовка тела запроса к отправке в JSON\"\"\"
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


def _query_params(
    query: Optional[BaseObj], exclude: Optional[List[str]] = None
) -> Optional[List[Tuple[str, Any]]]:
    \"\"\"
    Параметры строки запроса.

    None пропускаются, bool приводятся к строке, для списка ключ
    повторяется: {"ids": [1, 2]} -> ids=1&ids=2
    \"\"\"
    exclude = exclude or []
    params = []
    for key, value in (query or {}).items():
        if key in exclude:
            continue
        for item in value if isinstance(value, (list, tuple)) else [value]:
            if item is None:
                continue
            if isinstance(item, bool):
                item = str(item).lower()
            elif not isinstance(item, (str, int, float)):
                item = str(item)
            params.append((key, item))
    return params or None


async def _fetch_(options: RequestType) -> Any:
    \"\"\"Функция запроса по умолчанию: HTTP запрос через aiohttp и разбор JSON ответа\"\"\"
    data = options.get("data")
    async with aiohttp.ClientSession() as session:
        async with session.request(
            options["method"].upper(),
            options["path"],
            params=_query_params(options.get("query"), options.get("path_params")),
            json=_serialize(data) if data is not None else None,
            headers=options.get("headers"),
        ) as response:
            return await response.json(content_type=None)


_PATH_PARAM = re.compile(r"{([^}]+)}")


def replace_path_params(path: str, query: Optional[BaseObj]) -> str:
    \"\"\"
    Подстановка динамических параметров пути.

    Пример:
        replace_path_params("/page-node/{typeId}/{id}", {"id": 1, "typeId": 2})
        -> "/page-node/2/1"

    Значения, которые не являются числом или строкой, и отсутствующие
    ключи оставляют плейсхолдер без изменений.
    \"\"\"
    query = query or {}

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        value = query.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            logger.warning("Параметр пути %s имеет некорректный тип: %r", name, value)
            return match.group(0)
        return str(value)

    return _PATH_PARAM.sub(_substitute, path)


def validate_payload(model: Any, data: Any) -> bool:
    \"\"\"Проверка тела запроса по pydantic модели, если у типа есть валидатор\"\"\"
    validator = getattr(model, "model_validate", None)
    if validator is None:
        return True

    if hasattr(data, "model_dump"):
        data = data.model_dump()

    try:
        validator(data)
    except ValueError as exc:
        logger.warning("Тело запроса не прошло проверку %s: %s", model.__name__, exc)
        return False
    return True"""

    request_class = """class Request:
    \"\"\"Базовый класс запросов\"\"\"

    def __init__(self, options: Optional[RequestInitType] = None) -> None:
        self._origin: str = ""
        self._request: Transport = _fetch_
        if options:
            self.init(options)

    def init(self, options: RequestInitType) -> None:
        \"\"\"Инициализация SDK: origin и функция запроса заменяются целиком\"\"\"
        self._origin = options.get("origin") or ""
        self._request = options.get("request") or _fetch_

    async def send_request(self, options: RequestType) -> Any:
        \"\"\"Отправка HTTP запроса, результат функции запроса возвращается как есть\"\"\"
        template = options["path"]
        query = options.get("query") or {}
        path = replace_path_params(template, query)

        return await self._request(
            {
                **options,
                "path": f"{self._origin}{path}",
                "query": query,
                "path_params": _PATH_PARAM.findall(template),
            }
        )"""


templates = Templates()
