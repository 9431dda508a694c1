"""
Тесты группировки операций по контроллерам
"""

import pytest

from openapi_sdk.exceptions import OperationIdError
from openapi_sdk.internal.generator.classifier import classify, split_operation_id
from openapi_sdk.internal.types.diagnostics import Diagnostics, Severity
from openapi_sdk.internal.types.document import ApiDocument


def make_document(paths):
    return ApiDocument.model_validate({"paths": paths})


def operation(operation_id=None):
    result = {"responses": {"200": {"description": "OK"}}}
    if operation_id is not None:
        result["operationId"] = operation_id
    return result


class TestSplitOperationId:
    """Тесты разбора operationId"""

    @pytest.mark.parametrize(
        "operation_id,expected",
        [
            ("application_findAll", ("application", "findAll")),
            ("pageNode_find_by_type", ("pageNode", "find_by_type")),
            ("application", None),
            ("_findAll", None),
            ("application_", None),
            ("", None),
            (None, None),
            (42, None),
        ],
    )
    def test_split(self, operation_id, expected):
        """Тест деления по первому подчеркиванию"""
        assert split_operation_id(operation_id) == expected


class TestClassify:
    """Тесты построения карты контроллеров"""

    def test_grouping(self, sample_spec):
        """Тест группировки по префиксу operationId"""
        controllers = classify(ApiDocument.model_validate(sample_spec))

        assert list(controllers) == ["application", "pageNode"]
        assert list(controllers["application"]) == [
            "findAll",
            "create",
            "findOne",
            "update",
            "remove",
        ]

        find_one = controllers["pageNode"]["findOne"]
        assert find_one.verb == "get"
        assert find_one.path == "/page-node/{typeId}/{id}"
        assert find_one.controller == "pageNode"
        assert find_one.operation_id == "pageNode_findOne"

    def test_every_operation_once(self, sample_spec):
        """Тест: каждая пара (путь, метод) попадает в карту ровно один раз"""
        document = ApiDocument.model_validate(sample_spec)
        controllers = classify(document)

        classified = [
            (enriched.path, enriched.verb)
            for methods in controllers.values()
            for enriched in methods.values()
        ]
        expected = [(path, verb) for path, verb, _ in document.operations()]

        assert sorted(classified) == sorted(expected)
        assert len(classified) == len(set(classified))

    def test_method_collisions(self):
        """Тест переименования одинаковых методов"""
        diagnostics = Diagnostics()
        controllers = classify(
            make_document(
                {
                    "/a": {"get": operation("items_list")},
                    "/b": {"get": operation("items_list")},
                    "/c": {"get": operation("items_list")},
                }
            ),
            diagnostics,
        )

        methods = controllers["items"]
        assert list(methods) == ["list", "list_2", "list_3"]
        assert [m.path for m in methods.values()] == ["/a", "/b", "/c"]
        assert len(diagnostics.by_severity(Severity.INFO)) == 2

    def test_collision_skips_taken_suffix(self):
        """Тест: суффикс подбирается среди свободных имен"""
        controllers = classify(
            make_document(
                {
                    "/a": {"get": operation("items_list_2")},
                    "/b": {"get": operation("items_list")},
                    "/c": {"get": operation("items_list")},
                }
            )
        )

        assert list(controllers["items"]) == ["list_2", "list", "list_3"]

    def test_unsupported_verbs_skipped(self):
        """Тест пропуска методов вне get/post/put/delete"""
        diagnostics = Diagnostics()
        controllers = classify(
            make_document(
                {
                    "/a": {
                        "patch": operation("items_patch"),
                        "head": operation("items_head"),
                        "get": operation("items_list"),
                    }
                }
            ),
            diagnostics,
        )

        assert list(controllers["items"]) == ["list"]
        infos = diagnostics.by_severity(Severity.INFO)
        assert {(d.path, d.verb) for d in infos} == {("/a", "patch"), ("/a", "head")}

    def test_malformed_operation_id_skipped(self):
        """Тест пропуска операции с некорректным operationId"""
        diagnostics = Diagnostics()
        controllers = classify(
            make_document(
                {
                    "/a": {"get": operation(None), "post": operation("noseparator")},
                    "/b": {"get": operation("items_list")},
                }
            ),
            diagnostics,
        )

        assert list(controllers) == ["items"]
        assert diagnostics.has_errors
        errors = diagnostics.by_severity(Severity.ERROR)
        assert [(d.path, d.verb) for d in errors] == [("/a", "get"), ("/a", "post")]

    def test_malformed_operation_id_strict(self):
        """Тест строгого режима"""
        document = make_document({"/a": {"get": operation("noseparator")}})

        with pytest.raises(OperationIdError) as exc_info:
            classify(document, strict=True)

        assert exc_info.value.path == "/a"
        assert exc_info.value.verb == "get"
        assert exc_info.value.operation_id == "noseparator"

    def test_empty_document(self):
        """Тест документа без операций"""
        assert classify(make_document({})) == {}
