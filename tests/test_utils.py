"""
Тесты утилит имен и записи файлов
"""

import os
import stat

import pytest

from openapi_sdk.internal.utils import (
    pascal_case,
    python_identifier,
    snake_case,
    unique_name,
    write_atomic,
)


class TestNaming:
    """Тесты преобразования имен"""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Application", "application"),
            ("PageNode", "page_node"),
            ("HTTPValidationError", "http_validation_error"),
            ("page-node", "page_node"),
        ],
    )
    def test_snake_case(self, name, expected):
        assert snake_case(name) == expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("application", "Application"),
            ("findAll", "FindAll"),
            ("list_2", "List2"),
            ("page-node", "PageNode"),
            ("", ""),
        ],
    )
    def test_pascal_case(self, name, expected):
        assert pascal_case(name) == expected

    @pytest.mark.parametrize(
        "name,reserved,expected",
        [
            ("findAll", (), "findAll"),
            ("find-all", (), "find_all"),
            ("2fa", (), "_2fa"),
            ("class", (), "class_"),
            ("init", ("init",), "init_"),
            ("", (), "_"),
        ],
    )
    def test_python_identifier(self, name, reserved, expected):
        assert python_identifier(name, reserved) == expected

    def test_unique_name(self):
        assert unique_name("list", set()) == "list"
        assert unique_name("list", {"list"}) == "list_2"
        assert unique_name("list", {"list", "list_2"}) == "list_3"


class TestWriteAtomic:
    """Тесты атомарной записи"""

    def test_write_creates_directories(self, tmp_path):
        """Тест записи в новую папку"""
        target = tmp_path / "nested" / "sdk.py"

        path = write_atomic(str(target), "print('ok')\n")

        assert path == str(target)
        assert target.read_text(encoding="utf-8") == "print('ok')\n"

    def test_overwrite(self, tmp_path):
        """Тест полной перезаписи файла"""
        target = tmp_path / "sdk.py"
        target.write_text("old content that is longer", encoding="utf-8")

        write_atomic(str(target), "new")

        assert target.read_text(encoding="utf-8") == "new"

    def test_overwrite_keeps_mode(self, tmp_path):
        """Тест: перезапись сохраняет права существующего файла"""
        target = tmp_path / "sdk.py"
        target.write_text("old", encoding="utf-8")
        os.chmod(target, 0o644)

        write_atomic(str(target), "new")

        assert stat.S_IMODE(os.stat(target).st_mode) == 0o644

    def test_new_file_mode_follows_umask(self, tmp_path):
        """Тест прав нового файла по umask"""
        target = tmp_path / "sdk.py"
        umask = os.umask(0o022)
        try:
            write_atomic(str(target), "new")
        finally:
            os.umask(umask)

        assert stat.S_IMODE(os.stat(target).st_mode) == 0o644

    def test_failure_keeps_previous_file(self, tmp_path):
        """Тест: ошибка записи не трогает прежний файл"""
        target = tmp_path / "sdk.py"
        target.write_text("previous", encoding="utf-8")

        with pytest.raises(UnicodeEncodeError):
            write_atomic(str(target), "broken \ud800")

        assert target.read_text(encoding="utf-8") == "previous"
        assert [p.name for p in tmp_path.iterdir()] == ["sdk.py"]
