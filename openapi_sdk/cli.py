import argparse
import logging
import os
import sys

from openapi_sdk.config import CONFIG_FILE, OpenApiConfig
from openapi_sdk.exceptions import GenerationError
from openapi_sdk.generator import generate_file
from openapi_sdk.internal.types.diagnostics import Diagnostics, Severity


def confirm_choice(message: str) -> bool:
    """Запрос подтверждения у пользователя"""
    while True:
        choice = input(f"{message} (y/n): ").lower().strip()
        if choice in ["y", "yes", "да", ""]:
            return True
        elif choice in ["n", "no", "нет"]:
            return False
        print("Введите y/n")


def _print_diagnostics(diagnostics: Diagnostics):
    """Итог диагностик запуска"""
    if not len(diagnostics):
        return

    errors = diagnostics.by_severity(Severity.ERROR)
    warnings = diagnostics.by_severity(Severity.WARNING)
    infos = diagnostics.by_severity(Severity.INFO)

    print(
        f"📋 Диагностика: ошибок {len(errors)}, "
        f"предупреждений {len(warnings)}, сообщений {len(infos)}"
    )
    for diagnostic in errors + warnings:
        marker = "❌" if diagnostic.severity == Severity.ERROR else "⚠️"
        print(f"   {marker} {diagnostic}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Генерация Python SDK из OpenAPI")
    parser.add_argument("--source", type=str, help="Путь или URL к OpenAPI документу")
    parser.add_argument("--output", type=str, help="Файл для записи SDK")
    parser.add_argument("--client-name", type=str, help="Имя класса SDK")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Прерывать генерацию на некорректном operationId",
    )
    parser.add_argument(
        "--config", type=str, default=CONFIG_FILE, help="Путь к файлу конфигурации"
    )
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi.toml"
    )
    parser.add_argument(
        "--force", action="store_true", help="Перезаписывать файлы без подтверждения"
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")
    return parser


def generate(argv=None):
    """Универсальная команда генерации SDK клиента"""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Инициализация конфига
    if args.init_config:
        config = OpenApiConfig().merge_with_args(args)
        if os.path.exists(args.config) and not (
            args.force or confirm_choice(f"Файл {args.config} существует. Перезаписать?")
        ):
            return
        config.save_to_file(args.config)
        print(f"✅ Создан конфиг файл {args.config}")
        return

    # Загрузка конфига из файла, аргументы имеют приоритет
    file_config = OpenApiConfig.from_file(args.config)
    if file_config:
        print(f"📋 Используется конфиг из {args.config}")
        config = file_config.merge_with_args(args)
    else:
        config = OpenApiConfig().merge_with_args(args)

    if not config.source:
        print("❌ Ошибка: Укажите --source или создайте конфиг с --init-config")
        sys.exit(1)

    if (
        os.path.exists(config.output)
        and not args.force
        and not confirm_choice(f"Файл {config.output} существует. Перезаписать?")
    ):
        return

    print(f"🚀 Генерация SDK из {config.source}")

    try:
        generator = generate_file(config)
    except (GenerationError, OSError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)

    _print_diagnostics(generator.diagnostics)
    print("✅ Генерация завершена успешно!")
    print(f"📦 SDK создан в: {os.path.abspath(config.output)}")


if __name__ == "__main__":
    generate()
