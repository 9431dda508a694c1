"""
Конфигурация для генерации SDK клиента
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_FILE = "openapi.toml"


@dataclass
class OpenApiConfig:
    """Конфигурация генератора SDK"""

    source: Optional[str] = None
    output: str = "sdk.py"
    client_name: str = "ApiSDK"
    value_object_suffix: str = "Dto"
    models_module: str = ".dto"
    models_ext_package: str = ".dto_ext"
    strict: bool = False

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE, search_dir: str = None
    ) -> Optional["OpenApiConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (OSError, toml.TomlDecodeError) as e:
            logger.warning("Не удалось прочитать конфиг %s: %s", config_path, e)
            return None

        defaults = cls()
        return cls(
            source=config_data.get("source"),
            output=config_data.get("output", defaults.output),
            client_name=config_data.get("client_name", defaults.client_name),
            value_object_suffix=config_data.get(
                "value_object_suffix", defaults.value_object_suffix
            ),
            models_module=config_data.get("models_module", defaults.models_module),
            models_ext_package=config_data.get(
                "models_ext_package", defaults.models_ext_package
            ),
            strict=bool(config_data.get("strict", defaults.strict)),
        )

    def save_to_file(self, config_path: str = CONFIG_FILE) -> None:
        """Сохранение конфигурации в файл"""
        config_data = {
            "output": self.output,
            "client_name": self.client_name,
            "value_object_suffix": self.value_object_suffix,
            "models_module": self.models_module,
            "models_ext_package": self.models_ext_package,
            "strict": self.strict,
        }
        # toml не сохраняет None
        if self.source is not None:
            config_data = {"source": self.source, **config_data}

        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "OpenApiConfig":
        """Объединение с аргументами командной строки"""
        return OpenApiConfig(
            source=args.source or self.source,
            output=args.output or self.output,
            client_name=args.client_name or self.client_name,
            value_object_suffix=self.value_object_suffix,
            models_module=self.models_module,
            models_ext_package=self.models_ext_package,
            strict=args.strict or self.strict,
        )
