"""Конфигурация easy_i18n (dataclass + переменные окружения)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .catalog import DEFAULT_NAMESPACE


@dataclass
class I18nConfig:
    """Настройки контекста переводов."""
    source_dir: Optional[Path] = None   # Директория с {lang}.json
    lang: str = "CN"                    # Активный язык при старте
    default_namespace: str = DEFAULT_NAMESPACE
    file_extension: str = ".json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "I18nConfig":
        """
        Читает EASY_I18N_SOURCE, EASY_I18N_LANG, EASY_I18N_NAMESPACE.
        Пустые и отсутствующие значения оставляют значения по умолчанию.
        """
        env = os.environ if environ is None else environ
        config = cls()

        source = env.get("EASY_I18N_SOURCE", "")
        if source:
            config.source_dir = Path(source)
        lang = env.get("EASY_I18N_LANG", "")
        if lang:
            config.lang = lang
        namespace = env.get("EASY_I18N_NAMESPACE", "")
        if namespace:
            config.default_namespace = namespace
        return config
