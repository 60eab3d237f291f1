"""Исключения easy_i18n."""

from pathlib import Path
from typing import Union


class I18nError(Exception):
    """Базовое исключение библиотеки."""


class CatalogLoadError(I18nError):
    """Файл каталога не удалось прочитать или разобрать."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")
