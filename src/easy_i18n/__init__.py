"""
easy_i18n - перевод строк по заранее загруженным каталогам.

Модули:
- catalog: загрузка JSON-каталогов (один файл на язык)
- registry: контекст I18n (каталоги + активный язык, потокобезопасно)
- resolver: поиск шаблона с откатом на исходный текст
- placeholders: подстановка %1, %2, ...
- validator: проверка каталогов относительно эталонного языка
- manager: CLI поверх set_source / set_lang / translate

Пример:
    import easy_i18n
    easy_i18n.set_source("./source")
    easy_i18n.set_lang("EN")
    easy_i18n.t("这是一个测试")                      # This is a test
    easy_i18n.t("这是一个测试", ns="namespace1")     # This is a test, but it is different
    easy_i18n.t("他的成绩是，语文：%1, 数学：%2", 88, 100)
"""

import threading
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from .catalog import Catalog, CatalogLoader, LoadReport, load_catalog_file, load_source
from .config import I18nConfig
from .errors import CatalogLoadError, I18nError
from .placeholders import substitute
from .registry import I18n
from .resolver import resolve_template

__all__ = [
    "Catalog", "CatalogLoader", "CatalogLoadError", "I18n", "I18nConfig",
    "I18nError", "LoadReport", "get_default", "get_lang", "load_catalog_file",
    "load_source", "resolve_template", "set_lang", "set_source", "substitute",
    "t", "translate",
]

_default: Optional[I18n] = None
_default_lock = threading.Lock()


def get_default() -> I18n:
    """
    Контекст по умолчанию для модульных функций.

    Создаётся при первом обращении по I18nConfig.from_env().
    """
    global _default

    if _default is None:
        with _default_lock:
            if _default is None:
                _default = I18n.from_config(I18nConfig.from_env())
    return _default


def set_source(path: Union[str, Path]) -> LoadReport:
    """Загружает каталоги в контекст по умолчанию."""
    return get_default().set_source(path)


def set_lang(code: str) -> None:
    """Устанавливает активный язык контекста по умолчанию."""
    get_default().set_lang(code)


def get_lang() -> str:
    """Возвращает активный язык."""
    return get_default().lang


def translate(text: str, ns: Optional[str] = None, args: Sequence[Any] = ()) -> str:
    """Переводит text; при промахе возвращает его без изменений."""
    return get_default().translate(text, ns=ns, args=args)


def t(text: str, *args: Any, ns: Optional[str] = None) -> str:
    """
    Переводит строку с позиционными аргументами.

    Args:
        text: Исходный текст (ключ)
        *args: Значения для %1, %2, ...
        ns: Namespace (по умолчанию "common")
    """
    return get_default().translate(text, ns=ns, args=args)
