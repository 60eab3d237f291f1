#!/usr/bin/env python3
"""
Registry - контекст переводов: загруженные каталоги + активный язык.

Модель доступа: редкие записи (set_source, set_lang) и частые чтения (translate).
Состояние хранится как неизменяемый снимок (_State). Запись строит новый
снимок под блокировкой и публикует его одним присваиванием, чтение берёт
ссылку на текущий снимок один раз за вызов. Поэтому translate никогда не
видит наполовину загруженный набор каталогов и не смешивает два языка.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence, Union

from .catalog import DEFAULT_NAMESPACE, Catalog, CatalogLoader, LoadReport, normalize_lang
from .config import I18nConfig
from .placeholders import substitute
from .resolver import resolve_template

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Catalog] = MappingProxyType({})


@dataclass(frozen=True)
class _State:
    lang: str
    catalogs: Mapping[str, Catalog]
    source: Optional[Path] = None

    def active_catalog(self) -> Optional[Catalog]:
        return self.catalogs.get(self.lang)


class I18n:
    """
    Контекст переводов, которым владеет приложение.

    Usage:
        i18n = I18n(lang="en")
        i18n.set_source("./locales")
        i18n.translate("这是一个测试")
        i18n.translate("他的成绩是，语文：%1, 数学：%2", args=[88, 100])
    """

    def __init__(self, lang: str = "CN", default_namespace: str = DEFAULT_NAMESPACE,
                 loader: Optional[CatalogLoader] = None):
        self.default_namespace = default_namespace
        self.loader = loader or CatalogLoader()
        self._write_lock = threading.Lock()
        self._reload_lock = threading.Lock()
        self._state = _State(lang=normalize_lang(lang), catalogs=_EMPTY)

    @classmethod
    def from_config(cls, config: I18nConfig) -> "I18n":
        """Создаёт контекст по конфигурации и загружает source_dir, если он задан."""
        i18n = cls(
            lang=config.lang,
            default_namespace=config.default_namespace,
            loader=CatalogLoader(config.file_extension),
        )
        if config.source_dir is not None:
            i18n.set_source(config.source_dir)
        return i18n

    # === запись ===

    def set_source(self, path: Union[str, Path]) -> LoadReport:
        """
        Загружает каталоги из директории, полностью заменяя предыдущие.

        Новый набор собирается в стороне и публикуется целиком.
        Битые файлы пропускаются и перечислены в отчёте.
        Параллельные вызовы set_source выполняются по очереди: публикуется
        результат последнего вызова. set_lang на время загрузки не блокируется.
        """
        with self._reload_lock:
            catalogs, report = self.loader.load(path)
            frozen = MappingProxyType(dict(catalogs))
            with self._write_lock:
                self._state = _State(lang=self._state.lang, catalogs=frozen,
                                     source=Path(path))
        return report

    def set_lang(self, code: str):
        """Устанавливает активный язык. Наличие каталога не проверяется."""
        lang = normalize_lang(code)
        with self._write_lock:
            state = self._state
            self._state = _State(lang=lang, catalogs=state.catalogs, source=state.source)
        logger.debug("Active language set to %s", lang)

    # === чтение ===

    @property
    def lang(self) -> str:
        return self._state.lang

    @property
    def source(self) -> Optional[Path]:
        return self._state.source

    @property
    def languages(self) -> List[str]:
        """Коды загруженных языков."""
        return sorted(self._state.catalogs)

    def get_catalog(self, lang: str) -> Optional[Catalog]:
        return self._state.catalogs.get(normalize_lang(lang))

    def get_active_catalog(self) -> Optional[Catalog]:
        """Каталог активного языка или None."""
        return self._state.active_catalog()

    def translate(self, text: str, ns: Optional[str] = None,
                  args: Sequence[Any] = ()) -> str:
        """
        Переводит текст и подставляет позиционные аргументы.

        Args:
            text: Исходный текст
            ns: Namespace (по умолчанию default_namespace)
            args: Значения для %1, %2, ...

        Returns:
            Перевод или исходный текст, если перевод не найден
        """
        state = self._state
        template = resolve_template(
            state.active_catalog(), text,
            self.default_namespace if ns is None else ns,
        )
        return substitute(template, args)

    def t(self, text: str, *args: Any, ns: Optional[str] = None) -> str:
        """Краткая форма: t("text %1", value, ns="namespace1")."""
        return self.translate(text, ns=ns, args=args)
