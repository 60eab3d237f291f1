#!/usr/bin/env python3
"""
Catalog - загрузка каталогов переводов.

Один JSON-файл на язык: source/{lang}.json
Формат: {"namespace": {"исходный текст": "шаблон перевода", ...}, ...}

Код языка берётся из имени файла (часть до последней точки) в верхнем регистре:
    en.json -> EN, zh-cn.JSON -> ZH-CN

Политика ошибок:
- битый файл пропускается, ошибка попадает в LoadReport
- дубликат ключа внутри объекта: побеждает последний (с предупреждением в лог)
- два файла с одним кодом языка: побеждает последний по имени файла
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .errors import CatalogLoadError

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "common"


def normalize_lang(code: str) -> str:
    """Код языка в каноническом виде: без пробелов, верхний регистр."""
    return code.strip().upper()


@dataclass(frozen=True)
class Catalog:
    """Каталог одного языка: namespace -> (исходный текст -> шаблон)."""
    lang: str
    namespaces: Mapping[str, Mapping[str, str]]
    path: Optional[Path] = None

    def get(self, text: str, ns: str = DEFAULT_NAMESPACE) -> Optional[str]:
        """Шаблон для текста в namespace или None."""
        entries = self.namespaces.get(ns)
        if entries is None:
            return None
        return entries.get(text)

    def has_namespace(self, ns: str) -> bool:
        return ns in self.namespaces

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.namespaces.values())


@dataclass
class LoadReport:
    """Результат загрузки директории с каталогами."""
    source: Path
    loaded: List[str] = field(default_factory=list)
    errors: List[CatalogLoadError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self):
        """Fail-fast для вызывающего кода: поднимает первую ошибку загрузки."""
        if self.errors:
            raise self.errors[0]


def _read_json(path: Path) -> object:
    """Читает JSON, предупреждая о дубликатах ключей (побеждает последний)."""
    def _pairs_hook(pairs):
        data = {}
        for key, value in pairs:
            if key in data:
                logger.warning("%s: duplicate key %r, last value wins", path, key)
            data[key] = value
        return data

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f, object_pairs_hook=_pairs_hook)


def load_catalog_file(path: Union[str, Path], lang: Optional[str] = None) -> Catalog:
    """
    Загружает один файл каталога.

    Args:
        path: Путь к JSON-файлу
        lang: Код языка (по умолчанию из имени файла)

    Returns:
        Catalog с read-only отображениями

    Raises:
        CatalogLoadError: файл не читается, не JSON или неверная структура
    """
    path = Path(path)
    if lang is None:
        lang = path.name.rsplit(".", 1)[0]
    lang = normalize_lang(lang)

    try:
        data = _read_json(path)
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadError(path, f"cannot read file: {e}") from e
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, слишком длинные целые (3.11+), слишком глубокая вложенность
        raise CatalogLoadError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise CatalogLoadError(path, "top level must be an object of namespaces")

    namespaces: Dict[str, Mapping[str, str]] = {}
    for ns, entries in data.items():
        if not isinstance(entries, dict):
            raise CatalogLoadError(path, f"namespace {ns!r} must be an object")
        for text, template in entries.items():
            if not isinstance(template, str):
                raise CatalogLoadError(
                    path, f"value for {text!r} in namespace {ns!r} must be a string"
                )
        namespaces[ns] = MappingProxyType(dict(entries))

    catalog = Catalog(lang=lang, namespaces=MappingProxyType(namespaces), path=path)
    logger.debug("Loaded catalog %s from %s: %d namespaces, %d entries",
                 lang, path, len(namespaces), catalog.entry_count)
    return catalog


class CatalogLoader:
    """
    Загрузчик директории каталогов.

    Структура:
        source/
            en.json
            cn.json
    """

    def __init__(self, extension: str = ".json"):
        self.extension = extension.lower()

    def list_files(self, directory: Path) -> List[Path]:
        """Файлы каталогов в директории, отсортированные по имени."""
        files = []
        for path in directory.iterdir():
            if path.is_file() and path.suffix.lower() == self.extension:
                files.append(path)
        return sorted(files, key=lambda p: p.name)

    def load(self, directory: Union[str, Path]) -> Tuple[Dict[str, Catalog], LoadReport]:
        """
        Загружает все каталоги директории.

        Битые файлы пропускаются и попадают в report.errors,
        остальные каталоги загружаются как обычно.

        Returns:
            (каталоги по коду языка, отчёт о загрузке)
        """
        directory = Path(directory)
        report = LoadReport(source=directory)
        catalogs: Dict[str, Catalog] = {}

        if not directory.is_dir():
            error = CatalogLoadError(directory, "source directory not found")
            logger.warning("Skipping catalog source: %s", error)
            report.errors.append(error)
            return catalogs, report

        try:
            files = self.list_files(directory)
        except OSError as e:
            error = CatalogLoadError(directory, f"cannot list directory: {e}")
            logger.warning("Skipping catalog source: %s", error)
            report.errors.append(error)
            return catalogs, report

        for path in files:
            try:
                catalog = load_catalog_file(path)
            except CatalogLoadError as e:
                logger.warning("Skipping catalog file: %s", e)
                report.errors.append(e)
                continue

            previous = catalogs.get(catalog.lang)
            if previous is not None:
                logger.warning("Catalog %s from %s replaces %s",
                               catalog.lang, path, previous.path)
                report.loaded.remove(catalog.lang)
            catalogs[catalog.lang] = catalog
            report.loaded.append(catalog.lang)

        logger.info("Loaded %d catalogs from %s (%d failed)",
                    len(catalogs), directory, len(report.errors))
        return catalogs, report


def load_source(directory: Union[str, Path]) -> Tuple[Dict[str, Catalog], LoadReport]:
    """Загрузка директории загрузчиком по умолчанию."""
    return CatalogLoader().load(directory)
