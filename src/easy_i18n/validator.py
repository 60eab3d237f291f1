#!/usr/bin/env python3
"""
Валидатор загруженных каталогов относительно эталонного языка.

Проверки:
1. Полнота: все namespace и ключи эталона есть в других языках
2. Лишние ключи (есть в языке, нет в эталоне)
3. Совпадение набора маркеров %N между эталоном и переводом
4. Пустые шаблоны
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from .catalog import Catalog, normalize_lang
from .placeholders import find_markers
from .registry import I18n


class Severity(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass
class Issue:
    severity: Severity
    language: str
    namespace: str
    key: str
    message: str


class CatalogValidator:
    """Проверяет каталоги контекста I18n (файлы повторно не читаются)."""

    def __init__(self, i18n: I18n, reference_lang: str):
        self.i18n = i18n
        self.reference_lang = normalize_lang(reference_lang)
        self.issues: List[Issue] = []

    def _reference(self) -> Catalog:
        catalog = self.i18n.get_catalog(self.reference_lang)
        if catalog is None:
            raise ValueError(
                f"Reference language '{self.reference_lang}' is not loaded. "
                f"Available: {self.i18n.languages}"
            )
        return catalog

    def _others(self) -> List[Catalog]:
        return [self.i18n.get_catalog(lang) for lang in self.i18n.languages
                if lang != self.reference_lang]

    def check_completeness(self):
        """Проверка 1-2: пропущенные и лишние ключи."""
        ref = self._reference()
        for catalog in self._others():
            for ns, ref_entries in ref.namespaces.items():
                entries = catalog.namespaces.get(ns)
                if entries is None:
                    self.issues.append(Issue(
                        Severity.ERROR, catalog.lang, ns, "",
                        f"Missing namespace (present in {ref.lang})"
                    ))
                    continue
                for key in ref_entries:
                    if key not in entries:
                        self.issues.append(Issue(
                            Severity.ERROR, catalog.lang, ns, key,
                            f"Missing translation (present in {ref.lang})"
                        ))

            for ns, entries in catalog.namespaces.items():
                ref_entries = ref.namespaces.get(ns, {})
                for key in entries:
                    if key not in ref_entries:
                        self.issues.append(Issue(
                            Severity.WARNING, catalog.lang, ns, key,
                            f"Extra key (absent in {ref.lang})"
                        ))

    def check_placeholders(self):
        """Проверка 3: маркеры %N совпадают с эталоном."""
        ref = self._reference()
        for catalog in self._others():
            for ns, ref_entries in ref.namespaces.items():
                entries = catalog.namespaces.get(ns, {})
                for key, ref_template in ref_entries.items():
                    if key not in entries:
                        continue
                    ref_markers = set(find_markers(ref_template))
                    markers = set(find_markers(entries[key]))
                    if ref_markers != markers:
                        self.issues.append(Issue(
                            Severity.ERROR, catalog.lang, ns, key,
                            f"Placeholders differ: {ref.lang}={sorted(ref_markers)}, "
                            f"{catalog.lang}={sorted(markers)}"
                        ))

    def check_empty_values(self):
        """Проверка 4: пустые шаблоны."""
        for lang in self.i18n.languages:
            catalog = self.i18n.get_catalog(lang)
            for ns, entries in catalog.namespaces.items():
                for key, template in entries.items():
                    if not template.strip():
                        self.issues.append(Issue(
                            Severity.ERROR, lang, ns, key, "Empty value"
                        ))

    def validate(self) -> List[Issue]:
        """Запускает все проверки и возвращает найденные проблемы."""
        self.issues = []
        self.check_completeness()
        self.check_placeholders()
        self.check_empty_values()
        return self.issues

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    def summary(self) -> Dict[str, Dict[str, int]]:
        """Статистика по языкам: ключи, ошибки, предупреждения."""
        result = {}
        for lang in self.i18n.languages:
            lang_issues = [i for i in self.issues if i.language == lang]
            result[lang] = {
                "keys": self.i18n.get_catalog(lang).entry_count,
                "errors": len([i for i in lang_issues if i.severity == Severity.ERROR]),
                "warnings": len([i for i in lang_issues if i.severity == Severity.WARNING]),
            }
        return result
