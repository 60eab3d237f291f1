#!/usr/bin/env python3
"""
Placeholders - позиционная подстановка значений в шаблон.

Маркер: '%' + номер аргумента, начиная с 1 (%1, %2, ...).
Правила:
- номер больше числа аргументов -> маркер остаётся как есть
- %0 не является маркером
- '%' без цифр после него не трогается
- подстановка в один проход, вставленный текст повторно не сканируется
"""

import re
from typing import Any, List, Sequence

PLACEHOLDER_RE = re.compile(r"%(\d+)")


def find_markers(template: str) -> List[int]:
    """Возвращает номера маркеров в порядке появления (с повторами)."""
    return [int(m.group(1)) for m in PLACEHOLDER_RE.finditer(template)]


def substitute(template: str, args: Sequence[Any]) -> str:
    """
    Подставляет аргументы в шаблон.

    Args:
        template: Строка с маркерами %1, %2, ...
        args: Значения, приводятся через str()

    Returns:
        Строка с подставленными значениями
    """
    if not args:
        return template

    values = [str(a) for a in args]

    def _replace(match: "re.Match") -> str:
        index = int(match.group(1))
        if 1 <= index <= len(values):
            return values[index - 1]
        return match.group(0)

    return PLACEHOLDER_RE.sub(_replace, template)
