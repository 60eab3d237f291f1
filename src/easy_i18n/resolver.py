"""
Resolver - поиск шаблона перевода.

Цепочка: каталог активного языка -> namespace -> исходный текст.
Любой промах возвращает исходный текст без изменений.
Между namespace fallback нет: "ns1" не откатывается на "common".
"""

from typing import Optional

from .catalog import DEFAULT_NAMESPACE, Catalog


def resolve_template(catalog: Optional[Catalog], text: str,
                     ns: str = DEFAULT_NAMESPACE) -> str:
    """
    Возвращает шаблон для text или сам text при промахе.

    Args:
        catalog: Каталог активного языка (None если не загружен)
        text: Исходный текст (ключ)
        ns: Namespace
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")
    if catalog is None:
        return text
    template = catalog.get(text, ns)
    if template is None:
        return text
    return template
