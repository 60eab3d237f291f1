#!/usr/bin/env python3
"""
Manager - CLI поверх easy_i18n.

Команды:
  translate  Переводит строку (set_source -> set_lang -> translate)
  stats      Показывает загруженные каталоги и ошибки загрузки
  validate   Проверяет каталоги относительно эталонного языка

Использование:
  easy-i18n translate --source ./source --lang en "这是一个测试"
  easy-i18n translate --source ./source --lang en --ns namespace1 "他的成绩是，语文：%1, 数学：%2" 88 100
  easy-i18n stats --source ./source
  easy-i18n validate --source ./source --reference cn
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .catalog import DEFAULT_NAMESPACE, LoadReport
from .registry import I18n
from .validator import CatalogValidator, Severity

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_LOAD_ERRORS = 2


def _print_load_errors(console: Console, report: LoadReport):
    for error in report.errors:
        console.print(f"[red]❌ {escape(str(error))}[/red]")


def cmd_translate(args, console: Console) -> int:
    """Команда: перевод одной строки."""
    i18n = I18n(lang=args.lang)
    report = i18n.set_source(args.source)
    if not report.ok:
        _print_load_errors(console, report)
    print(i18n.translate(args.text, ns=args.ns, args=args.args))
    return EXIT_OK


def cmd_stats(args, console: Console) -> int:
    """Команда: статистика каталогов."""
    i18n = I18n()
    report = i18n.set_source(args.source)

    table = Table(title=f"Catalogs: {args.source}", box=box.SIMPLE)
    table.add_column("Lang")
    table.add_column("Namespaces", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("File")

    for lang in i18n.languages:
        catalog = i18n.get_catalog(lang)
        table.add_row(lang, str(len(catalog.namespaces)), str(catalog.entry_count),
                      catalog.path.name if catalog.path else "")
    console.print(table)

    if not report.ok:
        _print_load_errors(console, report)
        return EXIT_LOAD_ERRORS
    return EXIT_OK


def cmd_validate(args, console: Console) -> int:
    """Команда: валидация каталогов."""
    i18n = I18n()
    report = i18n.set_source(args.source)
    if not report.ok:
        _print_load_errors(console, report)
        return EXIT_LOAD_ERRORS

    validator = CatalogValidator(i18n, args.reference)
    try:
        issues = validator.validate()
    except ValueError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        return EXIT_LOAD_ERRORS

    if issues:
        table = Table(title="Issues", box=box.SIMPLE)
        table.add_column("Severity")
        table.add_column("Lang")
        table.add_column("Namespace")
        table.add_column("Key")
        table.add_column("Message")
        for issue in issues[:args.max_issues]:
            style = "red" if issue.severity == Severity.ERROR else "yellow"
            table.add_row(f"[{style}]{issue.severity.value}[/{style}]", issue.language,
                          escape(issue.namespace), escape(issue.key), escape(issue.message))
        console.print(table)
        if len(issues) > args.max_issues:
            console.print(f"... {len(issues) - args.max_issues} more")

    for lang, stats in validator.summary().items():
        status = "✅" if stats["errors"] == 0 else "❌"
        console.print(f"{status} {lang}: {stats['keys']} keys | "
                      f"{stats['errors']} errors | {stats['warnings']} warnings")

    return EXIT_ISSUES if validator.errors else EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Создаёт парсер аргументов."""
    parser = argparse.ArgumentParser(
        prog="easy-i18n",
        description="Перевод строк по JSON-каталогам",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Подробный лог")

    subparsers = parser.add_subparsers(dest="command", help="Команда")

    # === translate ===
    p_trans = subparsers.add_parser("translate", help="Перевести строку")
    p_trans.add_argument("--source", required=True, help="Директория каталогов")
    p_trans.add_argument("--lang", required=True, help="Код языка")
    p_trans.add_argument("--ns", default=DEFAULT_NAMESPACE, help="Namespace")
    p_trans.add_argument("text", help="Исходный текст")
    p_trans.add_argument("args", nargs="*", help="Значения для %%1, %%2, ...")

    # === stats ===
    p_stats = subparsers.add_parser("stats", help="Статистика каталогов")
    p_stats.add_argument("--source", required=True, help="Директория каталогов")

    # === validate ===
    p_val = subparsers.add_parser("validate", help="Валидировать каталоги")
    p_val.add_argument("--source", required=True, help="Директория каталогов")
    p_val.add_argument("--reference", required=True, help="Эталонный язык")
    p_val.add_argument("--max-issues", type=int, default=50,
                       help="Максимум проблем для вывода")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Точка входа CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return EXIT_LOAD_ERRORS

    commands = {
        "translate": cmd_translate,
        "stats": cmd_stats,
        "validate": cmd_validate,
    }
    console = Console(width=120)
    return commands[args.command](args, console)


if __name__ == "__main__":
    sys.exit(main())
