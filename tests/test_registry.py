import threading
from pathlib import Path

import pytest

from easy_i18n import CatalogLoader, I18n, I18nConfig

from conftest import EN, JA, write_catalog

GRADES = "他的成绩是，语文：%1, 数学：%2"


def test_no_catalog_loaded_passthrough():
    ctx = I18n()
    assert ctx.get_active_catalog() is None
    assert ctx.translate("这是一个测试") == "这是一个测试"
    assert ctx.translate(GRADES, args=[88, 100]) == "他的成绩是，语文：88, 数学：100"


def test_translate_common(i18n):
    assert i18n.translate("这是一个测试") == "This is a test"


def test_translate_with_args(i18n):
    assert i18n.translate(GRADES, args=[88, 100]) == \
        "His grades are Chinese: 88, Mathematics: 100"
    assert i18n.t(GRADES, 88, 100, ns="namespace1") == \
        "His grades are Chinese: 88, Mathematics: 100, and the test is not bad."


def test_namespaces_are_independent(i18n):
    assert i18n.translate("这是一个测试") == "This is a test"
    assert i18n.translate("这是一个测试", "namespace1") == "This is a test, but it is different"
    assert i18n.translate("这是一个测试", "absent") == "这是一个测试"


def test_overflow_keeps_marker(i18n):
    assert i18n.translate(GRADES, args=[88]) == "His grades are Chinese: 88, Mathematics: %2"


def test_set_lang_is_case_normalized(i18n):
    i18n.set_lang("  ja ")
    assert i18n.lang == "JA"
    assert i18n.get_active_catalog().lang == "JA"
    assert i18n.translate("这是一个测试") == JA["common"]["这是一个测试"]


def test_set_lang_without_catalog_is_allowed(i18n):
    i18n.set_lang("fr")
    assert i18n.lang == "FR"
    assert i18n.get_active_catalog() is None
    assert i18n.translate("这是一个测试") == "这是一个测试"


def test_set_lang_before_set_source():
    ctx = I18n()
    ctx.set_lang("en")
    assert ctx.translate("这是一个测试") == "这是一个测试"


def test_reload_replaces_previous_catalogs(i18n, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    write_catalog(other, "en.json", {"common": {"new key": "New value"}})

    report = i18n.set_source(other)
    assert report.loaded == ["EN"]
    assert i18n.languages == ["EN"]
    assert i18n.source == other
    assert i18n.translate("new key") == "New value"
    assert i18n.translate("这是一个测试") == "这是一个测试"
    assert i18n.get_catalog("ja") is None


def test_reload_with_missing_directory_clears_catalogs(i18n, tmp_path):
    report = i18n.set_source(tmp_path / "missing")
    assert not report.ok
    assert i18n.languages == []
    assert i18n.translate("这是一个测试") == "这是一个测试"


def test_reload_keeps_active_language(i18n, source_dir):
    i18n.set_lang("ja")
    i18n.set_source(source_dir)
    assert i18n.lang == "JA"


def test_failed_file_only_affects_its_language(source_dir):
    write_catalog(source_dir, "fr.json", "{broken")
    ctx = I18n(lang="fr")
    report = ctx.set_source(source_dir)
    assert len(report.errors) == 1
    assert ctx.translate("这是一个测试") == "这是一个测试"
    ctx.set_lang("en")
    assert ctx.translate("这是一个测试") == "This is a test"


def test_default_namespace_override(source_dir):
    ctx = I18n(lang="en", default_namespace="namespace1")
    ctx.set_source(source_dir)
    assert ctx.translate("这是一个测试") == "This is a test, but it is different"
    assert ctx.translate("这是一个测试", ns="common") == "This is a test"


def test_from_config_loads_source(source_dir):
    ctx = I18n.from_config(I18nConfig(source_dir=source_dir, lang="ja"))
    assert ctx.languages == ["EN", "JA"]
    assert ctx.translate("这是一个测试") == JA["common"]["这是一个测试"]


def test_from_config_without_source():
    ctx = I18n.from_config(I18nConfig())
    assert ctx.lang == "CN"
    assert ctx.languages == []


def test_concurrent_language_switch_never_mixes_languages(i18n):
    key = "这是一个测试"
    allowed = {EN["common"][key], JA["common"][key]}
    en_grades = "His grades are Chinese: 1, Mathematics: 2"
    ja_grades = "彼の成績は国語：1、数学：2"
    stop = threading.Event()
    bad = []

    def writer():
        langs = ["en", "ja"]
        i = 0
        while not stop.is_set():
            i18n.set_lang(langs[i % 2])
            i += 1

    def reader():
        for _ in range(2000):
            if i18n.translate(key) not in allowed:
                bad.append(key)
            if i18n.translate(GRADES, args=[1, 2]) not in (en_grades, ja_grades):
                bad.append(GRADES)

    writers = [threading.Thread(target=writer) for _ in range(2)]
    readers = [threading.Thread(target=reader) for _ in range(4)]
    for th in writers + readers:
        th.start()
    for th in readers:
        th.join()
    stop.set()
    for th in writers:
        th.join()

    assert bad == []


def test_concurrent_reload_is_atomic(source_dir, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    write_catalog(other, "en.json", {"common": {"这是一个测试": "Reloaded"}})
    ctx = I18n(lang="en")
    ctx.set_source(source_dir)

    stop = threading.Event()
    seen = set()

    def writer():
        dirs = [source_dir, other]
        i = 0
        while not stop.is_set():
            ctx.set_source(dirs[i % 2])
            i += 1

    def reader():
        for _ in range(500):
            if ctx.get_active_catalog() is None:
                seen.add(None)
            seen.add(ctx.translate("这是一个测试"))

    w = threading.Thread(target=writer)
    readers = [threading.Thread(target=reader) for _ in range(3)]
    w.start()
    for th in readers:
        th.start()
    for th in readers:
        th.join()
    stop.set()
    w.join()

    assert seen <= {"This is a test", "Reloaded"}


@pytest.mark.parametrize("code", ["en", "EN", "En"])
def test_get_catalog_normalizes_code(i18n, code):
    assert i18n.get_catalog(code).lang == "EN"


def test_set_source_publishes_good_catalogs_when_a_file_cannot_be_parsed(source_dir):
    write_catalog(source_dir, "fr.json", "[" * 200000 + "]" * 200000)
    ctx = I18n(lang="en")
    report = ctx.set_source(source_dir)
    assert len(report.errors) == 1
    assert ctx.languages == ["EN", "JA"]
    assert ctx.translate("这是一个测试") == "This is a test"


class GatedLoader(CatalogLoader):
    """Задерживает загрузку одной директории до сигнала release."""

    def __init__(self, gated_dir):
        super().__init__()
        self.gated_dir = gated_dir
        self.entered = threading.Event()
        self.release = threading.Event()

    def load(self, directory):
        if Path(directory) == self.gated_dir:
            self.entered.set()
            self.release.wait(5)
        return super().load(directory)


def test_concurrent_reloads_publish_in_call_order(source_dir, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    write_catalog(other, "en.json", {"common": {"这是一个测试": "Reloaded"}})
    loader = GatedLoader(source_dir)
    ctx = I18n(lang="en", loader=loader)

    first = threading.Thread(target=ctx.set_source, args=(source_dir,))
    first.start()
    assert loader.entered.wait(5)

    # set_lang не ждёт загрузку
    ctx.set_lang("ja")
    assert ctx.lang == "JA"

    second = threading.Thread(target=ctx.set_source, args=(other,))
    second.start()
    second.join(0.2)
    assert second.is_alive()

    loader.release.set()
    first.join(5)
    second.join(5)

    assert ctx.source == other
    assert ctx.languages == ["EN"]
    ctx.set_lang("en")
    assert ctx.translate("这是一个测试") == "Reloaded"
