import json
from pathlib import Path

import pytest

from easy_i18n import I18n

EN = {
    "common": {
        "这是一个测试": "This is a test",
        "他的成绩是，语文：%1, 数学：%2": "His grades are Chinese: %1, Mathematics: %2",
    },
    "namespace1": {
        "这是一个测试": "This is a test, but it is different",
        "他的成绩是，语文：%1, 数学：%2":
            "His grades are Chinese: %1, Mathematics: %2, and the test is not bad.",
    },
}

JA = {
    "common": {
        "这是一个测试": "これはテストです",
        "他的成绩是，语文：%1, 数学：%2": "彼の成績は国語：%1、数学：%2",
    },
}


def write_catalog(directory: Path, name: str, data) -> Path:
    path = directory / name
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def source_dir(tmp_path):
    directory = tmp_path / "source"
    directory.mkdir()
    write_catalog(directory, "en.json", EN)
    write_catalog(directory, "ja.json", JA)
    return directory


@pytest.fixture
def i18n(source_dir):
    ctx = I18n(lang="en")
    report = ctx.set_source(source_dir)
    assert report.ok
    return ctx
