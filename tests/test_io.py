from __future__ import annotations

import json

import pytest

from forcelayout.errors import MalformedInputError
from forcelayout.model.io import NodeRecord, collect_records, load_records, parse_records


def test_parse_records_reads_package_map_keys() -> None:
    text = json.dumps([
        {"Name": "bash", "dep": ["glibc", "readline"], "introduced_in": "f12", "Version": "5.2"},
        {"Name": "glibc", "dep": [], "introduced_in": "f1"},
    ])
    records = parse_records(text)

    assert records[0] == NodeRecord(name="bash", dependencies=("glibc", "readline"), group="f12")
    assert records[1].dependencies == ()
    assert records[1].group == "f1"


def test_parse_records_accepts_lowercase_aliases() -> None:
    records = parse_records('[{"name": "a", "deps": ["b"], "group": "x"}, {"name": "b"}]')

    assert records[0].name == "a"
    assert records[0].dependencies == ("b",)
    assert records[0].group == "x"
    assert records[1].group is None


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"Name": "a"}',
        '[{"dep": []}]',
        '[{"Name": "a", "dep": "b"}]',
        '[42]',
    ],
)
def test_parse_records_rejects_bad_payloads(text: str) -> None:
    with pytest.raises(MalformedInputError):
        parse_records(text)


def test_collect_records_merges_file_then_inline(tmp_path) -> None:
    path = tmp_path / "packages-map.json"
    path.write_text(json.dumps([{"Name": "a", "dep": ["b"]}]), encoding="utf-8")

    records = collect_records(filepath=str(path), inline='[{"Name": "b", "dep": []}]')

    assert [r.name for r in records] == ["a", "b"]
    assert load_records(str(path))[0].name == "a"


def test_collect_records_without_sources_is_empty() -> None:
    assert collect_records() == []


def test_load_records_rejects_non_utf8_file(tmp_path) -> None:
    path = tmp_path / "packages-map.json"
    path.write_bytes(b'[{"Name": "\xff\xfe", "dep": []}]')

    with pytest.raises(MalformedInputError):
        load_records(str(path))
