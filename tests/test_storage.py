from __future__ import annotations

import json

import pytest

from slashdot_headlines.errors import HeadlineStoreFormatError
from slashdot_headlines.storage import dump_headlines, load_headlines


def test_load_headlines_keeps_file_order(sample_database) -> None:
    entries = load_headlines(sample_database)

    assert [entry.key for entry in entries] == ["k1", "k2", "k3"]
    assert [entry.record.title for entry in entries] == [
        "Big News",
        "Second Story",
        "Third Story",
    ]
    assert entries[1].record.timestamp == 1_000_006_656.0


def test_load_headlines_missing_file_warns_and_returns_empty(tmp_path, caplog) -> None:
    missing = tmp_path / "nope.json"
    notices: list[str] = []

    entries = load_headlines(missing, notify=notices.append)

    assert entries == []
    assert notices == [f"No such file `{missing}`"]
    assert "headline_store missing" in caplog.text


def test_load_headlines_missing_file_without_notify(tmp_path) -> None:
    assert load_headlines(tmp_path / "nope.json") == []


def test_load_headlines_propagates_invalid_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[[\"k1\", ", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        load_headlines(path)


@pytest.mark.parametrize(
    "payload",
    [
        {"k1": []},
        ["k1"],
        [["k1", ["too", "short"]]],
    ],
)
def test_load_headlines_rejects_non_pair_shapes(tmp_path, payload) -> None:
    path = tmp_path / "headlines.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(HeadlineStoreFormatError):
        load_headlines(path)


def test_dump_headlines_writes_fields_back_verbatim(sample_database, tmp_path) -> None:
    entries = load_headlines(sample_database)
    out = tmp_path / "nested" / "copy.json"

    dump_headlines(entries, out)

    original = json.loads(sample_database.read_text(encoding="utf-8"))
    assert json.loads(out.read_text(encoding="utf-8")) == original
