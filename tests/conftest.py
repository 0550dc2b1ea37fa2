from __future__ import annotations

import json
from pathlib import Path

import pytest

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def sample_database() -> Path:
    return FIXTURE_DIR / "headlines.sample.json"


@pytest.fixture
def big_news_database(tmp_path) -> Path:
    path = tmp_path / "headlines.json"
    path.write_text(
        json.dumps(
            [["k1", ["Big News", "http://example.com/a", "", "", "", "", "", "", 1_000_000_000]]]
        ),
        encoding="utf-8",
    )
    return path
