from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from slashdot_headlines.errors import HeadlineStoreFormatError
from slashdot_headlines.schemas import HeadlineEntry

logger = logging.getLogger(__name__)


def load_headlines(
    path: str | Path,
    *,
    notify: Callable[[str], None] | None = None,
) -> list[HeadlineEntry]:
    """Read the whole database as an ordered list of ``(key, record)`` pairs.

    A missing file is not an error: the user is warned and an empty store is
    returned. Anything that is not a JSON list of pairs propagates.
    """
    target = Path(path)
    if not target.exists():
        message = missing_file_message(target)
        logger.warning("headline_store missing path=%s", target)
        if notify is not None:
            notify(message)
        return []

    payload = json.loads(target.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise HeadlineStoreFormatError(
            f"headline database must contain a list of pairs: {target}"
        )

    entries: list[HeadlineEntry] = []
    for position, pair in enumerate(payload):
        if not isinstance(pair, list):
            raise HeadlineStoreFormatError(
                f"headline database entry {position} is not a [key, record] pair"
            )
        try:
            entries.append(HeadlineEntry.from_pair(pair))
        except ValueError as exc:
            raise HeadlineStoreFormatError(
                f"headline database entry {position} is malformed: {exc}"
            ) from exc

    logger.info("headline_store loaded path=%s entries=%d", target, len(entries))
    return entries


def dump_headlines(entries: Iterable[HeadlineEntry], path: str | Path) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = [entry.to_pair() for entry in entries]
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("headline_store written path=%s entries=%d", target, len(payload))


def missing_file_message(path: str | Path) -> str:
    return f"No such file `{path}`"
