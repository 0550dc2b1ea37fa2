from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from slashdot_headlines.browse import BrowseCommand, open_in_browser
from slashdot_headlines.config import AppConfig
from slashdot_headlines.errors import HeadlineError, NoHeadlineError, NotHeadlineBufferError
from slashdot_headlines.formatting import (
    HeadlineFormatter,
    build_headline_formatter,
    format_citation,
    format_url,
)
from slashdot_headlines.schemas import HeadlineEntry, HeadlineRecord
from slashdot_headlines.storage import load_headlines
from slashdot_headlines.surface import TextSurface

logger = logging.getLogger(__name__)

KEYMAP: dict[str, str] = {
    "RET": "select_and_open",
    "o": "select_and_open",
    "c": "insert_citation",
    "u": "insert_url_only",
    "g": "refresh",
    "q": "close",
    "n": "next_line",
    "p": "previous_line",
    "?": "describe",
}

_ACTION_HELP = {
    "select_and_open": "open the story on this line in a browser",
    "insert_citation": "insert title and URL into the calling buffer",
    "insert_url_only": "insert the URL into the calling buffer",
    "refresh": "reload the headline database",
    "close": "close the headline view",
    "next_line": "move to the next headline",
    "previous_line": "move to the previous headline",
    "describe": "show this help",
}


@dataclass(slots=True, frozen=True)
class Found:
    entry: HeadlineEntry

    @property
    def record(self) -> HeadlineRecord:
        return self.entry.record


@dataclass(slots=True, frozen=True)
class NotFound:
    index: int


HeadlineLookup = Found | NotFound


def line_index_at(text: str, position: int) -> int:
    """Count line terminators strictly before ``position``."""
    return text.count("\n", 0, max(position, 0))


class HeadlineController:
    def __init__(
        self,
        surface: TextSurface,
        config: AppConfig | None = None,
        *,
        formatter: HeadlineFormatter | None = None,
        browse: BrowseCommand | None = None,
        database_path: str | Path | None = None,
    ) -> None:
        self.surface = surface
        self.config = config or AppConfig()
        self.formatter = formatter or build_headline_formatter(
            self.config.headline_format,
            self.config.time_format,
        )
        self.browse = browse or open_in_browser
        self.database_path = (
            Path(database_path).expanduser()
            if database_path is not None
            else self.config.database_path()
        )
        self.entries: list[HeadlineEntry] = []
        self.last_buffer: str | None = None

    @property
    def view_name(self) -> str:
        return self.config.buffer_name

    def is_open(self) -> bool:
        return self.surface.current_buffer() == self.view_name

    def open(self) -> None:
        calling = self.surface.current_buffer()
        if calling != self.view_name:
            self.last_buffer = calling
        self.surface.switch_to_view(self.view_name)
        self._reload()
        self.surface.set_read_only(True)
        logger.info(
            "headline_view opened entries=%d calling_buffer=%s",
            len(self.entries),
            self.last_buffer,
        )

    def refresh(self) -> None:
        self._require_view()
        self._reload()

    def render(self) -> None:
        self._require_view()
        lines = [f"{self.formatter(entry.record)}\n" for entry in self.entries]
        self.surface.replace_text("".join(lines))
        start = 0
        for line in lines:
            end = start + len(line) - 1
            self.surface.mark_hoverable(start, end)
            start = end + 1
        self.surface.set_point(0)

    def headline_at(self, position: int) -> HeadlineLookup:
        index = line_index_at(self.surface.text(), position)
        if 0 <= index < len(self.entries):
            return Found(self.entries[index])
        return NotFound(index)

    def current_record(self) -> HeadlineRecord:
        self._require_view()
        lookup = self.headline_at(self.surface.point())
        if isinstance(lookup, NotFound):
            raise NoHeadlineError()
        return lookup.record

    def select_and_open(self) -> None:
        record = self.current_record()
        self.surface.message(f"loading {record.url}")
        self.browse(record.url)

    def select_at_pointer(self, position: int) -> None:
        self._require_view()
        self.surface.set_point(position)
        self.select_and_open()

    def insert_citation(self) -> None:
        self._insert_into_calling_buffer(format_citation)

    def insert_url_only(self) -> None:
        self._insert_into_calling_buffer(format_url)

    def close(self) -> None:
        self.surface.kill_buffer(self.view_name)
        if self.last_buffer is not None:
            self.surface.switch_to_buffer(self.last_buffer)
        self.surface.delete_other_windows()
        self.entries = []
        logger.info("headline_view closed calling_buffer=%s", self.last_buffer)

    def next_line(self) -> None:
        self._move_lines(1)

    def previous_line(self) -> None:
        self._move_lines(-1)

    def goto_line(self, index: int) -> None:
        self._require_view()
        starts = _line_starts(self.surface.text())
        if 0 <= index < len(starts):
            self.surface.set_point(starts[index])
        else:
            self.surface.set_point(len(self.surface.text()))

    def describe(self) -> str:
        help_text = describe_keymap()
        self.surface.message(help_text)
        return help_text

    def dispatch(self, key: str) -> None:
        action = KEYMAP.get(key)
        if action is None:
            raise HeadlineError(f"{key} is undefined")
        getattr(self, action)()

    def _require_view(self) -> None:
        if not self.is_open():
            raise NotHeadlineBufferError()

    def _reload(self) -> None:
        self.entries = load_headlines(self.database_path, notify=self.surface.message)
        self.render()

    def _insert_into_calling_buffer(self, render: Callable[[HeadlineRecord], str]) -> None:
        record = self.current_record()
        target = self.last_buffer
        if target is None:
            raise HeadlineError("no calling buffer to insert into")
        self.surface.switch_to_buffer(target)
        self.surface.insert(render(record))
        self.close()

    def _move_lines(self, delta: int) -> None:
        self._require_view()
        text = self.surface.text()
        starts = _line_starts(text)
        if not starts:
            return
        current = min(line_index_at(text, self.surface.point()), len(starts) - 1)
        target = min(max(current + delta, 0), len(starts) - 1)
        self.surface.set_point(starts[target])


def describe_keymap() -> str:
    lines = ["Slashdot headlines mode:"]
    for key, action in KEYMAP.items():
        lines.append(f"  {key:<4} {_ACTION_HELP[action]}")
    lines.append("  mouse-2 open the story under the pointer")
    return "\n".join(lines)


def _line_starts(text: str) -> list[int]:
    if not text:
        return []
    starts = [0]
    starts.extend(index + 1 for index, char in enumerate(text) if char == "\n")
    if starts[-1] == len(text):
        starts.pop()
    return starts
