from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from slashdot_headlines.errors import HeadlineError

logger = logging.getLogger(__name__)

SCRATCH_BUFFER = "*scratch*"


class BufferReadOnlyError(HeadlineError):
    def __init__(self, name: str) -> None:
        super().__init__(f"buffer is read-only: {name}")
        self.name = name


class TextSurface(Protocol):
    """Editor operations the headline controller relies on."""

    def current_buffer(self) -> str: ...

    def switch_to_view(self, name: str) -> None: ...

    def switch_to_buffer(self, name: str) -> None: ...

    def point(self) -> int: ...

    def set_point(self, position: int) -> None: ...

    def text(self) -> str: ...

    def replace_text(self, text: str) -> None: ...

    def mark_hoverable(self, start: int, end: int) -> None: ...

    def set_read_only(self, read_only: bool) -> None: ...

    def insert(self, text: str) -> None: ...

    def kill_buffer(self, name: str) -> None: ...

    def delete_other_windows(self) -> None: ...

    def message(self, text: str) -> None: ...


@dataclass(slots=True)
class Buffer:
    name: str
    text: str = ""
    point: int = 0
    read_only: bool = False
    hover_spans: list[tuple[int, int]] = field(default_factory=list)


class Workspace:
    """In-process text surface: named buffers, a current buffer and a window count."""

    def __init__(self, initial_buffer: str = SCRATCH_BUFFER) -> None:
        self.buffers: dict[str, Buffer] = {initial_buffer: Buffer(name=initial_buffer)}
        self._current = initial_buffer
        self.window_count = 1
        self.messages: list[str] = []

    def buffer(self, name: str) -> Buffer:
        return self.buffers[name]

    def current_buffer(self) -> str:
        return self._current

    def switch_to_view(self, name: str) -> None:
        self._ensure(name)
        if name != self._current:
            self.window_count = max(self.window_count, 2)
        self._current = name

    def switch_to_buffer(self, name: str) -> None:
        self._ensure(name)
        self._current = name

    def point(self) -> int:
        return self._active().point

    def set_point(self, position: int) -> None:
        buffer = self._active()
        buffer.point = min(max(position, 0), len(buffer.text))

    def text(self) -> str:
        return self._active().text

    def replace_text(self, text: str) -> None:
        buffer = self._active()
        buffer.text = text
        buffer.hover_spans = []
        buffer.point = min(buffer.point, len(text))

    def mark_hoverable(self, start: int, end: int) -> None:
        buffer = self._active()
        if not 0 <= start <= end <= len(buffer.text):
            raise ValueError(f"span {start}..{end} outside buffer {buffer.name}")
        buffer.hover_spans.append((start, end))

    def set_read_only(self, read_only: bool) -> None:
        self._active().read_only = read_only

    def insert(self, text: str) -> None:
        buffer = self._active()
        if buffer.read_only:
            raise BufferReadOnlyError(buffer.name)
        buffer.text = f"{buffer.text[: buffer.point]}{text}{buffer.text[buffer.point :]}"
        buffer.point += len(text)

    def kill_buffer(self, name: str) -> None:
        if name not in self.buffers:
            return
        del self.buffers[name]
        if self._current == name:
            self._current = next(iter(self.buffers), None) or self._ensure(SCRATCH_BUFFER).name

    def delete_other_windows(self) -> None:
        self.window_count = 1

    def message(self, text: str) -> None:
        logger.info("message text=%s", text)
        self.messages.append(text)

    def _active(self) -> Buffer:
        return self.buffers[self._current]

    def _ensure(self, name: str) -> Buffer:
        if name not in self.buffers:
            self.buffers[name] = Buffer(name=name)
        return self.buffers[name]
