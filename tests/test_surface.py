from __future__ import annotations

import pytest

from slashdot_headlines.surface import SCRATCH_BUFFER, BufferReadOnlyError, Workspace


def test_insert_at_point_and_clamp_point() -> None:
    workspace = Workspace()
    workspace.insert("hello world")
    workspace.set_point(5)
    workspace.insert(",")

    assert workspace.text() == "hello, world"
    assert workspace.point() == 6

    workspace.set_point(100)
    assert workspace.point() == len("hello, world")
    workspace.set_point(-3)
    assert workspace.point() == 0


def test_insert_into_read_only_buffer_raises() -> None:
    workspace = Workspace()
    workspace.switch_to_view("*view*")
    workspace.set_read_only(True)

    with pytest.raises(BufferReadOnlyError):
        workspace.insert("x")


def test_replace_text_clears_hover_spans() -> None:
    workspace = Workspace()
    workspace.replace_text("line\n")
    workspace.mark_hoverable(0, 4)

    workspace.replace_text("")

    assert workspace.buffer(SCRATCH_BUFFER).hover_spans == []
    with pytest.raises(ValueError):
        workspace.mark_hoverable(0, 4)


def test_kill_current_buffer_falls_back() -> None:
    workspace = Workspace(initial_buffer="B")
    workspace.switch_to_view("*view*")

    workspace.kill_buffer("*view*")
    workspace.kill_buffer("*never-created*")

    assert workspace.current_buffer() == "B"


def test_kill_last_buffer_recreates_scratch() -> None:
    workspace = Workspace(initial_buffer="B")

    workspace.kill_buffer("B")

    assert workspace.current_buffer() == SCRATCH_BUFFER
