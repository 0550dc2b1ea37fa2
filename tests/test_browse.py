from __future__ import annotations

import pytest

import slashdot_headlines.browse as browse_module
from slashdot_headlines.browse import build_browse_command, open_in_browser, reap_finished


def test_webbrowser_strategy(monkeypatch) -> None:
    opened: list[str] = []
    monkeypatch.setattr(browse_module.webbrowser, "open", opened.append)

    command = build_browse_command("webbrowser")
    command("http://example.com/a")

    assert command is open_in_browser
    assert opened == ["http://example.com/a"]


def test_echo_strategy(capsys) -> None:
    build_browse_command("echo")("http://example.com/a")

    assert capsys.readouterr().out == "http://example.com/a\n"


class _FakeProcess:
    def __init__(self, argv, **kwargs) -> None:
        self.argv = argv
        self.kwargs = kwargs
        self.returncode = None

    def poll(self):
        return self.returncode


def test_command_template_is_started_without_waiting(monkeypatch) -> None:
    monkeypatch.setattr(browse_module, "_launched", [])
    monkeypatch.setattr(browse_module.subprocess, "Popen", _FakeProcess)

    build_browse_command("firefox --new-tab {url}")("http://example.com/a?b=1")

    (process,) = browse_module._launched
    assert process.argv == ["firefox", "--new-tab", "http://example.com/a?b=1"]
    assert process.kwargs["start_new_session"] is True


def test_finished_browser_processes_are_reaped(monkeypatch) -> None:
    monkeypatch.setattr(browse_module, "_launched", [])
    monkeypatch.setattr(browse_module.subprocess, "Popen", _FakeProcess)
    command = build_browse_command("xdg-open {url}")

    command("http://example.com/a")
    browse_module._launched[0].returncode = 0
    command("http://example.com/b")

    assert [process.argv[-1] for process in browse_module._launched] == ["http://example.com/b"]
    browse_module._launched[0].returncode = 0
    assert reap_finished() == 0


def test_command_without_placeholder_is_rejected() -> None:
    with pytest.raises(ValueError, match="browse_command"):
        build_browse_command("firefox")
