from __future__ import annotations

import logging
import shlex
import subprocess
import webbrowser
from collections.abc import Callable

import typer

logger = logging.getLogger(__name__)

BrowseCommand = Callable[[str], None]

_launched: list[subprocess.Popen] = []


def open_in_browser(url: str) -> None:
    logger.info("browse webbrowser url=%s", url)
    webbrowser.open(url)


def echo_url(url: str) -> None:
    typer.echo(url)


def build_browse_command(command: str) -> BrowseCommand:
    """Resolve the configured browse strategy.

    ``webbrowser`` hands the URL to the system browser, ``echo`` prints it,
    and anything else is a command line with a ``{url}`` placeholder that is
    started without waiting for it to finish.
    """
    normalized = command.strip()
    if normalized.lower() == "webbrowser":
        return open_in_browser
    if normalized.lower() == "echo":
        return echo_url
    if "{url}" not in normalized:
        raise ValueError(f"browse_command must be webbrowser, echo or contain {{url}}: {command}")

    def _run(url: str) -> None:
        argv = [part.replace("{url}", url) for part in shlex.split(normalized)]
        logger.info("browse command argv=%s", argv)
        reap_finished()
        _launched.append(
            subprocess.Popen(
                argv,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        )

    return _run


def reap_finished() -> int:
    """Collect exited browser processes; returns how many are still running."""
    _launched[:] = [process for process in _launched if process.poll() is None]
    return len(_launched)
