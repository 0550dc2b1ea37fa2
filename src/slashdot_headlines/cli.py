from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import typer

from slashdot_headlines.browse import build_browse_command
from slashdot_headlines.config import AppConfig, load_config
from slashdot_headlines.controller import HeadlineController, describe_keymap, line_index_at
from slashdot_headlines.errors import HeadlineError
from slashdot_headlines.schemas import HeadlineEntry, HeadlineRecord
from slashdot_headlines.storage import dump_headlines
from slashdot_headlines.surface import Workspace

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

CALLING_BUFFER = "*cli*"

app = typer.Typer(help="Slashdot headline browser")
debug_app = typer.Typer(help="Debug commands")
app.add_typer(debug_app, name="debug")

_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Config file path (JSON or YAML).",
    exists=True,
    dir_okay=False,
    readable=True,
)
_DATABASE_OPTION = typer.Option(
    None,
    "--database",
    help="Headline database path; overrides headline_database from the config.",
    dir_okay=False,
)


@app.command("list")
def list_headlines(
    config_path: Path | None = _CONFIG_OPTION,
    database: Path | None = _DATABASE_OPTION,
) -> None:
    """Print the headline view with line numbers."""
    workspace, controller = _open_view(config_path, database)
    _echo_messages(workspace)
    if not controller.entries:
        typer.echo("no headlines")
        return
    typer.echo(_render_view(workspace.text()))


@app.command("open")
def open_headline(
    line: int = typer.Argument(..., min=1, help="1-based line in the headline view."),
    config_path: Path | None = _CONFIG_OPTION,
    database: Path | None = _DATABASE_OPTION,
) -> None:
    """Open the story on LINE with the configured browse command."""
    workspace, controller = _open_view(config_path, database)
    seen = _echo_messages(workspace)
    controller.goto_line(line - 1)
    _run_action(controller.select_and_open)
    _echo_messages(workspace, start=seen, err=False)


@app.command("cite")
def cite_headline(
    line: int = typer.Argument(..., min=1, help="1-based line in the headline view."),
    into: Path | None = typer.Option(
        None,
        "--into",
        help="Append the citation to this file instead of printing it.",
        dir_okay=False,
    ),
    config_path: Path | None = _CONFIG_OPTION,
    database: Path | None = _DATABASE_OPTION,
) -> None:
    """Insert "<title> <URL:<url>>" for the story on LINE."""
    _insert_headline(line, into, config_path, database, url_only=False)


@app.command("url")
def url_headline(
    line: int = typer.Argument(..., min=1, help="1-based line in the headline view."),
    into: Path | None = typer.Option(
        None,
        "--into",
        help="Append the URL to this file instead of printing it.",
        dir_okay=False,
    ),
    config_path: Path | None = _CONFIG_OPTION,
    database: Path | None = _DATABASE_OPTION,
) -> None:
    """Insert "<URL:<url>>" for the story on LINE."""
    _insert_headline(line, into, config_path, database, url_only=True)


@app.command("browse")
def browse_headlines(
    config_path: Path | None = _CONFIG_OPTION,
    database: Path | None = _DATABASE_OPTION,
) -> None:
    """Interactive headline view driven by single-key commands."""
    workspace, controller = _open_view(config_path, database)
    seen = _echo_messages(workspace)
    typer.echo(describe_keymap())

    while controller.is_open():
        typer.echo(_render_view(workspace.text(), point=workspace.point()))
        key = typer.prompt("key", default="RET", show_default=False).strip()
        try:
            controller.dispatch(key)
        except HeadlineError as exc:
            typer.echo(str(exc), err=True)
        seen = _echo_messages(workspace, start=seen, err=False)

    inserted = workspace.buffer(CALLING_BUFFER).text
    if inserted:
        typer.echo(inserted)


@debug_app.command("sample")
def debug_sample(
    out: Path = typer.Option(
        Path("data/slashdot-headlines.json"),
        "--out",
        help="Where to write the sample headline database.",
        dir_okay=False,
    ),
) -> None:
    """Write a small headline database for trying the browser."""
    entries = [
        HeadlineEntry(
            key=f"sample-{index}",
            record=HeadlineRecord.from_fields(
                [title, url, "", "", "", "", "", "", timestamp]
            ),
        )
        for index, (title, url, timestamp) in enumerate(_SAMPLE_HEADLINES, start=1)
    ]
    dump_headlines(entries, out)
    typer.echo(f"entries={len(entries)} out={out}")


_SAMPLE_HEADLINES = [
    ("Big News", "http://example.com/a", 1_000_000_000),
    ("Kernel Release Candidate Tagged", "http://example.com/b", 1_000_003_600),
    ("Ask Slashdot: Which Editor?", "http://example.com/c", 1_000_007_200),
]


def _insert_headline(
    line: int,
    into: Path | None,
    config_path: Path | None,
    database: Path | None,
    *,
    url_only: bool,
) -> None:
    workspace, controller = _open_view(config_path, database)
    _echo_messages(workspace)
    controller.goto_line(line - 1)
    _run_action(controller.insert_url_only if url_only else controller.insert_citation)

    inserted = workspace.buffer(CALLING_BUFFER).text
    if into is None:
        typer.echo(inserted)
        return

    into.parent.mkdir(parents=True, exist_ok=True)
    with into.open("a", encoding="utf-8") as handle:
        handle.write(f"{inserted}\n")
    typer.echo(f"inserted into={into}")


def _open_view(
    config_path: Path | None,
    database: Path | None,
) -> tuple[Workspace, HeadlineController]:
    config = _load_config_or_exit(config_path)
    try:
        browse = build_browse_command(config.browse_command)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    workspace = Workspace(initial_buffer=CALLING_BUFFER)
    controller = HeadlineController(
        workspace,
        config,
        browse=browse,
        database_path=database,
    )
    controller.open()
    return workspace, controller


def _load_config_or_exit(config_path: Path | None) -> AppConfig:
    try:
        return load_config(config_path)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _run_action(action: Callable[[], None]) -> None:
    try:
        action()
    except HeadlineError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _echo_messages(workspace: Workspace, *, start: int = 0, err: bool = True) -> int:
    for message in workspace.messages[start:]:
        typer.echo(message, err=err)
    return len(workspace.messages)


def _render_view(text: str, *, point: int | None = None) -> str:
    if not text:
        return "no headlines"

    lines = text.splitlines()
    width = len(str(len(lines)))
    current = line_index_at(text, point) if point is not None else None
    body = []
    for index, line in enumerate(lines):
        marker = ">" if index == current else " "
        body.append(f"{marker} {str(index + 1).rjust(width)}  {line}")
    return "\n".join(body)


def main() -> None:
    """CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
