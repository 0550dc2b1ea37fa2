from __future__ import annotations

from collections.abc import Callable

from slashdot_headlines.config import DEFAULT_HEADLINE_FORMAT
from slashdot_headlines.schemas import HeadlineRecord

HeadlineFormatter = Callable[[HeadlineRecord], str]


def default_format_headline(record: HeadlineRecord) -> str:
    return f"{record.captured_at().ctime()} - {_single_line(record.title)}"


def build_headline_formatter(
    template: str = DEFAULT_HEADLINE_FORMAT,
    time_format: str = "",
) -> HeadlineFormatter:
    if template == DEFAULT_HEADLINE_FORMAT and not time_format:
        return default_format_headline

    def _format(record: HeadlineRecord) -> str:
        captured_at = record.captured_at()
        time_text = captured_at.strftime(time_format) if time_format else captured_at.ctime()
        return template.format(
            time=time_text,
            title=_single_line(record.title),
            url=_single_line(record.url),
        )

    return _format


def format_citation(record: HeadlineRecord) -> str:
    return f"{record.title} {format_url(record)}"


def format_url(record: HeadlineRecord) -> str:
    return f"<URL:{record.url}>"


# One view line per record; a newline inside a title would shift every line after it.
def _single_line(text: str) -> str:
    return " ".join(text.splitlines())
