from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

TITLE_INDEX = 0
URL_INDEX = 1
TIMESTAMP_INDEX = 8

_EMACS_TIME_HIGH = 65536


class DTOBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class HeadlineRecord(DTOBase):
    """One captured story.

    ``raw_fields`` keeps every positional value from the database so that the
    record can be written back unchanged; ``title``, ``url`` and ``timestamp``
    are the positions this package interprets.
    """

    title: str
    url: str
    timestamp: float
    raw_fields: list[Any] = Field(default_factory=list)

    @field_validator("timestamp", mode="before")
    @classmethod
    def normalize_timestamp(cls, value: Any) -> float:
        return timestamp_to_seconds(value)

    @classmethod
    def from_fields(cls, fields: Sequence[Any]) -> HeadlineRecord:
        values = list(fields)
        if len(values) <= TIMESTAMP_INDEX:
            raise ValueError(
                f"headline record needs at least {TIMESTAMP_INDEX + 1} fields, got {len(values)}"
            )
        return cls(
            title=str(values[TITLE_INDEX]),
            url=str(values[URL_INDEX]),
            timestamp=values[TIMESTAMP_INDEX],
            raw_fields=values,
        )

    def captured_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp).astimezone()

    def to_fields(self) -> list[Any]:
        return list(self.raw_fields)


class HeadlineEntry(DTOBase):
    key: Any
    record: HeadlineRecord

    @classmethod
    def from_pair(cls, pair: Sequence[Any]) -> HeadlineEntry:
        if isinstance(pair, (str, bytes)) or len(pair) != 2:
            raise ValueError("headline entry must be a [key, record] pair")
        key, fields = pair
        if isinstance(fields, (str, bytes)) or not isinstance(fields, Sequence):
            raise ValueError("headline record must be a list of fields")
        return cls(key=key, record=HeadlineRecord.from_fields(fields))

    def to_pair(self) -> list[Any]:
        return [self.key, self.record.to_fields()]


def timestamp_to_seconds(value: Any) -> float:
    """Accept epoch seconds or an Emacs ``(HIGH LOW [USEC [PSEC]])`` time list."""
    if isinstance(value, bool):
        raise ValueError(f"invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        parts = list(value)
        if not 2 <= len(parts) <= 4 or not all(
            isinstance(part, int) and not isinstance(part, bool) for part in parts
        ):
            raise ValueError(f"invalid time list: {value!r}")
        high, low, *rest = parts
        seconds = float(high * _EMACS_TIME_HIGH + low)
        if rest:
            seconds += rest[0] / 1_000_000
        if len(rest) > 1:
            seconds += rest[1] / 1_000_000_000_000
        return seconds
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as exc:
            raise ValueError(f"invalid timestamp: {value!r}") from exc
    raise ValueError(f"invalid timestamp: {value!r}")
