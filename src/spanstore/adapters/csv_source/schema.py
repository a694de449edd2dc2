"""Pydantic model describing one CSV record row."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Annotated, Final, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from spanstore.domain.model import DATE_FORMAT

FIELD_NAMES: Final[tuple[str, ...]] = ("start", "end", "delete", "key", "value")
HEADER: Final[str] = "StartDate,EndDate,Delete,Key,Value"

_INTEGER = re.compile(r"[+-]?\d+")
_BOOLEANS: Final[dict[str, bool]] = {"true": True, "false": False}

INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1


def _parse_date(value: object) -> object:
    if isinstance(value, str):
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError as exc:
            raise ValueError(f"Unparseable date: {value!r}") from exc
    return value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class RecordRow(BaseModel):
    """Typed view of the ``start,end,delete,key,value`` fields of a row."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date | None = None
    delete: bool
    key: str
    value: Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]

    @field_validator("start", mode="before")
    @classmethod
    def _parse_start(cls, value: object) -> object:
        return _parse_date(value)

    @field_validator("end", mode="before")
    @classmethod
    def _parse_end(cls, value: object) -> object:
        return _parse_date(_blank_to_none(value))

    @field_validator("delete", mode="before")
    @classmethod
    def _parse_delete(cls, value: object) -> object:
        if isinstance(value, str):
            parsed = _BOOLEANS.get(value.lower())
            if parsed is None:
                raise ValueError(f"Unparseable boolean: {value!r}")
            return parsed
        return value

    @field_validator("value", mode="before")
    @classmethod
    def _parse_value(cls, value: object) -> object:
        if isinstance(value, str):
            if not _INTEGER.fullmatch(value):
                raise ValueError(f"Unparseable integer: {value!r}")
            return int(value)
        return value

    @model_validator(mode="after")
    def _check_bounds(self) -> Self:
        if self.end is not None and self.end < self.start:
            raise ValueError("End date precedes start date")
        return self

    @classmethod
    def from_fields(cls, fields: list[str]) -> RecordRow:
        return cls.model_validate(dict(zip(FIELD_NAMES, fields, strict=True)))
