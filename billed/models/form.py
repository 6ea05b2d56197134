from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from typing import Any

import pydantic
from pydantic import BaseModel, Field, field_validator

from billed.errors import ValidationError
from billed.models.bill import BillType

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class BillForm(BaseModel):
    """Fields an employee fills in on the new-bill form."""

    type: BillType
    name: str = Field(min_length=1)
    date: str
    amount: float = Field(ge=0)
    pct: int = Field(ge=0, le=100)
    vat: float | None = Field(default=None, ge=0)
    commentary: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("date")
    @classmethod
    def _iso_date(cls, value: str) -> str:
        if not _ISO_DATE.match(value):
            raise ValueError("date must be YYYY-MM-DD")
        date.fromisoformat(value)
        return value

    @field_validator("vat", "commentary", "pct", "amount", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


def parse_form(fields: Mapping[str, Any]) -> BillForm:
    """Validate raw form input, raising ``ValidationError`` on the first bad field."""
    try:
        return BillForm.model_validate(dict(fields))
    except pydantic.ValidationError as exc:
        errors = exc.errors()
        field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else "form"
        raise ValidationError(field, f"Invalid or missing field: {field}") from exc
