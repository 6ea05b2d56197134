from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


class BillType(str, Enum):
    TRANSPORTS = "Transports"
    RESTAURANTS = "Restaurants et bars"
    HOTEL = "Hôtel et logement"
    ONLINE_SERVICES = "Services en ligne"
    IT = "IT et électronique"
    EQUIPMENT = "Equipement et matériel"
    OFFICE_SUPPLIES = "Fournitures de bureau"


class BillStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REFUSED = "refused"


class Bill(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    employee_email: str
    type: BillType
    name: str
    amount: float
    date: str  # ISO 'YYYY-MM-DD', kept raw for ordering
    vat: float | None = None
    pct: int = 20
    commentary: str | None = None
    comment_admin: str | None = None
    file_url: str | None = None
    file_name: str | None = None
    status: BillStatus = BillStatus.PENDING

    @field_validator("file_url", "file_name", "vat", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _attachment_is_complete(self) -> Bill:
        if (self.file_url is None) != (self.file_name is None):
            raise ValueError("file_url and file_name must be set together")
        return self

    @property
    def has_attachment(self) -> bool:
        return self.file_url is not None

    def to_payload(self) -> dict:
        """Wire representation (camelCase keys, enum values)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CreateResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_url: str
    key: str | None = None


class EmptyUpdate(BaseModel):
    """The store acknowledged the update without echoing the bill."""


class FullUpdate(BaseModel):
    bill: Bill


UpdateResult = EmptyUpdate | FullUpdate


def parse_update_result(payload: dict | None) -> UpdateResult:
    if not payload:
        return EmptyUpdate()
    return FullUpdate(bill=Bill.model_validate(payload))
