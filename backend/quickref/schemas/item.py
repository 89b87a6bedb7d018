"""Item Schemas — body/response shapes for the Request/Response Models and Database sections.

Invariants:
    - ItemIn.price > 0, ItemIn.tax >= 0 when present
    - ItemIn.tags deduplicated with first-seen order preserved
    - ItemOut.price_with_tax is derived, never accepted from the client
    - ItemUpdate fields all optional; routes apply only fields the client sent
    - Names are stripped and non-blank on create and on update
    - ItemRecord.created_at is always timezone-aware (naive values read back from
      SQLite are UTC)
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


class ItemIn(BaseModel):
    """Item as submitted by a client."""
    name: str = Field(min_length=1, max_length=100)
    price: float = Field(gt=0)
    description: str | None = Field(None, max_length=2000)
    tax: float | None = Field(None, ge=0)
    tags: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(t.strip() for t in v if t.strip()))


class ItemOut(BaseModel):
    """Item as returned to a client."""
    name: str
    price: float
    description: str | None = None
    tax: float | None = None
    tags: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def price_with_tax(self) -> float:
        return round(self.price + (self.tax or 0.0), 2)


class ItemUpdate(BaseModel):
    """Partial update; unset fields are left untouched."""
    name: str | None = Field(None, min_length=1, max_length=100)
    price: float | None = Field(None, gt=0)
    description: str | None = Field(None, max_length=2000)
    tax: float | None = Field(None, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return v if v is None else _clean_name(v)


class ItemRecord(BaseModel):
    """Item row from the database example table."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    price: float
    tax: float | None = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)


class ItemPage(BaseModel):
    items: list[ItemRecord]
    skip: int
    limit: int
    total: int
