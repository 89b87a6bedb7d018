"""Validation Schemas — body models with field and model validators.

Invariants:
    - Signup.username stripped and non-blank; age >= 13
    - DateRange.end >= DateRange.start
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator


class Signup(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    age: int = Field(ge=13, le=130)
    website: str | None = Field(None, pattern=r"^https?://")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v


class DateRange(BaseModel):
    start: date
    end: date

    @model_validator(mode="after")
    def check_order(self):
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self

    @property
    def days(self) -> int:
        return (self.end - self.start).days
