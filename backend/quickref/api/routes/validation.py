"""Validation — declarative constraints on query, path and body inputs.

Invariants:
    - Constraint failures surface as 422 through the global validation handler
    - tag may repeat (tag=a&tag=b); order preserved
"""

from typing import Annotated

from fastapi import APIRouter, Path, Query

from quickref.schemas.validation import DateRange, Signup

router = APIRouter(prefix="/api/v1/validation", tags=["validation"])


@router.get("/search")
async def search(
    q: Annotated[str, Query(min_length=3, max_length=50, pattern=r"^[a-z0-9-]+$")],
    tag: Annotated[list[str] | None, Query()] = None,
):
    return {"q": q, "tags": tag or []}


@router.get("/pages/{page}")
async def read_page(
    page: Annotated[int, Path(ge=1, le=1000, title="Page number")],
    size: Annotated[int, Query(gt=0, le=100)] = 20,
):
    return {"page": page, "size": size, "offset": (page - 1) * size}


@router.post("/signup")
async def signup(body: Signup):
    return {"username": body.username, "age": body.age, "website": body.website}


@router.post("/date-range")
async def date_range(body: DateRange):
    return {"start": body.start, "end": body.end, "days": body.days}
