"""Request/Response Models — typed bodies in, filtered response models out.

Invariants:
    - POST /items returns 201 with ItemOut (adds price_with_tax)
    - POST /users never echoes the password (response_model=UserOut)
    - PUT /items/{item_id} combines path, query and body parameters
"""

from fastapi import APIRouter, status

from quickref.schemas.item import ItemIn, ItemOut
from quickref.schemas.user import UserIn, UserOut

router = APIRouter(prefix="/api/v1/models", tags=["request-response-models"])


@router.post(
    "/items", response_model=ItemOut, status_code=status.HTTP_201_CREATED,
)
async def create_item(item: ItemIn):
    return item.model_dump()


@router.put("/items/{item_id}")
async def update_item(item_id: int, item: ItemIn, q: str | None = None):
    result = {"item_id": item_id, **item.model_dump()}
    if q:
        result["q"] = q
    return result


@router.post(
    "/users", response_model=UserOut, status_code=status.HTTP_201_CREATED,
)
async def create_user(user: UserIn):
    return user
