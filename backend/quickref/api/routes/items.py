"""Database Example — CRUD over the items table through an async session dependency.

Invariants:
    - Item names are unique: create/rename to an existing name → 409
    - Unknown id → 404 (ResourceNotFoundError envelope)
    - PATCH applies only fields present in the request (exclude_unset)
    - DELETE returns 204 with an empty body
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quickref.api.deps import pagination_params
from quickref.core.errors import ConflictError, ResourceNotFoundError
from quickref.infrastructure.database import get_db
from quickref.models.item import Item
from quickref.schemas.item import ItemIn, ItemPage, ItemRecord, ItemUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/items", tags=["database"])

DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_item_or_404(item_id: int, db: AsyncSession) -> Item:
    item = await db.get(Item, item_id)
    if item is None:
        raise ResourceNotFoundError("Item", str(item_id))
    return item


async def _ensure_name_free(
    name: str, db: AsyncSession, exclude_id: int | None = None,
) -> None:
    query = select(Item.id).where(Item.name == name)
    if exclude_id is not None:
        query = query.where(Item.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise ConflictError(f"Item named '{name}' already exists")


async def _commit(db: AsyncSession, name: str) -> None:
    try:
        await db.commit()
    except IntegrityError:
        # lost a race with a concurrent insert of the same name
        await db.rollback()
        raise ConflictError(f"Item named '{name}' already exists")


@router.post(
    "", response_model=ItemRecord, status_code=status.HTTP_201_CREATED,
)
async def create_item(body: ItemIn, db: DbSession):
    await _ensure_name_free(body.name, db)
    item = Item(
        name=body.name, description=body.description,
        price=body.price, tax=body.tax,
    )
    db.add(item)
    await _commit(db, body.name)
    await db.refresh(item)
    logger.info(f"Created item {item.id} ({item.name})")
    return item


@router.get("", response_model=ItemPage)
async def list_items(
    db: DbSession,
    page: Annotated[dict, Depends(pagination_params)],
):
    total = (await db.execute(select(func.count()).select_from(Item))).scalar_one()
    result = await db.execute(
        select(Item).order_by(Item.id).offset(page["skip"]).limit(page["limit"]),
    )
    return ItemPage(
        items=[ItemRecord.model_validate(i) for i in result.scalars().all()],
        skip=page["skip"], limit=page["limit"], total=total,
    )


@router.get("/{item_id}", response_model=ItemRecord)
async def read_item(item_id: int, db: DbSession):
    return await get_item_or_404(item_id, db)


@router.patch("/{item_id}", response_model=ItemRecord)
async def update_item(item_id: int, body: ItemUpdate, db: DbSession):
    item = await get_item_or_404(item_id, db)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("name") is not None and changes["name"] != item.name:
        await _ensure_name_free(changes["name"], db, exclude_id=item_id)
    for field, value in changes.items():
        if field in ("name", "price") and value is None:
            continue
        setattr(item, field, value)
    await _commit(db, item.name)
    await db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: int, db: DbSession):
    item = await get_item_or_404(item_id, db)
    await db.delete(item)
    await db.commit()
    logger.info(f"Deleted item {item_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
