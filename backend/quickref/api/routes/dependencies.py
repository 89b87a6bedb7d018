"""Dependencies — function, class, sub-, yield and router-level dependencies.

Invariants:
    - Every route here requires a valid X-Token header (router-level dependency)
    - /resource returns while the yield dependency is open; close is recorded after
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from quickref.api.deps import (
    CommonQueryParams,
    managed_resource,
    pagination_params,
    query_or_cookie_extractor,
    verify_token_header,
)
from quickref.core.event_log import resource_log

router = APIRouter(
    prefix="/api/v1/dependencies",
    tags=["dependencies"],
    dependencies=[Depends(verify_token_header)],
)

_FAKE_ITEMS = [{"item_name": name} for name in ("Foo", "Bar", "Baz", "Qux", "Quux")]


@router.get("/items")
async def list_items(page: Annotated[dict, Depends(pagination_params)]):
    window = _FAKE_ITEMS[page["skip"]: page["skip"] + page["limit"]]
    return {"page": page, "items": window}


@router.get("/users")
async def list_users(commons: Annotated[CommonQueryParams, Depends()]):
    response = {"skip": commons.skip, "limit": commons.limit}
    if commons.q:
        response["q"] = commons.q
    return response


@router.get("/query")
async def read_query(
    query: Annotated[dict, Depends(query_or_cookie_extractor)],
):
    return {"q_or_cookie": query["value"], "source": query["source"]}


@router.get("/resource")
async def use_resource(resource: Annotated[dict, Depends(managed_resource)]):
    return {"resource_id": resource["id"], "events": resource_log.kinds()[-1:]}


@router.get("/resource/log")
async def resource_events():
    return {"events": [e.to_dict() for e in resource_log.entries()]}
