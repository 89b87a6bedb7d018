"""Routing — path and query parameterized handlers.

Invariants:
    - item_id is an int path param; non-integers fail validation (422)
    - /users/me declared before /users/{user_id}: fixed path wins
    - file_path uses the :path converter, so it may contain slashes
"""

from fastapi import APIRouter

from quickref.core.domain_types import ModelName

router = APIRouter(prefix="/api/v1/routing", tags=["routing"])

_MODEL_MESSAGES = {
    ModelName.ALEXNET: "Deep Learning FTW!",
    ModelName.LENET: "LeCNN all the images",
    ModelName.RESNET: "Have some residuals",
}


@router.get("/items/{item_id}")
async def read_item(item_id: int, q: str | None = None, short: bool = False):
    item = {"item_id": item_id, "q": q, "short": short}
    if not short:
        item["description"] = "This is an amazing item that has a long description"
    return item


@router.get("/models/{model_name}")
async def get_model(model_name: ModelName):
    return {"model_name": model_name, "message": _MODEL_MESSAGES[model_name]}


@router.get("/files/{file_path:path}")
async def read_file(file_path: str):
    return {"file_path": file_path}


@router.get("/users/me")
async def read_user_me():
    return {"user_id": "the current user"}


@router.get("/users/{user_id}")
async def read_user(user_id: str):
    return {"user_id": user_id}
