"""Middleware & Events — exposes the lifecycle log written by the lifespan handler."""

from fastapi import APIRouter, Request

from quickref.core.event_log import lifecycle_log

router = APIRouter(prefix="/api/v1/events", tags=["middleware-events"])


@router.get("")
async def lifecycle_events():
    return {"events": [e.to_dict() for e in lifecycle_log.entries()]}


@router.get("/request-id")
async def current_request_id(request: Request):
    """Echo the id the request-context middleware assigned to this request."""
    return {"request_id": getattr(request.state, "request_id", None)}
