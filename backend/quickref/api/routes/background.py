"""Background Tasks — deferred work that runs after the response is sent.

Invariants:
    - POST /send-notification/{email} returns 202 before the notification is written
    - Tasks added by a dependency run before tasks added by the handler
    - A failing task is logged; it never changes the already-sent response
"""

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import EmailStr

from quickref.api.deps import audit_query, write_notification
from quickref.core.event_log import notification_log

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/background", tags=["background-tasks"])


def safe_task(func, *args, **kwargs) -> None:
    """Run a task body, logging instead of raising on failure."""
    try:
        func(*args, **kwargs)
    except Exception as e:
        notification_log.record("failed", f"{getattr(func, '__name__', func)}: {e}")
        logger.error(f"Background task failed: {e}", exc_info=True)


@router.post(
    "/send-notification/{email}", status_code=status.HTTP_202_ACCEPTED,
)
async def send_notification(
    email: EmailStr,
    background_tasks: BackgroundTasks,
    q: Annotated[str | None, Depends(audit_query)] = None,
    message: str = "some notification",
):
    background_tasks.add_task(safe_task, write_notification, email, message=message)
    return {"message": "Notification queued", "email": email, "q": q}


@router.get("/log")
async def notification_entries(kind: str | None = None):
    return {"entries": [e.to_dict() for e in notification_log.entries(kind)]}
