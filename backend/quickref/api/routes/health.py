"""Health & Readiness Probes — liveness, plus readiness over the database and bundled content.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
    - GET /api/v1/health/ready returns 503 unless every check passes
    - Readiness checks: database connectivity, and the bundled cheat sheet
      carrying all of its sections
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from quickref.core.content import load_cheatsheet
from quickref.core.domain_types import Section
from quickref.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "quickref-api"
SERVICE_VERSION = "1.0.0"


def _missing_sections() -> list[str]:
    doc = load_cheatsheet()
    return [s.value for s in Section if doc.section(s.value) is None]


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "sections": len(Section),
    }


@router.get("/ready")
async def readiness_check():
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    missing = _missing_sections()

    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "cheatsheet": "healthy" if not missing else f"missing: {', '.join(missing)}",
    }
    if not db_ok or missing:
        logger.warning(f"Readiness failed: {checks}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
