"""/health — liveness and deployment readiness."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from intake.db.session import ping_db
from intake.schemas.submission import ReadinessReport
from intake.services.health import DatabaseProbe, run_readiness_checks

router = APIRouter(prefix="/health", tags=["health"])


def get_db_probe() -> DatabaseProbe:
    return ping_db


@router.get("")
async def health():
    """Health check for load balancers and container orchestration."""
    return {"status": "ok"}


@router.get("/ready", response_model=ReadinessReport, responses={503: {"model": ReadinessReport}})
async def readiness(db_probe: DatabaseProbe = Depends(get_db_probe)):
    """Database reachable and notification addresses configured; 503 otherwise."""
    report = await run_readiness_checks(db_probe)
    if not report.ready:
        return JSONResponse(status_code=503, content=report.model_dump())
    return report
