from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from skillsphere.core.rate_limit import rate_limit

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, summary="Liveness banner")
@rate_limit()
async def root(request: Request):
    return "SkillSphere Backend is Running!"


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
@rate_limit()
async def health_check(request: Request):
    return {"status": "healthy"}
