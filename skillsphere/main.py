import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import sentry_sdk

from skillsphere import __version__
from skillsphere.api.v1.health import router as health_router
from skillsphere.api.v1.career import router as career_router
from skillsphere.api.v1.learning import router as learning_router
from skillsphere.api.v1.portfolio import router as portfolio_router
from skillsphere.api.v1.circles import router as circles_router
from skillsphere.api.v1.resume import router as resume_router
from skillsphere.api.v1.proxy import router as proxy_router
from skillsphere.core.config import settings
from skillsphere.core.cors import cors_allow_credentials, cors_allowed_origins
from skillsphere.core.errors import register_error_handlers
from skillsphere.core.rate_limit import limiter, rate_limit_exceeded_handler
from skillsphere.store.base import InMemoryStore, KeyValueStore

logging.basicConfig(level=settings.log_level, format="%(message)s")
logger = logging.getLogger(__name__)
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)


def create_app(store: KeyValueStore | None = None) -> FastAPI:
    app = FastAPI(title="SkillSphere API", version=__version__)
    app.state.store = store if store is not None else InMemoryStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins(),
        allow_credentials=cors_allow_credentials(),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Response-Source", "X-Degraded-Reason", "X-Extracted-Characters"],
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    register_error_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(career_router, tags=["Career"])
    app.include_router(learning_router, tags=["Learning"])
    app.include_router(portfolio_router, tags=["Portfolio"])
    app.include_router(circles_router, tags=["Peer Learning"])
    app.include_router(resume_router, tags=["Resume"])
    app.include_router(proxy_router, tags=["Proxy"])
    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("skillsphere_starting host=%s port=%s", settings.host, settings.port)
    uvicorn.run("skillsphere.main:app", host=settings.host, port=settings.port)
