import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.api.v1 import admin, profiles, prompts
from app.core.config import settings
from app.core.database import get_db, storage_call
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.middleware.logging import LoggingMiddleware

logger = logging.getLogger("app.main")


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="PromptNote API",
        version="0.1.0",
    )

    # CORS middleware - must be added before other middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    prefix = settings.API_V1_PREFIX
    app.include_router(prompts.router, prefix=prefix)
    app.include_router(profiles.router, prefix=prefix)
    app.include_router(admin.router, prefix=prefix)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict:
        return {"status": "ok", "environment": settings.ENVIRONMENT}

    @app.get("/health/ready", tags=["health"])
    def readiness_check(db: Session = Depends(get_db)) -> dict:
        """503 with code ``storage_unavailable`` when the database cannot be reached."""
        with storage_call(db, "readiness probe"):
            db.execute(text("SELECT 1"))
        return {"status": "ready", "database": "ok"}

    logger.info("PromptNote API configured for %s", settings.ENVIRONMENT)
    return app


app = create_app()


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=settings.DEBUG,
    )
