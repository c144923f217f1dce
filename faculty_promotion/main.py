"""
FastAPI server for the faculty promotion tracker.

Serves one faculty record per app instance:
- achievement CRUD with full rescoring on every change
- eligibility against the current position's requirement tier
- promotion application (not_applied -> pending)
- what-if simulation and full reset
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from faculty_promotion import config
from faculty_promotion.api.routes import FacultyStore, promotion_error_handler, router
from faculty_promotion.errors import PromotionError
from faculty_promotion.config import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler for FastAPI.
    Validates settings on startup.
    """
    config.validate_environment()

    logger.info("=" * 60)
    logger.info("Starting Faculty Promotion Tracker API")
    logger.info("=" * 60)

    yield

    logger.info("🛑 Faculty Promotion Tracker stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Faculty Promotion Tracker API",
        description="Promotion points scoring and eligibility for academic staff",
        version="1.0.0",
        lifespan=lifespan,
    )

    # One record per app instance, never shared across apps
    app.state.faculty_store = FacultyStore()

    app.include_router(router)
    app.add_exception_handler(PromotionError, promotion_error_handler)

    # Configure CORS for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok", "service": "faculty_promotion"}

    return app


app = create_app()


def main():
    """Run the FastAPI server."""
    config.validate_environment()
    uvicorn.run(
        "faculty_promotion.main:app",
        host=config.HOST,
        port=int(config.PORT),
    )


if __name__ == "__main__":
    main()
