from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.quizzes.router import router as quizzes_router
from app.quizzes.store import init_store

setup_logging()
logger = logging.getLogger("app.startup")


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One store per app instance; quizzes live until the process exits.
        init_store(app=app)
        settings = get_settings()
        logger.info(
            "Application started",
            extra={
                "app_name": settings.app_name,
                "app_env": settings.app_env,
                "llm_model": settings.llm_model,
                "llm_configured": bool(settings.llm_api_key),
            },
        )
        yield

    app = FastAPI(
        title="Property Quiz Generator API",
        description=(
            "Generates property-industry knowledge quizzes with a hosted LLM.\n\n"
            "Flow:\n"
            "- The topic is first classified by the LLM; off-domain or vague topics are "
            "rejected.\n"
            "- The quiz is then synthesized, validated against a fixed schema, and "
            "checked for question/answer parity before it is stored.\n"
            "- Quizzes are kept in memory only and are lost on restart."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        redoc_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime checks for load balancers and monitoring.",
            },
            {
                "name": "quizzes",
                "description": "Generate quizzes, read them back, and export them as text.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description="Verifies the API process is running. Does not call the LLM.",
    )
    @app.get("/api/health", response_model=HealthOut, tags=["health"], include_in_schema=False)
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(quizzes_router)
    return app


app = create_app()
