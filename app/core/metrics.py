from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.routing import route_template

metrics_router = APIRouter(tags=["monitoring"])

# Labels are route templates or fixed values only; never quiz ids or topics.

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status_code"),
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("method", "route", "status_code"),
    # Quiz generation waits on two LLM calls, hence the long tail.
    buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
)

llm_requests_total = Counter(
    "llm_requests_total",
    "LLM calls made by the quiz pipeline",
    labelnames=("stage", "outcome"),
)

llm_request_duration_seconds = Histogram(
    "llm_request_duration_seconds",
    "LLM call duration in seconds",
    labelnames=("stage",),
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0),
)

quizzes_stored_total = Counter(
    "quizzes_stored_total",
    "Quizzes that passed validation and were stored",
)


def observe_llm_call(*, stage: str, outcome: str, duration_seconds: float) -> None:
    llm_requests_total.labels(stage=stage, outcome=outcome).inc()
    llm_request_duration_seconds.labels(stage=stage).observe(duration_seconds)


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route_label = route_template(request)
            method = request.method
            code = str(int(status_code))
            duration = time.perf_counter() - started
            http_requests_total.labels(method=method, route=route_label, status_code=code).inc()
            http_request_duration_seconds.labels(
                method=method, route=route_label, status_code=code
            ).observe(duration)


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    # Default registry; the store is per-process anyway.
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
