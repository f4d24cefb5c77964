import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from finpath.core.logging import setup_logging, logger
from finpath.config.settings import settings
from finpath.core.correlation import new_correlation_id, new_request_id, set_correlation_id, set_request_id
from finpath.core.errors import FinPathError
from finpath.db import pg
from finpath.api.errors import (
    finpath_error_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from finpath.api.profile import router as profile_router
from finpath.api.financial_items import router as financial_items_router
from finpath.api.goals import router as goals_router
from finpath.api.roadmap import router as roadmap_router

tags_metadata = [
    {"name": "Profile", "description": "Income and employment status used by the roadmap rules."},
    {"name": "Financial items", "description": "Assets and liabilities with balance-sheet totals."},
    {"name": "Goals", "description": "Up to three prioritized financial goals."},
    {"name": "Roadmap", "description": "Generated action steps and their progress."},
    {"name": "System", "description": "Health check and Prometheus metrics."},
]

REQ_COUNTER = Counter("http_requests_total", "Total HTTP requests", ["method", "path", "status"])
LATENCY = Histogram("http_request_latency_seconds", "Request latency seconds", ["method", "path"])


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("startup", app_env=settings.app_env.value, postgres=pg.is_configured())
    if pg.is_configured():
        pg.ensure_tables()
    yield


app = FastAPI(
    title="FinPath API",
    description="""
# FinPath

Personal finance tracking: record assets and liabilities, declare up to three goals,
and get a rule-based **roadmap** of next steps with progress tracking.

All `/v1/*` endpoints require `Authorization: Bearer <access token>`.
    """,
    version="1.0.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)


@app.middleware("http")
async def request_context_middleware(request, call_next):
    cid = request.headers.get("X-Correlation-ID") or new_correlation_id()
    rid = request.headers.get("X-Request-ID") or new_request_id()
    set_correlation_id(cid)
    set_request_id(rid)
    request.state.request_id = rid
    resp = await call_next(request)
    resp.headers["X-Correlation-ID"] = cid
    resp.headers["X-Request-ID"] = rid
    return resp


@app.middleware("http")
async def metrics_middleware(request, call_next):
    method = request.method
    start = time.perf_counter()
    resp = await call_next(request)
    # Label by route template so resource ids do not create new series.
    route = request.scope.get("route")
    path = route.path if route is not None else "unmatched"
    LATENCY.labels(method=method, path=path).observe(time.perf_counter() - start)
    REQ_COUNTER.labels(method=method, path=path, status=str(resp.status_code)).inc()
    return resp


app.add_exception_handler(FinPathError, finpath_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


@app.get("/health", tags=["System"], summary="Health check", description="Reports whether the service and its store are configured.")
async def health():
    return {"status": "ok", "postgres": pg.is_configured()}


@app.get("/metrics", tags=["System"], summary="Prometheus metrics")
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


origins = [o.strip() for o in (settings.cors_allow_origins or "").split(",") if o.strip()]
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
app.include_router(profile_router)
app.include_router(financial_items_router)
app.include_router(goals_router)
app.include_router(roadmap_router)
