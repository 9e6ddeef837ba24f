import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from frostwatch.api.routes.alerts import router as alerts_router
from frostwatch.api.routes.metrics import router as metrics_router
from frostwatch.api.routes.subscriptions import router as subscriptions_router
from frostwatch.core.config import settings
from frostwatch.core.errors import StoreFailure, ValidationError
from frostwatch.core.logging import configure_logging
from frostwatch.db import session as session_mod
from frostwatch.metrics.prometheus import api_request_latency_seconds


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    session_mod.init_db()
    yield


app = FastAPI(
    title="FrostWatch API",
    version="2.0.0",
    description="Daily frost and freeze advisory emails for U.S. ZIP codes",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    return JSONResponse(status_code=500, content={"error": "Storage error", "details": str(exc)})


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    start = time.perf_counter()
    status = "unknown"
    try:
        response = await call_next(request)
        status = str(response.status_code)
        return response
    finally:
        dt = time.perf_counter() - start
        api_request_latency_seconds.labels(route=request.url.path, method=request.method, status=status).observe(dt)


@app.get("/api/health")
def health():
    return {"status": "ok"}


app.include_router(subscriptions_router)
app.include_router(alerts_router)
app.include_router(metrics_router)
