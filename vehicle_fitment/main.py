"""FastAPI app entry point for the vehicle fitment engine."""

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from vehicle_fitment import __version__
from vehicle_fitment.api.routes import router
from vehicle_fitment.config import get_settings
from vehicle_fitment.core.logging import log_request, log_response, setup_logging

settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(
    title="Vehicle Fitment Engine",
    description="Parses free-text parts compatibility into a vehicle tree and matches parts to vehicles",
    version=__version__,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    log_request(request.method, request.url.path)

    response = await call_next(request)

    duration_ms = (time.time() - start) * 1000
    log_response(request.method, request.url.path, response.status_code, duration_ms)

    return response


# Routes
app.include_router(router, prefix="/api")


@app.get("/health")
async def health():
    return {"status": "ok", "service": settings.service_name}
