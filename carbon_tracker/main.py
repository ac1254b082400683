import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db.database import init_db
from .errors import GENERIC_ERROR_MESSAGE, CarbonTrackerError
from .logging_config import setup_logging
from .routes.activities import router as activities_router
from .routes.auth import router as auth_router
from .schemas import error_response

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Carbon footprint tracker started")
    yield


app = FastAPI(
    title="Carbon Footprint Tracker",
    version="1.0.0",
    description="Log daily activities and estimate their CO₂ emissions.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(CarbonTrackerError)
async def carbon_tracker_error_handler(request: Request, exc: CarbonTrackerError):
    if exc.operational:
        logger.error("%s: %s", exc.kind.value, exc.message)
    else:
        logger.error(
            "Fatal error on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
    return JSONResponse(status_code=exc.status_code, content=error_response(exc.public_message))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content=error_response(message))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=error_response(message))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_response(GENERIC_ERROR_MESSAGE))


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "service": "carbon-footprint-tracker",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(auth_router)
app.include_router(activities_router)
