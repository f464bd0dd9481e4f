"""
learnquest/main.py
LearnQuest dashboard API

Serves the course library, media streaming, progress and gamification
endpoints under /api, and the bundled dashboard at /.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from learnquest import __version__
from learnquest.config import feature_flags, settings
from learnquest.errors import ERROR_MAPPING, APIError, ErrorCode, InternalError, get_error_summary, new_log_id
from learnquest.rate_limit import limiter
from learnquest.routes import router
from learnquest.services.course_scanner import generate_course_data
from learnquest.store import DOCUMENTS, JsonStore, StoreError, get_store

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting LearnQuest...")
    logger.info(f"Data directory: {settings.data_dir}")
    logger.info(f"Feature flags: {feature_flags.get_all_flags()}")

    if feature_flags.FEATURE_SCAN_ON_STARTUP:
        if settings.course_paths:
            generate_course_data(get_store(), settings.course_paths, settings.video_extensions)
        else:
            logger.warning("⚠️ COURSE_PATH not set - keeping existing data.json")

    yield

    logger.info("Shutting down LearnQuest...")


app = FastAPI(
    title="LearnQuest API",
    description="Local course dashboard with progress tracking and gamification",
    version=__version__,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan
)

# Attach rate limiter to the app
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"],
)


# ============================================
# Exception handlers
# ============================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    error_details = []
    for error in exc.errors():
        error_details.append({
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "type": error.get("type")
        })

    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Validation Error",
            "message": "Request validation failed",
            "code": ErrorCode.VALIDATION_ERROR,
            "details": {"errors": error_details}
        }
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(f"HTTP exception on {request.url.path}: {exc.detail}")

    error, code = ERROR_MAPPING.get(
        exc.status_code,
        ("Error", ErrorCode.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCode.INVALID_INPUT)
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": error,
            "message": str(exc.detail),
            "code": code
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit hit on {request.url.path}: {exc.detail}")
    return APIError(
        status_code=429,
        error="Too Many Requests",
        message=f"Rate limit exceeded: {exc.detail}",
        code=ErrorCode.RATE_LIMITED
    ).to_response()


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    logger.warning(f"API error on {request.url.path}: {exc.code} - {exc.message}")
    return exc.to_response()


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    log_id = new_log_id()
    logger.error(f"[{log_id}] Store error on {request.url.path}: {exc}")
    return InternalError(
        message=f"Data file {exc.path.name} is corrupt",
        code=ErrorCode.STORE_CORRUPT,
        log_id=log_id
    ).to_response()


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    log_id = new_log_id()
    logger.error(f"[{log_id}] Unhandled exception on {request.url.path}: {type(exc).__name__}: {str(exc)}")
    return InternalError(
        message="An unexpected error occurred. Please try again later.",
        log_id=log_id
    ).to_response()


# ============================================
# Health
# ============================================

@app.get("/health", tags=["Health"])
async def health_check(store: JsonStore = Depends(get_store)):
    return {
        "status": "healthy",
        "environment": settings.environment,
        "course_paths": len(settings.course_paths),
        "documents": {name: store.exists(name) for name in DOCUMENTS},
        "version": __version__
    }


@app.get("/api/errors/health", tags=["Health"])
async def error_handling_health():
    return get_error_summary()


app.include_router(router)

# Mounted last so /api and /health win over the catch-all
if feature_flags.FEATURE_SERVE_DASHBOARD and STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="dashboard")
    logger.info(f"✓ Dashboard served from {STATIC_DIR}")
