"""
Paydesk — FastAPI Application Entry Point

Aggregates routers, configures middleware and error mapping,
and initializes the database on startup.
"""
import logging
import time
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from paydesk.config import get_settings
from paydesk.database import SessionLocal, get_db, init_db
from paydesk.exceptions import PaydeskError
from paydesk.logging_config import setup_logging
from paydesk.routes import payment_router, admin_router
from paydesk.schemas.schemas import HealthResponse
from paydesk.services.settings_store import SettingsStore

settings = get_settings()
logger = logging.getLogger("paydesk.main")

# ─── Application Instance ───────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Collects manually confirmed UPI payments and gives the administrator "
        "a pausable payment gate plus trash/restore/purge management of records."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# ─── Startup ─────────────────────────────────────────────────────────
BOOT_TIME = time.time()


@app.on_event("startup")
def on_startup():
    """Initialize logging and database tables, then log boot info."""
    setup_logging()
    init_db()

    db = SessionLocal()
    try:
        gate = SettingsStore(db).get_status()
    finally:
        db.close()

    logger.info(
        "\n%s\n  %s v%s\n  TIME: %s\n  DATABASE: %s\n  GATE: %s\n  DEBUG: %s\n%s",
        "=" * 60,
        settings.APP_NAME,
        settings.APP_VERSION,
        datetime.now().isoformat(),
        settings.DATABASE_URL,
        gate,
        settings.DEBUG,
        "=" * 60,
    )


# ─── Middleware ──────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with timing."""
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 1)

    if request.url.path.startswith("/api"):
        logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration)

    return response


# ─── Error Mapping ───────────────────────────────────────────────────
@app.exception_handler(PaydeskError)
async def paydesk_error_handler(request: Request, exc: PaydeskError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same 400 {"error": ...} shape as service validation."""
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=400, content={"error": "Invalid request"})
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid {field}: {message}" if field else f"Invalid request: {message}"},
    )


# ─── API Routers ─────────────────────────────────────────────────────
app.include_router(payment_router)
app.include_router(admin_router)


@app.get("/health", tags=["Health"], response_model=HealthResponse)
def deep_health(db: Session = Depends(get_db)):
    """Detailed health check including database and gate status."""
    db_ok = False
    gate = None
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
        gate = SettingsStore(db).get_status()
    except SQLAlchemyError:
        logger.exception("Health check failed")

    return {
        "status": "healthy" if db_ok else "degraded",
        "database": "connected" if db_ok else "disconnected",
        "gate": gate,
        "uptime_seconds": round(time.time() - BOOT_TIME, 1),
        "version": settings.APP_VERSION,
    }
