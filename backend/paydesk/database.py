"""
Database Engine & Session Management
SQLAlchemy setup over a single SQLite file, with dependency injection for FastAPI.
"""
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from paydesk.config import get_settings

settings = get_settings()

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``, making sure the SQLite directory exists."""
    if database_url.startswith("sqlite:///"):
        db_dir = os.path.dirname(database_url.replace("sqlite:///", ""))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    return create_engine(
        database_url,
        connect_args={
            "check_same_thread": False,  # Required for SQLite
            "timeout": settings.DB_BUSY_TIMEOUT_SECONDS,
        },
        echo=settings.DEBUG,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI dependency: yields a database session, auto-closes on finish."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None):
    """Create all tables and seed the payment gate. Called once at application startup."""
    from paydesk.models import payment as _payment_model   # noqa: F401
    from paydesk.models import setting as _setting_model   # noqa: F401
    from paydesk.services.settings_store import SettingsStore

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    db = Session(bind=bind)
    try:
        SettingsStore(db).ensure_defaults()
    finally:
        db.close()
