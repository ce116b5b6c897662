"""
Database Session Management
"""
from typing import Generator, Dict, Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from app.core.config import settings


def _engine_options() -> Dict[str, Any]:
    """Pool and timeout options for the configured backend"""
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.DB_POOL_PRE_PING,
        "echo": settings.DEBUG,
    }

    if settings.DATABASE_URL.startswith(("postgresql", "postgres://")):
        timeout_ms = settings.DB_STATEMENT_TIMEOUT_SECONDS * 1000
        options.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "connect_args": {
                "connect_timeout": settings.DB_STATEMENT_TIMEOUT_SECONDS,
                "options": f"-c statement_timeout={timeout_ms}",
            },
        })

    return options


def _database_url() -> str:
    url = settings.DATABASE_URL
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    return url


# Create engine
engine = create_engine(_database_url(), **_engine_options())

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency

    Usage:
        @router.get("/")
        async def endpoint(db: Session = Depends(get_db)):
            # Use db here
            pass
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
