"""Database engine and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def build_engine(url: str, timeout_sec: float, echo: bool = False) -> Engine:
    """
    Create an engine whose connection, pool checkout and statement waits are
    bounded by timeout_sec.

    In-memory SQLite shares a single connection so every session sees the same tables.
    """
    if url.startswith("sqlite"):
        connect_args: dict[str, Any] = {"timeout": timeout_sec, "check_same_thread": False}
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            return create_engine(
                url,
                connect_args=connect_args,
                poolclass=StaticPool,
                echo=echo,
            )
        return create_engine(url, connect_args=connect_args, echo=echo)

    timeout_ms = int(timeout_sec * 1000)
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=timeout_sec,
        connect_args={
            "connect_timeout": max(1, int(timeout_sec)),
            "options": f"-c statement_timeout={timeout_ms}",
        },
        echo=echo,
    )


engine = build_engine(
    settings.DATABASE_URL,
    settings.DATABASE_TIMEOUT_SEC,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
