import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from src.config import settings
from src.exceptions import TransactionError

Base = declarative_base()


def make_engine(url: str) -> Engine:
    """Build a pooled engine for the given URL.

    SQLite is only used for local runs and tests; an in-memory database has to
    share a single connection or every checkout would see an empty schema.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False, "timeout": 30}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    connect_args = {}
    if url.startswith("postgresql"):
        timeout_ms = int(settings.TRANSACTION_TIMEOUT_SECONDS * 1000)
        connect_args["options"] = f"-c statement_timeout={timeout_ms}"

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        connect_args=connect_args,
    )


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction_scope(db: Session, timeout: Optional[float] = None) -> Iterator[Session]:
    """Run a unit of work that commits all-or-nothing.

    Any exception raised inside the block rolls the session back and is
    re-raised unchanged. The deadline is checked once more before committing,
    so a unit of work that overran is rolled back instead of committed late.
    """
    if timeout is None:
        timeout = settings.TRANSACTION_TIMEOUT_SECONDS
    deadline = time.monotonic() + timeout

    try:
        yield db
        if time.monotonic() > deadline:
            raise TransactionError("Transaction deadline exceeded", stage="deadline")
        try:
            db.commit()
        except Exception as e:
            raise TransactionError("Commit failed", stage="commit") from e
    except Exception:
        db.rollback()
        raise
