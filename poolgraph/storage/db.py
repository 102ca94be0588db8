from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, scoped_session
from sqlalchemy.pool import StaticPool

from poolgraph.config.settings import DATABASE_URL
from poolgraph.storage.models.base import Base


def make_engine(url: str = DATABASE_URL) -> Engine:
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every thread sees its own empty db
        return create_engine(
            url, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True, pool_size=10, max_overflow=20)


def create_tables(bind: Engine) -> None:
    # registers the mapped tables on Base.metadata
    import poolgraph.storage.models.pools  # noqa: F401
    import poolgraph.storage.models.extraction_metrics  # noqa: F401

    Base.metadata.create_all(bind)


engine = make_engine()
SessionLocal = scoped_session(
    sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
