"""SQLAlchemy engine, session factory and declarative base."""
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session as DBSession, sessionmaker
from sqlalchemy.pool import StaticPool

from eduportal.config import DATABASE_URL


def create_db_engine(url: str = DATABASE_URL) -> Engine:
    """Engine for url; an in-memory SQLite database lives on one shared connection."""
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, connect_args={"check_same_thread": False})


def create_session_factory(bind: Engine) -> sessionmaker[DBSession]:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = create_db_engine()
SessionLocal = create_session_factory(engine)


class Base(DeclarativeBase):
    """Base class of the session and result tables."""
    pass


def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create missing tables on bind (the application engine by default)."""
    # Register models on Base.metadata before create_all
    import eduportal.models.db  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
