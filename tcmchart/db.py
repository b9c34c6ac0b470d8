# tcmchart/db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from tcmchart.config import get_settings


settings = get_settings()

# SQLite needs this to be usable from FastAPI's threadpool
_connect_args = (
    {"check_same_thread": False}
    if settings.database_url.startswith("sqlite")
    else {}
)

engine = create_engine(
    settings.database_url,
    echo=False,  # set True if you want to see SQL queries
    future=True,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


class Base(DeclarativeBase):
    """
    Base class for ORM models.
    """
    pass


def init_db() -> None:
    """
    Create all tables. Call this once at startup.
    """
    # models must be imported so their tables are registered on Base
    import tcmchart.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
