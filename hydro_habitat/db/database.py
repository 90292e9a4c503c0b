# hydro_habitat/db/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from hydro_habitat.core.config import settings

def _connect_args(database_url: str) -> dict:
    # SQLite connections are shared with FastAPI's threadpool
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """
    FastAPI dependency: yields a session and always closes it.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None):
    """Create every table registered on Base."""
    from hydro_habitat.models import tank  # noqa: F401  (registers the model)
    Base.metadata.create_all(bind=bind or engine)
