import logging as log

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config.app_vars import DATABASE_URL


def _engine_options(url: str):
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True}


if DATABASE_URL:
    engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
else:
    # Webhook saves will fail until a database is configured
    log.warning("No DATABASE_URL or DB_HOST found. Webhook savings will fail.")
    engine = None

Base = declarative_base()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    if engine is None:
        return False
    Base.metadata.create_all(bind=engine)
    return True
