"""
Database engine + session factory.

Defaults to SQLite for local dev, Postgres in production. Every pipeline run
and request handler opens its own session via get_session().
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from creatorfit.config import DATABASE_URL


class Base(DeclarativeBase):
    pass


# Heroku/Railway style postgres:// URLs are rejected by SQLAlchemy 2.x
url = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

if url.startswith('sqlite'):
    engine = create_engine(url, connect_args={'check_same_thread': False})
else:
    engine = create_engine(url, pool_pre_ping=True, pool_size=5, max_overflow=10)

SessionLocal = sessionmaker(bind=engine)


def get_session():
    """Return a new DB session."""
    return SessionLocal()


def import_models():
    """Import every model module so Base.metadata knows all tables."""
    import importlib
    for name in ('creator', 'account', 'qualification', 'audit'):
        importlib.import_module(f'creatorfit.models.{name}')
