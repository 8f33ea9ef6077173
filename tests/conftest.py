"""Shared test fixtures."""
from datetime import datetime, timezone
from unittest.mock import patch, MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from creatorfit.database import Base, import_models

# Modules that bind get_session at import time
SESSION_USERS = [
    'creatorfit.database',
    'creatorfit.pipeline.qualification',
    'creatorfit.routes.lead',
    'creatorfit.routes.oauth',
    'creatorfit.routes.creator',
    'creatorfit.routes.admin',
]


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    import_models()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def patch_get_session(db_session):
    """Route all get_session() calls to the test session.

    close() is disabled so that handlers closing the session in their
    finally blocks don't invalidate the shared test session.
    """
    _real_close = db_session.close
    db_session.close = lambda: None
    patches = [patch(f'{module}.get_session', return_value=db_session) for module in SESSION_USERS]
    for p in patches:
        p.start()
    yield db_session
    for p in reversed(patches):
        p.stop()
    db_session.close = _real_close


@pytest.fixture
def mock_redis():
    """Mock Redis client with the commands the app uses."""
    mock = MagicMock()
    mock.get.return_value = None
    mock.setex.return_value = True
    mock.hgetall.return_value = {}
    mock.pipeline.return_value.execute.return_value = [None, 0]
    with patch('creatorfit.extensions.redis_client', mock):
        yield mock


@pytest.fixture
def app(mock_redis):
    """Flask test app."""
    from creatorfit import create_app
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def admin_token(monkeypatch):
    monkeypatch.setattr('creatorfit.config.ADMIN_TOKEN', 'test-admin-token')
    return 'test-admin-token'


@pytest.fixture
def make_creator(db_session):
    """Factory fixture: inserts and commits a Creator row."""
    from creatorfit.models.creator import Creator

    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        n = counter['n']
        defaults = dict(
            id=f'creator-{n:03d}',
            full_name=f'Creator {n}',
            email=f'creator{n}@example.com',
            phone=None,
            country='PT',
            city='Lisboa',
            declared_category=None,
            status='lead',
            created_at=datetime(2026, 1, 15, 10, 0, n, tzinfo=timezone.utc),
            updated_at=datetime(2026, 1, 15, 10, 0, n, tzinfo=timezone.utc),
        )
        defaults.update(overrides)
        creator = Creator(**defaults)
        db_session.add(creator)
        db_session.commit()
        return creator
    return _make


@pytest.fixture
def make_account(db_session):
    """Factory fixture: inserts and commits a ConnectedAccount row."""
    from creatorfit.models.account import ConnectedAccount

    def _make(creator_id, **overrides):
        defaults = dict(
            creator_id=creator_id,
            platform='instagram',
            platform_user_id='1784000000',
            account_type='unknown',
            connected_at=datetime(2026, 1, 16, 9, 0, tzinfo=timezone.utc),
            status='active',
        )
        defaults.update(overrides)
        account = ConnectedAccount(**defaults)
        db_session.add(account)
        db_session.commit()
        return account
    return _make
