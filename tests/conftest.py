from __future__ import annotations

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from leadhub.models import Base, Broker, TeamMember


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield TestingSessionLocal
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def broker(db_session):
    broker = Broker(id="broker-1", email="Owner@Example.com", name="Olivia Owner", company="Owner Finance")
    db_session.add(broker)
    db_session.add_all(
        [
            TeamMember(broker_id="broker-1", user_id="user-sam", email="sam@example.com", name="Sam Smith"),
            TeamMember(broker_id="broker-1", user_id="user-jo", email="Jo@Example.com", name=None),
        ]
    )
    db_session.commit()
    return broker
