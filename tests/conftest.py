"""
Shared pytest fixtures for FieldDay tests.

Each test gets its own in-memory SQLite database.
"""

import os

# Keep the module-level engine off the user's data directory
os.environ.setdefault("FIELDDAY_DATABASE_URL", "sqlite://")

import random
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models.base import init_db
from models.schemas import TournamentCreate
from models.tournament import SportType
from services.event_bus import EventBus
from services.roster_service import RosterService
from services.tournament_service import TournamentService

START = datetime(2026, 5, 14, 9, 0)

COMPETITORS = ["palchan", "palsar", "palnat", "paltaz", "palsam", "mesayaat"]
GROUP_A = ["palchan", "palsar", "palnat"]
GROUP_B = ["paltaz", "palsam", "mesayaat"]


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def service(session_factory, event_bus):
    return TournamentService(session_factory, event_bus, rng=random.Random(7))


@pytest.fixture
def roster(session_factory, event_bus):
    return RosterService(session_factory, event_bus)


def make_tournament(service, sport_type=SportType.SOCCER, name="Field Day Soccer", start_at=START):
    return service.create_tournament(TournamentCreate(
        name=name,
        sport_type=sport_type,
        start_at=start_at,
        end_at=start_at.replace(hour=17),
        created_by="admin@example.com",
    ))


@pytest.fixture
def drawn_tournament(service):
    """A soccer tournament with a fixed draw: A = GROUP_A, B = GROUP_B."""
    tournament = make_tournament(service)
    return service.set_groups(tournament.id, [GROUP_A, GROUP_B])
