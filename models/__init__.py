"""
FieldDay Database Models

SQLAlchemy ORM models and pydantic value objects for the tournament core.
"""

from models.base import Base, engine, SessionLocal, get_session, init_db
from models.competitor import Competitor, DEFAULT_COMPETITORS
from models.slots import (
    Slot,
    CompetitorSlot,
    GroupPlaceSlot,
    MatchOutcomeSlot,
    Outcome,
)
from models.tournament import (
    Tournament,
    Group,
    SportType,
    TournamentFormat,
    TournamentStatus,
)
from models.match import Match, MatchStage, MatchStatus
from models.result import MatchResult, ScoringEvent, ResultDetails, Side
from models.player import Player, RunningEntry

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_session",
    "init_db",
    "Competitor",
    "DEFAULT_COMPETITORS",
    "Slot",
    "CompetitorSlot",
    "GroupPlaceSlot",
    "MatchOutcomeSlot",
    "Outcome",
    "Tournament",
    "Group",
    "SportType",
    "TournamentFormat",
    "TournamentStatus",
    "Match",
    "MatchStage",
    "MatchStatus",
    "MatchResult",
    "ScoringEvent",
    "ResultDetails",
    "Side",
    "Player",
    "RunningEntry",
]
