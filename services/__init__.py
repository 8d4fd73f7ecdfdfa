"""
FieldDay Services

Application services for tournaments, rosters and event handling.
"""

from services.event_bus import EventBus
from services.tournament_service import TournamentService
from services.roster_service import RosterService

__all__ = ["EventBus", "TournamentService", "RosterService"]
