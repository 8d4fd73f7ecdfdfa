"""
Roster Service

Unit rosters and the timed results of the running event.

Operations that require an admin caller (not enforced here):
create_player, delete_player, record_running_time.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from engine.errors import FieldDayError, IllegalStateError, InvalidInputError, NotFoundError
from models.base import get_session
from models.player import Player, RunningEntry
from models.schemas import PlayerCreate, PlayerResponse, RunningResult
from models.tournament import Tournament, TournamentFormat
from services.event_bus import EventBus

logger = logging.getLogger(__name__)


class RosterService:
    """Players and running times on top of a SQLAlchemy session factory."""

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        event_bus: Optional[EventBus] = None
    ):
        self.session_factory = session_factory
        self.event_bus = event_bus

    def _load_player(self, session: Session, player_id: int) -> Player:
        player = session.get(Player, player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")
        return player

    def _rejected(self, message: str) -> None:
        logger.warning(message)
        if self.event_bus:
            self.event_bus.emit_message("warning", message)

    # ============ Players ============

    def create_player(self, data: PlayerCreate) -> PlayerResponse:
        with get_session(self.session_factory) as session:
            player = Player(
                first_name=data.first_name,
                last_name=data.last_name,
                competitor_id=data.competitor_id,
                is_runner=data.is_runner,
            )
            player.sport_branches = data.sport_branches
            session.add(player)
            session.flush()
            response = PlayerResponse.model_validate(player)

        logger.info("Added player %s to %s", response.full_name, response.competitor_id)
        if self.event_bus:
            self.event_bus.player_added.emit(response)
        return response

    def get_player(self, player_id: int) -> PlayerResponse:
        with get_session(self.session_factory) as session:
            return PlayerResponse.model_validate(self._load_player(session, player_id))

    def list_players(self, competitor: Optional[str] = None) -> list[PlayerResponse]:
        """Players ordered by last name, optionally only one unit's."""
        query = select(Player).order_by(Player.last_name, Player.first_name, Player.id)
        if competitor is not None:
            query = query.where(Player.competitor_id == competitor)

        with get_session(self.session_factory) as session:
            return [PlayerResponse.model_validate(p) for p in session.scalars(query).all()]

    def list_runners(self) -> list[PlayerResponse]:
        with get_session(self.session_factory) as session:
            players = session.scalars(
                select(Player)
                .where(Player.is_runner.is_(True))
                .order_by(Player.last_name, Player.first_name, Player.id)
            ).all()
            return [PlayerResponse.model_validate(p) for p in players]

    def delete_player(self, player_id: int) -> None:
        """Remove a player and any running times recorded for them."""
        try:
            with get_session(self.session_factory) as session:
                player = self._load_player(session, player_id)
                session.execute(delete(RunningEntry).where(RunningEntry.player_id == player_id))
                session.delete(player)
        except FieldDayError as exc:
            self._rejected(f"Delete of player {player_id} rejected: {exc}")
            raise

        logger.info("Removed player %s", player_id)
        if self.event_bus:
            self.event_bus.player_removed.emit(player_id)

    # ============ Running ============

    def record_running_time(
        self,
        tournament_id: str,
        player_id: int,
        seconds: float
    ) -> RunningResult:
        """
        Record (or correct) a runner's time in an individual-time tournament.

        Raises:
            NotFoundError: Unknown tournament or player
            InvalidInputError: Time is not positive
            IllegalStateError: Tournament is not an individual-time tournament
        """
        try:
            if seconds is None or seconds <= 0:
                raise InvalidInputError(f"Running time must be positive, got {seconds}")

            with get_session(self.session_factory) as session:
                tournament = session.get(Tournament, tournament_id)
                if tournament is None:
                    raise NotFoundError(f"Tournament {tournament_id} not found")
                if tournament.format != TournamentFormat.INDIVIDUAL:
                    raise IllegalStateError(
                        f"{tournament.sport_type.value} tournaments do not record running times"
                    )
                player = self._load_player(session, player_id)

                entry = next(
                    (e for e in tournament.running_entries if e.player_id == player_id),
                    None
                )
                if entry is None:
                    entry = RunningEntry(player=player, time_seconds=float(seconds))
                    tournament.running_entries.append(entry)
                else:
                    entry.time_seconds = float(seconds)
                session.flush()

                result = next(
                    r for r in self._rank(tournament.running_entries) if r.player_id == player_id
                )
        except FieldDayError as exc:
            self._rejected(
                f"Running time for player {player_id} in tournament {tournament_id} rejected: {exc}"
            )
            raise

        logger.info(
            "Recorded %.2fs for player %s in tournament %s", seconds, player_id, tournament_id
        )
        if self.event_bus:
            self.event_bus.running_time_recorded.emit(tournament_id, player_id, float(seconds))
        return result

    def running_results(self, tournament_id: str) -> list[RunningResult]:
        """Entries ranked by ascending time; equal times keep recording order."""
        with get_session(self.session_factory) as session:
            tournament = session.get(Tournament, tournament_id)
            if tournament is None:
                raise NotFoundError(f"Tournament {tournament_id} not found")
            return self._rank(tournament.running_entries)

    @staticmethod
    def _rank(entries: list[RunningEntry]) -> list[RunningResult]:
        ordered = sorted(entries, key=lambda e: (e.time_seconds, e.id))
        return [
            RunningResult(
                rank=rank,
                player_id=entry.player_id,
                player_name=entry.player.full_name,
                competitor_id=entry.player.competitor_id,
                time_seconds=entry.time_seconds,
            )
            for rank, entry in enumerate(ordered, start=1)
        ]
