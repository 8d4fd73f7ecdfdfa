"""
Tournament Service

Orchestrates tournament operations against the database: creation, the
group draw and schedule generation, result reporting with status and slot
propagation, and the read models for displays.

Every operation runs in one session and commits once. Proposed changes are
computed and checked before anything is written, so a rejected call leaves
the stored tournament untouched.

Operations that require an admin caller (not enforced here):
create_tournament, delete_tournament, draw_groups, set_groups, report_result.
"""

import logging
import random
import uuid
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from config import DRAW_SETTINGS
from engine.errors import FieldDayError, IllegalStateError, InvalidInputError, NotFoundError
from engine.group_draw import assign_groups, validate_competitors
from engine.progression import advance_status, resolve_knockout_slots
from engine.rules import ResultValidator
from engine.standings import (
    ScorerRow,
    SeasonStanding,
    StandingRow,
    compute_season_leaderboard,
    compute_top_scorers,
    group_standings,
)
from engine.tournament_bracket import generate_schedule
from models.base import get_session
from models.competitor import DEFAULT_COMPETITORS
from models.match import Match, MatchStatus
from models.result import MatchResult, utcnow
from models.schemas import MatchResponse, TournamentCreate, TournamentResponse
from models.tournament import Group, Tournament, TournamentFormat, TournamentStatus
from services.event_bus import EventBus

logger = logging.getLogger(__name__)


class TournamentService:
    """
    Tournament lifecycle on top of a SQLAlchemy session factory.

    Usage:
        service = TournamentService(event_bus=bus)
        tournament = service.create_tournament(TournamentCreate(...))
        service.draw_groups(tournament.id)
        service.report_result(tournament.id, "g1", MatchResult(...))
    """

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None
    ):
        self.session_factory = session_factory
        self.event_bus = event_bus
        self.rng = rng or random.Random()

    # ============ Helpers ============

    def _load(self, session: Session, tournament_id: str) -> Tournament:
        tournament = session.get(Tournament, tournament_id)
        if tournament is None:
            raise NotFoundError(f"Tournament {tournament_id} not found")
        return tournament

    def _load_match(self, tournament: Tournament, match_id: str) -> Match:
        match = tournament.get_match(match_id)
        if match is None:
            raise NotFoundError(f"Match {match_id} not found in tournament {tournament.id}")
        return match

    def _rejected(self, message: str) -> None:
        """Log a refused operation and tell listeners about it."""
        logger.warning(message)
        if self.event_bus:
            self.event_bus.emit_message("warning", message)

    # ============ Tournaments ============

    def create_tournament(self, data: TournamentCreate) -> TournamentResponse:
        """Create a tournament with two empty groups and no matches."""
        fmt = TournamentFormat.for_sport(data.sport_type)

        with get_session(self.session_factory) as session:
            tournament = Tournament(
                id=uuid.uuid4().hex,
                name=data.name,
                description=data.description,
                sport_type=data.sport_type,
                format=fmt,
                status=TournamentStatus.UPCOMING,
                start_at=data.start_at,
                end_at=data.end_at,
                created_by=data.created_by,
            )
            if fmt == TournamentFormat.LEAGUE_KNOCKOUT:
                tournament.groups = [Group(id=gid, name=name) for gid, name in DRAW_SETTINGS.groups]
            session.add(tournament)
            session.flush()
            response = TournamentResponse.model_validate(tournament)

        logger.info("Created %s tournament %s (%s)", data.sport_type.value, response.id, response.name)
        if self.event_bus:
            self.event_bus.tournament_created.emit(response.id)
        return response

    def get_tournament(self, tournament_id: str) -> TournamentResponse:
        with get_session(self.session_factory) as session:
            return TournamentResponse.model_validate(self._load(session, tournament_id))

    def list_tournaments(self) -> list[TournamentResponse]:
        """All tournaments, newest start first."""
        with get_session(self.session_factory) as session:
            tournaments = session.scalars(
                select(Tournament).order_by(Tournament.start_at.desc())
            ).all()
            return [TournamentResponse.model_validate(t) for t in tournaments]

    def delete_tournament(self, tournament_id: str) -> None:
        """Delete a tournament together with its matches and running entries."""
        try:
            with get_session(self.session_factory) as session:
                session.delete(self._load(session, tournament_id))
        except FieldDayError as exc:
            self._rejected(f"Delete of tournament {tournament_id} rejected: {exc}")
            raise

        logger.info("Deleted tournament %s", tournament_id)
        if self.event_bus:
            self.event_bus.tournament_deleted.emit(tournament_id)

    # ============ Draw & Schedule ============

    def draw_groups(
        self,
        tournament_id: str,
        competitors: Optional[Sequence[str]] = None
    ) -> TournamentResponse:
        """
        Randomly draw two groups of three and regenerate the schedule.

        Args:
            tournament_id: Tournament to draw
            competitors: Six distinct competitor ids (defaults to the six units)

        Raises:
            NotFoundError: Unknown tournament
            InvalidInputError: Not six distinct competitor ids
            IllegalStateError: No bracket for this sport, or play has started
        """
        competitors = list(competitors) if competitors is not None else list(DEFAULT_COMPETITORS)
        try:
            group_a, group_b = assign_groups(competitors, self.rng)
            return self._apply_draw(tournament_id, [group_a, group_b])
        except FieldDayError as exc:
            self._rejected(f"Group draw for tournament {tournament_id} rejected: {exc}")
            raise

    def set_groups(
        self,
        tournament_id: str,
        groups: Sequence[Sequence[str]]
    ) -> TournamentResponse:
        """
        Replace the draw with explicit groups (manual redraw).

        ``groups`` is [group_a_members, group_b_members], three ids each.
        """
        try:
            if len(groups) != len(DRAW_SETTINGS.groups):
                raise InvalidInputError(
                    f"Expected {len(DRAW_SETTINGS.groups)} groups, got {len(groups)}"
                )
            for members in groups:
                if len(members) != DRAW_SETTINGS.group_size:
                    raise InvalidInputError(
                        f"Each group needs {DRAW_SETTINGS.group_size} competitors, got {len(members)}"
                    )
            validate_competitors([c for members in groups for c in members])
            return self._apply_draw(tournament_id, [[str(c).strip() for c in m] for m in groups])
        except FieldDayError as exc:
            self._rejected(f"Group assignment for tournament {tournament_id} rejected: {exc}")
            raise

    def _apply_draw(self, tournament_id: str, members: list[list[str]]) -> TournamentResponse:
        with get_session(self.session_factory) as session:
            tournament = self._load(session, tournament_id)

            if not tournament.has_bracket:
                raise IllegalStateError(
                    f"{tournament.sport_type.value} tournaments have no group draw"
                )
            started = [m.id for m in tournament.matches if m.status != MatchStatus.SCHEDULED]
            if started:
                raise IllegalStateError(
                    f"Cannot redraw tournament {tournament_id}: matches {started} already started"
                )

            groups = [
                Group(id=gid, name=name, competitors=list(group_members))
                for (gid, name), group_members in zip(DRAW_SETTINGS.groups, members)
            ]
            schedule = generate_schedule(tournament.id, groups, tournament.start_at)

            # Old fixtures are deleted before the new ones reuse their ids
            tournament.matches.clear()
            session.flush()

            tournament.groups = groups
            for fixture in schedule:
                match = Match(
                    tournament_id=fixture.tournament_id,
                    id=fixture.match_id,
                    stage=fixture.stage,
                    group_id=fixture.group_id,
                    round=fixture.round,
                    status=MatchStatus.SCHEDULED,
                    start_time=fixture.start_time,
                    location=fixture.location,
                )
                match.team_a = fixture.team_a
                match.team_b = fixture.team_b
                match.source_a = fixture.team_a
                match.source_b = fixture.team_b
                tournament.matches.append(match)

            session.flush()
            response = TournamentResponse.model_validate(tournament)

        logger.info(
            "Drew tournament %s: %s",
            tournament_id,
            ", ".join(f"{g.id}={g.competitors}" for g in response.groups),
        )
        if self.event_bus:
            self.event_bus.groups_drawn.emit(
                tournament_id, {g.id: list(g.competitors) for g in response.groups}
            )
            self.event_bus.schedule_generated.emit(tournament_id, len(response.matches))
        return response

    # ============ Matches ============

    def get_match(self, tournament_id: str, match_id: str) -> MatchResponse:
        with get_session(self.session_factory) as session:
            tournament = self._load(session, tournament_id)
            return MatchResponse.model_validate(self._load_match(tournament, match_id))

    def list_matches(self, tournament_id: str) -> list[MatchResponse]:
        """Matches of a tournament in start-time order."""
        with get_session(self.session_factory) as session:
            tournament = self._load(session, tournament_id)
            return [MatchResponse.model_validate(m) for m in tournament.matches]

    def report_result(
        self,
        tournament_id: str,
        match_id: str,
        result: MatchResult,
        status: MatchStatus = MatchStatus.COMPLETED
    ) -> MatchResponse:
        """
        Record a live or final result and propagate it.

        Writes the result, advances the tournament status and resolves any
        knockout slots the new result decides, all in one commit.

        Raises:
            NotFoundError: Unknown tournament or match
            InvalidInputError: ``status`` is not in_progress or completed
            IllegalStateError: Match finished already or participants unknown
            InvalidResultError: Result breaks the sport's scoring rules
        """
        try:
            with get_session(self.session_factory) as session:
                tournament = self._load(session, tournament_id)
                match = self._load_match(tournament, match_id)
                ResultValidator(tournament.sport_type).validate(match, result, status)

                now = utcnow()
                previous = match.result
                started_at = result.started_at
                if started_at is None:
                    started_at = previous.started_at if previous and previous.started_at else now
                ended_at = result.ended_at
                if status == MatchStatus.COMPLETED and ended_at is None:
                    ended_at = max(now, started_at)

                match.result = MatchResult.model_validate({
                    **result.model_dump(), "started_at": started_at, "ended_at": ended_at,
                })
                match.status = status

                changes = resolve_knockout_slots(tournament.matches, tournament.groups)
                for changed_id, (team_a, team_b) in changes.items():
                    changed = tournament.get_match(changed_id)
                    changed.team_a = team_a
                    changed.team_b = team_b

                previous_status = tournament.status
                tournament.status = advance_status(previous_status, tournament.matches)

                session.flush()
                response = MatchResponse.model_validate(match)
                new_status = tournament.status
        except FieldDayError as exc:
            self._rejected(
                f"Result for match {match_id} of tournament {tournament_id} rejected: {exc}"
            )
            raise

        logger.info(
            "Match %s of tournament %s %s: %d-%d",
            match_id, tournament_id, status.value,
            result.team_a_score, result.team_b_score,
        )
        if new_status != previous_status:
            logger.info(
                "Tournament %s advanced %s -> %s",
                tournament_id, previous_status.value, new_status.value,
            )
        if changes:
            logger.info("Tournament %s resolved slots of %s", tournament_id, sorted(changes))

        if self.event_bus:
            self.event_bus.emit_match(response)
            if new_status != previous_status:
                self.event_bus.tournament_status_changed.emit(tournament_id, new_status.value)
            if changes:
                self.event_bus.emit_slots(tournament_id, changes)
        return response

    # ============ Standings ============

    def get_group_standings(self, tournament_id: str) -> dict[str, list[StandingRow]]:
        """Ranked table per group, keyed by group id in draw order."""
        with get_session(self.session_factory) as session:
            tournament = self._load(session, tournament_id)
            return {
                group.id: group_standings(tournament.matches, group)
                for group in tournament.groups
            }

    def get_season_leaderboard(self) -> list[SeasonStanding]:
        """Season points across every completed bracket tournament."""
        with get_session(self.session_factory) as session:
            tournaments = session.scalars(
                select(Tournament)
                .where(Tournament.format == TournamentFormat.LEAGUE_KNOCKOUT)
                .order_by(Tournament.start_at)
            ).all()

            competitors: list[str] = []
            for tournament in tournaments:
                for group in tournament.groups:
                    competitors.extend(c for c in group.competitors if c not in competitors)

            return compute_season_leaderboard(tournaments, competitors)

    def get_top_scorers(self, tournament_id: str) -> list[ScorerRow]:
        with get_session(self.session_factory) as session:
            return compute_top_scorers(self._load(session, tournament_id).matches)
