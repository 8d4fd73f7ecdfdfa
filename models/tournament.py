"""
Tournament model for bracket management and persistence.

Stores tournament configuration, the group draw and the cached lifecycle
status. Matches live in their own table and are deleted with the tournament.
"""

import enum
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime, Text, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base

if TYPE_CHECKING:
    from models.match import Match
    from models.player import RunningEntry


class SportType(enum.Enum):
    """Sports played on field day."""
    BASKETBALL = "basketball"
    SOCCER = "soccer"
    VOLLEYBALL = "volleyball"
    TUG_OF_WAR = "tug_of_war"
    RUNNING = "running"


class TournamentFormat(enum.Enum):
    """Bracket tournaments for team sports, a timed roster for running."""
    LEAGUE_KNOCKOUT = "league_knockout"
    INDIVIDUAL = "individual"

    @classmethod
    def for_sport(cls, sport_type: SportType) -> "TournamentFormat":
        if sport_type == SportType.RUNNING:
            return cls.INDIVIDUAL
        return cls.LEAGUE_KNOCKOUT


class TournamentStatus(enum.Enum):
    """Tournament lifecycle states. Forward-only."""
    UPCOMING = "upcoming"
    GROUP_STAGE = "group_stage"
    KNOCKOUT_STAGE = "knockout_stage"
    COMPLETED = "completed"

    @property
    def order(self) -> int:
        return TOURNAMENT_STATUS_ORDER.index(self)


TOURNAMENT_STATUS_ORDER = [
    TournamentStatus.UPCOMING,
    TournamentStatus.GROUP_STAGE,
    TournamentStatus.KNOCKOUT_STAGE,
    TournamentStatus.COMPLETED,
]


@dataclass
class Group:
    """A group of the draw: three competitor ids, empty until drawn."""
    id: str
    name: str
    competitors: list[str] = field(default_factory=list)


class Tournament(Base):
    """
    A single-sport tournament among six competing units.

    Stages: Group Stage (two groups of three) -> Semi-finals ->
    Third place / Final. Running tournaments have no bracket, only a timed
    roster.

    ``status`` is a cached projection of match state. It is recomputed by the
    tournament service after every result report and never set directly.
    """
    __tablename__ = "tournaments"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")

    sport_type: Mapped[SportType] = mapped_column(SAEnum(SportType), nullable=False)
    format: Mapped[TournamentFormat] = mapped_column(SAEnum(TournamentFormat), nullable=False)
    status: Mapped[TournamentStatus] = mapped_column(
        SAEnum(TournamentStatus),
        default=TournamentStatus.UPCOMING
    )

    # Scheduling window
    start_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Caller identity supplied by the application layer
    created_by: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # Group draw: [{"id": "group-a", "name": "Group A", "competitors": [...]}, ...]
    groups_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    matches: Mapped[list["Match"]] = relationship(
        back_populates="tournament",
        cascade="all, delete-orphan",
        order_by="Match.start_time"
    )
    running_entries: Mapped[list["RunningEntry"]] = relationship(
        back_populates="tournament",
        cascade="all, delete-orphan",
        order_by="RunningEntry.id"
    )

    def __repr__(self) -> str:
        return f"<Tournament(id={self.id}, name='{self.name}', status={self.status.value})>"

    @property
    def groups(self) -> list[Group]:
        """Get the group draw."""
        if self.groups_json:
            return [Group(**g) for g in json.loads(self.groups_json)]
        return []

    @groups.setter
    def groups(self, value: list[Group]) -> None:
        """Replace the group draw."""
        self.groups_json = json.dumps([
            {"id": g.id, "name": g.name, "competitors": list(g.competitors)}
            for g in value
        ])

    @property
    def has_bracket(self) -> bool:
        return self.format == TournamentFormat.LEAGUE_KNOCKOUT

    def get_match(self, match_id: str) -> Optional["Match"]:
        """Find one of this tournament's matches by id."""
        return next((m for m in self.matches if m.id == match_id), None)
