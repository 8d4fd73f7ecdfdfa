"""
Match model for group-stage and knockout fixtures.
"""

import enum
import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Integer, ForeignKey, DateTime, Text, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base
from models.result import MatchResult
from models.slots import Slot, competitor_of, slot_from_dict, slot_to_dict

if TYPE_CHECKING:
    from models.tournament import Tournament


class MatchStage(enum.Enum):
    """Bracket stage of a match."""
    GROUP = "group"
    SEMI_FINAL = "semi_final"
    THIRD_PLACE = "third_place"
    FINAL = "final"

    @property
    def is_knockout(self) -> bool:
        return self != MatchStage.GROUP


class MatchStatus(enum.Enum):
    """Match lifecycle states."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (MatchStatus.COMPLETED, MatchStatus.CANCELLED)


class Match(Base):
    """
    A fixture between two competitor slots.

    Match ids are unique within a tournament ("g1".."g6", "sf1", "sf2",
    "3rd", "final"). ``source_a``/``source_b`` keep the slots the match was
    generated with; ``team_a``/``team_b`` hold the current, possibly
    resolved, slots.
    """
    __tablename__ = "matches"

    tournament_id: Mapped[str] = mapped_column(
        ForeignKey("tournaments.id"),
        primary_key=True
    )
    id: Mapped[str] = mapped_column(String(20), primary_key=True)

    stage: Mapped[MatchStage] = mapped_column(SAEnum(MatchStage), nullable=False)
    group_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    round: Mapped[int] = mapped_column(Integer, default=1)

    status: Mapped[MatchStatus] = mapped_column(
        SAEnum(MatchStatus),
        default=MatchStatus.SCHEDULED
    )

    # Slots (JSON, see models.slots)
    team_a_json: Mapped[str] = mapped_column(Text, nullable=False)
    team_b_json: Mapped[str] = mapped_column(Text, nullable=False)
    source_a_json: Mapped[str] = mapped_column(Text, nullable=False)
    source_b_json: Mapped[str] = mapped_column(Text, nullable=False)

    # Timing and venue
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Latest reported result (JSON, see models.result)
    result_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

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

    # Relationships
    tournament: Mapped["Tournament"] = relationship(back_populates="matches")

    def __repr__(self) -> str:
        return (
            f"<Match(tournament={self.tournament_id}, id={self.id}, "
            f"stage={self.stage.value}, status={self.status.value})>"
        )

    # JSON property helpers
    @property
    def team_a(self) -> Slot:
        return slot_from_dict(json.loads(self.team_a_json))

    @team_a.setter
    def team_a(self, value: Slot) -> None:
        self.team_a_json = json.dumps(slot_to_dict(value))

    @property
    def team_b(self) -> Slot:
        return slot_from_dict(json.loads(self.team_b_json))

    @team_b.setter
    def team_b(self, value: Slot) -> None:
        self.team_b_json = json.dumps(slot_to_dict(value))

    @property
    def source_a(self) -> Slot:
        return slot_from_dict(json.loads(self.source_a_json))

    @source_a.setter
    def source_a(self, value: Slot) -> None:
        self.source_a_json = json.dumps(slot_to_dict(value))

    @property
    def source_b(self) -> Slot:
        return slot_from_dict(json.loads(self.source_b_json))

    @source_b.setter
    def source_b(self, value: Slot) -> None:
        self.source_b_json = json.dumps(slot_to_dict(value))

    @property
    def result(self) -> Optional[MatchResult]:
        if self.result_json:
            return MatchResult.model_validate_json(self.result_json)
        return None

    @result.setter
    def result(self, value: Optional[MatchResult]) -> None:
        self.result_json = value.model_dump_json() if value is not None else None

    # Convenience accessors
    @property
    def team_a_id(self) -> Optional[str]:
        """Competitor on side A, None while unresolved."""
        return competitor_of(self.team_a)

    @property
    def team_b_id(self) -> Optional[str]:
        """Competitor on side B, None while unresolved."""
        return competitor_of(self.team_b)

    @property
    def team_a_label(self) -> str:
        return self.team_a.label

    @property
    def team_b_label(self) -> str:
        return self.team_b.label

    @property
    def is_complete(self) -> bool:
        return self.status == MatchStatus.COMPLETED
