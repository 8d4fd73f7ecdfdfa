"""
Player roster and running-event entries.
"""

import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Float, ForeignKey, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base
from models.tournament import SportType

if TYPE_CHECKING:
    from models.tournament import Tournament


class Player(Base):
    """
    A soldier on a unit's roster.

    Players belong to one competing unit and may be registered for several
    sport branches. Runners take part in the individual-time event.
    """
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    competitor_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # Sport branches as a JSON list of SportType values
    sport_branches_json: Mapped[str] = mapped_column(Text, default="[]")
    is_runner: Mapped[bool] = mapped_column(default=False)

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

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name='{self.full_name}', unit={self.competitor_id})>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def sport_branches(self) -> list[SportType]:
        return [SportType(v) for v in json.loads(self.sport_branches_json or "[]")]

    @sport_branches.setter
    def sport_branches(self, value: list[SportType]) -> None:
        self.sport_branches_json = json.dumps([s.value for s in value])


class RunningEntry(Base):
    """
    A runner's time in an individual-time tournament.

    Entries are ranked by ascending time; equal times keep insertion order,
    which is the autoincrement id.
    """
    __tablename__ = "running_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    tournament_id: Mapped[str] = mapped_column(
        ForeignKey("tournaments.id"),
        nullable=False
    )
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    time_seconds: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    tournament: Mapped["Tournament"] = relationship(back_populates="running_entries")
    player: Mapped["Player"] = relationship()

    def __repr__(self) -> str:
        return f"<RunningEntry(id={self.id}, player={self.player_id}, time={self.time_seconds})>"
