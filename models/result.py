"""
Match result value objects.

A result is reported repeatedly while a match is live and once more when it
completes. Sport-specific checks (draws, binary outcomes) need the match and
sport, so they live in ``engine.rules``; these models only validate shape.
"""

import enum
from datetime import datetime, timezone, timedelta
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Result timestamps are stored as naive UTC, like every other column."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Side(enum.Enum):
    """Which side of a match an event belongs to."""
    TEAM_A = "team_a"
    TEAM_B = "team_b"


class ScoringEvent(BaseModel):
    """One goal/basket, credited to ``side`` unless it is an own goal."""
    actor: str = Field(..., min_length=1, max_length=200)
    side: Side
    own_goal: bool = False
    minute: Optional[int] = Field(None, ge=0)

    @field_validator("actor")
    @classmethod
    def actor_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Actor cannot be empty")
        return v.strip()

    @property
    def credited_side(self) -> Side:
        """The side whose score this event increases."""
        if not self.own_goal:
            return self.side
        return Side.TEAM_B if self.side == Side.TEAM_A else Side.TEAM_A


class ResultDetails(BaseModel):
    """Optional sport-specific breakdown."""
    periods: Optional[list[int]] = None      # Basketball/soccer period scores
    sets: Optional[list[list[int]]] = None   # Volleyball set scores
    time: Optional[float] = None             # Seconds


class MatchResult(BaseModel):
    """
    Score of a match as reported by the scorekeeper.

    ``winner`` is a competitor id, or None for a draw or a live score.
    """
    team_a_score: int = Field(0, ge=0)
    team_b_score: int = Field(0, ge=0)
    winner: Optional[str] = None
    scorers: list[ScoringEvent] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    details: Optional[ResultDetails] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("started_at", "ended_at")
    @classmethod
    def naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(v)

    @model_validator(mode="after")
    def ended_after_started(self) -> "MatchResult":
        if self.started_at and self.ended_at and self.ended_at < self.started_at:
            raise ValueError("ended_at cannot be before started_at")
        return self

    def elapsed(self, now: Optional[datetime] = None) -> Optional[timedelta]:
        """
        Time on the clock for display.

        Measured up to ``ended_at`` when the match is over, else up to
        ``now``. None if the match never started.
        """
        if self.started_at is None:
            return None
        end = self.ended_at or as_naive_utc(now) or utcnow()
        return end - self.started_at
