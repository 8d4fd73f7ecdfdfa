"""
Pydantic schemas for data validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models.match import MatchStage, MatchStatus
from models.result import MatchResult
from models.tournament import SportType, TournamentFormat, TournamentStatus


# ============ Tournament Schemas ============

class TournamentCreate(BaseModel):
    """Schema for creating a new tournament."""
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    sport_type: SportType
    start_at: datetime
    end_at: datetime
    created_by: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def window_is_ordered(self) -> "TournamentCreate":
        if self.end_at < self.start_at:
            raise ValueError("end_at cannot be before start_at")
        return self


class GroupResponse(BaseModel):
    """Schema for a group of the draw."""
    id: str
    name: str
    competitors: list[str]

    class Config:
        from_attributes = True


class MatchResponse(BaseModel):
    """Schema for match response."""
    id: str
    tournament_id: str
    stage: MatchStage
    group_id: Optional[str]
    round: int
    team_a_id: Optional[str]
    team_b_id: Optional[str]
    team_a_label: str
    team_b_label: str
    start_time: datetime
    status: MatchStatus
    location: Optional[str]
    result: Optional[MatchResult]

    class Config:
        from_attributes = True

    @property
    def is_complete(self) -> bool:
        return self.status == MatchStatus.COMPLETED


class TournamentResponse(BaseModel):
    """Schema for tournament response, matches ordered by start time."""
    id: str
    name: str
    description: str
    sport_type: SportType
    format: TournamentFormat
    status: TournamentStatus
    start_at: datetime
    end_at: datetime
    created_by: Optional[str]
    groups: list[GroupResponse]
    matches: list[MatchResponse]

    class Config:
        from_attributes = True

    def get_match(self, match_id: str) -> Optional[MatchResponse]:
        return next((m for m in self.matches if m.id == match_id), None)


# ============ Player Schemas ============

class PlayerCreate(BaseModel):
    """Schema for adding a player to a unit's roster."""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    competitor_id: str = Field(..., min_length=1, max_length=50)
    sport_branches: list[SportType] = Field(default_factory=list)
    is_runner: bool = False

    @field_validator("first_name", "last_name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class PlayerResponse(BaseModel):
    """Schema for player response."""
    id: int
    first_name: str
    last_name: str
    full_name: str
    competitor_id: str
    sport_branches: list[SportType]
    is_runner: bool

    class Config:
        from_attributes = True


# ============ Running Schemas ============

class RunningResult(BaseModel):
    """One ranked line of an individual-time tournament."""
    rank: int
    player_id: int
    player_name: str
    competitor_id: str
    time_seconds: float
