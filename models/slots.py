"""
Team slots.

A match side is either a concrete competitor or a placeholder that names the
outcome it depends on: a group placing ("winner of group A") or a knockout
result ("loser of semifinal 2"). Slots are frozen dataclasses combined into
the ``Slot`` union; ``slot_to_dict``/``slot_from_dict`` convert them to the
JSON form stored on match rows.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Union


class Outcome(enum.Enum):
    """Which side of a finished knockout match a placeholder refers to."""
    WINNER = "winner"
    LOSER = "loser"


@dataclass(frozen=True)
class CompetitorSlot:
    """A resolved side: one concrete competitor."""
    competitor_id: str

    @property
    def label(self) -> str:
        return self.competitor_id


@dataclass(frozen=True)
class GroupPlaceSlot:
    """The competitor finishing at ``rank`` (1-based) in a group."""
    group_id: str
    rank: int

    @property
    def label(self) -> str:
        return f"rank {self.rank} of {self.group_id}"


@dataclass(frozen=True)
class MatchOutcomeSlot:
    """The winner or loser of another match in the same tournament."""
    match_id: str
    outcome: Outcome

    @property
    def label(self) -> str:
        return f"{self.outcome.value} of {self.match_id}"


Slot = Union[CompetitorSlot, GroupPlaceSlot, MatchOutcomeSlot]


def competitor_of(slot: Optional[Slot]) -> Optional[str]:
    """Return the competitor id of a resolved slot, None for placeholders."""
    if isinstance(slot, CompetitorSlot):
        return slot.competitor_id
    return None


def is_placeholder(slot: Optional[Slot]) -> bool:
    return not isinstance(slot, CompetitorSlot)


def slot_to_dict(slot: Slot) -> dict:
    """Serialize a slot for storage."""
    if isinstance(slot, CompetitorSlot):
        return {"kind": "competitor", "competitor_id": slot.competitor_id}
    if isinstance(slot, GroupPlaceSlot):
        return {"kind": "group_place", "group_id": slot.group_id, "rank": slot.rank}
    if isinstance(slot, MatchOutcomeSlot):
        return {
            "kind": "match_outcome",
            "match_id": slot.match_id,
            "outcome": slot.outcome.value,
        }
    raise TypeError(f"Not a slot: {slot!r}")


def slot_from_dict(data: dict) -> Slot:
    """Rebuild a slot from its stored form."""
    kind = data.get("kind")
    if kind == "competitor":
        return CompetitorSlot(competitor_id=data["competitor_id"])
    if kind == "group_place":
        return GroupPlaceSlot(group_id=data["group_id"], rank=int(data["rank"]))
    if kind == "match_outcome":
        return MatchOutcomeSlot(
            match_id=data["match_id"],
            outcome=Outcome(data["outcome"]),
        )
    raise ValueError(f"Unknown slot kind: {kind!r}")
