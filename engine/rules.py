"""
Rules Engine - Sport scoring semantics and result validation.

Each sport falls into one scoring kind:
- SCORE: points/sets compared, higher wins, draws allowed (basketball, volleyball)
- GOALS: goals compared, higher wins, draws allowed (soccer)
- BINARY: one side wins outright, scores are 1/0 (tug of war)
- TIMED: individual times, no matches at all (running)
"""

import enum
from dataclasses import dataclass

from engine.errors import IllegalStateError, InvalidInputError, InvalidResultError
from models.match import Match, MatchStatus
from models.result import MatchResult
from models.slots import is_placeholder
from models.tournament import SportType


class ScoringKind(enum.Enum):
    SCORE = "score"
    GOALS = "goals"
    BINARY = "binary"
    TIMED = "timed"


@dataclass(frozen=True)
class SportRules:
    """How results are scored for one sport."""
    sport_type: SportType
    kind: ScoringKind

    @property
    def allows_draws(self) -> bool:
        return self.kind in (ScoringKind.SCORE, ScoringKind.GOALS)

    @property
    def has_bracket(self) -> bool:
        return self.kind != ScoringKind.TIMED


SPORT_RULES: dict[SportType, SportRules] = {
    SportType.BASKETBALL: SportRules(SportType.BASKETBALL, ScoringKind.SCORE),
    SportType.VOLLEYBALL: SportRules(SportType.VOLLEYBALL, ScoringKind.SCORE),
    SportType.SOCCER: SportRules(SportType.SOCCER, ScoringKind.GOALS),
    SportType.TUG_OF_WAR: SportRules(SportType.TUG_OF_WAR, ScoringKind.BINARY),
    SportType.RUNNING: SportRules(SportType.RUNNING, ScoringKind.TIMED),
}

# Statuses a result report may move a match to
REPORTABLE_STATUSES = (MatchStatus.IN_PROGRESS, MatchStatus.COMPLETED)


def get_rules(sport_type: SportType) -> SportRules:
    return SPORT_RULES[sport_type]


class ResultValidator:
    """
    Checks a reported result against the match and the sport.

    Usage:
        ResultValidator(SportType.SOCCER).validate(match, result, MatchStatus.COMPLETED)
    """

    def __init__(self, sport_type: SportType):
        self.rules = get_rules(sport_type)

    def validate(self, match: Match, result: MatchResult, status: MatchStatus) -> None:
        """
        Raise if ``result`` may not be written to ``match`` with ``status``.

        Raises:
            InvalidInputError: Target status is not in_progress/completed
            IllegalStateError: Match already finished or participants unknown
            InvalidResultError: Result breaks the sport's scoring semantics
        """
        if status not in REPORTABLE_STATUSES:
            raise InvalidInputError(f"Cannot report a result with status {status.value}")

        if not self.rules.has_bracket:
            raise IllegalStateError(f"{self.rules.sport_type.value} has no matches to score")

        if match.status.is_terminal:
            raise IllegalStateError(f"Match {match.id} is already {match.status.value}")

        if is_placeholder(match.team_a) or is_placeholder(match.team_b):
            raise IllegalStateError(
                f"Match {match.id} participants are not known yet "
                f"({match.team_a_label} vs {match.team_b_label})"
            )

        self._check_winner(match, result)

        if self.rules.kind == ScoringKind.BINARY:
            self._check_binary(match, result, status)
        elif status == MatchStatus.COMPLETED:
            self._check_completed_score(match, result)

    def _check_winner(self, match: Match, result: MatchResult) -> None:
        """A named winner must be a participant with the strictly higher score."""
        if result.winner is None:
            return

        if result.winner == match.team_a_id:
            leading = result.team_a_score > result.team_b_score
        elif result.winner == match.team_b_id:
            leading = result.team_b_score > result.team_a_score
        else:
            raise InvalidResultError(
                f"Winner {result.winner} is not playing in match {match.id}"
            )

        if not leading:
            raise InvalidResultError(
                f"Winner {result.winner} does not have the higher score "
                f"({result.team_a_score}-{result.team_b_score})"
            )

    def _check_completed_score(self, match: Match, result: MatchResult) -> None:
        if result.team_a_score == result.team_b_score:
            if not self.rules.allows_draws:
                raise InvalidResultError(f"{self.rules.sport_type.value} cannot end in a draw")
            if match.stage.is_knockout:
                raise InvalidResultError(
                    f"Knockout match {match.id} needs a winner"
                )
        elif result.winner is None:
            raise InvalidResultError(
                f"Match {match.id} ended {result.team_a_score}-{result.team_b_score} "
                f"but no winner was given"
            )

    def _check_binary(self, match: Match, result: MatchResult, status: MatchStatus) -> None:
        if result.team_a_score > 1 or result.team_b_score > 1:
            raise InvalidResultError(
                f"{self.rules.sport_type.value} scores are 0 or 1, "
                f"got {result.team_a_score}-{result.team_b_score}"
            )

        if status == MatchStatus.COMPLETED:
            if result.winner is None:
                raise InvalidResultError(
                    f"{self.rules.sport_type.value} match {match.id} needs a winner"
                )
        elif result.team_a_score or result.team_b_score:
            # A live tug of war has no partial score
            raise InvalidResultError("A binary result can only be scored on completion")
