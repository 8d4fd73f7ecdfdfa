"""
Unit tests for sport rules and result validation.
"""

from datetime import datetime, timedelta, timezone

import pytest

from engine.errors import IllegalStateError, InvalidInputError, InvalidResultError
from engine.rules import ResultValidator, ScoringKind, get_rules
from models.match import Match, MatchStage, MatchStatus
from models.result import MatchResult
from models.slots import CompetitorSlot, GroupPlaceSlot
from models.tournament import SportType


def make_match(stage=MatchStage.GROUP, team_a=CompetitorSlot("X"), team_b=CompetitorSlot("Y"),
               status=MatchStatus.SCHEDULED):
    match = Match(
        tournament_id="t1",
        id="g1" if stage == MatchStage.GROUP else "sf1",
        stage=stage,
        round=1,
        status=status,
        start_time=datetime(2026, 5, 14, 9, 0),
    )
    match.team_a = match.source_a = team_a
    match.team_b = match.source_b = team_b
    return match


class TestSportRules:
    """Tests for the per-sport scoring table."""

    def test_scoring_kinds(self):
        assert get_rules(SportType.BASKETBALL).kind == ScoringKind.SCORE
        assert get_rules(SportType.VOLLEYBALL).kind == ScoringKind.SCORE
        assert get_rules(SportType.SOCCER).kind == ScoringKind.GOALS
        assert get_rules(SportType.TUG_OF_WAR).kind == ScoringKind.BINARY
        assert get_rules(SportType.RUNNING).kind == ScoringKind.TIMED

    def test_only_running_has_no_bracket(self):
        assert not get_rules(SportType.RUNNING).has_bracket
        assert get_rules(SportType.TUG_OF_WAR).has_bracket

    def test_binary_sport_has_no_draws(self):
        assert not get_rules(SportType.TUG_OF_WAR).allows_draws


class TestScoreValidation:
    """Tests for score-comparison results."""

    def setup_method(self):
        self.validator = ResultValidator(SportType.BASKETBALL)

    def test_valid_win(self):
        self.validator.validate(
            make_match(), MatchResult(team_a_score=50, team_b_score=42, winner="X"),
            MatchStatus.COMPLETED,
        )

    def test_winner_must_have_higher_score(self):
        with pytest.raises(InvalidResultError):
            self.validator.validate(
                make_match(), MatchResult(team_a_score=40, team_b_score=42, winner="X"),
                MatchStatus.COMPLETED,
            )

    def test_winner_must_be_a_participant(self):
        with pytest.raises(InvalidResultError):
            self.validator.validate(
                make_match(), MatchResult(team_a_score=50, team_b_score=42, winner="Z"),
                MatchStatus.COMPLETED,
            )

    def test_unequal_final_score_needs_winner(self):
        with pytest.raises(InvalidResultError):
            self.validator.validate(
                make_match(), MatchResult(team_a_score=50, team_b_score=42),
                MatchStatus.COMPLETED,
            )

    def test_live_score_needs_no_winner(self):
        self.validator.validate(
            make_match(), MatchResult(team_a_score=10, team_b_score=4),
            MatchStatus.IN_PROGRESS,
        )

    def test_group_draw_is_legal(self):
        self.validator.validate(
            make_match(), MatchResult(team_a_score=40, team_b_score=40),
            MatchStatus.COMPLETED,
        )

    def test_knockout_draw_is_rejected(self):
        with pytest.raises(InvalidResultError):
            self.validator.validate(
                make_match(stage=MatchStage.SEMI_FINAL),
                MatchResult(team_a_score=40, team_b_score=40),
                MatchStatus.COMPLETED,
            )

    def test_soccer_group_draw_is_legal(self):
        """Assumed legal: the group table awards a point for a draw."""
        ResultValidator(SportType.SOCCER).validate(
            make_match(), MatchResult(team_a_score=1, team_b_score=1),
            MatchStatus.COMPLETED,
        )


class TestBinaryValidation:
    """Tests for binary-outcome (tug of war) results."""

    def setup_method(self):
        self.validator = ResultValidator(SportType.TUG_OF_WAR)

    def test_completed_without_winner_is_rejected(self):
        with pytest.raises(InvalidResultError):
            self.validator.validate(
                make_match(), MatchResult(team_a_score=0, team_b_score=0),
                MatchStatus.COMPLETED,
            )

    def test_completed_with_winner(self):
        self.validator.validate(
            make_match(), MatchResult(team_a_score=0, team_b_score=1, winner="Y"),
            MatchStatus.COMPLETED,
        )

    def test_scores_above_one_rejected(self):
        with pytest.raises(InvalidResultError):
            self.validator.validate(
                make_match(), MatchResult(team_a_score=2, team_b_score=0, winner="X"),
                MatchStatus.COMPLETED,
            )

    def test_live_binary_score_rejected(self):
        with pytest.raises(InvalidResultError):
            self.validator.validate(
                make_match(), MatchResult(team_a_score=1, team_b_score=0),
                MatchStatus.IN_PROGRESS,
            )

    def test_live_binary_without_score(self):
        self.validator.validate(make_match(), MatchResult(), MatchStatus.IN_PROGRESS)


class TestStateValidation:
    """Tests for match and status preconditions."""

    def setup_method(self):
        self.validator = ResultValidator(SportType.SOCCER)
        self.result = MatchResult(team_a_score=1, team_b_score=0, winner="X")

    def test_completed_match_is_final(self):
        with pytest.raises(IllegalStateError):
            self.validator.validate(
                make_match(status=MatchStatus.COMPLETED), self.result, MatchStatus.COMPLETED
            )

    def test_cancelled_match_is_final(self):
        with pytest.raises(IllegalStateError):
            self.validator.validate(
                make_match(status=MatchStatus.CANCELLED), self.result, MatchStatus.COMPLETED
            )

    def test_placeholder_slot_rejected(self):
        match = make_match(stage=MatchStage.SEMI_FINAL, team_a=GroupPlaceSlot("group-a", 1))

        with pytest.raises(IllegalStateError):
            self.validator.validate(match, self.result, MatchStatus.COMPLETED)

    def test_scheduled_is_not_a_reportable_status(self):
        with pytest.raises(InvalidInputError):
            self.validator.validate(make_match(), self.result, MatchStatus.SCHEDULED)

    def test_running_has_no_matches(self):
        with pytest.raises(IllegalStateError):
            ResultValidator(SportType.RUNNING).validate(
                make_match(), self.result, MatchStatus.COMPLETED
            )


class TestMatchResultModel:
    """Tests for result shape validation."""

    def test_negative_score_rejected(self):
        with pytest.raises(ValueError):
            MatchResult(team_a_score=-1, team_b_score=0)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            MatchResult(
                started_at=datetime(2026, 5, 14, 10, 0),
                ended_at=datetime(2026, 5, 14, 9, 0),
            )

    def test_elapsed_uses_end_time(self):
        result = MatchResult(
            started_at=datetime(2026, 5, 14, 9, 0),
            ended_at=datetime(2026, 5, 14, 9, 20),
        )

        assert result.elapsed().total_seconds() == 20 * 60

    def test_aware_times_become_naive_utc(self):
        result = MatchResult(started_at=datetime(2026, 5, 14, 11, 0, tzinfo=timezone(timedelta(hours=2))))

        assert result.started_at == datetime(2026, 5, 14, 9, 0)

    def test_elapsed_with_aware_now(self):
        result = MatchResult(started_at=datetime(2026, 5, 14, 9, 0))
        now = datetime(2026, 5, 14, 9, 15, tzinfo=timezone.utc)

        assert result.elapsed(now) == timedelta(minutes=15)

    def test_elapsed_without_start(self):
        assert MatchResult().elapsed() is None
