"""Unit tests for matching score reports to spread records."""

import pytest

from pickem.matcher import match_scores, orient_score, suggest_matches
from pickem.models import ScoreRecord, SpreadRecord


@pytest.fixture
def ohio_michigan():
    return SpreadRecord(date='Sat 11/29/2025 11:00 AM', team1='Ohio State', team2='Michigan',
                        spread1=-7.0, spread2=7.0)


class TestOrientScore:
    """Tests for orient_score()."""

    def test_same_order_unchanged(self, ohio_michigan):
        """Test that a report already in spread order is kept as is."""
        score = ScoreRecord(team1='Ohio St.', team2='Michigan', score1=20, score2=7)
        assert orient_score(ohio_michigan, score) is score

    def test_reversed_order_swapped(self, ohio_michigan):
        """Test that a reversed report is swapped along with its scores."""
        score = ScoreRecord(team1='Michigan', team2='Ohio St', score1=7, score2=20)
        oriented = orient_score(ohio_michigan, score)
        assert oriented.team1 == 'Ohio St'
        assert oriented.score1 == 20
        assert oriented.team2 == 'Michigan'
        assert oriented.score2 == 7


class TestMatchScores:
    """Tests for match_scores()."""

    def test_reorients_reversed_report(self, ohio_michigan):
        """Test that a reversed report yields scores in the spread's order."""
        scores = [ScoreRecord(team1='Michigan', team2='Ohio St', score1=7, score2=20)]

        report = match_scores([ohio_michigan], scores)

        assert len(report.ordered) == 1
        result = report.ordered[0]
        assert result.team1 == 'Ohio State'
        assert result.team2 == 'Michigan'
        assert result.score1 == 20
        assert result.score2 == 7
        assert result.winner is None
        assert report.all_matched
        assert report.unused_scores == []

    def test_order_insensitive(self, ohio_michigan):
        """Test that both orders of the same report give the same result."""
        forward = [ScoreRecord(team1='Ohio State', team2='Michigan', score1=20, score2=7)]
        backward = [forward[0].swapped()]

        a = match_scores([ohio_michigan], forward).ordered[0]
        b = match_scores([ohio_michigan], backward).ordered[0]
        assert (a.score1, a.score2) == (b.score1, b.score2) == (20, 7)

    def test_unmatched_game_does_not_abort(self, ohio_michigan):
        """Test that a game with no report is collected and the rest still match."""
        other = SpreadRecord(date='', team1='Alabama', team2='Auburn', spread1=-10.5, spread2=10.5)
        scores = [ScoreRecord(team1='Auburn', team2='Alabama', score1=14, score2=28)]

        report = match_scores([ohio_michigan, other], scores)

        assert report.unmatched_spreads == [ohio_michigan]
        assert len(report.ordered) == 1
        assert report.ordered[0].team1 == 'Alabama'
        assert report.ordered[0].score1 == 28
        assert not report.all_matched

    def test_unused_scores_reported(self, ohio_michigan):
        """Test that reports matching no game are returned as unused."""
        extra = ScoreRecord(team1='Oregon', team2='Washington', score1=31, score2=10)
        scores = [
            ScoreRecord(team1='Ohio State', team2='Michigan', score1=20, score2=7),
            extra,
        ]

        report = match_scores([ohio_michigan], scores)

        assert report.unused_scores == [extra]

    def test_first_report_wins(self, ohio_michigan):
        """Test that with duplicate reports the first in input order is used."""
        first = ScoreRecord(team1='Ohio State', team2='Michigan', score1=20, score2=7)
        second = ScoreRecord(team1='Michigan', team2='Ohio State', score1=10, score2=30)

        report = match_scores([ohio_michigan], [first, second])

        assert report.ordered[0].score1 == 20
        assert report.unused_scores == [second]

    def test_report_consumed_once(self, ohio_michigan):
        """Test that one report cannot satisfy two identical games."""
        twin = SpreadRecord(date='', team1='Michigan', team2='Ohio State', spread1=3.0, spread2=-3.0)
        scores = [ScoreRecord(team1='Ohio State', team2='Michigan', score1=20, score2=7)]

        report = match_scores([ohio_michigan, twin], scores)

        assert len(report.ordered) == 1
        assert report.unmatched_spreads == [twin]

    def test_empty_inputs(self):
        """Test that empty spreads and scores give an empty report."""
        report = match_scores([], [])
        assert report.ordered == []
        assert report.unmatched_spreads == []
        assert report.unused_scores == []

    def test_report_to_dict(self, ohio_michigan):
        """Test the persisted shape of a match report."""
        report = match_scores([ohio_michigan], [])
        data = report.to_dict()
        assert data['matched'] == 0
        assert data['unmatched_spreads'][0]['team1'] == 'Ohio State'
        assert data['unused_scores'] == []


class TestSuggestMatches:
    """Tests for suggest_matches()."""

    def test_normalized_and_substring_suggestions(self):
        """Test that both normalized-equal and containing names are suggested."""
        scores = [
            ScoreRecord(team1='Miami (FL)', team2='Ohio St.', score1=1, score2=2),
            ScoreRecord(team1='Miami (OH)', team2='Toledo', score1=3, score2=4),
        ]
        assert suggest_matches('Miami', scores) == ['Miami (FL)', 'Miami (OH)']
        assert suggest_matches('Ohio State', scores) == ['Ohio St.']

    def test_no_suggestions(self):
        """Test that unrelated names give no suggestions."""
        scores = [ScoreRecord(team1='Oregon', team2='Washington', score1=1, score2=2)]
        assert suggest_matches('Alabama', scores) == []
