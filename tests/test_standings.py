"""Unit tests for cumulative standings."""

from pickem.models import PlayerResult, Standings
from pickem.standings import (
    accumulate,
    replay_standings,
    totals_table,
    week_contribution,
)


def results(**totals):
    """Build PlayerResults with the given number of correct picks each."""
    return [PlayerResult(player=name, correct=['x'] * n) for name, n in totals.items()]


class TestAccumulate:
    """Tests for accumulate()."""

    def test_first_week(self):
        """Test folding a week into empty standings."""
        standings = accumulate(Standings(), 1, results(Dana=3, Lee=1))
        assert standings.totals == {'Dana': 3, 'Lee': 1}
        assert standings.weeks == {1: {'Dana': 3, 'Lee': 1}}

    def test_weeks_add_up(self):
        """Test that different weeks sum per player."""
        standings = accumulate(Standings(), 1, results(Dana=3, Lee=1))
        standings = accumulate(standings, 2, results(Dana=2, Sam=4))
        assert standings.totals == {'Dana': 5, 'Lee': 1, 'Sam': 4}

    def test_rerunning_a_week_does_not_double_count(self):
        """Test that applying the same week twice leaves totals unchanged."""
        week1 = results(Dana=3, Lee=1)
        once = accumulate(Standings(), 1, week1)
        twice = accumulate(once, 1, week1)
        assert twice.totals == once.totals == {'Dana': 3, 'Lee': 1}

    def test_rerun_replaces_contribution(self):
        """Test that a corrected week replaces the earlier numbers."""
        standings = accumulate(Standings(), 1, results(Dana=3))
        standings = accumulate(standings, 2, results(Dana=1))
        standings = accumulate(standings, 1, results(Dana=5))
        assert standings.totals == {'Dana': 6}
        assert standings.weeks[1] == {'Dana': 5}

    def test_prior_not_modified(self):
        """Test that accumulate returns new standings."""
        prior = accumulate(Standings(), 1, results(Dana=3))
        accumulate(prior, 1, results(Dana=0))
        assert prior.totals == {'Dana': 3}

    def test_player_name_trimmed(self):
        """Test that names differing only by whitespace share one total."""
        standings = accumulate(Standings(), 1, results(**{'Dana ': 2}))
        standings = accumulate(standings, 2, results(Dana=1))
        assert standings.totals == {'Dana': 3}

    def test_zero_score_player_listed(self):
        """Test that a player with no correct picks still appears."""
        standings = accumulate(Standings(), 1, results(Dana=0))
        assert standings.totals == {'Dana': 0}


class TestWeekContribution:
    """Tests for week_contribution()."""

    def test_duplicate_entries_summed(self):
        """Test that two results for the same trimmed name are added."""
        contribution = week_contribution(
            [PlayerResult('Dana', ['a']), PlayerResult(' Dana', ['b', 'c'])]
        )
        assert contribution == {'Dana': 3}


class TestReplay:
    """Tests for replay_standings()."""

    def test_replay_matches_incremental(self):
        """Test that replaying all weeks equals folding them one by one."""
        by_week = {2: results(Dana=1), 1: results(Dana=3, Lee=2)}
        incremental = accumulate(accumulate(Standings(), 1, by_week[1]), 2, by_week[2])
        assert replay_standings(by_week).totals == incremental.totals


class TestTotalsTable:
    """Tests for totals_table()."""

    def test_sorted_by_total_then_name(self):
        """Test descending totals with case-insensitive name tiebreak."""
        standings = Standings(totals={'lee': 4, 'Dana': 4, 'Sam': 7})
        assert totals_table(standings) == [
            {'player': 'Sam', 'total': 7},
            {'player': 'Dana', 'total': 4},
            {'player': 'lee', 'total': 4},
        ]

    def test_to_dict_uses_string_weeks(self):
        """Test that persisted week keys are strings."""
        standings = accumulate(Standings(), 3, results(Dana=1))
        assert standings.to_dict() == {'weeks': {'3': {'Dana': 1}}, 'totals': {'Dana': 1}}
