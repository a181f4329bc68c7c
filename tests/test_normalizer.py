"""Unit tests for team name normalization."""

import pytest

from pickem.normalizer import normalize, same_team


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize(
        'name,expected',
        [
            ('Ohio State', 'ohiost'),
            ('Ohio St.', 'ohiost'),
            ('OHIO STATE', 'ohiost'),
            ('Texas A&M', 'texasam'),
            ('Miami (FL)', 'miamifl'),
            ('San José State', 'sanjosst'),
            ('49ers', '49ers'),
        ],
    )
    def test_examples(self, name, expected):
        """Test the canonical key for common spellings."""
        assert normalize(name) == expected

    def test_empty(self):
        """Test that empty and missing names give an empty key."""
        assert normalize('') == ''
        assert normalize(None) == ''

    def test_state_only_at_end(self):
        """Test that 'state' is only collapsed as a suffix."""
        assert normalize('Statesboro') == 'statesboro'
        assert normalize('Penn State') == 'pennst'

    def test_idempotent(self):
        """Test that normalizing twice changes nothing."""
        for name in ('Ohio State', 'Texas A&M', 'Mississippi St.', 'Boise State'):
            once = normalize(name)
            assert normalize(once) == once


class TestSameTeam:
    """Tests for same_team()."""

    def test_spelling_variants(self):
        """Test that abbreviation and punctuation differences still match."""
        assert same_team('Ohio State', 'Ohio St.')
        assert same_team('texas a&m', 'Texas A & M')

    def test_different_teams(self):
        """Test that distinct teams do not match."""
        assert not same_team('Ohio State', 'Ohio')
        assert not same_team('Michigan', 'Michigan State')
