"""Integration tests for end-to-end workflows."""

import json

import pytest

from pickem.models import Pick, ScoreRecord, SpreadRecord
from pickem.schemas import RosterEntry
from pickem.storage import PoolStore, WeekExistsError
from pickem.validators import MalformedInputError
from pickem.week_scorer import recalculate_week, score_week, upload_scores, verify_matches


@pytest.fixture
def store(tmp_path):
    """Pool with week 1 spreads, a roster and two players' picks."""
    store = PoolStore(tmp_path / 'data')
    store.save_roster([RosterEntry(name='Dana', pin='1234'), RosterEntry(name='Lee', pin='0042')])
    store.save_spreads(
        1,
        [
            SpreadRecord(date='Sat', team1='Ohio State', team2='Michigan', spread1=-7.0, spread2=7.0),
            SpreadRecord(date='Sat', team1='Alabama', team2='Auburn', spread1=-3.0, spread2=3.0),
            SpreadRecord(date='Sat', team1='Navy', team2='Army', spread1=3.5, spread2=-3.5),
        ],
    )
    store.submit_picks(1, 'Dana', '1234', [Pick(0, 'Ohio State'), Pick(1, 'Alabama'), Pick(2, 'Navy')])
    store.submit_picks(1, 'Lee', '0042', [Pick(0, 'Michigan'), Pick(1, 'Auburn'), Pick(2, 'Navy')])
    return store


@pytest.fixture
def raw_scores():
    """Week 1 finals as reported, in mixed team order and spelling."""
    return [
        ScoreRecord(team1='Michigan', team2='Ohio St', score1=10, score2=20),
        ScoreRecord(team1='Alabama', team2='Auburn', score1=17, score2=14),
        ScoreRecord(team1='Army', team2='Navy', score1=24, score2=21),
    ]


def read(store, name):
    return json.loads((store.data_dir / name).read_text())


class TestScoreWeek:
    """Tests for the full week pipeline."""

    def test_full_pipeline(self, store, raw_scores):
        """Test matching, winners, player totals and standings in one run."""
        summary = score_week(store, 1, raw_scores)

        assert summary.match_report.all_matched
        # Ohio State 20 - 7 = 13 > 10; Alabama 17 - 3 = 14 == 14 push; Navy 21 + 3.5 > 24
        assert summary.winners.declared == ['Ohio State', 'Navy']
        assert summary.winners.pushes == 1
        assert {r.player: r.total for r in summary.player_results} == {'Dana': 2, 'Lee': 1}
        assert summary.standings.totals == {'Dana': 2, 'Lee': 1}

    def test_files_written(self, store, raw_scores):
        """Test that oriented scores and result files are persisted."""
        score_week(store, 1, raw_scores)

        scores = read(store, 'scores_week_1.json')
        assert scores[0]['team1'] == 'Ohio St'
        assert scores[0]['score1'] == 20
        assert read(store, 'declaredwinners_week_1.json') == ['Ohio State', 'Navy']
        assert [d['winner'] for d in read(store, 'winners_detail_week_1.json')] == [
            'Ohio State', 'PUSH', 'Navy',
        ]
        assert read(store, 'winners_week_1.json')[0] == {
            'player': 'Dana', 'correct': ['Ohio State', 'Navy'], 'total': 2,
        }
        assert read(store, 'totals.json') == {'Dana': 2, 'Lee': 1}
        assert read(store, 'match_report_week_1.json')['matched'] == 3

    def test_unmatched_game_reported(self, store, raw_scores):
        """Test that a missing report leaves the other games scored."""
        summary = score_week(store, 1, raw_scores[:2])

        assert [g.team1 for g in summary.match_report.unmatched_spreads] == ['Navy']
        assert summary.winners.declared == ['Ohio State']
        assert summary.standings.totals == {'Dana': 1, 'Lee': 0}

    def test_missing_spreads(self, store, raw_scores):
        """Test that scoring a week without spreads fails and writes nothing."""
        with pytest.raises(FileNotFoundError, match='No spreads uploaded for week 5'):
            score_week(store, 5, raw_scores)
        assert not store.has_scores(5)

    def test_null_pin_in_picks_file(self, store, raw_scores):
        """Test that a hand-edited picks file with a null PIN still scores."""
        entries = read(store, 'picks_week_1.json')
        entries[0]['pin'] = None
        (store.data_dir / 'picks_week_1.json').write_text(json.dumps(entries))

        summary = score_week(store, 1, raw_scores)

        assert summary.standings.totals == {'Dana': 2, 'Lee': 1}

    def test_no_picks(self, tmp_path, raw_scores):
        """Test that a week nobody picked still declares winners."""
        store = PoolStore(tmp_path / 'empty')
        store.save_spreads(1, [SpreadRecord('', 'Ohio State', 'Michigan', -7.0, 7.0)])
        summary = score_week(store, 1, raw_scores)
        assert summary.winners.declared == ['Ohio State']
        assert summary.player_results == []
        assert summary.standings.totals == {}


class TestUploadAndRecalculate:
    """Tests for score uploads and recalculation."""

    def test_bad_picks_file_leaves_week_untouched(self, store, raw_scores):
        """Test that a rejected picks file writes no scores and a plain re-upload works once fixed."""
        good = read(store, 'picks_week_1.json')
        picks_path = store.data_dir / 'picks_week_1.json'
        picks_path.write_text(json.dumps(good + [{'pin': '99', 'picks': []}]))

        with pytest.raises(MalformedInputError, match='player'):
            upload_scores(store, 1, raw_scores)
        assert not store.has_scores(1)
        assert not (store.data_dir / 'declaredwinners_week_1.json').exists()
        assert store.totals() == []

        picks_path.write_text(json.dumps(good))
        summary = upload_scores(store, 1, raw_scores)
        assert summary.standings.totals == {'Dana': 2, 'Lee': 1}

    def test_upload_conflict(self, store, raw_scores):
        """Test that a second upload without force is refused."""
        upload_scores(store, 1, raw_scores)
        with pytest.raises(WeekExistsError):
            upload_scores(store, 1, raw_scores)

    def test_forced_upload_replaces_week(self, store, raw_scores):
        """Test that a corrected upload replaces the week's standings contribution."""
        upload_scores(store, 1, raw_scores)
        corrected = [
            ScoreRecord(team1='Michigan', team2='Ohio St', score1=14, score2=20),
            raw_scores[1],
            raw_scores[2],
        ]

        summary = upload_scores(store, 1, corrected, force=True)

        # 20 - 7 = 13 < 14: Michigan now covers
        assert summary.winners.declared == ['Michigan', 'Navy']
        assert summary.standings.totals == {'Dana': 1, 'Lee': 2}
        assert any(p.name.endswith('_scores_week_1.json') for p in store.backup_dir.iterdir())

    def test_recalculate_is_stable(self, store, raw_scores):
        """Test that recalculating a scored week does not change totals."""
        upload_scores(store, 1, raw_scores)

        first = recalculate_week(store, 1)
        second = recalculate_week(store, 1)

        assert first.standings.totals == second.standings.totals == {'Dana': 2, 'Lee': 1}
        assert read(store, 'totals.json') == {'Dana': 2, 'Lee': 1}

    def test_recalculate_after_late_picks(self, store, raw_scores):
        """Test that picks changed after scoring are picked up on recalculation."""
        upload_scores(store, 1, raw_scores)
        store.submit_picks(1, 'Lee', '0042', [Pick(0, 'Ohio State'), Pick(2, 'Navy')])

        summary = recalculate_week(store, 1)

        assert summary.standings.totals == {'Dana': 2, 'Lee': 2}

    def test_weeks_accumulate(self, store, raw_scores):
        """Test that a second week adds to the first."""
        upload_scores(store, 1, raw_scores)
        store.save_spreads(2, [SpreadRecord('', 'Oregon', 'Washington', -10.0, 10.0)])
        store.submit_picks(2, 'Lee', '0042', [Pick(0, 'Oregon')])

        upload_scores(store, 2, [ScoreRecord('Washington', 'Oregon', 10, 31)])

        assert store.totals() == [{'player': 'Dana', 'total': 2}, {'player': 'Lee', 'total': 2}]
        assert store.load_standings().weeks[2] == {'Lee': 1}


class TestVerifyMatches:
    """Tests for verify_matches()."""

    def test_suggestions_for_unmatched(self, store):
        """Test that mismatched names come back with suggestions."""
        store.save_scores(
            1,
            [
                ScoreRecord('Ohio State', 'Michigan', 20, 10),
                ScoreRecord('Alabama', 'Auburn', 17, 14),
                ScoreRecord('Navy Midshipmen', 'Army', 21, 24),
            ],
        )

        result = verify_matches(store, 1)

        assert result['matched'] == 2
        assert result['unmatched'] == [
            {'team1': 'Navy', 'team2': 'Army', 'suggestions': {'Navy': ['Navy Midshipmen'], 'Army': ['Army']}}
        ]
        assert result['unused_scores'][0]['team1'] == 'Navy Midshipmen'

    def test_all_matched(self, store, raw_scores):
        """Test a clean week."""
        upload_scores(store, 1, raw_scores)
        assert verify_matches(store, 1)['unmatched'] == []
