"""Weekly scoring pipeline.

spreads + raw scores -> match -> declare winners -> score players -> standings
"""

import logging

from .calculator import declare_winners, score_players
from .matcher import match_scores, suggest_matches
from .models import ScoreRecord, WeekSummary
from .standings import accumulate
from .storage import PoolStore, WeekExistsError
from .validators import validate_week_spreads

logger = logging.getLogger('pickem.week_scorer')


def score_week(
    store: PoolStore,
    week: int,
    raw_scores: list[ScoreRecord],
    persist_scores: bool = True,
) -> WeekSummary:
    """
    Run the full pipeline for one week.

    The week's spreads must already be stored. Spreads and picks are loaded
    and validated before anything is written, so a rejected file leaves the
    week untouched. Scores are then oriented to the spread records and
    (optionally) persisted, winners are declared, the week's picks are
    scored and the week is folded into the standings. Running it again for
    the same week replaces that week's contribution.

    Args:
        store: Pool storage
        week: Week number
        raw_scores: Score reports in any team order
        persist_scores: Write the oriented scores to scores_week_N.json

    Returns:
        WeekSummary with match report, winners, player results and standings

    Raises:
        FileNotFoundError: If the week has no spreads
        MalformedInputError: If the stored spreads or picks are invalid
    """
    with store.week_lock(week):
        if not store.has_spreads(week):
            raise FileNotFoundError(f'No spreads uploaded for week {week}')
        spreads = store.load_spreads(week)
        entries = store.load_picks(week)
        for warning in validate_week_spreads(spreads):
            logger.warning(f'Week {week}: {warning}')

        report = match_scores(spreads, raw_scores)
        winners = declare_winners(report.ordered)
        player_results = score_players(entries, winners.declared)

        if persist_scores:
            store.save_scores(week, [r.score_record for r in report.ordered])
            logger.info(f'scores_week_{week}.json saved with corrected order')
        store.save_week_results(week, report, winners, player_results)

    with store.standings_lock():
        standings = accumulate(store.load_standings(), week, player_results)
        store.save_standings(standings)

    return WeekSummary(
        week=week,
        match_report=report,
        winners=winners,
        player_results=player_results,
        standings=standings,
    )


def upload_scores(
    store: PoolStore,
    week: int,
    raw_scores: list[ScoreRecord],
    force: bool = False,
) -> WeekSummary:
    """
    Accept a score upload for a week and score it.

    Raises:
        WeekExistsError: If scores exist for the week and force is False
        FileNotFoundError: If the week has no spreads
    """
    if store.has_scores(week) and not force:
        raise WeekExistsError('scores', week)
    return score_week(store, week, raw_scores)


def recalculate_week(store: PoolStore, week: int) -> WeekSummary:
    """
    Re-run winners, player results and standings from the stored files.

    Raises:
        FileNotFoundError: If the week has no spreads or no scores
    """
    return score_week(store, week, store.load_scores(week), persist_scores=False)


def verify_matches(store: PoolStore, week: int) -> dict:
    """
    Check the stored spreads against the stored scores without writing anything.

    Returns:
        Dict with 'matched', 'unmatched' (each with per-team suggestions)
        and 'unused_scores'
    """
    scores = store.load_scores(week)
    report = match_scores(store.load_spreads(week), scores)

    unmatched = []
    for game in report.unmatched_spreads:
        unmatched.append(
            {
                'team1': game.team1,
                'team2': game.team2,
                'suggestions': {
                    game.team1: suggest_matches(game.team1, scores),
                    game.team2: suggest_matches(game.team2, scores),
                },
            }
        )

    return {
        'matched': len(report.ordered),
        'unmatched': unmatched,
        'unused_scores': [s.to_dict() for s in report.unused_scores],
    }
