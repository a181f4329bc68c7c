"""Cumulative standings across weeks.

Standings keep each week's per-player contribution, so folding a week in
is idempotent: applying the same week again replaces that week's earlier
contribution instead of adding to it.
"""

import logging
from collections import defaultdict

from .models import PlayerResult, Standings

logger = logging.getLogger('pickem.standings')


def week_contribution(results: list[PlayerResult]) -> dict[str, int]:
    """Map trimmed player name -> correct picks for one week."""
    contribution: dict[str, int] = defaultdict(int)
    for result in results:
        contribution[result.player.strip()] += result.total
    return dict(contribution)


def _sum_weeks(weeks: dict[int, dict[str, int]]) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for week in sorted(weeks):
        for player, count in weeks[week].items():
            totals[player] += count
    return dict(totals)


def accumulate(prior: Standings, week: int, results: list[PlayerResult]) -> Standings:
    """
    Fold one week's results into the standings.

    Pure: ``prior`` is not modified. If ``week`` was already folded in,
    its previous contribution is replaced.

    Args:
        prior: Standings before this week
        week: Week number the results belong to
        results: Player results for the week

    Returns:
        New Standings with totals recomputed from the per-week contributions
    """
    weeks = {w: dict(contrib) for w, contrib in prior.weeks.items()}
    if week in weeks:
        logger.info(f'Week {week} already in standings, replacing its contribution')
    weeks[week] = week_contribution(results)

    standings = Standings(weeks=weeks, totals=_sum_weeks(weeks))
    logger.info(f'Standings updated through week {week}: {len(standings.totals)} players')
    return standings


def replay_standings(results_by_week: dict[int, list[PlayerResult]]) -> Standings:
    """
    Rebuild standings from scratch by replaying every week's results.

    Args:
        results_by_week: Week number -> player results for that week

    Returns:
        Standings equal to folding each week in once, in week order
    """
    standings = Standings()
    for week in sorted(results_by_week):
        standings = accumulate(standings, week, results_by_week[week])
    return standings


def totals_table(standings: Standings) -> list[dict]:
    """
    Standings as display rows.

    Returns:
        List of {'player', 'total'} sorted by total (desc), then name
    """
    rows = [{'player': player, 'total': total} for player, total in standings.totals.items()]
    return sorted(rows, key=lambda r: (-r['total'], r['player'].lower()))
