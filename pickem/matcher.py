"""Match score reports to the week's spread records."""

import logging

from .models import MatchReport, OrderedResult, ScoreRecord, SpreadRecord
from .normalizer import normalize, same_team

logger = logging.getLogger('pickem.matcher')


def _pair_matches(score: ScoreRecord, n1: str, n2: str) -> bool:
    """Check if a score report covers the same two teams, in either order."""
    s1 = normalize(score.team1)
    s2 = normalize(score.team2)
    return (s1 == n1 and s2 == n2) or (s1 == n2 and s2 == n1)


def orient_score(spread: SpreadRecord, score: ScoreRecord) -> ScoreRecord:
    """
    Return the score report oriented to the spread record's team order.

    The report is swapped when its team1 does not normalize to the
    spread's team1.
    """
    if same_team(score.team1, spread.team1):
        return score
    return score.swapped()


def match_scores(spreads: list[SpreadRecord], scores: list[ScoreRecord]) -> MatchReport:
    """
    Pair every spread record with its score report.

    For each spread record, in input order, the first score report whose
    two teams normalize to the spread's two teams (in either order) is
    used and consumed. When several reports could match, input order
    decides. Spread records with no report are collected as unmatched and
    the rest of the batch still runs. Reports never consumed are returned
    as unused.

    Args:
        spreads: The week's spread records (canonical orientation)
        scores: Score reports from any source, in any team order

    Returns:
        MatchReport with ordered results (winner not yet set), unmatched
        spread records and unused score reports
    """
    report = MatchReport()
    consumed: set[int] = set()

    for game in spreads:
        n1 = normalize(game.team1)
        n2 = normalize(game.team2)

        match_index = None
        for i, score in enumerate(scores):
            if i in consumed:
                continue
            if _pair_matches(score, n1, n2):
                match_index = i
                break

        if match_index is None:
            logger.warning(f'Could not match score for game: {game.team1} vs {game.team2}')
            report.unmatched_spreads.append(game)
            continue

        consumed.add(match_index)
        oriented = orient_score(game, scores[match_index])
        report.ordered.append(
            OrderedResult(
                spread=game,
                score1=oriented.score1,
                score2=oriented.score2,
                score_record=oriented,
            )
        )

    report.unused_scores = [s for i, s in enumerate(scores) if i not in consumed]

    logger.info(
        f'Matched {len(report.ordered)} of {len(spreads)} games '
        f'({len(report.unused_scores)} score reports unused)'
    )
    return report


def suggest_matches(team: str, scores: list[ScoreRecord]) -> list[str]:
    """
    Suggest score-side team names that may refer to a spread team.

    A name is suggested when it normalizes to the same key, or when it
    contains the spread team name (case-insensitive).

    Args:
        team: Team name from the spread record
        scores: Score reports to search

    Returns:
        Distinct candidate names in the order they appear
    """
    key = normalize(team)
    lowered = team.lower()
    suggestions: list[str] = []
    for score in scores:
        for name in (score.team1, score.team2):
            if name in suggestions:
                continue
            if normalize(name) == key or lowered in name.lower():
                suggestions.append(name)
    return suggestions
