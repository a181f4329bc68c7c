"""Spread-adjusted winner declaration and player scoring."""

import logging

from .constants import PUSH
from .models import (
    GameDetail,
    InvalidPick,
    OrderedResult,
    PlayerPickEntry,
    PlayerResult,
    WeekWinners,
)
from .validators import validate_pick

logger = logging.getLogger('pickem.calculator')


def declare_winner(score1: int, spread1: float, score2: int, team1: str, team2: str) -> str:
    """
    Decide the against-the-spread winner of a single game.

    Only team1's score receives the spread (team1 score + spread1 is
    compared to team2's raw score). An exact tie is a push; there is no
    tolerance on the comparison.

    Returns:
        team1, team2, or PUSH
    """
    adjusted1 = score1 + spread1
    if adjusted1 > score2:
        return team1
    if adjusted1 < score2:
        return team2
    return PUSH


def declare_winners(results: list[OrderedResult]) -> WeekWinners:
    """
    Declare winners for every matched game of the week.

    Sets ``winner`` on each OrderedResult and builds the per-game detail
    list plus the flat list of declared winner names (pushes excluded).

    Args:
        results: Ordered results from the score matcher

    Returns:
        WeekWinners with details and declared winner names
    """
    winners = WeekWinners()

    for result in results:
        winner = declare_winner(
            result.score1, result.spread1, result.score2, result.team1, result.team2
        )
        result.winner = winner

        logger.info(
            f'{result.team1} ({result.score1} + {result.spread1} = '
            f'{result.score1 + result.spread1}) vs {result.team2} ({result.score2}) '
            f'-> winner: {winner}'
        )

        winners.details.append(
            GameDetail(
                team1=result.team1,
                spread1=result.spread1,
                score1=result.score1,
                team2=result.team2,
                spread2=result.spread2,
                score2=result.score2,
                winner=winner,
            )
        )
        if winner != PUSH:
            winners.declared.append(winner)

    logger.info(
        f'Winners declared: {len(winners.declared)} games with a winner, '
        f'{winners.pushes} push(es)'
    )
    return winners


def score_player(entry: PlayerPickEntry, declared: list[str]) -> PlayerResult:
    """
    Count a player's correct picks against the declared winners.

    A pick is correct when its trimmed team name is one of the declared
    winner names. Picks with a non-numeric game index or an empty team
    are excluded and reported on the result.

    Args:
        entry: The player's submission
        declared: Declared winner names for the week

    Returns:
        PlayerResult with the correct picks and any invalid ones
    """
    winner_names = set(declared)
    result = PlayerResult(player=entry.player)

    for i, pick in enumerate(entry.picks):
        reason = validate_pick(pick.game_index, pick.team)
        if reason:
            logger.warning(f'{entry.player}: pick {i} excluded ({reason})')
            result.invalid_picks.append(
                InvalidPick(
                    player=entry.player,
                    index=i,
                    game_index=pick.game_index,
                    pick=pick.team if isinstance(pick.team, str) else '',
                    reason=reason,
                )
            )
            continue

        team = pick.team.strip()
        if team in winner_names:
            result.correct.append(team)

    return result


def score_players(entries: list[PlayerPickEntry], declared: list[str]) -> list[PlayerResult]:
    """
    Score every player's submission for the week.

    Args:
        entries: All pick submissions for the week
        declared: Declared winner names from declare_winners

    Returns:
        One PlayerResult per entry, in submission order
    """
    results = [score_player(entry, declared) for entry in entries]
    logger.info(f'Scored {len(results)} player submissions')
    return results
