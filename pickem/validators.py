"""Validation for pool inputs: pick entries and spread records."""

import re
from typing import Optional

from .models import SpreadRecord

_INDEX_RE = re.compile(r'^-?\d+$')


class MalformedInputError(ValueError):
    """Input is not a list, or a record is missing or mistypes a required field."""

    def __init__(self, source: str, problems: list[str]):
        self.source = source
        self.problems = problems
        detail = '\n'.join(f'  - {p}' for p in problems)
        super().__init__(f'Malformed {source}:\n{detail}')


def validate_pick(game_index: object, team: object) -> Optional[str]:
    """
    Check a single pick.

    Args:
        game_index: Position of the game in the week's spread list
        team: Picked team name

    Returns:
        Reason the pick is invalid, or None if it can be scored
    """
    if isinstance(game_index, bool):
        return f'non-numeric game index {game_index!r}'
    if isinstance(game_index, int):
        index = game_index
    elif isinstance(game_index, str) and _INDEX_RE.match(game_index.strip()):
        index = int(game_index.strip())
    else:
        return f'non-numeric game index {game_index!r}'
    if index < 0:
        return f'negative game index {index}'

    if not isinstance(team, str) or not team.strip():
        return 'empty team name'

    return None


def validate_spread_record(game: SpreadRecord) -> list[str]:
    """
    Sanity-check a spread record.

    Checks:
    - Both team names present and different
    - spread2 mirrors spread1 (spread2 is never applied to scoring, so a
      line that does not mirror is worth a look)

    Args:
        game: SpreadRecord to check

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    label = f'{game.team1} vs {game.team2}'

    if not game.team1.strip() or not game.team2.strip():
        warnings.append(f'{label}: missing team name')
    elif game.team1.strip().lower() == game.team2.strip().lower():
        warnings.append(f'{label}: team plays itself')

    if game.spread2 != -game.spread1:
        warnings.append(
            f'{label}: spread2 ({game.spread2}) does not mirror spread1 ({game.spread1}); '
            'only spread1 is applied'
        )

    return warnings


def validate_week_spreads(spreads: list[SpreadRecord]) -> list[str]:
    """
    Validate all spread records for a week.

    Adds a warning for any team listed in more than one game.

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings: list[str] = []
    for game in spreads:
        warnings.extend(validate_spread_record(game))

    seen = set()
    duplicates = set()
    for game in spreads:
        for team in (game.team1, game.team2):
            if team in seen:
                duplicates.add(team)
            seen.add(team)

    if duplicates:
        warnings.append(f'Teams listed in more than one game: {", ".join(sorted(duplicates))}')

    return warnings
