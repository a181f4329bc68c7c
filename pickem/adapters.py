"""Input boundary: turn raw JSON lists and vendor payloads into pool records.

Everything that knows about alternate key spellings, container wrappers or
string-typed numbers lives here, so the matcher and calculator only ever
see SpreadRecord, ScoreRecord and PlayerPickEntry.
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ValidationError

from .constants import (
    VENDOR_AWAY_SCORE_KEYS,
    VENDOR_AWAY_TEAM_KEYS,
    VENDOR_DATE_FORMAT,
    VENDOR_HOME_SCORE_KEYS,
    VENDOR_HOME_TEAM_KEYS,
    VENDOR_ID_KEYS,
    VENDOR_MATCH_CONTAINERS,
    VENDOR_RESULT_CONTAINERS,
    VENDOR_START_TIME_KEYS,
    VENDOR_STATUS_KEYS,
)
from .models import Pick, PlayerPickEntry, ScoreRecord, SpreadRecord
from .schemas import PickEntryRow, PickRow, RosterEntry, ScoreRow, SpreadRow
from .validators import MalformedInputError

logger = logging.getLogger('pickem.adapters')

_YMD_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def _validate_rows(data: Any, schema: type[BaseModel], source: str) -> list:
    """Validate every row of a list against a schema, collecting all problems."""
    if not isinstance(data, list):
        raise MalformedInputError(source, [f'expected a list, got {type(data).__name__}'])

    rows = []
    problems = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            problems.append(f'record {i}: expected an object, got {type(item).__name__}')
            continue
        try:
            rows.append(schema(**item))
        except ValidationError as e:
            for err in e.errors():
                loc = '.'.join(str(part) for part in err['loc'])
                problems.append(f'record {i}: {loc}: {err["msg"]}')

    if problems:
        raise MalformedInputError(source, problems)
    return rows


def parse_spread_records(data: Any, source: str = 'spread records') -> list[SpreadRecord]:
    """
    Validate a JSON list of games into SpreadRecords.

    Raises:
        MalformedInputError: If data is not a list or any game is missing a
            team name or has a missing/non-numeric spread
    """
    rows = _validate_rows(data, SpreadRow, source)
    return [
        SpreadRecord(
            date=r.date, team1=r.team1, team2=r.team2, spread1=r.spread1, spread2=r.spread2
        )
        for r in rows
    ]


def parse_score_records(data: Any, source: str = 'score records') -> list[ScoreRecord]:
    """
    Validate a JSON list of final scores into ScoreRecords.

    Missing or non-numeric scores are rejected, never read as zero.

    Raises:
        MalformedInputError: If data is not a list or any record is invalid
    """
    rows = _validate_rows(data, ScoreRow, source)
    return [
        ScoreRecord(team1=r.team1, team2=r.team2, score1=r.score1, score2=r.score2, date=r.date)
        for r in rows
    ]


def _to_pick(item: Any) -> Pick:
    if not isinstance(item, dict):
        return Pick(game_index=None, team='')
    row = PickRow.model_validate(item)
    return Pick(game_index=row.game_index, team=row.pick)


def parse_pick_entries(data: Any, source: str = 'pick entries') -> list[PlayerPickEntry]:
    """
    Validate a JSON list of player submissions.

    Individual picks are not judged here; a bad game index, an empty team
    or a pick item that is not an object is reported later as an invalid
    pick for that player only.

    Raises:
        MalformedInputError: If data is not a list, an entry has no player,
            or an entry's picks are not a list
    """
    rows = _validate_rows(data, PickEntryRow, source)
    return [
        PlayerPickEntry(
            player=r.player,
            pin=r.pin,
            picks=[_to_pick(p) for p in r.picks],
            week=r.week,
        )
        for r in rows
    ]


def parse_roster(data: Any, source: str = 'roster') -> list[RosterEntry]:
    """Validate a JSON list of roster entries ({name, pin})."""
    return _validate_rows(data, RosterEntry, source)


# ---------------------------------------------------------------------------
# Vendor feed payloads
# ---------------------------------------------------------------------------


def grab(row: dict, keys: list[str]) -> Any:
    """Return the first non-null value among several key spellings."""
    for key in keys:
        if row and row.get(key) is not None:
            return row[key]
    return None


def unwrap_array(payload: Any, containers: list[str]) -> list:
    """Find the row list in a payload that may wrap it in a container key."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in containers:
            if isinstance(payload.get(key), list):
                return payload[key]
    return []


def _to_score(value: Any) -> Optional[int]:
    """Read a vendor score; None when missing or not a whole number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value) and float(value).is_integer():
        return int(value)
    return None


def adapt_result(row: dict) -> dict:
    """Normalize a vendor result row (id, status, home/away scores)."""
    result_id = grab(row, VENDOR_ID_KEYS)
    status = grab(row, VENDOR_STATUS_KEYS)
    return {
        'id': str(result_id) if result_id is not None else None,
        'status': str(status) if status is not None else '',
        'home_score': _to_score(grab(row, VENDOR_HOME_SCORE_KEYS)),
        'away_score': _to_score(grab(row, VENDOR_AWAY_SCORE_KEYS)),
    }


def _team_text(value: Any) -> Optional[str]:
    """Vendor team names occasionally arrive as numbers."""
    if value is None:
        return None
    return str(value).strip()


def adapt_match(row: dict) -> dict:
    """Normalize a vendor match row (id, home/away team, kickoff)."""
    match_id = grab(row, ['ID', 'Id', 'id'])
    return {
        'id': str(match_id) if match_id is not None else None,
        'home': _team_text(grab(row, VENDOR_HOME_TEAM_KEYS)),
        'away': _team_text(grab(row, VENDOR_AWAY_TEAM_KEYS)),
        'start_time': grab(row, VENDOR_START_TIME_KEYS),
    }


def pick_alias_map(alias_json: Any, sport: str) -> dict[str, str]:
    """Use the per-sport slice of an alias file when it has one."""
    if isinstance(alias_json, dict):
        if isinstance(alias_json.get(sport), dict):
            return alias_json[sport]
        return {k: v for k, v in alias_json.items() if isinstance(v, str)}
    return {}


def _loose_key(name: str) -> str:
    return ' '.join(name.replace('.', '').split()).lower()


def apply_alias(name: Optional[str], alias_map: dict[str, str]) -> Optional[str]:
    """
    Map a vendor team name to the pool's spelling.

    Lookup order: exact key, case-insensitive key, then ignoring dots and
    repeated whitespace. Unknown names pass through unchanged.
    """
    if not name:
        return name
    if name in alias_map:
        return alias_map[name]
    lowered = name.lower()
    for key, value in alias_map.items():
        if key.lower() == lowered:
            return value
    loose = _loose_key(name)
    for key, value in alias_map.items():
        if _loose_key(key) == loose:
            return value
    return name


def parse_vendor_time(value: Any) -> Optional[datetime]:
    """Parse an ISO-like kickoff time; naive values are taken as UTC."""
    if not value:
        return None
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_kickoff(value: Any, tz_name: str) -> str:
    """Format a kickoff as 'YYYY-MM-DD hh:MM AM/PM' in the pool's timezone."""
    parsed = parse_vendor_time(value)
    if parsed is None:
        return str(value) if value else ''
    return parsed.astimezone(ZoneInfo(tz_name)).strftime(VENDOR_DATE_FORMAT)


def join_vendor_scores(
    results_payload: Any,
    matches_payload: Any,
    alias_map: Optional[dict[str, str]] = None,
    tz_name: str = 'America/Chicago',
) -> tuple[list[ScoreRecord], list[dict]]:
    """
    Join vendor results (scores) to matches (teams, kickoff) by id.

    Away team becomes team1 and home team team2. Rows without an id or
    without any team name are dropped; rows with a missing or non-numeric
    score are rejected rather than scored as zero.

    Args:
        results_payload: Raw results payload (list or wrapped list)
        matches_payload: Raw matches/odds payload (list or wrapped list)
        alias_map: Vendor name -> pool name
        tz_name: Timezone for the display date

    Returns:
        Tuple of (score records sorted by kickoff, rejected rows)
    """
    alias_map = alias_map or {}
    results = unwrap_array(results_payload, VENDOR_RESULT_CONTAINERS)
    matches = unwrap_array(matches_payload, VENDOR_MATCH_CONTAINERS)

    match_by_id = {}
    for row in matches:
        if not isinstance(row, dict):
            continue
        match = adapt_match(row)
        if match['id']:
            match_by_id[match['id']] = match

    timed: list[tuple[float, ScoreRecord]] = []
    rejected: list[dict] = []

    for row in results:
        if not isinstance(row, dict):
            continue
        result = adapt_result(row)
        if not result['id']:
            continue
        match = match_by_id.get(result['id'], {})
        home = match.get('home')
        away = match.get('away')
        if not home and not away:
            continue

        if not home or not away or result['home_score'] is None or result['away_score'] is None:
            logger.warning(f'Rejected vendor result {result["id"]}: {away} at {home} (incomplete)')
            rejected.append({'id': result['id'], 'away': away, 'home': home, 'status': result['status']})
            continue

        start = parse_vendor_time(match.get('start_time'))
        record = ScoreRecord(
            team1=apply_alias(away, alias_map),
            team2=apply_alias(home, alias_map),
            score1=result['away_score'],
            score2=result['home_score'],
            date=format_kickoff(match.get('start_time'), tz_name),
        )
        timed.append((start.timestamp() if start else 0.0, record))

    timed.sort(key=lambda pair: pair[0])
    return [record for _, record in timed], rejected


def vendor_odds_to_spreads(
    rows: Any,
    alias_map: Optional[dict[str, str]] = None,
    tz_name: str = 'America/Chicago',
) -> tuple[list[SpreadRecord], list[dict]]:
    """
    Convert vendor odds rows into spread records.

    Rows look like {startTime, awayTeam, homeTeam, spreadAway, spreadHome}.
    Away team becomes team1. Rows with a missing spread are rejected.

    Returns:
        Tuple of (spread records sorted by date string, rejected rows)
    """
    alias_map = alias_map or {}
    games: list[SpreadRecord] = []
    rejected: list[dict] = []

    for row in unwrap_array(rows, VENDOR_MATCH_CONTAINERS):
        if not isinstance(row, dict):
            rejected.append(row)
            continue
        away = _team_text(grab(row, VENDOR_AWAY_TEAM_KEYS))
        home = _team_text(grab(row, VENDOR_HOME_TEAM_KEYS))
        spread_away = row.get('spreadAway')
        spread_home = row.get('spreadHome')
        valid_spreads = all(
            isinstance(s, (int, float)) and not isinstance(s, bool) and math.isfinite(s)
            for s in (spread_away, spread_home)
        )
        if not away or not home or not valid_spreads:
            rejected.append(row)
            continue
        games.append(
            SpreadRecord(
                date=format_kickoff(grab(row, VENDOR_START_TIME_KEYS), tz_name),
                team1=apply_alias(away, alias_map).strip(),
                team2=apply_alias(home, alias_map).strip(),
                spread1=float(spread_away),
                spread2=float(spread_home),
            )
        )

    if rejected:
        logger.warning(f'Rejected {len(rejected)} odds rows with missing teams or spreads')
    games.sort(key=lambda g: g.date)
    return games, rejected


def filter_by_date(
    scores: list[ScoreRecord],
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> list[ScoreRecord]:
    """
    Keep score records whose date falls within [date_from, date_to].

    Dates are compared on their leading 'YYYY-MM-DD'. A missing bound is
    open. Records without a leading YYYY-MM-DD are dropped.

    Raises:
        ValueError: If a bound is not YYYY-MM-DD or the range is reversed
    """
    for bound in (date_from, date_to):
        if bound is not None and not _YMD_RE.match(bound):
            raise ValueError(f'Expected YYYY-MM-DD, got {bound!r}')
    if date_from and date_to and date_from > date_to:
        raise ValueError(f'from date ({date_from}) must not be after to date ({date_to})')

    low = date_from or '0000-00-00'
    high = date_to or '9999-99-99'
    return [
        s for s in scores
        if _YMD_RE.match(s.date[:10]) and low <= s.date[:10] <= high
    ]
