"""Excel parsing for administrator uploads: spreads, scores and roster."""

import datetime as dt
import logging
import re
from pathlib import Path
from typing import Any, Optional

import openpyxl

from .constants import (
    ROSTER_NAME_HEADER,
    ROSTER_PIN_HEADER,
    SCORE_COLUMNS,
    SPREAD_BLOCK_ROWS,
    SPREAD_HEADER_ROWS,
)
from .models import ScoreRecord, SpreadRecord
from .schemas import RosterEntry

logger = logging.getLogger('pickem.excel_parser')

_TRAILING_AT_RE = re.compile(r'\s+at\s*$', re.IGNORECASE)


def read_sheet_rows(filepath: str | Path) -> list[list[Any]]:
    """
    Read the first worksheet of a workbook as a list of value rows.

    Trailing empty cells are trimmed from each row.
    """
    wb = openpyxl.load_workbook(filepath, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = []
        for row in ws.iter_rows(values_only=True):
            values = list(row)
            while values and (values[-1] is None or values[-1] == ''):
                values.pop()
            rows.append(values)
    finally:
        wb.close()
    return rows


def _cell(row: Optional[list[Any]], index: int) -> Any:
    if not row or index >= len(row):
        return None
    value = row[index]
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def format_excel_time(value: Any) -> str:
    """
    Format a kickoff time cell as 'h:MM AM/PM'.

    Examples:
        0.5 -> "12:00 PM"
        datetime.time(19, 30) -> "7:30 PM"
        "8:00 PM" -> "8:00 PM"
    """
    if value is None:
        return ''
    if isinstance(value, (dt.datetime, dt.time)):
        hours, minutes = value.hour, value.minute
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # Spreadsheet times are fractions of a day
        total_minutes = round((value % 1) * 24 * 60) % (24 * 60)
        hours, minutes = divmod(total_minutes, 60)
    else:
        return str(value).strip()

    suffix = 'PM' if hours >= 12 else 'AM'
    return f'{hours % 12 or 12}:{minutes:02d} {suffix}'


def format_excel_date(value: Any) -> str:
    """Render a date cell as text ('M/D/YYYY' for real dates)."""
    if value is None:
        return ''
    if isinstance(value, (dt.datetime, dt.date)):
        return f'{value.month}/{value.day}/{value.year}'
    return str(value).strip()


def clean_spread(value: Any) -> Optional[float]:
    """
    Parse a spread cell.

    Parentheses are removed and only the first space-separated token is
    read, so "(-3.5) o/u 44" gives -3.5.

    Returns:
        The spread, or None if the cell has no number
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).replace('(', '').replace(')', '').strip()
    if not text:
        return None
    try:
        spread = float(text.split(' ')[0])
    except ValueError:
        return None
    if spread != spread or spread in (float('inf'), float('-inf')):
        return None
    return spread


def clean_team2(matchup: Any) -> str:
    """Strip the trailing ' at' from the matchup cell ("Michigan at" -> "Michigan")."""
    return _TRAILING_AT_RE.sub('', str(matchup)).strip()


def parse_spread_rows(rows: list[list[Any]]) -> tuple[list[SpreadRecord], list[dict]]:
    """
    Parse spread sheet rows into SpreadRecords.

    After the header row each game is a block of three rows:
        [day, "<team2> at", spread2]
        [date]
        [kickoff time, team1, spread1]

    Blocks with a missing piece or an unreadable spread are skipped.

    Returns:
        Tuple of (games, skipped blocks as {'row', 'reason'})
    """
    games: list[SpreadRecord] = []
    skipped: list[dict] = []

    for i in range(SPREAD_HEADER_ROWS, len(rows) - (SPREAD_BLOCK_ROWS - 1), SPREAD_BLOCK_ROWS):
        day_row, date_row, time_row = rows[i], rows[i + 1], rows[i + 2]

        day = _cell(day_row, 0)
        matchup = _cell(day_row, 1)
        spread2 = clean_spread(_cell(day_row, 2))
        date = _cell(date_row, 0)
        kickoff = _cell(time_row, 0)
        team1 = _cell(time_row, 1)
        spread1 = clean_spread(_cell(time_row, 2))

        # Spreadsheet rows are 1-based
        sheet_row = i + 1
        if not day or not date or kickoff is None or not team1 or not matchup:
            skipped.append({'row': sheet_row, 'reason': 'incomplete game block'})
            continue

        team1 = str(team1).strip()
        team2 = clean_team2(matchup)
        if not team1 or not team2:
            skipped.append({'row': sheet_row, 'reason': 'missing team name'})
            continue
        if spread1 is None or spread2 is None:
            skipped.append({'row': sheet_row, 'reason': f'unreadable spread for {team1} vs {team2}'})
            continue

        games.append(
            SpreadRecord(
                date=f'{day} {format_excel_date(date)} {format_excel_time(kickoff)}',
                team1=team1,
                team2=team2,
                spread1=spread1,
                spread2=spread2,
            )
        )

    for skip in skipped:
        logger.warning(f'Spread sheet row {skip["row"]} skipped: {skip["reason"]}')
    logger.info(f'Parsed {len(games)} games from spread sheet')
    return games, skipped


def _to_score(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            return None
        return int(value)
    if isinstance(value, (int, float)) and float(value).is_integer() and value >= 0:
        return int(value)
    return None


def parse_score_rows(rows: list[list[Any]]) -> tuple[list[ScoreRecord], list[dict]]:
    """
    Parse score sheet rows: [date, team1, score1, team2, score2].

    The header row and blank rows are skipped. Short rows and rows with a
    blank or non-numeric score are rejected rather than read as zero.

    Returns:
        Tuple of (score records, rejected rows as {'row', 'reason'})
    """
    scores: list[ScoreRecord] = []
    rejected: list[dict] = []

    for i, row in enumerate(rows[1:], start=2):
        if not row:
            continue
        if len(row) < len(SCORE_COLUMNS):
            rejected.append({'row': i, 'reason': 'incomplete row'})
            continue

        team1 = _cell(row, SCORE_COLUMNS['team1'])
        team2 = _cell(row, SCORE_COLUMNS['team2'])
        score1 = _to_score(_cell(row, SCORE_COLUMNS['score1']))
        score2 = _to_score(_cell(row, SCORE_COLUMNS['score2']))

        if not team1 or not team2:
            rejected.append({'row': i, 'reason': 'missing team name'})
            continue
        if score1 is None or score2 is None:
            rejected.append({'row': i, 'reason': f'missing or non-numeric score for {team1} vs {team2}'})
            continue

        scores.append(
            ScoreRecord(
                team1=str(team1).strip(),
                team2=str(team2).strip(),
                score1=score1,
                score2=score2,
                date=format_excel_date(_cell(row, SCORE_COLUMNS['date'])),
            )
        )

    for reject in rejected:
        logger.warning(f'Score sheet row {reject["row"]} rejected: {reject["reason"]}')
    logger.info(f'Parsed {len(scores)} scores from score sheet')
    return scores, rejected


def _pin_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def parse_roster_rows(rows: list[list[Any]]) -> list[RosterEntry]:
    """
    Parse roster sheet rows. The first row must hold 'name' and 'pin' headers.

    Rows missing either value are dropped.

    Raises:
        ValueError: If the header has no 'name' or 'pin' column
    """
    if not rows:
        raise ValueError('Roster file is empty')

    header = [str(h).strip().lower() if h is not None else '' for h in rows[0]]
    if ROSTER_NAME_HEADER not in header or ROSTER_PIN_HEADER not in header:
        raise ValueError('Missing "name" or "pin" columns in roster file.')
    name_idx = header.index(ROSTER_NAME_HEADER)
    pin_idx = header.index(ROSTER_PIN_HEADER)

    roster = []
    for row in rows[1:]:
        name = _cell(row, name_idx)
        pin = _pin_text(_cell(row, pin_idx))
        if name and pin:
            roster.append(RosterEntry(name=str(name), pin=pin))

    logger.info(f'Parsed {len(roster)} players from roster sheet')
    return roster


def parse_spread_sheet(filepath: str | Path) -> tuple[list[SpreadRecord], list[dict]]:
    """Parse a spread workbook. See parse_spread_rows."""
    return parse_spread_rows(read_sheet_rows(filepath))


def parse_score_sheet(filepath: str | Path) -> tuple[list[ScoreRecord], list[dict]]:
    """Parse a score workbook. See parse_score_rows."""
    return parse_score_rows(read_sheet_rows(filepath))


def parse_roster_sheet(filepath: str | Path) -> list[RosterEntry]:
    """Parse a roster workbook. See parse_roster_rows."""
    return parse_roster_rows(read_sheet_rows(filepath))
