"""Pydantic schemas for JSON data validation."""

from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _text(v: Any) -> Any:
    """Coerce spreadsheet-ish scalars (numbers, dates) to trimmed text."""
    if v is None:
        return v
    return str(v).strip()


def _not_bool(v: Any) -> Any:
    """JSON true/false must never pass as 1/0."""
    if isinstance(v, bool):
        raise ValueError('expected a number, got a boolean')
    return v


class SpreadRow(BaseModel):
    """One game in games_week_N.json."""

    date: str = ''
    team1: str = Field(..., min_length=1)
    spread1: float = Field(..., allow_inf_nan=False)
    team2: str = Field(..., min_length=1)
    spread2: float = Field(..., allow_inf_nan=False)

    @field_validator('date', 'team1', 'team2', mode='before')
    @classmethod
    def strip_text(cls, v):
        """Trim names; numbers and dates become text."""
        return _text(v)

    @field_validator('spread1', 'spread2', mode='before')
    @classmethod
    def reject_bool(cls, v):
        return _not_bool(v)


class ScoreRow(BaseModel):
    """One final score in scores_week_N.json.

    Whole numbers only: 14 and "14" are accepted, 14.5 and true are not.
    """

    date: str = ''
    team1: str = Field(..., min_length=1)
    score1: int = Field(..., ge=0)
    team2: str = Field(..., min_length=1)
    score2: int = Field(..., ge=0)

    @field_validator('date', 'team1', 'team2', mode='before')
    @classmethod
    def strip_text(cls, v):
        """Trim names; numbers and dates become text."""
        return _text(v)

    @field_validator('score1', 'score2', mode='before')
    @classmethod
    def reject_bool(cls, v):
        return _not_bool(v)


class PickRow(BaseModel):
    """A single pick inside a player's submission.

    Kept lenient: a bad game index or empty team is an invalid pick, scored
    as incorrect, not a malformed file.
    """

    model_config = ConfigDict(populate_by_name=True)

    game_index: Any = Field(None, alias='gameIndex')
    pick: Any = ''


class PickEntryRow(BaseModel):
    """One player's submission in picks_week_N.json.

    Only the player name is required. The PIN is carried through as text
    (empty when missing) and each pick item is judged later, one by one.
    """

    player: str = Field(..., min_length=1)
    pin: str = ''
    picks: list[Any] = Field(default_factory=list)
    week: Optional[int] = None

    @field_validator('player', mode='before')
    @classmethod
    def strip_player(cls, v):
        return _text(v)

    @field_validator('pin', mode='before')
    @classmethod
    def pin_text(cls, v):
        """PINs typed into spreadsheets often arrive as numbers; null means none."""
        return '' if v is None else _text(v)


class RosterEntry(BaseModel):
    """Player allowed to submit picks."""

    name: str = Field(..., min_length=1)
    pin: str = Field(..., min_length=1)

    @field_validator('name', 'pin', mode='before')
    @classmethod
    def strip_text(cls, v):
        """PINs typed into spreadsheets often arrive as numbers."""
        return _text(v)


class CurrentWeekFile(BaseModel):
    """current_week.json file structure."""

    currentWeek: int = Field(..., ge=1)


class StandingsFile(BaseModel):
    """standings.json file structure."""

    updated_at: Optional[str] = None
    weeks: dict[int, dict[str, int]] = Field(default_factory=dict)
    totals: dict[str, int] = Field(default_factory=dict)

    model_config = ConfigDict(extra='forbid')


class PoolConfig(BaseModel):
    """Pool configuration settings."""

    season: int = Field(2025, ge=2000, le=2100)
    timezone: str = 'America/Chicago'
    backups: bool = True
    vendor_base_url: str = 'https://jsonodds.com/api'
    vendor_api_key: Optional[str] = None
    vendor_sports: list[str] = Field(default_factory=lambda: ['nfl'])
    vendor_results_endpoint: str = '/results'
    vendor_odds_endpoint: str = '/odds'

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v):
        """Ensure the timezone name is known."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f'Unknown timezone: {v}')
        return v

    @field_validator('vendor_sports')
    @classmethod
    def validate_sports(cls, v):
        """Ensure at least one sport is configured."""
        if not v:
            raise ValueError('vendor_sports must list at least one sport')
        return v

    model_config = ConfigDict(extra='forbid')
