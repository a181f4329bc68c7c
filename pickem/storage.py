"""JSON file storage for the pool: one directory, week-keyed files.

Layout under the data directory:
    games_week_N.json            spread records for week N
    scores_week_N.json           final scores, oriented to the spread records
    picks_week_N.json            player submissions
    winners_detail_week_N.json   per-game winner declarations
    declaredwinners_week_N.json  flat list of winner names (pushes excluded)
    winners_week_N.json          per-player correct picks
    match_report_week_N.json     unmatched games and unused score reports
    standings.json               per-week contributions and totals
    totals.json                  flat {player: total} mapping
    current_week.json, roster.json, backups/
"""

import logging
import re
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from .adapters import parse_pick_entries, parse_roster, parse_score_records, parse_spread_records
from .constants import (
    BACKUP_DIR,
    CURRENT_WEEK_FILE,
    DECLARED_WINNERS_FILE,
    GAMES_FILE,
    MATCH_REPORT_FILE,
    PICKS_FILE,
    PLAYER_WINNERS_FILE,
    ROSTER_FILE,
    SCORES_FILE,
    STANDINGS_FILE,
    TOTALS_FILE,
    WEEK_FILE_PATTERNS,
    WINNERS_DETAIL_FILE,
)
from .models import (
    MatchReport,
    Pick,
    PlayerPickEntry,
    PlayerResult,
    ScoreRecord,
    SpreadRecord,
    Standings,
    WeekWinners,
)
from .schemas import CurrentWeekFile, RosterEntry, StandingsFile
from .standings import totals_table
from .utils import backup_file, load_json, load_json_safe, save_json

logger = logging.getLogger('pickem.storage')


class WeekExistsError(Exception):
    """A week file already exists and overwriting was not requested."""

    def __init__(self, kind: str, week: int):
        self.kind = kind
        self.week = week
        super().__init__(f'Week {week} {kind} already exist. Use force to overwrite.')


class AuthenticationError(Exception):
    """Player name and PIN do not match the roster."""


_locks: dict[tuple[str, object], threading.Lock] = {}
_locks_guard = threading.Lock()


class PoolStore:
    """Reads and writes the pool's JSON files in a data directory."""

    def __init__(self, data_dir: str | Path, backups: bool = True):
        self.data_dir = Path(data_dir)
        self.backup_dir = self.data_dir / BACKUP_DIR
        self.backups = backups
        self.data_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Paths and locking
    # ------------------------------------------------------------------

    def week_path(self, template: str, week: int) -> Path:
        return self.data_dir / template.format(week=week)

    @contextmanager
    def _lock(self, name: object) -> Iterator[None]:
        key = (str(self.data_dir.resolve()), name)
        with _locks_guard:
            lock = _locks.setdefault(key, threading.Lock())
        with lock:
            yield

    def week_lock(self, week: int):
        """Serialize writes for one week of this data directory."""
        return self._lock(week)

    def standings_lock(self):
        """Serialize read-modify-write of the pool-wide standings."""
        return self._lock('standings')

    def _backup(self, path: Path) -> Optional[Path]:
        if not self.backups:
            return None
        return backup_file(path, self.backup_dir)

    # ------------------------------------------------------------------
    # Current week
    # ------------------------------------------------------------------

    def current_week(self) -> Optional[int]:
        """The week of the latest spread upload, or None if not set."""
        data = load_json_safe(self.data_dir / CURRENT_WEEK_FILE, schema=CurrentWeekFile)
        return data.currentWeek if data else None

    def set_current_week(self, week: int) -> None:
        save_json(self.data_dir / CURRENT_WEEK_FILE, {'currentWeek': week})

    # ------------------------------------------------------------------
    # Spreads and scores
    # ------------------------------------------------------------------

    def has_spreads(self, week: int) -> bool:
        return self.week_path(GAMES_FILE, week).exists()

    def load_spreads(self, week: int) -> list[SpreadRecord]:
        """
        Load the week's spread records.

        Raises:
            FileNotFoundError: If no spreads were uploaded for the week
            MalformedInputError: If the file content is invalid
        """
        path = self.week_path(GAMES_FILE, week)
        return parse_spread_records(load_json(path), source=path.name)

    def save_spreads(self, week: int, games: list[SpreadRecord], force: bool = False) -> Path:
        """
        Store the week's spread records and make the week current.

        Raises:
            WeekExistsError: If spreads exist for the week and force is False
        """
        path = self.week_path(GAMES_FILE, week)
        with self.week_lock(week):
            if path.exists():
                if not force:
                    raise WeekExistsError('spreads', week)
                self._backup(path)
            save_json(path, [g.to_dict() for g in games])
            self.set_current_week(week)
        logger.info(f'Saved {len(games)} games for week {week}')
        return path

    def has_scores(self, week: int) -> bool:
        return self.week_path(SCORES_FILE, week).exists()

    def load_scores(self, week: int) -> list[ScoreRecord]:
        """
        Load the week's stored (already oriented) scores.

        Raises:
            FileNotFoundError: If no scores were uploaded for the week
        """
        path = self.week_path(SCORES_FILE, week)
        return parse_score_records(load_json(path), source=path.name)

    def save_scores(self, week: int, scores: list[ScoreRecord]) -> Path:
        """Store the week's scores, backing up any previous file. Caller holds the week lock."""
        path = self.week_path(SCORES_FILE, week)
        if path.exists():
            self._backup(path)
        save_json(path, [s.to_dict() for s in scores])
        return path

    # ------------------------------------------------------------------
    # Roster and picks
    # ------------------------------------------------------------------

    def load_roster(self) -> list[RosterEntry]:
        path = self.data_dir / ROSTER_FILE
        if not path.exists():
            return []
        return parse_roster(load_json(path), source=path.name)

    def save_roster(self, roster: list[RosterEntry]) -> Path:
        """Replace the roster, backing up the previous one."""
        path = self.data_dir / ROSTER_FILE
        self._backup(path)
        save_json(path, [entry.model_dump() for entry in roster])
        logger.info(f'Roster saved: {len(roster)} players')
        return path

    def authenticate(self, player: str, pin: str) -> bool:
        """Check a player name (case-insensitive) and PIN (exact) against the roster."""
        name = player.strip().lower()
        return any(
            entry.name.lower() == name and entry.pin == str(pin).strip()
            for entry in self.load_roster()
        )

    def load_picks(self, week: int) -> list[PlayerPickEntry]:
        """Load the week's submissions; an absent file means no picks yet."""
        path = self.week_path(PICKS_FILE, week)
        if not path.exists():
            return []
        return parse_pick_entries(load_json(path), source=path.name)

    def has_picked(self, week: int, player: str) -> bool:
        name = player.strip().lower()
        return any(entry.player.strip().lower() == name for entry in self.load_picks(week))

    def submit_picks(
        self,
        week: int,
        player: str,
        pin: str,
        picks: list[Pick],
    ) -> PlayerPickEntry:
        """
        Record a player's picks for the week.

        A re-submission replaces the player's earlier entry. The picks file
        is backed up before every write.

        Raises:
            AuthenticationError: If the player/PIN pair is not on the roster
            ValueError: If player or PIN is empty
        """
        if not player or not player.strip() or not str(pin).strip():
            raise ValueError('Player name and PIN are required')
        if not self.authenticate(player, pin):
            raise AuthenticationError(f'Unknown player or wrong PIN: {player}')

        entry = PlayerPickEntry(player=player.strip(), pin=str(pin).strip(), picks=picks, week=week)
        path = self.week_path(PICKS_FILE, week)

        with self.week_lock(week):
            existing = self.load_picks(week)
            self._backup(path)
            kept = [e for e in existing if e.player.strip().lower() != entry.player.lower()]
            replaced = len(kept) != len(existing)
            kept.append(entry)
            save_json(path, [e.to_dict() for e in kept])

        logger.info(
            f'{"Replaced" if replaced else "Saved"} picks for {entry.player} '
            f'(week {week}, {len(picks)} picks)'
        )
        return entry

    # ------------------------------------------------------------------
    # Week results
    # ------------------------------------------------------------------

    def save_week_results(
        self,
        week: int,
        report: MatchReport,
        winners: WeekWinners,
        player_results: list[PlayerResult],
    ) -> None:
        """Write match report, winner declarations and player results. Caller holds the week lock."""
        save_json(self.week_path(MATCH_REPORT_FILE, week), report.to_dict())
        save_json(self.week_path(WINNERS_DETAIL_FILE, week), [d.to_dict() for d in winners.details])
        save_json(self.week_path(DECLARED_WINNERS_FILE, week), list(winners.declared))
        save_json(self.week_path(PLAYER_WINNERS_FILE, week), [r.to_dict() for r in player_results])
        logger.info(
            f'Week {week} results written: {len(winners.details)} games, '
            f'{len(player_results)} players'
        )

    # ------------------------------------------------------------------
    # Standings
    # ------------------------------------------------------------------

    def load_standings(self) -> Standings:
        """Load standings; absent file means an empty pool."""
        path = self.data_dir / STANDINGS_FILE
        if not path.exists():
            return Standings()
        data = load_json(path, schema=StandingsFile)
        return Standings(weeks=data.weeks, totals=data.totals)

    def save_standings(self, standings: Standings) -> None:
        """Write standings.json and the flat totals.json mapping."""
        data = standings.to_dict()
        data['updated_at'] = datetime.now(timezone.utc).isoformat()
        save_json(self.data_dir / STANDINGS_FILE, data)
        save_json(self.data_dir / TOTALS_FILE, dict(standings.totals))

    def totals(self) -> list[dict]:
        """Standings as [{player, total}], best first."""
        return totals_table(self.load_standings())

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset(self) -> list[str]:
        """
        Remove all week files and reset the pool to week 1.

        Roster, config and backups are kept.

        Returns:
            Names of the deleted files
        """
        patterns = [re.compile(p) for p in WEEK_FILE_PATTERNS]
        removed = []
        for path in sorted(self.data_dir.iterdir()):
            if path.is_file() and any(p.match(path.name) for p in patterns):
                path.unlink()
                removed.append(path.name)

        self.set_current_week(1)
        self.save_standings(Standings())
        logger.info(f'Pool reset: {len(removed)} week files removed')
        return removed
