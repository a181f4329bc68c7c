"""Data models for the pick'em pool."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class SpreadRecord:
    """One scheduled game with its betting line.

    team1/team2 order is the canonical orientation for the week.
    """
    date: str
    team1: str
    team2: str
    spread1: float
    spread2: float

    def to_dict(self) -> dict:
        return {
            'date': self.date,
            'team1': self.team1,
            'spread1': self.spread1,
            'team2': self.team2,
            'spread2': self.spread2,
        }


@dataclass
class ScoreRecord:
    """A final-score report; team order may differ from the spread."""
    team1: str
    team2: str
    score1: int
    score2: int
    date: str = ''

    def swapped(self) -> 'ScoreRecord':
        """Return the same report with team1/team2 positions exchanged."""
        return ScoreRecord(
            team1=self.team2,
            team2=self.team1,
            score1=self.score2,
            score2=self.score1,
            date=self.date,
        )

    def to_dict(self) -> dict:
        return {
            'date': self.date,
            'team1': self.team1,
            'score1': self.score1,
            'team2': self.team2,
            'score2': self.score2,
        }


@dataclass
class OrderedResult:
    """A spread record paired with scores oriented to its team order."""
    spread: SpreadRecord
    score1: int
    score2: int
    score_record: ScoreRecord  # the matched report, reoriented
    winner: Optional[str] = None  # set once winners are declared

    @property
    def team1(self) -> str:
        return self.spread.team1

    @property
    def team2(self) -> str:
        return self.spread.team2

    @property
    def spread1(self) -> float:
        return self.spread.spread1

    @property
    def spread2(self) -> float:
        return self.spread.spread2


@dataclass
class MatchReport:
    """Output of the score matcher."""
    ordered: List[OrderedResult] = field(default_factory=list)
    unmatched_spreads: List[SpreadRecord] = field(default_factory=list)
    unused_scores: List[ScoreRecord] = field(default_factory=list)

    @property
    def all_matched(self) -> bool:
        return not self.unmatched_spreads

    def to_dict(self) -> dict:
        return {
            'matched': len(self.ordered),
            'unmatched_spreads': [s.to_dict() for s in self.unmatched_spreads],
            'unused_scores': [s.to_dict() for s in self.unused_scores],
        }


@dataclass
class GameDetail:
    """Per-game winner declaration, as persisted for the week."""
    team1: str
    spread1: float
    score1: int
    team2: str
    spread2: float
    score2: int
    winner: str

    def to_dict(self) -> dict:
        return {
            'team1': self.team1,
            'spread1': self.spread1,
            'score1': self.score1,
            'team2': self.team2,
            'spread2': self.spread2,
            'score2': self.score2,
            'winner': self.winner,
        }


@dataclass
class WeekWinners:
    """Winner declarations for a week."""
    details: List[GameDetail] = field(default_factory=list)
    declared: List[str] = field(default_factory=list)  # winner names, pushes excluded

    @property
    def pushes(self) -> int:
        return len(self.details) - len(self.declared)


@dataclass
class Pick:
    """A single pick: a position in the week's spread list and a team name."""
    game_index: object
    team: str


@dataclass
class PlayerPickEntry:
    """One player's submission for a week."""
    player: str
    pin: str
    picks: List[Pick] = field(default_factory=list)
    week: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            'player': self.player,
            'pin': self.pin,
            'picks': [{'gameIndex': p.game_index, 'pick': p.team} for p in self.picks],
        }
        if self.week is not None:
            data['week'] = self.week
        return data


@dataclass
class InvalidPick:
    """A pick excluded from scoring."""
    player: str
    index: int  # position within the player's pick list
    game_index: object
    pick: str
    reason: str


@dataclass
class PlayerResult:
    """A player's correct picks for one week."""
    player: str
    correct: List[str] = field(default_factory=list)
    invalid_picks: List[InvalidPick] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.correct)

    def to_dict(self) -> dict:
        return {
            'player': self.player,
            'correct': list(self.correct),
            'total': self.total,
        }


@dataclass
class Standings:
    """Cumulative correct-pick totals, with each week's contribution kept.

    weeks[week][player] is the number of correct picks the player had in
    that week; totals is always the sum over weeks.
    """
    weeks: Dict[int, Dict[str, int]] = field(default_factory=dict)
    totals: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'weeks': {str(w): dict(contrib) for w, contrib in sorted(self.weeks.items())},
            'totals': dict(self.totals),
        }


@dataclass
class WeekSummary:
    """Everything produced by one run of the week pipeline."""
    week: int
    match_report: MatchReport
    winners: WeekWinners
    player_results: List[PlayerResult]
    standings: Standings
