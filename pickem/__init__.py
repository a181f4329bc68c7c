from .models import (
    SpreadRecord,
    ScoreRecord,
    OrderedResult,
    MatchReport,
    GameDetail,
    WeekWinners,
    Pick,
    PlayerPickEntry,
    InvalidPick,
    PlayerResult,
    Standings,
    WeekSummary,
)
from .constants import PUSH
from .normalizer import normalize
from .matcher import match_scores, suggest_matches
from .calculator import declare_winner, declare_winners, score_player, score_players
from .standings import accumulate, replay_standings, totals_table
from .validators import MalformedInputError
from .adapters import (
    parse_spread_records,
    parse_score_records,
    parse_pick_entries,
    join_vendor_scores,
    vendor_odds_to_spreads,
    filter_by_date,
)
from .storage import PoolStore, WeekExistsError, AuthenticationError
from .week_scorer import score_week, upload_scores, recalculate_week, verify_matches

__all__ = [
    # Models
    'SpreadRecord',
    'ScoreRecord',
    'OrderedResult',
    'MatchReport',
    'GameDetail',
    'WeekWinners',
    'Pick',
    'PlayerPickEntry',
    'InvalidPick',
    'PlayerResult',
    'Standings',
    'WeekSummary',
    'PUSH',
    # Core
    'normalize',
    'match_scores',
    'suggest_matches',
    'declare_winner',
    'declare_winners',
    'score_player',
    'score_players',
    'accumulate',
    'replay_standings',
    'totals_table',
    # Input boundary
    'MalformedInputError',
    'parse_spread_records',
    'parse_score_records',
    'parse_pick_entries',
    'join_vendor_scores',
    'vendor_odds_to_spreads',
    'filter_by_date',
    # Storage and pipeline
    'PoolStore',
    'WeekExistsError',
    'AuthenticationError',
    'score_week',
    'upload_scores',
    'recalculate_week',
    'verify_matches',
]
