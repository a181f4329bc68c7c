"""Constants and mappings for the pick'em pool."""

# Winner sentinel for a game that ties after the spread is applied
PUSH = 'PUSH'

# Per-week data files (relative to the data directory)
GAMES_FILE = 'games_week_{week}.json'
SCORES_FILE = 'scores_week_{week}.json'
PICKS_FILE = 'picks_week_{week}.json'
WINNERS_DETAIL_FILE = 'winners_detail_week_{week}.json'
DECLARED_WINNERS_FILE = 'declaredwinners_week_{week}.json'
PLAYER_WINNERS_FILE = 'winners_week_{week}.json'
MATCH_REPORT_FILE = 'match_report_week_{week}.json'

# Pool-wide data files
TOTALS_FILE = 'totals.json'
STANDINGS_FILE = 'standings.json'
CURRENT_WEEK_FILE = 'current_week.json'
ROSTER_FILE = 'roster.json'
CONFIG_FILE = 'pool_config.json'
BACKUP_DIR = 'backups'

# Week files removed by a system reset
WEEK_FILE_PATTERNS = [
    r'^games_week_\d+\.json$',
    r'^scores_week_\d+\.json$',
    r'^picks_week_\d+\.json$',
    r'^winners_week_\d+\.json$',
    r'^winners_detail_week_\d+\.json$',
    r'^declaredwinners_week_\d+\.json$',
    r'^match_report_week_\d+\.json$',
]

# Week number embedded in an uploaded file name, e.g. "Spreads_Week-3.xlsx"
WEEK_IN_FILENAME = r'week[_-]?(\d+)'

# Spread spreadsheet: each game is a block of three rows after the header.
#   row 0: [day, "<team2> at", spread2]
#   row 1: [date]
#   row 2: [kickoff time, team1, spread1]
SPREAD_BLOCK_ROWS = 3
SPREAD_HEADER_ROWS = 1

# Score spreadsheet columns (0-based) after the header row
SCORE_COLUMNS = {
    'date': 0,
    'team1': 1,
    'score1': 2,
    'team2': 3,
    'score2': 4,
}

# Roster spreadsheet header names (matched case-insensitively)
ROSTER_NAME_HEADER = 'name'
ROSTER_PIN_HEADER = 'pin'

# Vendor payload key spellings, tried in order
VENDOR_ID_KEYS = ['ID', 'Id', 'id', 'EventID', 'EventId']
VENDOR_STATUS_KEYS = ['FinalType', 'Status', 'GameStatus', 'State', 'status']
VENDOR_HOME_SCORE_KEYS = ['HomeScore', 'home_score', 'homeScore', 'HomePoints']
VENDOR_AWAY_SCORE_KEYS = ['AwayScore', 'away_score', 'awayScore', 'AwayPoints']
VENDOR_HOME_TEAM_KEYS = [
    'HomeTeam', 'Home', 'HomeTeamName', 'TeamHome', 'homeTeam', 'home_team', 'home', 'HomeName',
]
VENDOR_AWAY_TEAM_KEYS = [
    'AwayTeam', 'Away', 'AwayTeamName', 'TeamAway', 'awayTeam', 'away_team', 'away', 'AwayName',
]
VENDOR_START_TIME_KEYS = [
    'MatchTime', 'StartTime', 'CommenceTime', 'Kickoff', 'DateTime', 'DateTimeUTC',
    'EventDate', 'StartDate', 'StartDateTime', 'startTime', 'start_date', 'date',
]

# Container keys wrapping the row arrays in vendor payloads
VENDOR_RESULT_CONTAINERS = ['results', 'data', 'items', 'Events', 'events']
VENDOR_MATCH_CONTAINERS = ['matches', 'data', 'items', 'Matches', 'events', 'odds']

# Display format for vendor kickoff times
VENDOR_DATE_FORMAT = '%Y-%m-%d %I:%M %p'
