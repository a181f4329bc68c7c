#!/usr/bin/env python3
"""
Pick'em Pool CLI

Administers a weekly against-the-spread pick'em pool stored as JSON files.

Usage:
    python pool.py upload-spread Spreads_Week3.xlsx
    python pool.py upload-scores Scores_Week3.xlsx --force
    python pool.py upload-roster roster.xlsx
    python pool.py submit-picks --week 3 --player Dana --pin 1234 --picks picks.json
    python pool.py calculate --week 3
    python pool.py verify --week 3
    python pool.py import-vendor-scores --week 3 --from 2025-09-18 --to 2025-09-22
    python pool.py standings
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import requests

from pickem import (
    AuthenticationError,
    MalformedInputError,
    Pick,
    PoolStore,
    WeekExistsError,
    filter_by_date,
    join_vendor_scores,
    parse_score_records,
    parse_spread_records,
    recalculate_week,
    upload_scores,
    vendor_odds_to_spreads,
    verify_matches,
)
from pickem.adapters import pick_alias_map
from pickem.config import get_config, get_data_dir
from pickem.excel_parser import parse_roster_sheet, parse_score_sheet, parse_spread_sheet
from pickem.logging_config import setup_logging
from pickem.utils import load_json, save_json, week_from_filename
from pickem.vendor_client import VendorClient


def resolve_week(args, path: Path) -> int:
    """Week from --week, else from the file name."""
    if args.week:
        return args.week
    return week_from_filename(path.name)


def print_summary(summary) -> None:
    """Print the outcome of a scoring run."""
    report = summary.match_report
    print(f"\nWeek {summary.week}: {len(report.ordered)} games matched, "
          f"{len(summary.winners.declared)} winners, {summary.winners.pushes} push(es)")

    if report.unmatched_spreads:
        print(f"❌ {len(report.unmatched_spreads)} game(s) had no score:")
        for game in report.unmatched_spreads:
            print(f"   - {game.team1} vs {game.team2}")
    if report.unused_scores:
        print(f"⚠️  {len(report.unused_scores)} score report(s) matched no game:")
        for score in report.unused_scores:
            print(f"   - {score.team1} {score.score1} / {score.team2} {score.score2}")

    print("\n" + "=" * 40)
    print("WEEK RESULTS")
    print("=" * 40)
    for result in sorted(summary.player_results, key=lambda r: r.total, reverse=True):
        line = f"  {result.player}: {result.total}"
        if result.invalid_picks:
            line += f" ({len(result.invalid_picks)} invalid pick(s) ignored)"
        print(line)


def cmd_upload_spread(args, store: PoolStore) -> int:
    path = Path(args.file)
    week = resolve_week(args, path)

    if path.suffix.lower() == '.json':
        games = parse_spread_records(load_json(path), source=path.name)
    else:
        games, skipped = parse_spread_sheet(path)
        if skipped:
            print(f"⚠️  {len(skipped)} block(s) skipped in {path.name}")

    store.save_spreads(week, games, force=args.force)
    print(f"✅ Spread uploaded and converted for Week {week} ({len(games)} games)")
    return 0


def cmd_upload_scores(args, store: PoolStore) -> int:
    path = Path(args.file)
    week = resolve_week(args, path)

    if path.suffix.lower() == '.json':
        scores = parse_score_records(load_json(path), source=path.name)
    else:
        scores, rejected = parse_score_sheet(path)
        if rejected:
            print(f"⚠️  {len(rejected)} row(s) rejected in {path.name}")

    summary = upload_scores(store, week, scores, force=args.force)
    print_summary(summary)
    print(f"\n✅ Scores uploaded and winners calculated for Week {week}")
    return 0


def cmd_upload_roster(args, store: PoolStore) -> int:
    path = Path(args.file)
    if path.suffix.lower() not in ('.xlsx', '.xlsm'):
        print("❌ Unsupported file type. Please upload an Excel file.")
        return 1

    roster = parse_roster_sheet(path)
    store.save_roster(roster)
    print(f"✅ Roster uploaded successfully. {len(roster)} players added.")
    return 0


def cmd_submit_picks(args, store: PoolStore) -> int:
    data = load_json(args.picks)
    if not isinstance(data, list):
        print("❌ Picks file must hold a list of {gameIndex, pick}")
        return 1
    picks = [Pick(game_index=p.get('gameIndex'), team=p.get('pick', '')) for p in data if isinstance(p, dict)]

    store.submit_picks(args.week, args.player, args.pin, picks)
    print(f"✅ Picks saved for {args.player} (Week {args.week})")
    return 0


def cmd_calculate(args, store: PoolStore) -> int:
    summary = recalculate_week(store, args.week)
    print_summary(summary)
    return 0


def cmd_verify(args, store: PoolStore) -> int:
    result = verify_matches(store, args.week)
    if not result['unmatched']:
        print("✅ All games matched correctly!")
        return 0

    print(f"❌ {len(result['unmatched'])} game(s) could not be matched:\n")
    for i, game in enumerate(result['unmatched'], 1):
        print(f"{i}. {game['team1']} vs {game['team2']}")
        for team, suggestions in game['suggestions'].items():
            found = ', '.join(suggestions) if suggestions else 'none'
            print(f"     - {team}: {found}")
    return 1


def cmd_import_vendor_scores(args, store: PoolStore) -> int:
    config = get_config(store.data_dir)
    alias_json = load_json(args.alias_map) if args.alias_map else {}

    scores = []
    if args.results or args.matches:
        if not (args.results and args.matches):
            print("❌ --results and --matches must be given together")
            return 1
        sport = config.vendor_sports[0]
        scores, rejected = join_vendor_scores(
            load_json(args.results),
            load_json(args.matches),
            pick_alias_map(alias_json, sport),
            config.timezone,
        )
        if rejected:
            print(f"⚠️  {len(rejected)} result(s) rejected (missing teams or scores)")
    else:
        client = VendorClient.from_config(config)
        for sport in config.vendor_sports:
            sport_scores, rejected, raw = client.fetch_scores(
                sport, pick_alias_map(alias_json, sport), config.timezone
            )
            save_json(store.data_dir / f'vendor_raw_results_{sport}_week_{args.week}.json', raw['results'])
            save_json(store.data_dir / f'vendor_raw_matches_{sport}_week_{args.week}.json', raw['matches'])
            if rejected:
                print(f"⚠️  {sport}: {len(rejected)} result(s) rejected (missing teams or scores)")
            scores.extend(sport_scores)

    if args.date_from or args.date_to:
        scores = filter_by_date(scores, args.date_from, args.date_to)

    summary = upload_scores(store, args.week, scores, force=args.force)
    print_summary(summary)
    return 0


def cmd_import_vendor_spreads(args, store: PoolStore) -> int:
    config = get_config(store.data_dir)
    rows = load_json(args.file)
    alias_map = pick_alias_map(load_json(args.alias_map), config.vendor_sports[0]) if args.alias_map else {}

    games, rejected = vendor_odds_to_spreads(rows, alias_map, config.timezone)
    if rejected:
        print(f"⚠️  {len(rejected)} odds row(s) rejected")
    store.save_spreads(args.week, games, force=args.force)
    print(f"✅ Wrote {len(games)} games for Week {args.week}")
    return 0


def cmd_standings(args, store: PoolStore) -> int:
    rows = store.totals()
    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    print("=" * 40)
    print("STANDINGS")
    print("=" * 40)
    for rank, row in enumerate(rows, 1):
        print(f"  {rank}. {row['player']}: {row['total']}")
    return 0


def cmd_reset(args, store: PoolStore) -> int:
    if not args.yes:
        print("❌ Refusing to reset without --yes")
        return 1
    removed = store.reset()
    print(f"✅ System reset complete. {len(removed)} week files removed; current week is 1.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Weekly pick'em pool administration")
    parser.add_argument(
        "--data-dir", "-d",
        default=None,
        help="Path to data directory (default: $PICKEM_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write a timestamped log file to this directory",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("upload-spread", help="Upload a week's spreads (.xlsx or .json)")
    p.add_argument("file")
    p.add_argument("--week", "-w", type=int, help="Week number (default: from file name)")
    p.add_argument("--force", action="store_true", help="Overwrite existing spreads (old file is backed up)")
    p.set_defaults(func=cmd_upload_spread)

    p = sub.add_parser("upload-scores", help="Upload final scores and score the week")
    p.add_argument("file")
    p.add_argument("--week", "-w", type=int, help="Week number (default: from file name)")
    p.add_argument("--force", action="store_true", help="Overwrite existing scores (old file is backed up)")
    p.set_defaults(func=cmd_upload_scores)

    p = sub.add_parser("upload-roster", help="Replace the player roster (.xlsx with name/pin columns)")
    p.add_argument("file")
    p.set_defaults(func=cmd_upload_roster)

    p = sub.add_parser("submit-picks", help="Record a player's picks")
    p.add_argument("--week", "-w", type=int, required=True)
    p.add_argument("--player", required=True)
    p.add_argument("--pin", required=True)
    p.add_argument("--picks", required=True, help="JSON file: [{\"gameIndex\": 0, \"pick\": \"Team\"}, ...]")
    p.set_defaults(func=cmd_submit_picks)

    p = sub.add_parser("calculate", help="Recalculate winners and standings for a week")
    p.add_argument("--week", "-w", type=int, required=True)
    p.set_defaults(func=cmd_calculate)

    p = sub.add_parser("verify", help="Diagnose team-name mismatches between spreads and scores")
    p.add_argument("--week", "-w", type=int, required=True)
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("import-vendor-scores", help="Import final scores from the vendor feed")
    p.add_argument("--week", "-w", type=int, required=True)
    p.add_argument("--alias-map", help="JSON alias map (flat or per-sport)")
    p.add_argument("--results", help="Use a saved results payload instead of fetching")
    p.add_argument("--matches", help="Use a saved matches payload instead of fetching")
    p.add_argument("--from", dest="date_from", help="Keep games on or after YYYY-MM-DD")
    p.add_argument("--to", dest="date_to", help="Keep games on or before YYYY-MM-DD")
    p.add_argument("--force", action="store_true")
    p.set_defaults(func=cmd_import_vendor_scores)

    p = sub.add_parser("import-vendor-spreads", help="Import spreads from saved vendor odds rows")
    p.add_argument("file")
    p.add_argument("--week", "-w", type=int, required=True)
    p.add_argument("--alias-map", help="JSON alias map (flat or per-sport)")
    p.add_argument("--force", action="store_true")
    p.set_defaults(func=cmd_import_vendor_spreads)

    p = sub.add_parser("standings", help="Show cumulative standings")
    p.add_argument("--json", action="store_true", help="Print as JSON")
    p.set_defaults(func=cmd_standings)

    p = sub.add_parser("reset", help="Delete all week files and reset to week 1")
    p.add_argument("--yes", action="store_true", help="Confirm the reset")
    p.set_defaults(func=cmd_reset)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=logging.WARNING if args.quiet else logging.INFO,
        log_to_file=bool(args.log_dir),
    )

    data_dir = Path(args.data_dir) if args.data_dir else get_data_dir()
    config = get_config(data_dir)
    store = PoolStore(data_dir, backups=config.backups)

    try:
        return args.func(args, store)
    except WeekExistsError as e:
        print(f"⚠️  {e}")
        return 2
    except AuthenticationError as e:
        print(f"❌ {e}")
        return 3
    except (MalformedInputError, FileNotFoundError, ValueError) as e:
        print(f"❌ {e}")
        return 1
    except requests.RequestException as e:
        print(f"❌ Vendor request failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
