"""CLI entry point for the career ledger and its analyses."""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from careerflow.analysis.earnings import calculate_earnings_analysis
from careerflow.analysis.loyalty_tax import calculate_loyalty_tax
from careerflow.analysis.resume_export import generate_resume_export
from careerflow.career.models import Position, UserProfile
from careerflow.config import load_config, validate_config
from careerflow.storage.database import CareerDatabase, StorageError
from careerflow.utils.logging_config import setup_logging

logger = logging.getLogger("careerflow")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="careerflow",
        description="CareerFlow - employment history ledger and compensation analysis",
    )
    parser.add_argument(
        "--config", default="config.yaml",
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log at DEBUG level",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    profile = sub.add_parser("profile", help="Show the user profile, or replace it from a file")
    profile.add_argument("--set", dest="profile_file", metavar="FILE", help="YAML or JSON profile to save")

    sub.add_parser("positions", help="List positions, most recent first")

    add = sub.add_parser("add-position", help="Add positions from a YAML or JSON file")
    add.add_argument("file", help="File holding one position or a list of positions")

    delete = sub.add_parser("delete-position", help="Delete a position and its compensation records")
    delete.add_argument("position_id", type=int)

    sub.add_parser("earnings", help="Earnings analysis")
    sub.add_parser("loyalty-tax", help="Loyalty tax analysis")
    sub.add_parser("resume", help="Resume export")

    export = sub.add_parser("export", help="Write a JSON backup of all data")
    export.add_argument("file")

    restore = sub.add_parser("import", help="Replace all data with a JSON backup")
    restore.add_argument("file")

    sub.add_parser("stats", help="Print ledger statistics")

    return parser.parse_args(argv)


def read_document(path: str):
    """Read a YAML or JSON document (JSON is valid YAML)."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def print_json(data):
    print(json.dumps(data, indent=2))


def add_positions(db: CareerDatabase, path: str) -> list[int]:
    data = read_document(path)
    items = data if isinstance(data, list) else [data]
    if not all(isinstance(item, dict) for item in items):
        raise ValueError(f"{path} must hold a position mapping or a list of them")

    positions = [Position.from_dict(item) for item in items]
    # All or nothing: a bad entry must not leave the earlier ones saved
    return db.save_positions(positions)


def run_command(args: argparse.Namespace, db: CareerDatabase):
    """Dispatch a parsed command against the database."""
    command = args.command

    if command == "profile":
        if args.profile_file:
            profile = UserProfile.from_dict(read_document(args.profile_file))
            db.save_user_profile(profile)
        profile = db.get_user_profile()
        print_json(profile.to_dict() if profile else None)

    elif command == "positions":
        print_json([p.to_dict() for p in db.get_positions()])

    elif command == "add-position":
        ids = add_positions(db, args.file)
        print_json({"added": ids})

    elif command == "delete-position":
        db.delete_position(args.position_id)
        print_json({"deleted": args.position_id})

    elif command == "earnings":
        print_json(calculate_earnings_analysis(db.get_positions(), db.get_user_profile()).to_dict())

    elif command == "loyalty-tax":
        print_json(calculate_loyalty_tax(db.get_positions()).to_dict())

    elif command == "resume":
        print_json(generate_resume_export(db.get_positions(), db.get_user_profile()).to_dict())

    elif command == "export":
        data = db.export_all_data()
        Path(args.file).write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.info("Backup written to %s", args.file)
        print_json({"exported": args.file})

    elif command == "import":
        with open(args.file, "r", encoding="utf-8") as f:
            data = json.load(f)
        print_json({"imported": db.import_all_data(data)})

    elif command == "stats":
        print_json(db.get_stats())


def main(argv=None):
    args = parse_args(argv)

    # Load config
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Logs go to stderr so command output stays parseable
    setup_logging(
        config.log_dir,
        logging.DEBUG if args.verbose else None,
        stream=sys.stderr,
        settings=config.logging,
    )

    for w in validate_config(config):
        logger.warning("Config: %s", w)

    try:
        with CareerDatabase(config.storage.database_url) as db:
            run_command(args, db)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
