import argparse
import json
import logging
import sys
from pathlib import Path

from fastapi import HTTPException

from api.config import APP_ID
from api.database import SessionLocal, init_db
from api.services.catalog_admin_service import add_entries
from api.utils import normalize_test_type
from core.logging_setup import setup_console_logging

setup_console_logging()
logger = logging.getLogger("cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage practice content catalogs")
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser(
        "import", help="Add items from a JSON file to the dynamic catalog"
    )
    import_cmd.add_argument("file", type=Path, help="JSON file with a list of items")
    import_cmd.add_argument(
        "--type",
        dest="test_type",
        required=True,
        help="Test type the items belong to (tat, wat, srt, ppdt, oir)",
    )
    import_cmd.add_argument(
        "--app-id",
        default=APP_ID,
        help="Application id the catalog is scoped to",
    )
    return parser.parse_args(argv)


def load_items(path: Path) -> list[dict[str, object]]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("items", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a list of items")
    return [item for item in payload if isinstance(item, dict)]


def import_items(path: Path, test_type: str, app_id: str) -> int:
    items = load_items(path)
    init_db()
    db = SessionLocal()
    try:
        entries = add_entries(db, app_id, normalize_test_type(test_type), items)
    finally:
        db.close()
    return len(entries)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        count = import_items(args.file, args.test_type, args.app_id)
    except HTTPException as e:
        logger.error(f"Import rejected: {e.detail}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {args.file}: {e}")
        return 1

    print(f"Imported {count} {args.test_type.lower()} items into '{args.app_id}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
