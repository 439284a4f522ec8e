import argparse
import json
import logging
import os
import sys
from pathlib import Path

from src.adapters.json_file_store import JsonFileCollectionStore
from src.app_shell.config import resolve_db_path, validate_store_rules
from src.core.ports.store import StoreError
from src.rules.loader import load_rules
from src.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules(rules_path: Path) -> Rules:
    if not rules_path.exists():
        logger.info(f"Rules file {rules_path} not found, using defaults.")
        return Rules()

    try:
        return load_rules(rules_path)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


def open_store(rules: Rules, db: str | None) -> JsonFileCollectionStore:
    db_path = resolve_db_path(rules, Path.cwd(), db)
    if not db_path.exists():
        logger.error(f"Database {db_path} not found.")
        sys.exit(1)

    try:
        return JsonFileCollectionStore(
            db_path,
            foreign_key_suffix=rules.store.foreign_key_suffix,
            persist=False,
        )
    except StoreError as e:
        logger.error(str(e))
        sys.exit(1)


def handle_serve(rules_path: Path, args: argparse.Namespace) -> None:
    import uvicorn

    rules = get_rules(rules_path)
    db_path = resolve_db_path(rules, Path.cwd(), args.db)
    try:
        validate_store_rules(rules, db_path)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    # The app resolves its own settings from the environment
    os.environ["JCA_RULES_PATH"] = str(rules_path.resolve())
    os.environ["JCA_DB_PATH"] = str(db_path)

    uvicorn.run(
        "src.api.main:app",
        host=args.host or rules.server.host,
        port=args.port or rules.server.port,
        reload=args.reload,
    )


def handle_collections(rules_path: Path, args: argparse.Namespace) -> None:
    store = open_store(get_rules(rules_path), args.db)
    for name in store.collection_names():
        records = store.get_collection(name) or []
        print(f"{name}\t{len(records)}")


def handle_dump(rules_path: Path, args: argparse.Namespace) -> None:
    store = open_store(get_rules(rules_path), args.db)
    data = store.state()
    if args.collection:
        if not store.has_collection(args.collection):
            logger.error(f"Collection '{args.collection}' not found.")
            sys.exit(1)
        data = store.get_collection(args.collection)

    output = json.dumps(data, indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        print(output)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="JSON Collections API CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("--db", help="Database file (overrides store.path in rules)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", help="Bind address (default from rules)")
    serve_parser.add_argument("--port", type=int, help="Bind port (default from rules)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # collections
    subparsers.add_parser("collections", help="List collections and record counts")

    # dump
    dump_parser = subparsers.add_parser("dump", help="Print the database as JSON")
    dump_parser.add_argument("collection", nargs="?", help="Only this collection")
    dump_parser.add_argument("--output", "-o", help="Write to a file instead of stdout")

    args = parser.parse_args(argv)
    rules_path = Path(args.rules)

    if args.command == "serve":
        handle_serve(rules_path, args)
    elif args.command == "collections":
        handle_collections(rules_path, args)
    elif args.command == "dump":
        handle_dump(rules_path, args)


if __name__ == "__main__":
    main()
