#!/usr/bin/env python3
"""
Add a post or comment directly to the JSON document (same rules as POST /<collection>).

Usage:
  python scripts/add_item.py posts --title "Hello"
  python scripts/add_item.py comments --text "Nice" --field postId=1 [--id 10]
"""
from __future__ import annotations

import argparse
import json
import sys

from jsonboard.core.config import get_settings
from jsonboard.repositories.json_storage import COLLECTIONS, JsonStore
from jsonboard.services.collection_service import CollectionService

LABELS = {"posts": "Post", "comments": "Comment"}


def parse_field(raw: str) -> tuple:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"Invalid field '{raw}', expected key=value")
    return key.strip(), value


def main() -> None:
    ap = argparse.ArgumentParser(description="Add an item to a jsonboard collection")
    ap.add_argument("collection", choices=COLLECTIONS)
    ap.add_argument("--id", help="Explicit id (default: next numeric id)")
    ap.add_argument("--title")
    ap.add_argument("--text")
    ap.add_argument("--field", action="append", type=parse_field, default=[], help="Extra field key=value (repeatable)")
    ap.add_argument("--db", help="Path to the JSON document (default: JSONBOARD_DB_FILE)")
    args = ap.parse_args()

    store = JsonStore(args.db or get_settings().db_file)
    store.ensure_exists()
    fields = dict(args.field)
    for key in ("id", "title", "text"):
        value = getattr(args, key)
        if value:
            fields[key] = value

    svc = CollectionService(store, args.collection, LABELS[args.collection])
    item = svc.create_item(fields)
    print(json.dumps(item, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
