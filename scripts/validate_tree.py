"""Validate a navigation, component, or app definition stored as JSON."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from stackspec.component import COMPONENT_TREE, validate_component
from stackspec.navigation import NAVIGATION_TREE, dump_app, validate_app, validate_navigation_item
from stackspec.utils.logging_config import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate a tree definition and print the result as JSON.")
    parser.add_argument("file", help="JSON file to validate")
    parser.add_argument(
        "--schema",
        choices=("navigation", "component", "app"),
        default="navigation",
        help="Schema to validate against",
    )
    parser.add_argument("--unique-ids", action="store_true", help="Reject repeated navigation item IDs")
    parser.add_argument("--max-depth", type=int, default=None, help="Maximum nesting depth (0 = unlimited)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: STACKSPEC_LOG_LEVEL)")
    args = parser.parse_args()

    configure_logging(args.log_level)
    raw = load_json(args.file)

    if args.schema == "navigation":
        result = validate_navigation_item(raw, unique_ids=args.unique_ids, max_depth=args.max_depth)
        dump = NAVIGATION_TREE.dump
    elif args.schema == "app":
        result = validate_app(raw, unique_ids=args.unique_ids, max_depth=args.max_depth)
        dump = dump_app
    else:
        result = validate_component(raw, max_depth=args.max_depth)
        dump = COMPONENT_TREE.dump

    if not result.ok:
        print(result.to_error_response().model_dump_json(indent=2))
        sys.exit(1)
    print(json.dumps(dump(result.value), indent=2, default=repr))


def load_json(file_path: str) -> Any:
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"JSON file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    main()
