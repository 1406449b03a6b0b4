"""
JSON Storage CLI

Command-line host for the storage node.

Usage:
    python -m json_storage.cli --operation save --key user --value Ada
    python -m json_storage.cli -o read -k user -k missing
    python -m json_storage.cli -o delete --items batch.yaml --file data/store.json
    python -m json_storage.cli --list-tools
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .core import Config, Item, Operation, StoreError
from .tools import create_registry

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def load_items_file(items_path: str) -> List[Item]:
    """Load a batch from a YAML or JSON file containing a list of {key, value}."""
    path = Path(items_path)
    if not path.exists():
        raise FileNotFoundError(f"Items file not found: {items_path}")

    with open(path, encoding="utf-8") as f:
        # YAML is a superset of JSON, so one loader covers both
        data = yaml.safe_load(f)

    if isinstance(data, dict) and "items" in data:
        data = data["items"]
    if not isinstance(data, list):
        raise ValueError(f"Items file must contain a list of items: {items_path}")

    return [Item.from_dict(entry) for entry in data]


def build_items(keys: List[str], values: List[str], operation: Operation) -> List[Item]:
    """Pair --key and --value flags in order."""
    if operation is Operation.SAVE and len(values) != len(keys):
        raise ValueError(f"save needs one --value per --key (got {len(keys)} keys, {len(values)} values)")
    return [
        Item(key=key, value=values[i] if i < len(values) else None)
        for i, key in enumerate(keys)
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-storage",
        description="Store and retrieve key-value pairs in a JSON file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Save two keys
    json-storage -o save -k a -v 1 -k b -v 2

    # Read them back from a specific file
    json-storage -o read -k a -k b --file data/custom_json.json

    # Delete a batch described in YAML
    json-storage -o delete --items batch.yaml
        """,
    )

    parser.add_argument(
        "--operation", "-o",
        choices=[op.value for op in Operation],
        default=Operation.SAVE.value,
        help="Operation to run for every item (default: save)",
    )

    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Path to the JSON store (default: $JSON_STORAGE_FILE_PATH or ./data/custom_json.json)",
    )

    parser.add_argument(
        "--key", "-k",
        action="append",
        default=[],
        help="Item key (repeat for a batch)",
    )

    parser.add_argument(
        "--value", "-v",
        action="append",
        default=[],
        help="Item value for save, paired with --key in order",
    )

    parser.add_argument(
        "--items",
        type=str,
        help="YAML or JSON file with a list of {key, value} items",
    )

    parser.add_argument(
        "--continue-on-fail",
        action="store_true",
        help="Emit an error record instead of failing",
    )

    parser.add_argument(
        "--list-tools",
        action="store_true",
        help="Print registered tool definitions",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: $JSON_STORAGE_LOG_LEVEL or INFO)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = Config.from_env()
    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    registry = create_registry(config)

    if args.list_tools:
        definitions = [d.to_dict() for d in registry.get_all_definitions().values()]
        print(json.dumps(definitions, indent=2))
        return 0

    operation = Operation.parse(args.operation)

    try:
        if args.items:
            items = load_items_file(args.items)
        else:
            items = build_items(args.key, args.value, operation)
    except (OSError, ValueError, yaml.YAMLError, StoreError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if not items:
        parser.print_help(sys.stderr)
        return 1

    tool = registry.get("json_storage")
    try:
        result = tool.execute(
            operation=operation,
            file_path=args.file,
            items=items,
            continue_on_fail=args.continue_on_fail or config.continue_on_fail,
        )
    except StoreError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(json.dumps(result["items"], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
