"""Command line access to a store file.

Usage:
    python syncstore.py --file data.json set retries 3
    python syncstore.py --file data.json get retries
    python syncstore.py --config syncstore.yml list

Values given to `set` are parsed as YAML scalars/collections, so `3`,
`true` and `[a, b]` are stored as a number, a boolean and a list, while
dates such as `2024-01-01` stay strings. Output is JSON. Exit codes: 0 ok,
1 missing key, 2 store or format error.
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from syncstore_lib.config import load_settings, open_app_store
from syncstore_lib.logging_config import configure_logging
from syncstore_lib.storage import BACKENDS, StoreError, create_store
from syncstore_lib.storage.interfaces import StoreProtocol

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISSING = 1
EXIT_ERROR = 2


class _ValueLoader(yaml.SafeLoader):
    pass


# dates and timestamps stay strings; stores only hold plain JSON shapes
_ValueLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="syncstore", description="Inspect and edit a file-synchronized store")
    p.add_argument("--file", type=Path, help="Store file to open (overrides --config)")
    p.add_argument("--backend", choices=sorted(BACKENDS), help="Store format when --file is given [json]")
    p.add_argument("--config", type=Path, help="YAML settings file [syncstore.yml]")
    p.add_argument("--log-level", help="Override the configured log level")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("get", help="Print the value stored under KEY")
    g.add_argument("key")
    s = sub.add_parser("set", help="Store VALUE under KEY")
    s.add_argument("key")
    s.add_argument("value")
    r = sub.add_parser("remove", help="Delete KEY")
    r.add_argument("key")
    sub.add_parser("list", help="Print all keys")
    sub.add_parser("dump", help="Print the whole store")
    sub.add_parser("clear", help="Remove every entry")
    return p


def parse_value(text: str) -> Any:
    """Parse a command line value; anything YAML cannot parse stays a string."""
    try:
        return yaml.load(text, Loader=_ValueLoader)
    except yaml.YAMLError:
        return text


def _open(args: argparse.Namespace) -> StoreProtocol:
    if args.file is not None:
        return create_store(args.file, backend=args.backend or "json")
    settings = load_settings(args.config)
    if args.backend:
        settings.backend = args.backend
    return open_app_store(settings)


def _print(value: Any) -> None:
    print(json.dumps(value, indent=3, ensure_ascii=False))


def run(args: argparse.Namespace) -> int:
    store = _open(args)
    cmd = args.command
    if cmd == "get":
        value = store.get(args.key, None)
        if value is None and args.key not in store:
            print(f"Key not found: {args.key}", file=sys.stderr)
            return EXIT_MISSING
        _print(value)
    elif cmd == "set":
        previous = store.put(args.key, parse_value(args.value))
        logger.info("Set %s (previous: %r)", args.key, previous)
    elif cmd == "remove":
        if args.key not in store.keys():
            print(f"Key not found: {args.key}", file=sys.stderr)
            return EXIT_MISSING
        store.remove(args.key)
    elif cmd == "list":
        for key in store:
            print(key)
    elif cmd == "dump":
        _print(dict(store.items()))
    elif cmd == "clear":
        store.clear()
    return EXIT_OK


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    configure_logging(args.config, level=args.log_level)
    try:
        return run(args)
    except (StoreError, ValueError) as e:
        # ValueError: invalid settings file
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
