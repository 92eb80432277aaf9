"""Main CLI entry point."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from listing_normalizer.adapters import AdapterRegistry
from listing_normalizer.config import CONFIG_ENV_VAR, AdapterOptions
from listing_normalizer.errors import RawFileNotFoundError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listing-normalizer",
        description="Normalize raw real-estate listing captures (JSONL) into one listing schema",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # normalize
    normalize_parser = subparsers.add_parser("normalize", help="Normalize one raw capture file")
    normalize_parser.add_argument(
        "--platform",
        required=True,
        help="Platform code or alias (see 'platforms')",
    )
    normalize_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Raw JSONL capture file",
    )
    normalize_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the run manifest JSON to file (default: stdout)",
    )
    normalize_parser.add_argument(
        "--max-items",
        type=int,
        default=None,
        help="Stop accepting new listings after N items",
    )
    normalize_parser.add_argument(
        "--include-raw",
        action="store_true",
        help="Attach each record's payload to its listings",
    )
    normalize_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Options YAML (default: ${CONFIG_ENV_VAR} if set)",
    )

    # platforms
    subparsers.add_parser("platforms", help="List registered platforms")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Parse args and dispatch to subcommands."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    registry = AdapterRegistry.default()

    if args.command == "normalize":
        _run_normalize(args, registry)
    elif args.command == "platforms":
        _run_platforms(registry)


def _load_options(config_path: Optional[Path]) -> AdapterOptions:
    if config_path is None and os.environ.get(CONFIG_ENV_VAR):
        config_path = Path(os.environ[CONFIG_ENV_VAR])
    if config_path is None:
        return AdapterOptions()
    return AdapterOptions.from_yaml(config_path)


def _run_normalize(args: argparse.Namespace, registry: AdapterRegistry) -> None:
    try:
        adapter = registry.create_adapter(args.platform, _load_options(args.config))
    except ValueError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)

    try:
        result = adapter.normalize(args.input, max_items=args.max_items, include_raw=args.include_raw)
    except RawFileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(1)

    output = json.dumps(result.to_json_dict(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {len(result.items)} listings from {result.stats.raw_records} records to {args.output}")
    else:
        print(output)


def _run_platforms(registry: AdapterRegistry) -> None:
    print(json.dumps(registry.describe(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
