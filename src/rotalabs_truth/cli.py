"""
rotalabs-truth Command Line Interface

Evaluates adapter definitions from JSON or YAML files.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from rotalabs_truth.core.config import load_definition
from rotalabs_truth.core.exceptions import ConfigurationError
from rotalabs_truth.plugins.registry import AdapterRegistry, build_adapter

logger = logging.getLogger(__name__)

EXIT_TRUE = 0
EXIT_FALSE = 1
EXIT_CONFIG_ERROR = 2


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="rotalabs-truth",
        description="Evaluate truth adapters and adapter chains",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    evaluate_parser = subparsers.add_parser("evaluate", help="Evaluate an adapter definition file")
    evaluate_parser.add_argument("file", type=Path, help="Definition file (.json, .yaml, .yml)")

    subparsers.add_parser("types", help="List registered adapter types")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "evaluate":
        return asyncio.run(cmd_evaluate(args.file))
    elif args.command == "types":
        return cmd_types()

    parser.print_help()
    return EXIT_CONFIG_ERROR


async def cmd_evaluate(path: Path) -> int:
    """Build, evaluate and dispose the adapter described by a file."""
    try:
        definition = load_definition(path)
        adapter = await build_adapter(definition)
    except (ConfigurationError, ImportError, OSError, ValueError) as e:
        logger.error(f"Failed to load {path}: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        result = await adapter.evaluate()
    finally:
        await adapter.dispose()

    print(json.dumps(result.to_dict(), indent=2, default=str))
    return EXIT_TRUE if result.answer else EXIT_FALSE


def cmd_types() -> int:
    """Print registered adapter types."""
    for entry in AdapterRegistry().list_types():
        print(f"{entry['type']:<16} {entry['config']}")
    return EXIT_TRUE


if __name__ == "__main__":
    sys.exit(main())
