#!/usr/bin/env python3
"""
EntiToon - Conversion CLI

    entitoon convert records.json --key-field patient_id
    cat records.jsonl | entitoon convert - --jsonl --stats
    entitoon serve --transport http --port 8080
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from entitoon.integration.toon import get_toon_config, load_toon_config
from entitoon.integration.toon.converter import ToonConverter
from entitoon.models.conversion import IssueSeverity
from entitoon.utils.errors import EntiToonError, InputError
from entitoon.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def create_parser():
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="entitoon",
        description="Convert JSON records into entity-tagged TOON lines",
    )
    parser.add_argument("--config", help="Path to a YAML or JSON configuration file")
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    convert_parser = subparsers.add_parser("convert", help="Convert JSON to TOON")
    convert_parser.add_argument(
        "input", nargs="?", default="-", help="Input JSON file ('-' for stdin)"
    )
    convert_parser.add_argument("--key-field", "-k", help="Field used as the entity id")
    convert_parser.add_argument("--output", "-o", help="Write TOON to this file")
    convert_parser.add_argument(
        "--jsonl", action="store_true", help="Treat input as one JSON record per line"
    )
    convert_parser.add_argument(
        "--validate", action="store_true", help="Report inputs that render ambiguously"
    )
    convert_parser.add_argument(
        "--stats", action="store_true", help="Print JSON vs TOON size on stderr"
    )

    server_parser = subparsers.add_parser("serve", help="Start the MCP server")
    server_parser.add_argument(
        "--transport", choices=["stdio", "http"], default="stdio", help="Transport protocol"
    )
    server_parser.add_argument("--host", help="Host for HTTP server")
    server_parser.add_argument("--port", type=int, help="Port for HTTP server")

    return parser


def parse_json_text(text: str, jsonl: bool = False) -> Any:
    """Decode JSON or JSON Lines text into records."""
    try:
        if jsonl:
            return [json.loads(line) for line in text.splitlines() if line.strip()]
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON input: {e}") from e


def read_input(source: str, jsonl: bool = False) -> Any:
    """Read records from a file path or stdin ('-')."""
    if source == "-":
        try:
            text = sys.stdin.read()
        except UnicodeDecodeError as e:
            raise InputError(f"Cannot decode stdin: {e}") from e
        return parse_json_text(text, jsonl)

    path = Path(source)
    if not path.is_file():
        raise InputError(f"Input file not found: {source}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InputError(f"Cannot decode {source}: {e}") from e
    except OSError as e:
        raise InputError(f"Cannot read {source}: {e}") from e
    return parse_json_text(text, jsonl or path.suffix == ".jsonl")


def handle_convert(args, converter: Optional[ToonConverter] = None) -> int:
    """Handle convert command."""
    config = get_toon_config()
    converter = converter or ToonConverter()
    key_field = args.key_field or config.default_key_field

    data = read_input(args.input, args.jsonl)
    toon = converter.convert(data, key_field)

    exit_code = EXIT_OK
    if args.validate or config.validate_input:
        report = converter.validate_records(data, key_field)
        for issue in report.issues:
            print(
                f"[{issue.severity.value}] record {issue.record_index}"
                f"{' ' + issue.key if issue.key else ''}: {issue.message}",
                file=sys.stderr,
            )
        if args.validate and any(i.severity == IssueSeverity.ERROR for i in report.issues):
            exit_code = EXIT_VALIDATION_ERROR

    if args.output:
        try:
            Path(args.output).write_text(toon + "\n" if toon else "", encoding="utf-8")
        except OSError as e:
            raise InputError(f"Cannot write {args.output}: {e}") from e
        logger.info(f"Wrote TOON to {args.output}")
    elif toon:
        print(toon)

    if args.stats or config.include_stats:
        stats = converter.estimate_savings(data, toon, key_field)
        print(
            f"records={stats.record_count} json_chars={stats.json_chars} "
            f"toon_chars={stats.toon_chars} saved={stats.savings_ratio:.1%}",
            file=sys.stderr,
        )

    return exit_code


def handle_serve(args) -> int:
    """Handle serve command."""
    from entitoon.mcp_server import run_server

    run_server(transport=args.transport, host=args.host, port=args.port)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_INPUT_ERROR

    if args.config and not Path(args.config).is_file():
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    config = load_toon_config(args.config) if args.config else get_toon_config()
    setup_logging(args.log_level or config.log_level)

    handlers = {
        "convert": handle_convert,
        "serve": handle_serve,
    }

    try:
        return handlers[args.command](args)
    except EntiToonError as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        error = e.to_dict()
        print(f"Error ({error['category']}): {error['error']}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
