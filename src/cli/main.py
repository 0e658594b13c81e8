"""Snapshot ingest CLI entry points.
This module exposes local commands for invoking and validating requests.
It maps argparse commands onto the ingest handler.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Sequence

from core.config import IngestConfig
from core.constants import HTTP_OK
from core.errors import ClientInputError, SnapshotConfigError, UnauthorizedError
from ingest.events import request_from_event
from ingest.handler import SnapshotIngestHandler
from ingest.runtime import build_default_handler
from store.memory_store import InMemorySnapshotStore


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="snapshot-ingest",
        description="Portfolio snapshot ingest CLI",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_invoke_command(subparsers)
    _add_validate_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the snapshot ingest CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = IngestConfig.from_env()
        event = _build_event(args)
    except (SnapshotConfigError, OSError, ValueError) as error:
        print(f"error={error}")
        return 2
    if args.command == "invoke":
        return _run_invoke_command(config, event, args)
    if args.command == "validate":
        return _run_validate_command(config, event)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _add_event_arguments(parser: argparse.ArgumentParser) -> None:
    """Register request source arguments shared by all commands."""
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--body", help="Raw JSON request body")
    source.add_argument("--body-file", help="Path to a JSON request body file")
    source.add_argument("--event-file", help="Path to an API Gateway proxy event JSON file")
    parser.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Request header; repeat for multiple headers",
    )


def _add_invoke_command(subparsers: Any) -> None:
    """Register invoke subcommand."""
    parser = subparsers.add_parser(
        "invoke",
        help="Run the full handler and print the proxy response",
    )
    _add_event_arguments(parser)
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="Write to a throwaway in-memory store instead of DynamoDB",
    )


def _add_validate_command(subparsers: Any) -> None:
    """Register validate subcommand."""
    parser = subparsers.add_parser(
        "validate",
        help="Validate a request without writing it",
    )
    _add_event_arguments(parser)


def _run_invoke_command(
    config: IngestConfig, event: dict[str, Any], args: argparse.Namespace
) -> int:
    """Handle invoke command.

    Args:
        config: Runtime configuration.
        event: Proxy event to handle.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    if args.in_memory:
        handler = SnapshotIngestHandler(InMemorySnapshotStore(), config)
    else:
        try:
            handler = build_default_handler(config)
        except SnapshotConfigError as error:
            print(f"error={error}")
            return 2
    response = handler.handle_event(event)
    print(json.dumps(response.to_proxy(), indent=2))
    return 0 if response.status_code == HTTP_OK else 1


def _run_validate_command(config: IngestConfig, event: dict[str, Any]) -> int:
    """Handle validate command.

    Args:
        config: Runtime configuration.
        event: Proxy event to validate.

    Returns:
        Exit code.
    """
    handler = SnapshotIngestHandler(InMemorySnapshotStore(), config)
    try:
        record = handler.validate(request_from_event(event))
    except (ClientInputError, UnauthorizedError) as error:
        print(json.dumps({"error": error.message}))
        return 1
    print(json.dumps(record.to_item()))
    return 0


def _build_event(args: argparse.Namespace) -> dict[str, Any]:
    """Build a proxy event from CLI source arguments.

    Args:
        args: Parsed CLI args.

    Returns:
        API Gateway proxy event.

    Raises:
        OSError: If a source file cannot be read.
        ValueError: If an event file or header is malformed.
    """
    if args.event_file:
        event = json.loads(Path(args.event_file).read_text(encoding="utf-8"))
        if not isinstance(event, dict):
            raise ValueError(f"Event file {args.event_file} must contain a JSON object.")
    elif args.body_file:
        event = {"body": Path(args.body_file).read_text(encoding="utf-8")}
    else:
        event = {"body": args.body}
    headers = dict(event.get("headers") or {})
    headers.update(_parse_headers(args.header))
    event["headers"] = headers
    return event


def _parse_headers(raw_headers: Sequence[str]) -> dict[str, str]:
    """Parse repeated ``NAME=VALUE`` header arguments.

    Args:
        raw_headers: Raw header arguments.

    Returns:
        Header mapping.

    Raises:
        ValueError: If an argument has no ``=`` separator.
    """
    headers: dict[str, str] = {}
    for raw_header in raw_headers:
        name, separator, value = raw_header.partition("=")
        if not separator or not name:
            raise ValueError(
                f"Invalid --header value '{raw_header}': expected NAME=VALUE."
            )
        headers[name.strip()] = value.strip()
    return headers
