"""
Command-line interface for Honeycomb.

Usage:
    honeycomb query "customer Q4 metrics" --limit 3
    honeycomb enter customer-data-q4 --origin agent-1
    honeycomb next-steps customer-data-q4 --intent "revenue context"
    honeycomb traverse customer-data-q4 to-finance --intent "revenue" --payload '{"q": 4}'
    honeycomb deposit customer-data-q4 '{"notes": "checked"}'
    honeycomb create hexes/new-hex.json
    honeycomb list
    honeycomb journey --limit 20

All commands print JSON to stdout. The storage root defaults to the
configured one (see honeycomb.config) and can be overridden with --path.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from honeycomb.config import HoneycombConfig
from honeycomb.graph.context import AgentContext
from honeycomb.graph.navigator import Hive
from honeycomb.observability import configure_logging, set_trace_context


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _parse_json_arg(value: str | None) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid JSON argument: {e}") from e


def _context_from_args(args: argparse.Namespace) -> AgentContext:
    return AgentContext(
        intent=getattr(args, "intent", None),
        payload=_parse_json_arg(getattr(args, "payload", None)),
        origin=getattr(args, "origin", None),
    )


def _build_hive(args: argparse.Namespace) -> Hive:
    config = HoneycombConfig()
    if args.path:
        config.storage_path = Path(args.path)
    return Hive.from_config(config)


def _hex_summary(hex) -> dict[str, Any]:
    summary = {
        "id": hex.id,
        "name": hex.name,
        "type": str(hex.hex_type),
        "tags": hex.tags,
        "edgeCount": len(hex.edges),
    }
    if hex.description is not None:
        summary["description"] = hex.description
    return summary


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_query(args: argparse.Namespace) -> int:
    hive = _build_hive(args)
    context = AgentContext(origin=args.origin) if args.origin else None
    results = asyncio.run(hive.query(args.intent, args.limit, context=context))
    _print_json([r.to_dict() for r in results])
    return 0


def cmd_enter(args: argparse.Namespace) -> int:
    hive = _build_hive(args)
    hex = asyncio.run(hive.enter(args.hex_id, _context_from_args(args)))
    if hex is None:
        _print_json({"error": "Hex not found"})
        return 1
    _print_json(hex.to_record())
    return 0


def cmd_next_steps(args: argparse.Namespace) -> int:
    hive = _build_hive(args)
    edges = asyncio.run(hive.next_steps(args.hex_id, _context_from_args(args)))
    _print_json([e.model_dump(mode="json", by_alias=True, exclude_none=True) for e in edges])
    return 0


def cmd_traverse(args: argparse.Namespace) -> int:
    hive = _build_hive(args)
    result = asyncio.run(hive.traverse(args.hex_id, args.edge_id, _context_from_args(args)))
    _print_json(result.to_dict())
    return 0 if result.success else 1


def cmd_deposit(args: argparse.Namespace) -> int:
    hive = _build_hive(args)
    context = AgentContext(origin=args.origin) if args.origin else None
    data = _parse_json_arg(args.data)
    success = asyncio.run(hive.deposit(args.hex_id, data, context=context))
    _print_json({"success": success, "hexId": args.hex_id})
    return 0 if success else 1


def cmd_create(args: argparse.Namespace) -> int:
    hive = _build_hive(args)
    draft = json.loads(Path(args.file).read_text(encoding="utf-8"))
    drafts = draft if isinstance(draft, list) else [draft]

    async def _create_all() -> list:
        return [await hive.create_hex(item) for item in drafts]

    try:
        hexes = asyncio.run(_create_all())
    except (ValidationError, ValueError) as e:
        _print_json({"success": False, "error": f"Invalid hex: {e}"})
        return 1
    created = [{"id": h.id, "name": h.name, "type": str(h.hex_type)} for h in hexes]
    _print_json({"success": True, "created": created})
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    hive = _build_hive(args)
    hexes = asyncio.run(hive.list_hexes())
    _print_json([_hex_summary(h) for h in hexes])
    return 0


def cmd_journey(args: argparse.Namespace) -> int:
    hive = _build_hive(args)
    entries = asyncio.run(hive.journey_log(args.limit))
    _print_json([e.to_record() for e in entries])
    return 0


def register_commands(subparsers: argparse._SubParsersAction) -> None:
    """Register the navigation commands on an argparse subparser group."""

    def _add_context_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--intent", help="What the agent is trying to do")
        p.add_argument("--payload", help="JSON payload the agent is carrying")
        p.add_argument("--origin", help="Agent / journey identifier")

    p = subparsers.add_parser("query", help="Find hexes matching an intent")
    p.add_argument("intent")
    p.add_argument("--limit", type=int, default=None)
    p.add_argument("--origin", help="Record the query in this journey")
    p.set_defaults(func=cmd_query)

    p = subparsers.add_parser("enter", help="Show a hex's contents")
    p.add_argument("hex_id")
    _add_context_args(p)
    p.set_defaults(func=cmd_enter)

    p = subparsers.add_parser("next-steps", help="Edges available from a hex")
    p.add_argument("hex_id")
    _add_context_args(p)
    p.set_defaults(func=cmd_next_steps)

    p = subparsers.add_parser("traverse", help="Follow an edge")
    p.add_argument("hex_id")
    p.add_argument("edge_id")
    _add_context_args(p)
    p.set_defaults(func=cmd_traverse)

    p = subparsers.add_parser("deposit", help="Merge JSON data into a hex")
    p.add_argument("hex_id")
    p.add_argument("data", help="JSON value to deposit")
    p.add_argument("--origin", help="Record the deposit in this journey")
    p.set_defaults(func=cmd_deposit)

    p = subparsers.add_parser("create", help="Create hexes from a JSON file (object or list)")
    p.add_argument("file")
    p.set_defaults(func=cmd_create)

    p = subparsers.add_parser("list", help="List all hexes")
    p.set_defaults(func=cmd_list)

    p = subparsers.add_parser("journey", help="Recent journey log entries")
    p.add_argument("--limit", type=int, default=None, help="Default: configured journey_limit")
    p.set_defaults(func=cmd_journey)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="honeycomb",
        description="Honeycomb - navigate a knowledge graph by intent",
    )
    parser.add_argument("--path", help="Storage root (contains hexes/ and journeys.jsonl)")
    parser.add_argument("--log-level", default=None, help="Log level (default: $LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    register_commands(subparsers)

    args = parser.parse_args(argv)

    configure_logging(level=args.log_level or HoneycombConfig().log_level, stream=sys.stderr)
    if getattr(args, "origin", None):
        set_trace_context(journey_id=args.origin)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
