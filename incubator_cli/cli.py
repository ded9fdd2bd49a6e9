"""Operator CLI for the project incubator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from agent_tools import TOOL_DESCRIPTIONS, TOOL_KINDS, invoke, list_tools, serialize_result, tool_group
from incubation_engine import (
    IncubationEngine,
    IncubatorSettings,
    LedgerError,
    SessionNotFoundError,
    next_action,
    stage_for,
)
from incubation_engine.models import Response
from tx_adapter.evm import BuildError


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="incubator")
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    tools_parser = subparsers.add_parser("tools")
    tools_sub = tools_parser.add_subparsers(dest="tools_command", required=True)

    tools_list = tools_sub.add_parser("list")
    tools_list.set_defaults(func=_tools_list)

    tools_invoke = tools_sub.add_parser("invoke")
    tools_invoke.add_argument("name")
    tools_invoke.add_argument("--intent", required=True)
    tools_invoke.set_defaults(func=_tools_invoke)

    pipeline_parser = subparsers.add_parser("pipeline")
    pipeline_sub = pipeline_parser.add_subparsers(dest="pipeline_command", required=True)
    pipeline_next = pipeline_sub.add_parser("next")
    pipeline_next.add_argument("--completed", nargs="*", default=[])
    pipeline_next.set_defaults(func=_pipeline_next)

    stage_parser = subparsers.add_parser("stage")
    stage_parser.add_argument("count", type=int)
    stage_parser.set_defaults(func=_stage)

    chat_parser = subparsers.add_parser("chat")
    chat_parser.add_argument("--project", required=True)
    chat_parser.add_argument("--founder", required=True)
    chat_parser.set_defaults(func=_chat)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (OSError, ValueError, BuildError, LedgerError, SessionNotFoundError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2


def _tools_list(args: argparse.Namespace) -> int:
    tools = [
        {
            "name": name,
            "group": tool_group(name),
            "kind": TOOL_KINDS[name],
            "description": description,
        }
        for name, description in list_tools()
    ]
    print(json.dumps(tools, indent=2))
    return 0


def _tools_invoke(args: argparse.Namespace) -> int:
    if args.name not in TOOL_DESCRIPTIONS:
        raise BuildError(f"Unknown tool: {args.name}")
    intent = _load_intent(args.intent)
    result = invoke(args.name, intent)
    if TOOL_KINDS[args.name] == "write" and not isinstance(result, tuple):
        result = (result,)
    print(json.dumps(serialize_result(result), indent=2))
    return 0


def _pipeline_next(args: argparse.Namespace) -> int:
    upcoming = next_action(args.completed)
    print(json.dumps({"next_action": upcoming.value if upcoming else None}, indent=2))
    return 0


def _stage(args: argparse.Namespace) -> int:
    print(json.dumps({"completed": args.count, "stage": stage_for(args.count).value}, indent=2))
    return 0


def _chat(args: argparse.Namespace) -> int:
    engine = IncubationEngine(settings=IncubatorSettings.from_env())
    session = engine.create_session(args.project, args.founder)
    _print_response(engine.greeting(session.session_id), sys.stdout)
    for raw in sys.stdin:
        line = raw.strip()
        if not line:
            continue
        try:
            if line.startswith("/"):
                _chat_command(engine, session.session_id, line, sys.stdout)
            else:
                _print_response(engine.handle_message(session.session_id, line), sys.stdout)
        except (ValueError, LedgerError) as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
    print(json.dumps(session.to_dict(), indent=2))
    return 0


def _chat_command(engine: IncubationEngine, session_id: str, line: str, out: TextIO) -> None:
    """``/confirm [TX_HASH]`` or ``/fail REASON`` for the action in flight."""

    command, _, rest = line.partition(" ")
    in_flight = engine.get_session(session_id).ledger.in_flight()
    if in_flight is None:
        raise LedgerError("No action is in flight.")
    if command == "/confirm":
        action = engine.confirm_action(session_id, in_flight.action_id, tx_hash=rest or None)
    elif command == "/fail":
        action = engine.fail_action(session_id, in_flight.action_id, rest or "Failed by operator")
    else:
        raise ValueError(f"Unknown chat command: {command}")
    print(f"agent> {action.description}: {action.status.value}", file=out)


def _print_response(response: Response, out: TextIO) -> None:
    print(f"agent> {response.message}", file=out)
    for tx in response.transactions:
        print(json.dumps(tx.to_dict(), indent=2), file=out)


def _load_intent(source: str) -> dict:
    if source == "-":
        payload = json.loads(sys.stdin.read())
    elif source.lstrip().startswith("{"):
        payload = json.loads(source)
    else:
        payload = json.loads(Path(source).read_text())
    if not isinstance(payload, dict):
        raise ValueError("Intent must be a JSON object.")
    return payload


if __name__ == "__main__":
    raise SystemExit(main())
