"""
Skill Gomoku CLI - Developer command-line interface.

Usage:
    skill-gomoku skills                    Print the skill catalog
    skill-gomoku replay <messages_file>    Feed scripted messages to the engine

A replay file is a JSON list of messages, each tagged with a client alias:
    [{"client": "alice", "type": "join", "payload": {"roomId": "demo"}},
     {"client": "bob", "type": "join", "payload": {"roomId": "demo"}},
     {"client": "alice", "type": "move", "payload": {"x": 7, "y": 7}}]
"""

import argparse
import json
import logging
import sys
from random import Random

from .config import get_config


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Skill Gomoku - five-in-a-row with one-shot skills",
        prog="skill-gomoku",
    )
    parser.add_argument("--log-level", help="Override SKILL_GOMOKU_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("skills", help="Print the skill catalog as JSON")

    replay_parser = subparsers.add_parser("replay", help="Replay scripted client messages")
    replay_parser.add_argument("messages_file", help="Path to a JSON list of messages")
    replay_parser.add_argument("--seed", type=int, help="Seed for random skill placement")
    replay_parser.add_argument(
        "--final-only", action="store_true", help="Only print the last reply"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or get_config().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "skills":
        return cmd_skills(args)
    elif args.command == "replay":
        return cmd_replay(args)
    else:
        parser.print_help()
        return 1


def cmd_skills(args):
    """Print the skill catalog."""
    from .engine_core import catalog

    print(json.dumps(catalog(), ensure_ascii=False, indent=2))
    return 0


def cmd_replay(args):
    """Replay a scripted message file through the message service."""
    from .api import GameService
    from .session import SessionManager

    try:
        with open(args.messages_file, "r", encoding="utf-8") as f:
            messages = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.messages_file}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.messages_file}: {e}", file=sys.stderr)
        return 1

    if not isinstance(messages, list):
        print("Error: Replay file must contain a JSON list", file=sys.stderr)
        return 1

    seed = args.seed if args.seed is not None else get_config().random_seed
    service = GameService(session_manager=SessionManager(rng_factory=lambda: Random(seed)))

    clients = {}
    failures = 0
    reply = None
    for index, entry in enumerate(messages):
        alias = str(entry.get("client", "default")) if isinstance(entry, dict) else "default"
        if alias not in clients:
            clients[alias] = service.connect().payload["clientId"]

        message = {k: v for k, v in entry.items() if k != "client"} if isinstance(entry, dict) else entry
        reply = service.handle_message(clients[alias], message)
        if reply.type.value == "error":
            failures += 1

        if not args.final_only:
            print(json.dumps(
                {"step": index, "client": alias, "reply": reply.to_wire()},
                ensure_ascii=False,
            ))

    if args.final_only and reply is not None:
        print(json.dumps(reply.to_wire(), ensure_ascii=False, indent=2))

    return 0 if failures == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
