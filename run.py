#!/usr/bin/env python3
"""
Color Registry - command-line runner

Usage:
    python run.py decode ff8000                 # 16744448
    python run.py encode 16744448               # FF8000
    python run.py price FF0000                  # tier and required payment
    python run.py render FFDAB9 --name Peach    # metadata data URI
    python run.py render FFDAB9 --name Peach --decode
    python run.py deploy --owner alice          # registry summary
    python run.py --log-events render FFDAB9 --name Peach   # also writes logs/latest/events.jsonl
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Make the src package importable when run from a checkout
sys.path.insert(0, str(Path(__file__).parent))

from src.config import get_validated_config, load_config
from src.registry import ColorRegistry, RegistryError, decode, encode
from src.registry.renderer import decode_data_uri


logger = logging.getLogger("run")


def _decoded_document(uri: str) -> dict[str, Any]:
    """Outer JSON document with its image decoded back to SVG text."""
    _, payload = decode_data_uri(uri)
    document: dict[str, Any] = json.loads(payload)
    _, svg = decode_data_uri(document["image"])
    document["image"] = svg.decode("utf-8")
    return document


def _report_event_log(registry: ColorRegistry) -> None:
    event_logger = registry.events.event_logger
    if event_logger is not None:
        print(f"Events logged to: {event_logger.output_path}", file=sys.stderr)


def cmd_decode(args: argparse.Namespace) -> int:
    print(decode(args.hex))
    return 0


def cmd_encode(args: argparse.Namespace) -> int:
    print(encode(args.id))
    return 0


def cmd_price(args: argparse.Namespace) -> int:
    registry = ColorRegistry.from_config()
    print(json.dumps({
        "color": encode(decode(args.hex)),
        "tier": registry.tier_of(args.hex).value,
        "required_payment": registry.required_payment(args.hex),
    }))
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    registry = ColorRegistry.from_config(run_id=args.run_id)
    owner = args.owner or registry.current_principal()
    registry.create(
        args.hex, args.name, caller=owner, payment=registry.required_payment(args.hex)
    )
    uri = registry.render(args.hex)
    if args.decode:
        print(json.dumps(_decoded_document(uri), indent=2))
    else:
        print(uri)
    _report_event_log(registry)
    return 0


def cmd_deploy(args: argparse.Namespace) -> int:
    registry = ColorRegistry.from_config(principal=args.owner, run_id=args.run_id)
    print("Deploying color registry...")
    print(f"Registry deployed as: {registry.registry_id}")
    print(f"Principal: {registry.current_principal()}")
    print(f"Version: {registry.version}")
    print(f"Upgrades locked: {registry.is_locked()}")
    _report_event_log(registry)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Color registry: codec, pricing and metadata tools"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config YAML (default: config/config.yaml)",
    )
    parser.add_argument(
        "--log-events",
        action="store_true",
        help="Record committed events under logging.logs_dir/run_YYYYmmdd_HHMMSS/",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("decode", help="Hex text to identifier")
    p.add_argument("hex", help="Six hex characters, e.g. ff8000")
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("encode", help="Identifier to canonical hex text")
    p.add_argument("id", type=int, help="Integer in [0, 16777215]")
    p.set_defaults(func=cmd_encode)

    p = sub.add_parser("price", help="Tier and required payment for a color")
    p.add_argument("hex")
    p.set_defaults(func=cmd_price)

    p = sub.add_parser("render", help="Create a color in a fresh registry and render it")
    p.add_argument("hex")
    p.add_argument("--name", required=True, help="Name to give the color")
    p.add_argument("--owner", default=None, help="Creator (default: configured principal)")
    p.add_argument("--decode", action="store_true", help="Print decoded JSON instead of the URI")
    p.set_defaults(func=cmd_render)

    p = sub.add_parser("deploy", help="Construct a registry from config and summarize it")
    p.add_argument("--owner", default=None, help="Administrative principal override")
    p.set_defaults(func=cmd_deploy)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.run_id = datetime.now().strftime("run_%Y%m%d_%H%M%S") if args.log_events else None

    load_config(args.config)
    logging.basicConfig(
        level=get_validated_config().logging.level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result: int = args.func(args)
        return result
    except RegistryError as e:
        print(f"Error [{e.code.value}]: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
