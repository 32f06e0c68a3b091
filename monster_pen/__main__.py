"""Headless replay: feed a scripted button sequence and print LCD frames.

Usage:
    python -m monster_pen --polls 300 --step-ms 100
    python -m monster_pen --script "S.RRS.UU" --every 1 --seed 7
"""
from __future__ import annotations

import argparse
import logging
import sys

from monster_pen.clock import ManualClock
from monster_pen.config import PenConfig, load_config
from monster_pen.engine import Engine
from monster_pen.types import Button, Species

SCRIPT_KEYS = {
    "L": Button.LEFT,
    "R": Button.RIGHT,
    "U": Button.UP,
    "D": Button.DOWN,
    "S": Button.SELECT,
    ".": Button.NONE,
}

STARTING_PEN = (
    (Species.FUZZBALL, 2),
    (Species.DRAGON, 6),
    (Species.SLIME, 10),
)


def parse_script(script: str) -> list[Button]:
    buttons = []
    for ch in script.upper():
        if ch.isspace():
            continue
        if ch not in SCRIPT_KEYS:
            raise ValueError(
                f"Unknown script key {ch!r}, expected one of {''.join(SCRIPT_KEYS)}"
            )
        buttons.append(SCRIPT_KEYS[ch])
    return buttons


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monster-pen",
        description="Replay a button script against a simulated monster pen.",
    )
    parser.add_argument("--config", help="JSON file of PenConfig fields")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--script", default="", help=f"button keys: {''.join(SCRIPT_KEYS)}")
    parser.add_argument(
        "--polls", type=int, default=0,
        help="idle polls to run after the script (default: 0)",
    )
    parser.add_argument("--step-ms", type=int, default=100, help="clock advance per poll")
    parser.add_argument("--every", type=int, default=10, help="print a frame every N polls")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config) if args.config else PenConfig()
        buttons = parse_script(args.script)
    except (OSError, ValueError) as exc:
        print(f"monster-pen: {exc}", file=sys.stderr)
        return 2
    if args.step_ms < 0 or args.every <= 0 or args.polls < 0:
        print("monster-pen: --step-ms and --polls must be >= 0, --every must be > 0", file=sys.stderr)
        return 2

    clock = ManualClock()
    engine = Engine(config=config, clock=clock, seed=args.seed)
    for species, position in STARTING_PEN:
        if position < config.writable_width:
            engine.spawn(species, position)

    buttons += [Button.NONE] * args.polls
    for button in buttons:
        clock.advance(args.step_ms)
        engine.poll(button)
        if engine.poll_number % args.every == 0:
            top, bottom = engine.frame()
            print(f"[{clock.now_ms():>8} ms] |{top}|")
            print(f"{'':14}|{bottom}|")
    return 0


if __name__ == "__main__":
    sys.exit(main())
