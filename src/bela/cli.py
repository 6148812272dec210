"""
Command-line interface for bot simulations and hand analysis.

Usage examples (after installing in editable mode):

    python -m bela.cli simulate --matches 20 --levels 2 1 2 1 --seed 7
    python -m bela.cli hand --seed 3 --show-events --events-out hand.json
"""
from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .analysis import analyze_game, generate_report
from .config import GameConfig
from .deal import HUMAN_SEAT
from .game import new_match
from .persistence import config_from_json, events_to_json, event_to_dict
from .simulate import make_bots, play_hand, run_matches, summarize

logger = logging.getLogger(__name__)


def _load_config(path: Optional[str]) -> GameConfig:
    if not path:
        return GameConfig()
    return config_from_json(Path(path).read_text(encoding="utf-8"))


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for the shuffles.",
    )
    parser.add_argument(
        "--levels",
        type=int,
        nargs=4,
        default=[2, 2, 2, 2],
        metavar=("NORTH", "EAST", "SOUTH", "WEST"),
        help="Bot level (1 = beginner, 2 = advanced) for each seat.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional JSON file with rule options (snake_case or camelCase keys).",
    )


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play full bot-vs-bot matches and print summary statistics.",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--matches",
        type=int,
        default=10,
        help="Number of matches to play.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    config = _load_config(args.config)
    logger.info(f"Simulating {args.matches} matches with levels {args.levels} (seed {args.seed})")
    results = run_matches(args.levels, args.matches, args.seed, config)
    summary = summarize(results)
    print(summary.format(), flush=True)


def _add_hand_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "hand",
        help="Play one bot hand and print the analysis report.",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--show-events",
        action="store_true",
        help="Print every event of the hand.",
    )
    parser.add_argument(
        "--events-out",
        type=str,
        default=None,
        help="Write the event log to this JSON file.",
    )
    parser.add_argument(
        "--all-seats",
        action="store_true",
        help="Grade every seat instead of only the human seat (south).",
    )
    parser.set_defaults(func=_cmd_hand)


def _cmd_hand(args: argparse.Namespace) -> None:
    config = _load_config(args.config)
    state = new_match(config, random.Random(args.seed))
    state = play_hand(state, make_bots(args.levels))

    if args.show_events:
        for event in state.events:
            d = event_to_dict(event)
            print(f"{d['type']:<15} {d['seat'] or '-':<6} {d['payload']}")
        print()

    analysis = analyze_game(state, None if args.all_seats else HUMAN_SEAT)
    print(generate_report(analysis), end="")

    if args.events_out:
        out = Path(args.events_out)
        out.write_text(events_to_json(state.events), encoding="utf-8")
        print(f"Saved event log to {out.resolve()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bela",
        description="Bela rules engine: bot simulations and hand analysis.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    _add_hand_parser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
