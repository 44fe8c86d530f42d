"""Command line scoring of recorded boards."""

import argparse
import logging
from pathlib import Path

from cascadia_engine.errors import CascadiaError
from cascadia_engine.scoring.tally import tally, winner_names
from cascadia_engine.snapshot import load_snapshot

logger = logging.getLogger(__name__)


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cascadia-score", description="Score finished habitats."
    )
    parser.add_argument("snapshot", type=Path, help="YAML file with the boards")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log more")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = make_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    try:
        players, scorers = load_snapshot(args.snapshot)
    except CascadiaError as e:
        logger.error(f"Can't read {args.snapshot}: {e}")
        return 1
    for breakdown in tally(players, scorers):
        print(breakdown.human_description())
    print(f"Winner(s): {winner_names(players)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
