"""Command-line entry point: score one round file."""

from __future__ import annotations

import argparse
import logging
import sys

from .errors import RoundParseError, UnsupportedScopeError
from .round_io import read_round
from .scoring import score_round


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="balatro-score", description="Score one Balatro round")
    parser.add_argument("file", help="Round document (YAML or JSON), '-' for stdin")
    parser.add_argument("--explain", action="store_true", help="Print the hand name with the score")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every scoring step to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = score_round(read_round(args.file))
    except RoundParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except UnsupportedScopeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(result.explain() if args.explain else result.final_score)
    return 0


if __name__ == "__main__":
    sys.exit(main())
