#!/usr/bin/env python3
"""Print the Fibonacci number at a given position.

Runs standalone inside the demonstration image:

    python /fibonacci.py 10    # prints 55

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import argparse
import sys
from typing import List, Optional


def fibonacci(n: int) -> int:
    """Return F(n) with F(0) = 0 and F(1) = 1."""
    if n < 0:
        raise ValueError("Position must be a non-negative integer")
    current, following = 0, 1
    for _ in range(n):
        current, following = following, current + following
    return current


def fibonacci_sequence(count: int) -> List[int]:
    """Return the first ``count`` Fibonacci numbers."""
    if count < 0:
        raise ValueError("Count must be a non-negative integer")
    sequence = []
    current, following = 0, 1
    for _ in range(count):
        sequence.append(current)
        current, following = following, current + following
    return sequence


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid position: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"position must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fibonacci",
        description="Print the Fibonacci number at a position.",
    )
    parser.add_argument("position", type=non_negative_int)
    parser.add_argument(
        "--sequence",
        action="store_true",
        help="Print every number up to and including the position",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.sequence:
        for index, value in enumerate(fibonacci_sequence(args.position + 1)):
            print(f"F({index}) = {value}")
    else:
        print(fibonacci(args.position))
    return 0


if __name__ == "__main__":
    sys.exit(main())
