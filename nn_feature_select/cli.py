"""
nn_feature_select.cli
=====================
Command line driver: load a dataset, normalize it, run one search and
report the best feature subset.

    nn-feature-select data.txt --strategy forward
    nn-feature-select data.txt            # asks for the strategy
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Iterable, Optional, Sequence

from .exceptions import FeatureSelectionError
from .io import load_instances
from .metric import normalize
from .search import RoundChoice, SearchStrategy, TraceEvent, run_search


__all__ = ["main", "prompt_strategy"]

_MENU = {
    "1": (SearchStrategy.FORWARD, "Forward Selection"),
    "2": (SearchStrategy.BACKWARD, "Backward Elimination"),
    "3": (SearchStrategy.VARIANCE, "Variance-Ranked Selection (classes 1 and 2)"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nn-feature-select",
        description="Greedy feature subset search for a 1-nearest-neighbor "
                    "classifier scored by leave-one-out accuracy.",
    )
    parser.add_argument(
        "dataset",
        help="whitespace separated file, one instance per line, label first",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in SearchStrategy],
        help="search strategy; asked interactively when omitted",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="do not print evaluated subsets or per-round choices",
    )
    return parser


def format_features(features: Iterable[int]) -> str:
    """``{1, 3, 4}`` style rendering of a feature subset."""
    return "{" + ", ".join(str(i) for i in sorted(features)) + "}"


def prompt_strategy(
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> SearchStrategy:
    """Show the numbered strategy menu until a valid entry is typed."""
    write("Type the number of the algorithm you want to run.")
    for key, (_, label) in _MENU.items():
        write(f"\t{key}) {label}")
    while True:
        choice = read("").strip()
        if choice in _MENU:
            return _MENU[choice][0]
        write("Please enter a valid selection.")


def _print_event(event: TraceEvent) -> None:
    print(
        f"Accuracy with features {format_features(event.subset)} "
        f"is: {event.accuracy:.3f}"
    )


def _print_choice(choice: RoundChoice) -> None:
    if choice.phase == "forward":
        print(f"Best choice is to add feature: {choice.feature}")
    elif choice.phase == "backward":
        print(f"Best choice is to remove feature: {choice.feature}")
    else:
        print(f"Next lowest {choice.phase} variance is feature: {choice.feature}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    print("Reading data from input file ", end="", flush=True)
    try:
        instances = load_instances(args.dataset)
    except (OSError, FeatureSelectionError) as exc:
        print()
        print(f"Failed to read {args.dataset}: {exc}", file=sys.stderr)
        return 1
    print("(done)")

    print("Normalizing data ", end="", flush=True)
    try:
        normalize(instances)
    except FeatureSelectionError as exc:
        print()
        print(f"Cannot normalize {args.dataset}: {exc}", file=sys.stderr)
        return 1
    print("(done)")

    if args.strategy is not None:
        strategy = SearchStrategy(args.strategy)
    else:
        try:
            strategy = prompt_strategy()
        except EOFError:
            print("No search strategy selected.", file=sys.stderr)
            return 2

    try:
        result = run_search(
            strategy,
            instances,
            callback=None if args.quiet else _print_event,
            on_choice=None if args.quiet else _print_choice,
        )
    except FeatureSelectionError as exc:
        print(f"Search failed: {exc}", file=sys.stderr)
        return 1

    print(f"The search took {result.elapsed * 1000:.0f} milliseconds.")
    print(
        f"Feature list {format_features(result.features)} is the best feature "
        f"subset, with an accuracy of {result.accuracy:.3f}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
