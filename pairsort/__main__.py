"""
CLI entry point for pairsort.

Parses arguments, validates config, and wires components.
"""

import argparse
import random
import sys
from argparse import Namespace
from pathlib import Path
from typing import TypedDict

from prettytable import PrettyTable

from .choosers.console_chooser import ConsoleChooser
from .choosers.dummy_chooser import DummyChooser
from .choosers.sim_chooser import SimulatedChooser
from .comparator import Comparator
from .exceptions import ConfigurationError, ValidationError
from .fetchers.file_fetcher import FileElementFetcher
from .interfaces import Chooser
from .logging_config import get_logger, setup_logging
from .models import Element, RankingOrder
from .session import RunConfig, SessionRunner, SessionSummary


class CLIArgs(TypedDict):
    """Typed representation of parsed CLI arguments."""
    elements_file: str
    label_key: str | None
    chooser: str
    order: str
    seed: int | None
    max_questions: int | None
    progress_every: int
    noise: float
    debug: bool
    log_level: str
    log_file: str | None


def parse_args(argv: list[str] | None = None) -> Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="pairsort",
        description="pairsort - rank a list by answering pairwise questions",
    )

    _ = parser.add_argument(
        "elements_file",
        help="JSON list or text file (one element per line) to sort"
    )
    _ = parser.add_argument(
        "--label-key",
        help="Key holding the label when the JSON list contains objects"
    )
    _ = parser.add_argument(
        "--chooser",
        choices=["console", "simulated", "dummy"],
        default="console",
        help="Who answers the questions (default: console)"
    )
    _ = parser.add_argument(
        "--order",
        choices=[order.value for order in RankingOrder],
        default=RankingOrder.DESCENDING.value,
        help="Ranking direction; descending lists the preferred element first (default: descending)"
    )
    _ = parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the pair shuffle and the simulated/dummy choosers"
    )
    _ = parser.add_argument(
        "--max-questions",
        type=int,
        help="Stop after this many questions (default: unlimited)"
    )
    _ = parser.add_argument(
        "--progress-every",
        type=int,
        default=10,
        help="Log progress every N answers (default: 10)"
    )
    _ = parser.add_argument(
        "--noise",
        type=float,
        default=0.1,
        help="Noise level for the simulated chooser (0-1, default: 0.1)"
    )
    _ = parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)"
    )
    _ = parser.add_argument(
        "--log-file",
        help="Write a rotating log file at this path"
    )

    return parser.parse_args(argv)


def args_to_typed(ns: Namespace) -> CLIArgs:
    """Convert argparse Namespace to typed CLIArgs."""
    return CLIArgs(
        elements_file=ns.elements_file,
        label_key=ns.label_key,
        chooser=ns.chooser,
        order=ns.order,
        seed=ns.seed,
        max_questions=ns.max_questions,
        progress_every=ns.progress_every,
        noise=ns.noise,
        debug=ns.debug,
        log_level=ns.log_level,
        log_file=ns.log_file,
    )


def build_config(args: CLIArgs) -> RunConfig:
    """Validate the input file and build the run configuration."""
    elements_file = Path(args["elements_file"])
    if not elements_file.is_file():
        raise ConfigurationError(f"elements file does not exist: {elements_file}")

    if not (0.0 <= args["noise"] <= 1.0):
        raise ConfigurationError(f"noise must be between 0 and 1, got {args['noise']}")

    return RunConfig(
        max_questions=args["max_questions"],
        progress_every=args["progress_every"],
        order=RankingOrder(args["order"]),
        seed=args["seed"],
    )


def create_chooser(args: CLIArgs, elements: list[Element]) -> Chooser:
    """Create a chooser based on type."""
    seed = args["seed"] if args["seed"] is not None else 42
    if args["chooser"] == "console":
        return ConsoleChooser()
    elif args["chooser"] == "simulated":
        # Earlier elements in the file score higher
        ground_truth = {
            element.label: float(len(elements) - position)
            for position, element in enumerate(elements)
        }
        return SimulatedChooser(ground_truth, noise=args["noise"], seed=seed)
    elif args["chooser"] == "dummy":
        return DummyChooser(mode="random", seed=seed)
    else:
        raise ConfigurationError(f"Unknown chooser type: {args['chooser']}")


def wire_components(args: CLIArgs) -> SessionRunner:
    """Wire dependency injection components."""
    logger = get_logger("wire_components")
    config = build_config(args)

    fetcher = FileElementFetcher(Path(args["elements_file"]), label_key=args["label_key"])
    elements = list(fetcher.list_elements())

    rng = random.Random(config.seed)
    comparator = Comparator(elements, order=config.order, rng=rng)
    chooser = create_chooser(args, elements)
    logger.info(f"Created {args['chooser']} chooser for {len(elements)} elements")

    return SessionRunner(comparator, chooser, config)


def render_ranking(summary: SessionSummary) -> PrettyTable:
    """Render the final ranking as a table."""
    table = PrettyTable()
    table.field_names = ["Rank", "Element", "Degree"]
    table.align["Rank"] = "r"
    table.align["Element"] = "l"
    table.align["Degree"] = "r"

    for rank, (element, degree) in enumerate(summary.ranking, 1):
        table.add_row([rank, str(element), degree])
    return table


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = args_to_typed(parse_args(argv))
    setup_logging(level=args["log_level"], debug=args["debug"], log_file=args["log_file"])
    logger = get_logger("main")

    try:
        runner = wire_components(args)
        summary = runner.run()
    except (ConfigurationError, ValidationError, FileNotFoundError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Session interrupted by user")
        print("\nSession interrupted by user")
        sys.exit(1)

    if summary.is_sorted:
        print(f"\nCompleted in {len(runner.comparator.history)} choices.")
    else:
        print(
            f"\nStopped with {len(runner.comparator.pending)} pairs left "
            f"after {len(runner.comparator.history)} choices; partial ranking:"
        )
    print(render_ranking(summary))

    if summary.inconsistent:
        labels = ", ".join(str(runner.comparator.elements[i]) for i in summary.inconsistent)
        print(f"\nContradictory decisions involve: {labels}")


if __name__ == "__main__":
    main()
