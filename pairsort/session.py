"""
Session runner for pairsort.

Drives a Comparator with a Chooser until the elements are sorted, the
chooser quits, or the question budget runs out.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from loguru import Logger

from .comparator import Comparator
from .exceptions import ConfigurationError
from .interfaces import Chooser
from .logging_config import get_logger
from .models import RankingOrder, Verdict

# Stop after this many postpones in a row when no budget is set
MAX_CONSECUTIVE_POSTPONES = 1000


@dataclass
class RunConfig:
    """Configuration for a sorting session."""

    max_questions: int | None = None  # questions asked before giving up, None = unlimited
    progress_every: int = 10  # log progress every N answers
    order: RankingOrder = RankingOrder.ASCENDING
    seed: int | None = None  # pair shuffle seed, None = random

    def __post_init__(self):
        """Validate configuration."""
        if self.max_questions is not None and self.max_questions <= 0:
            raise ConfigurationError(
                f"max_questions must be positive, got {self.max_questions}"
            )
        if self.progress_every <= 0:
            raise ConfigurationError(
                f"progress_every must be positive, got {self.progress_every}"
            )
        if not isinstance(self.order, RankingOrder):
            raise ConfigurationError(f"order must be a RankingOrder, got {self.order!r}")


@dataclass
class SessionSummary:
    """Outcome of a session run."""

    questions: int = 0
    choices: int = 0
    ties: int = 0
    postpones: int = 0
    undos: int = 0
    quit: bool = False
    is_sorted: bool = False
    ranking: list[tuple[Any, int]] = field(default_factory=list)
    inconsistent: list[int] = field(default_factory=list)


class SessionRunner:
    """Main loop asking a chooser about the comparator's current pair."""

    def __init__(self, comparator: Comparator, chooser: Chooser, config: RunConfig):
        """Initialize session runner with its collaborators."""
        self.comparator: Comparator = comparator
        self.chooser: Chooser = chooser
        self.config: RunConfig = config

        self.summary: SessionSummary = SessionSummary()
        self._consecutive_postpones: int = 0

        self.logger: Logger = get_logger("session")

    def apply(self, verdict: Verdict) -> bool:
        """
        Apply one verdict to the comparator's current pair.

        Returns:
            False if the verdict ends the session, True otherwise
        """
        comparator = self.comparator
        current = comparator.current

        if verdict is Verdict.QUIT:
            self.summary.quit = True
            return False

        if verdict is Verdict.UNDO:
            comparator.undo()
            self.summary.undos += 1
            self._consecutive_postpones = 0
            return True

        if current is None:
            self.logger.debug(f"Ignoring {verdict.value}: nothing left to compare")
            return True

        left, right = current
        if verdict is Verdict.LEFT:
            comparator.choose(left, right)
            self.summary.choices += 1
        elif verdict is Verdict.RIGHT:
            comparator.choose(right, left)
            self.summary.choices += 1
        elif verdict is Verdict.TIE:
            comparator.choose_both(left, right)
            self.summary.ties += 1
        elif verdict is Verdict.POSTPONE:
            comparator.postpone()
            self.summary.postpones += 1
            self._consecutive_postpones += 1
            return True

        self._consecutive_postpones = 0
        return True

    def run(self) -> SessionSummary:
        """Ask questions until sorted, quit, or out of budget."""
        comparator = self.comparator
        self.logger.info(
            f"Starting session: {len(comparator)} elements, "
            f"{len(comparator.pending)} pairs pending, config: {self.config}"
        )

        while not comparator.is_sorted:
            if (
                self.config.max_questions is not None
                and self.summary.questions >= self.config.max_questions
            ):
                self.logger.warning(
                    f"Question budget of {self.config.max_questions} exhausted "
                    f"with {len(comparator.pending)} pairs pending"
                )
                break

            if (
                self.config.max_questions is None
                and self._consecutive_postpones >= MAX_CONSECUTIVE_POSTPONES
            ):
                self.logger.warning(
                    f"Stopping after {self._consecutive_postpones} postpones in a row"
                )
                break

            left, right = comparator.left, comparator.right
            assert left is not None and right is not None, "Unsorted comparator must have a current pair"

            verdict = self.chooser.choose(left, right, comparator)
            self.summary.questions += 1
            self.logger.debug(
                f"Question {self.summary.questions}: {left.element} vs {right.element} -> {verdict.value}"
            )

            if not self.apply(verdict):
                self.logger.info("Chooser quit the session")
                break

            if self.summary.questions % self.config.progress_every == 0:
                self._log_progress()

        self.summary.is_sorted = comparator.is_sorted
        self.summary.ranking = comparator.ranking
        self.summary.inconsistent = comparator.inconsistent

        if self.summary.inconsistent:
            self.logger.warning(
                f"{len(self.summary.inconsistent)} elements sit on contradictory decision cycles"
            )

        self.logger.info(
            f"Session finished: sorted={self.summary.is_sorted}, "
            f"{self.summary.questions} questions, {len(comparator.history)} choices recorded"
        )
        return self.summary

    def _log_progress(self) -> None:
        """Log progress."""
        self.logger.info(
            f"Progress: {self.summary.questions} questions answered, "
            f"{len(self.comparator.history)} choices recorded, "
            f"{len(self.comparator.pending)} pairs pending"
        )
