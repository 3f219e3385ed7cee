"""
Console chooser implementation.

Asks the user on a text stream, one question per pair.
"""

import sys
from typing import TextIO

from typing_extensions import override

from ..comparator import Comparator
from ..interfaces import Chooser
from ..logging_config import get_logger
from ..models import ElementView, Verdict

# Accepted answers, lower-cased
ANSWERS: dict[str, Verdict] = {
    "1": Verdict.LEFT,
    "l": Verdict.LEFT,
    "2": Verdict.RIGHT,
    "r": Verdict.RIGHT,
    "t": Verdict.TIE,
    "=": Verdict.TIE,
    "p": Verdict.POSTPONE,
    "s": Verdict.POSTPONE,
    "u": Verdict.UNDO,
    "q": Verdict.QUIT,
}

HELP = "[1] left  [2] right  [t] tie  [p] postpone  [u] undo  [q] quit"


class ConsoleChooser(Chooser):
    """Interactive chooser reading answers line by line."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        """
        Initialize console chooser.

        Args:
            stdin: Stream to read answers from (default: sys.stdin)
            stdout: Stream to print questions to (default: sys.stdout)
        """
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.logger = get_logger("console_chooser")

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    @override
    def choose(
        self, left: ElementView, right: ElementView, comparator: Comparator
    ) -> Verdict:
        self._write(
            f"\nYou've made {len(comparator.history)} choice(s) so far. "
            f"There are {len(comparator.pending)} pairs left.\n"
        )
        self._write(f"  1) {left.element}\n  2) {right.element}\n")

        while True:
            self._write(f"{HELP}\n> ")
            line = self.stdin.readline()
            if not line:
                self.logger.info("Input closed, quitting")
                self._write("\n")
                return Verdict.QUIT

            answer = line.strip().lower()
            if answer in ANSWERS:
                return ANSWERS[answer]

            self.logger.debug(f"Unrecognised answer: {answer!r}")
            self._write(f"Unrecognised answer: {answer!r}\n")
