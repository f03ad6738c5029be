# src/rf_chain_planner/progress.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TextIO
import shutil
import sys


@dataclass
class _PhaseState:
    desc: str
    total: Optional[int]
    done: int = 0
    last_drawn: int = -1


def _terminal_width() -> int:
    try:
        return shutil.get_terminal_size(fallback=(80, 20)).columns
    except (OSError, ValueError):
        return 80


class ProgressReporter:
    """
    Textual progress bar for the candidate sweep.

    - Writes to stderr so the report on stdout stays clean.
    - Redraws at most every `refresh_every` units; large sweeps advance
      once per candidate.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        enabled: bool = True,
        refresh_every: int = 1,
    ) -> None:
        self.stream = stream or sys.stderr
        self.enabled = enabled
        self.refresh_every = max(1, refresh_every)
        self._phase: Optional[_PhaseState] = None

    def start(self, description: str, total: Optional[int] = None) -> None:
        """Begin a phase, closing any phase still open."""
        if not self.enabled:
            return
        if self._phase is not None:
            self.end()
        self._phase = _PhaseState(desc=description, total=total)
        self._draw()

    def advance(self, n: int = 1) -> None:
        if not self.enabled or self._phase is None:
            return
        self._phase.done += n
        if self._phase.done - self._phase.last_drawn >= self.refresh_every:
            self._draw()

    def end(self) -> None:
        """Print the phase summary line and forget the phase."""
        if not self.enabled or self._phase is None:
            return
        phase = self._phase
        self._wipe()
        if phase.total is None:
            self.stream.write(f"{phase.desc}: {phase.done}\n")
        else:
            self.stream.write(f"{phase.desc}: {phase.done}/{phase.total}\n")
        self.stream.flush()
        self._phase = None

    def message(self, text: str) -> None:
        if not self.enabled:
            return
        if self._phase is not None:
            self._wipe()
        self.stream.write(text + "\n")
        self.stream.flush()
        if self._phase is not None:
            self._draw()

    def _draw(self) -> None:
        phase = self._phase
        if phase is None:
            return
        width = _terminal_width()
        if not phase.total:
            text = f"{phase.desc}: {phase.done}"
        else:
            frac = max(0.0, min(1.0, phase.done / float(phase.total)))
            bar_width = max(10, min(40, width - len(phase.desc) - 20))
            filled = int(bar_width * frac)
            bar = "=" * filled + "." * (bar_width - filled)
            text = f"{phase.desc} [{bar}] {int(frac * 100):3d}% ({phase.done}/{phase.total})"
        self._wipe()
        self.stream.write(text[: width - 1])
        self.stream.flush()
        phase.last_drawn = phase.done

    def _wipe(self) -> None:
        width = _terminal_width()
        self.stream.write("\r" + " " * (width - 1) + "\r")


class NullProgressReporter(ProgressReporter):
    """No-op reporter used when the planner is driven programmatically."""

    def __init__(self) -> None:
        super().__init__(enabled=False)
