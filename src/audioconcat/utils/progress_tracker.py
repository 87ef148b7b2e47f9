"""
Progress tracking module for audioconcat.

Each pipeline phase gets its own 0-100 indicator. What moves the indicator is
a progress source: either percentages parsed from the external tool's
diagnostic stream, or a synthetic ticker for when no real signal exists.
Exactly one source drives an indicator at a time.
"""

import time
import threading
import logging
from contextlib import contextmanager
from typing import Optional

from tqdm import tqdm

from ..config import ProgressMode
from .progress_parser import MAX_PROGRESS, parse_progress_line


class PhaseProgress:
    """
    Percentage indicator for one pipeline phase.

    The value never moves backwards; ``complete`` forces it to 100.
    """

    def __init__(self, pbar: Optional[tqdm] = None):
        self.pbar = pbar
        self.current = 0
        self._lock = threading.Lock()

    def advance_to(self, percent: int) -> bool:
        """
        Move the indicator forward to ``percent``.

        Returns:
            bool: True if the indicator moved
        """
        percent = min(int(percent), MAX_PROGRESS)
        with self._lock:
            if percent <= self.current:
                return False
            delta = percent - self.current
            self.current = percent
            if self.pbar is not None:
                self.pbar.update(delta)
            return True

    def complete(self):
        """Force the indicator to 100%."""
        self.advance_to(MAX_PROGRESS)

    def write(self, message: str):
        """Print a message without breaking the progress bar."""
        if self.pbar is not None:
            self.pbar.write(message)
        else:
            tqdm.write(message)


class ProgressSource:
    """Base class for things that drive a PhaseProgress."""

    def start(self, indicator: PhaseProgress):
        self.indicator = indicator

    def feed(self, line: str):
        """Offer one diagnostic line; sources that ignore output do nothing."""

    def stop(self):
        """Stop driving the indicator. Safe to call more than once."""


class ParsedProgressSource(ProgressSource):
    """Moves the indicator from percentages found in diagnostic lines."""

    def __init__(self, multiplier: float = 1):
        self.multiplier = multiplier
        self.indicator = None

    def feed(self, line: str):
        percent = parse_progress_line(line, self.multiplier)
        if percent > 0 and self.indicator is not None:
            self.indicator.advance_to(percent)


class TickerProgressSource(ProgressSource):
    """
    Synthetic progress: advances the indicator by ``step`` every ``interval``
    seconds, stopping short of 100 so completion is left to the runner.
    """

    def __init__(self, interval: float = 0.5, step: int = 1, ceiling: int = MAX_PROGRESS - 1):
        self.interval = interval
        self.step = step
        self.ceiling = ceiling
        self.indicator = None
        self._stop_event = threading.Event()
        self._thread = None

    def start(self, indicator: PhaseProgress):
        self.indicator = indicator
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._tick, daemon=True)
        self._thread.start()

    def _tick(self):
        while not self._stop_event.wait(self.interval):
            target = min(self.indicator.current + self.step, self.ceiling)
            if target <= self.indicator.current:
                continue
            self.indicator.advance_to(target)

    def stop(self):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None


def create_progress_source(mode: ProgressMode, multiplier: float = 1) -> ProgressSource:
    """Pick the progress source for a phase."""
    if mode == ProgressMode.TICKER:
        return TickerProgressSource()
    return ParsedProgressSource(multiplier)


class ProgressTracker:
    """Creates per-phase progress indicators and prints step messages."""

    def __init__(self, use_progress_bars: bool = True, quiet: bool = False):
        """
        Initialize progress tracker.

        Args:
            use_progress_bars: Whether to draw tqdm bars
            quiet: Suppress step messages and bars
        """
        self.use_progress_bars = use_progress_bars and not quiet
        self.quiet = quiet
        self.logger = logging.getLogger(__name__)

    @contextmanager
    def phase_progress(self, description: str):
        """
        Context manager yielding a fresh PhaseProgress for one phase.

        Args:
            description: Label shown next to the bar
        """
        if self.use_progress_bars:
            with tqdm(
                total=MAX_PROGRESS,
                desc=description,
                unit="%",
                ncols=80,
                bar_format="{desc}: {percentage:3.0f}%|{bar}| [{elapsed}]",
            ) as pbar:
                yield PhaseProgress(pbar)
        else:
            yield PhaseProgress(None)

    def print_step(self, message: str, step: Optional[int] = None, total_steps: Optional[int] = None):
        """
        Print a processing step message.

        Args:
            message: The message to print
            step: Current step number (optional)
            total_steps: Total number of steps (optional)
        """
        if self.quiet:
            return

        if step is not None and total_steps is not None:
            tqdm.write(f"[{step}/{total_steps}] {message}")
        else:
            tqdm.write(f"* {message}")


class ProcessingTimer:
    """Simple timer for measuring processing duration."""

    def __init__(self):
        self.start_time = None
        self.end_time = None

    def start(self):
        """Start the timer."""
        self.start_time = time.time()

    def stop(self):
        """Stop the timer and return duration."""
        self.end_time = time.time()
        return self.get_duration()

    def get_duration(self) -> float:
        """Get the current duration in seconds."""
        if self.start_time is None:
            return 0.0
        end_time = self.end_time or time.time()
        return end_time - self.start_time


def create_progress_tracker(quiet: bool = False) -> ProgressTracker:
    """
    Create a progress tracker with appropriate settings.

    Args:
        quiet: Suppress step messages and progress bars

    Returns:
        Configured ProgressTracker instance
    """
    return ProgressTracker(use_progress_bars=True, quiet=quiet)


def format_duration(seconds: float) -> str:
    """Format duration in a human-readable way."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = seconds % 60
        return f"{hours}h {minutes}m {secs:.1f}s"
