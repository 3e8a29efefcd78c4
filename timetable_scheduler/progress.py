"""
Progress and log reporting for schedule generation.
"""
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

LogCallback = Callable[[str], None]
ProgressCallback = Callable[[float], None]


class ProgressReporter:
    """
    Forwards trace lines and progress to the caller's callbacks.

    Every line is also written to the module logger. Progress never decreases
    within one run and stays at or below `cap` until `complete()` is called.
    """

    def __init__(self,
                 on_log: Optional[LogCallback] = None,
                 on_progress: Optional[ProgressCallback] = None,
                 cap: float = 95.0):
        self.on_log = on_log
        self.on_progress = on_progress
        self.cap = cap
        self.progress = 0.0
        self.lines: List[str] = []

    def log(self, message: str, level: int = logging.INFO) -> None:
        logger.log(level, message)
        self.lines.append(message)
        if self.on_log:
            self.on_log(message)

    def warning(self, message: str) -> None:
        self.log(message, logging.WARNING)

    def report(self, percent: float) -> float:
        """
        Report search progress, clamped to the cap and never decreasing.

        Returns:
            The progress value actually reported
        """
        percent = min(max(percent, 0.0), self.cap)
        self.progress = max(self.progress, percent)
        if self.on_progress:
            self.on_progress(self.progress)
        return self.progress

    def complete(self) -> None:
        """Report 100% once a successful result is known."""
        self.progress = 100.0
        if self.on_progress:
            self.on_progress(self.progress)
