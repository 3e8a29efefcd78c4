"""
Configuration for the timetable scheduler.
"""
import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

from .models.entities import WEEKDAYS, PERIODS


@dataclass
class SchedulerConfig:
    """
    Settings of a scheduling run.

    Attributes:
        checkpoint_interval: Number of search steps between progress checkpoints
        progress_cap: Highest progress percentage reported before a result is known
        days: Ordered weekdays the search may use
        periods: Ordered period enumeration the search may use
    """
    checkpoint_interval: int = 100
    progress_cap: float = 95.0
    days: Tuple[str, ...] = WEEKDAYS
    periods: Tuple[str, ...] = PERIODS

    def __post_init__(self):
        if self.checkpoint_interval < 1:
            raise ValueError(f"checkpoint_interval must be positive, got {self.checkpoint_interval}")
        if not 0 <= self.progress_cap <= 100:
            raise ValueError(f"progress_cap must be within 0-100, got {self.progress_cap}")
        if not self.days or not self.periods:
            raise ValueError("days and periods must not be empty")
        self.days = tuple(self.days)
        self.periods = tuple(self.periods)

    @classmethod
    def from_env(cls) -> 'SchedulerConfig':
        """Build a config from environment variables (and a .env file, if present)."""
        load_dotenv()
        interval = os.environ.get('TIMETABLE_CHECKPOINT_INTERVAL', '100')
        try:
            return cls(checkpoint_interval=int(interval))
        except ValueError as e:
            raise ValueError(f"Invalid TIMETABLE_CHECKPOINT_INTERVAL: {interval}") from e
