"""
Result models returned by the scheduler service.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from .entities import ScheduleSlot


@dataclass
class ScheduleStats:
    """Run statistics of a successful search."""
    total_slots: int
    filled_slots: int
    iterations: int
    duration_ms: int


@dataclass
class GenerationResult:
    """
    Outcome of one schedule generation.

    On success, `schedule` and `stats` are set. On failure, `message` and
    `conflicts` describe why no schedule was produced.
    """
    success: bool
    schedule: List[ScheduleSlot] = field(default_factory=list)
    stats: Optional[ScheduleStats] = None
    message: str = ""
    conflicts: List[str] = field(default_factory=list)

    @classmethod
    def succeeded(cls, schedule: List[ScheduleSlot], stats: ScheduleStats) -> 'GenerationResult':
        return cls(success=True, schedule=list(schedule), stats=stats)

    @classmethod
    def failed(cls, message: str, conflicts: List[str]) -> 'GenerationResult':
        return cls(success=False, message=message, conflicts=list(conflicts))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-serialisable dictionary."""
        if self.success:
            return {
                'success': True,
                'schedule': [asdict(slot) for slot in self.schedule],
                'stats': asdict(self.stats) if self.stats else None
            }
        return {
            'success': False,
            'message': self.message,
            'conflicts': list(self.conflicts)
        }
