from .loader import ScheduleDataLoader
from .converter import DataConverter

__all__ = ['ScheduleDataLoader', 'DataConverter']
