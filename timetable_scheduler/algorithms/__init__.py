# Initialize algorithms package
from . import feasibility
from . import occupancy
from . import ordering
from . import backtracking

__all__ = ['feasibility', 'occupancy', 'ordering', 'backtracking']
