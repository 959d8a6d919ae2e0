from .cache import SampleCache, Slot
from .monitor import Monitor
from .scheduler import PeriodicTask, Scheduler

__all__ = [
    "SampleCache",
    "Slot",
    "Monitor",
    "PeriodicTask",
    "Scheduler",
]
