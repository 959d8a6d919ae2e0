from __future__ import annotations

from typing import Generic, TypeVar

from sysmon.models.health import ServiceHealth
from sysmon.models.system import SystemSnapshot

T = TypeVar("T")


class Slot(Generic[T]):
    """Holder of the current value of one collector's output.

    ``set()`` swaps the reference in one step, so readers see either the old
    value or the new one and never a value under construction.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value


class SampleCache:
    """Most recent system snapshot and gateway health.

    The two slots are refreshed independently and are not synchronised with
    each other.
    """

    def __init__(self) -> None:
        self.system: Slot[SystemSnapshot] = Slot(SystemSnapshot())
        self.health: Slot[ServiceHealth] = Slot(ServiceHealth())
