"""Weighted round-robin lead distribution."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

COUNTER_MODULUS = 100


@dataclass(frozen=True)
class Allocation:
    user_id: str
    user_name: str
    percentage: int


def build_slots(allocations: Iterable[Allocation]) -> list[str]:
    """One slot per percentage point, grouped by user in allocation order.

    A 60/40 split yields sixty consecutive slots for the first user followed
    by forty for the second, so draws come in runs rather than alternating.
    """
    slots: list[str] = []
    for allocation in allocations:
        slots.extend([allocation.user_id] * max(0, allocation.percentage))
    return slots


class DistributionAllocator:
    """Hands out assignees from the slot table starting at a stored counter.

    The counter always advances modulo 100, independent of the slot count,
    so the stored position stays meaningful if allocations change between
    imports. Callers persist `counter` when `draws` is non-zero.
    """

    def __init__(self, allocations: Iterable[Allocation] = (), counter: int = 0) -> None:
        self.allocations = sorted(allocations, key=lambda allocation: allocation.user_id)
        self.slots = build_slots(self.allocations)
        self.counter = counter % COUNTER_MODULUS
        self.draws = 0

    @classmethod
    def disabled(cls) -> "DistributionAllocator":
        return cls()

    @property
    def was_used(self) -> bool:
        return self.draws > 0

    def next_assignee(self) -> str | None:
        if not self.slots:
            return None
        user_id = self.slots[self.counter % len(self.slots)]
        self.counter = (self.counter + 1) % COUNTER_MODULUS
        self.draws += 1
        return user_id

    def user_name(self, user_id: str | None) -> str | None:
        for allocation in self.allocations:
            if allocation.user_id == user_id:
                return allocation.user_name
        return None
