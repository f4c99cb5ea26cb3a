from __future__ import annotations

from collections import Counter

from leadhub.importing.allocation import Allocation, DistributionAllocator, build_slots


def test_sixty_forty_split_over_one_full_cycle():
    allocator = DistributionAllocator([Allocation("A", "Alice", 60), Allocation("B", "Bob", 40)])

    draws = Counter(allocator.next_assignee() for _ in range(100))

    assert draws == {"A": 60, "B": 40}
    assert allocator.counter == 0
    assert allocator.draws == 100


def test_slots_are_grouped_per_user_in_user_id_order():
    allocator = DistributionAllocator([Allocation("b", "Bea", 1), Allocation("a", "Al", 2)])

    assert allocator.slots == ["a", "a", "b"]
    assert build_slots([Allocation("x", "X", 2), Allocation("y", "Y", 0)]) == ["x", "x"]


def test_resumes_from_stored_counter():
    allocator = DistributionAllocator([Allocation("A", "Alice", 60), Allocation("B", "Bob", 40)], counter=59)

    assert allocator.next_assignee() == "A"
    assert allocator.next_assignee() == "B"
    assert allocator.counter == 61


def test_counter_wraps_at_one_hundred_even_with_fewer_slots():
    allocator = DistributionAllocator([Allocation("A", "Alice", 50)], counter=99)

    assert allocator.next_assignee() == "A"
    assert allocator.counter == 0


def test_disabled_allocator_returns_none_and_is_unused():
    allocator = DistributionAllocator.disabled()

    assert allocator.next_assignee() is None
    assert allocator.was_used is False
    assert allocator.counter == 0


def test_user_name_lookup():
    allocator = DistributionAllocator([Allocation("A", "Alice", 100)])

    assert allocator.user_name("A") == "Alice"
    assert allocator.user_name("Z") is None
