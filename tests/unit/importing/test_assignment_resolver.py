from __future__ import annotations

from leadhub.importing.allocation import Allocation, DistributionAllocator
from leadhub.importing.assignment import AssignableUser, AssignmentResolver

USERS = [
    AssignableUser(user_id="owner", email="owner@broker.com", name="Olivia Owner"),
    AssignableUser(user_id="sam", email="sam@broker.com", name="Sam Smith"),
    AssignableUser(user_id="sammy", email="sammy@broker.com", name="Sam"),
]


def _resolver(percentages=None):
    allocations = [Allocation(user_id, user_id, pct) for user_id, pct in (percentages or {}).items()]
    return AssignmentResolver(USERS, DistributionAllocator(allocations))


def test_email_hint_matches_exactly_after_normalizing():
    assert _resolver().resolve(" SAM@Broker.com ", None) == "sam"


def test_exact_name_wins_over_fuzzy_scan():
    assert _resolver().resolve(None, "sam") == "sammy"


def test_fuzzy_name_takes_first_positional_match():
    resolver = _resolver()

    assert resolver.resolve(None, "Olivia") == "owner"
    assert resolver.resolve(None, "Sam Smith Jr") == "sam"


def test_email_miss_still_tries_name():
    assert _resolver().resolve("nobody@broker.com", "Olivia Owner") == "owner"


def test_unmatched_hint_leaves_lead_unassigned_even_with_distribution():
    resolver = _resolver({"sam": 100})

    assert resolver.resolve("ghost@elsewhere.com", None) is None
    assert resolver.resolve(None, "Zed") is None
    assert resolver.allocator.draws == 0


def test_no_hint_uses_distribution():
    resolver = _resolver({"sam": 100})

    assert resolver.resolve(None, None) == "sam"
    assert resolver.resolve("   ", "") == "sam"
    assert resolver.allocator.draws == 2


def test_no_hint_without_distribution_is_unassigned():
    assert _resolver().resolve(None, None) is None


def test_exact_collisions_resolve_to_last_listed_user():
    users = [
        AssignableUser(user_id="owner", email="shared@broker.com", name="Sam Smith"),
        AssignableUser(user_id="member", email="shared@broker.com", name="Sam Smith"),
    ]
    resolver = AssignmentResolver(users)

    assert resolver.resolve(None, "sam smith") == "member"
    assert resolver.resolve("SHARED@broker.com", None) == "member"
    assert resolver.resolve(None, "Sam") == "owner"
