from __future__ import annotations

import pytest

from leadhub.core.exceptions import NotFoundError, ValidationError
from leadhub.models import LeadDistributionAllocation, LeadDistributionCounter
from leadhub.schemas.distribution import AllocationInput
from leadhub.services.distribution_service import DistributionService, validate_allocations
from leadhub.services.tenant_directory_service import TenantDirectoryService


def _allocations(*pairs):
    return [AllocationInput(user_id=user_id, user_name=user_id.title(), percentage=pct) for user_id, pct in pairs]


def test_validate_requires_hundred_percent_when_enabled():
    with pytest.raises(ValidationError, match="Current total: 90%"):
        validate_allocations(True, _allocations(("a", 50), ("b", 40)))

    validate_allocations(True, _allocations(("a", 60), ("b", 40)))
    validate_allocations(False, _allocations(("a", 10)))
    validate_allocations(True, [])


def test_validate_rejects_repeated_users():
    with pytest.raises(ValidationError):
        validate_allocations(True, _allocations(("a", 50), ("a", 50)))


def test_save_replaces_allocations_and_drops_zero_entries(db_session, broker):
    service = DistributionService(db=db_session)
    service.save_settings(broker.id, True, _allocations(("user-sam", 50), ("user-jo", 50)))

    settings = service.save_settings(broker.id, True, _allocations(("user-sam", 100), ("user-jo", 0)))

    assert settings.enabled is True
    assert [(item.user_id, item.percentage) for item in settings.allocations] == [("user-sam", 100)]
    assert db_session.query(LeadDistributionAllocation).count() == 1


def test_disabling_clears_allocations(db_session, broker):
    service = DistributionService(db=db_session)
    service.save_settings(broker.id, True, _allocations(("user-sam", 100)))

    settings = service.save_settings(broker.id, False, _allocations(("user-sam", 100)))

    assert settings.enabled is False
    assert settings.allocations == []


def test_assign_next_walks_slots_and_persists_counter(db_session, broker):
    service = DistributionService(db=db_session)
    service.save_settings(broker.id, True, _allocations(("user-jo", 1), ("user-sam", 99)))

    first = service.assign_next(broker.id)
    second = service.assign_next(broker.id)

    assert first.assigned_to == "user-jo"
    assert first.assigned_name == "User-Jo"
    assert second.assigned_to == "user-sam"
    assert db_session.get(LeadDistributionCounter, broker.id).counter == 2


def test_assign_next_without_distribution_returns_nobody(db_session, broker):
    response = DistributionService(db=db_session).assign_next(broker.id)

    assert response.assigned_to is None
    assert db_session.get(LeadDistributionCounter, broker.id) is None


def test_unknown_broker_is_not_found(db_session):
    with pytest.raises(NotFoundError):
        DistributionService(db=db_session).get_settings("missing")


def test_assignable_users_list_owner_first(db_session, broker):
    users = TenantDirectoryService(db=db_session).list_assignable_users(broker.id)

    assert users[0].user_id == broker.id
    assert users[0].email == "owner@example.com"
    assert {user.user_id for user in users[1:]} == {"user-sam", "user-jo"}
    jo = next(user for user in users if user.user_id == "user-jo")
    assert jo.email == "jo@example.com"
    assert jo.name == "Jo@Example.com"


def test_resolve_tenant_for_member(db_session, broker):
    directory = TenantDirectoryService(db=db_session)

    assert directory.resolve_tenant_for_user("user-sam") == broker.id
    assert directory.resolve_tenant_for_user(broker.id) == broker.id
    with pytest.raises(NotFoundError):
        directory.resolve_tenant_for_user("stranger")
