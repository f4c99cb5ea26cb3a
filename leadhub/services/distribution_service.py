"""Lead distribution settings and single-lead round-robin assignment."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from leadhub.core.exceptions import ValidationError
from leadhub.importing.allocation import DistributionAllocator
from leadhub.models import LeadDistributionAllocation
from leadhub.schemas.distribution import (
    AllocationInput,
    AllocationResponse,
    DistributionSettingsResponse,
    NextAssigneeResponse,
)
from leadhub.services.base_service import BaseService
from leadhub.services.lead_store_service import LeadStoreService
from leadhub.services.tenant_directory_service import TenantDirectoryService

logger = logging.getLogger(__name__)

REQUIRED_TOTAL = 100


def validate_allocations(enabled: bool, allocations: Sequence[AllocationInput]) -> None:
    if not enabled or not allocations:
        return
    total = sum(allocation.percentage for allocation in allocations)
    if total != REQUIRED_TOTAL:
        raise ValidationError(f"Percentages must add up to 100%. Current total: {total}%")
    user_ids = [allocation.user_id for allocation in allocations]
    if len(set(user_ids)) != len(user_ids):
        raise ValidationError("Each user may appear only once in the allocations.")


class DistributionService(BaseService):
    """Owns a broker's enabled flag, allocations and round-robin counter."""

    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db)
        self.directory = TenantDirectoryService(db=self.db)
        self.store = LeadStoreService(db=self.db)

    def get_settings(self, tenant_id: str) -> DistributionSettingsResponse:
        broker = self.directory.get_broker(tenant_id)
        allocations = self.directory.list_allocations(tenant_id, order_by_name=True)
        return DistributionSettingsResponse(
            enabled=broker.lead_distribution_enabled,
            allocations=[AllocationResponse.model_validate(row) for row in allocations],
        )

    def save_settings(
        self, tenant_id: str, enabled: bool, allocations: Sequence[AllocationInput]
    ) -> DistributionSettingsResponse:
        """Replace the allocation set wholesale; zero-percent entries are dropped."""
        validate_allocations(enabled, allocations)
        broker = self.directory.get_broker(tenant_id)
        broker.lead_distribution_enabled = enabled

        self.db.query(LeadDistributionAllocation).filter(
            LeadDistributionAllocation.broker_id == tenant_id
        ).delete(synchronize_session=False)
        if enabled:
            self.db.add_all(
                LeadDistributionAllocation(
                    broker_id=tenant_id,
                    user_id=allocation.user_id,
                    user_name=allocation.user_name,
                    percentage=allocation.percentage,
                )
                for allocation in allocations
                if allocation.percentage > 0
            )
        self.commit()
        logger.info(
            "distribution.settings_saved",
            extra={
                "event": "distribution.settings_saved",
                "tenant_id": tenant_id,
                "enabled": enabled,
                "allocation_count": len(allocations),
            },
        )
        return self.get_settings(tenant_id)

    def assign_next(self, tenant_id: str) -> NextAssigneeResponse:
        """Draw one assignee and persist the advanced counter straight away."""
        settings = self.directory.get_distribution_settings(tenant_id)
        if not settings.enabled or not settings.allocations:
            return NextAssigneeResponse()
        allocator = DistributionAllocator(settings.allocations, counter=self.store.load_counter(tenant_id))
        assigned_to = allocator.next_assignee()
        if assigned_to is None:
            return NextAssigneeResponse()
        self.store.save_counter(tenant_id, allocator.counter)
        return NextAssigneeResponse(assigned_to=assigned_to, assigned_name=allocator.user_name(assigned_to))
