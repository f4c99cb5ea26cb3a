"""Read-only view of a broker account: owner, team and distribution setup."""

from __future__ import annotations

from leadhub.core.exceptions import NotFoundError
from leadhub.importing.allocation import Allocation
from leadhub.importing.assignment import AssignableUser
from leadhub.importing.orchestrator import DistributionSettings
from leadhub.models import Broker, LeadDistributionAllocation, TeamMember
from leadhub.services.base_service import BaseService


class TenantDirectoryService(BaseService):
    def get_broker(self, tenant_id: str) -> Broker:
        broker = self.db.get(Broker, tenant_id)
        if broker is None:
            raise NotFoundError(f"Broker not found: {tenant_id}")
        return broker

    def ensure_tenant(self, tenant_id: str) -> None:
        self.get_broker(tenant_id)

    def resolve_tenant_for_user(self, user_id: str) -> str:
        """Broker id owned by, or employing, the given user."""
        if self.db.get(Broker, user_id) is not None:
            return user_id
        member = self.db.query(TeamMember).filter(TeamMember.user_id == user_id).first()
        if member is None:
            raise NotFoundError(f"No broker account for user: {user_id}")
        return member.broker_id

    def list_assignable_users(self, tenant_id: str) -> list[AssignableUser]:
        """Owner first, then team members in join order."""
        broker = self.get_broker(tenant_id)
        users: list[AssignableUser] = []
        if broker.email:
            users.append(
                AssignableUser(
                    user_id=broker.id,
                    email=broker.email.strip().lower(),
                    name=broker.name or "Owner",
                )
            )
        members = (
            self.db.query(TeamMember)
            .filter(TeamMember.broker_id == tenant_id)
            .order_by(TeamMember.created_at, TeamMember.id)
            .all()
        )
        for member in members:
            users.append(
                AssignableUser(
                    user_id=member.user_id,
                    email=(member.email or "").strip().lower(),
                    name=member.name or member.email or "",
                )
            )
        return users

    def list_allocations(self, tenant_id: str, order_by_name: bool = False) -> list[LeadDistributionAllocation]:
        query = self.db.query(LeadDistributionAllocation).filter(LeadDistributionAllocation.broker_id == tenant_id)
        if order_by_name:
            query = query.order_by(LeadDistributionAllocation.user_name)
        else:
            query = query.order_by(LeadDistributionAllocation.user_id)
        return query.all()

    def get_distribution_settings(self, tenant_id: str) -> DistributionSettings:
        broker = self.get_broker(tenant_id)
        if not broker.lead_distribution_enabled:
            return DistributionSettings(enabled=False)
        allocations = tuple(
            Allocation(user_id=row.user_id, user_name=row.user_name, percentage=row.percentage)
            for row in self.list_allocations(tenant_id)
        )
        return DistributionSettings(enabled=True, allocations=allocations)
