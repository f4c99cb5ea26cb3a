"""SQLAlchemy model package for the broker-scoped schema."""

from leadhub.models.base import Base
from leadhub.models.broker import Broker
from leadhub.models.csv_import import CsvImport
from leadhub.models.distribution import LeadDistributionAllocation, LeadDistributionCounter
from leadhub.models.lead import Lead
from leadhub.models.team_member import TeamMember

__all__ = [
    "Base",
    "Broker",
    "CsvImport",
    "Lead",
    "LeadDistributionAllocation",
    "LeadDistributionCounter",
    "TeamMember",
]
