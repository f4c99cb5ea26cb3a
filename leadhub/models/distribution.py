"""Lead distribution allocation and counter models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from leadhub.models.base import AuditMixin, Base, BrokerScopedMixin, IdMixin, utcnow


class LeadDistributionAllocation(Base, IdMixin, AuditMixin, BrokerScopedMixin):
    __tablename__ = "lead_distribution_allocations"
    __table_args__ = (
        UniqueConstraint("broker_id", "user_id", name="uq_allocations_broker_user"),
        CheckConstraint("percentage > 0 AND percentage <= 100", name="ck_allocations_percentage_range"),
    )

    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    percentage: Mapped[int] = mapped_column(Integer, nullable=False)


class LeadDistributionCounter(Base):
    """Round-robin cursor, one row per broker."""

    __tablename__ = "lead_distribution_counter"
    __table_args__ = (CheckConstraint("counter >= 0 AND counter < 100", name="ck_counter_range"),)

    broker_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("brokers.id", ondelete="CASCADE"), primary_key=True
    )
    counter: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
