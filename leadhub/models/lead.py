"""Lead model module."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from leadhub.core.enums import LeadStatus
from leadhub.models.base import AuditMixin, Base, BrokerScopedMixin, IdMixin


class Lead(Base, IdMixin, AuditMixin, BrokerScopedMixin):
    __tablename__ = "leads"
    __table_args__ = (
        Index("idx_leads_broker_status", "broker_id", "status"),
        Index("idx_leads_broker_assigned", "broker_id", "assigned_to"),
        CheckConstraint("call_count >= 0", name="ck_leads_call_count_non_negative"),
        CheckConstraint(
            "sub_status IS NULL OR status IN ('pending', 'bad_lead')",
            name="ck_leads_sub_status_scope",
        ),
    )

    external_id: Mapped[str | None] = mapped_column(String(255))
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    business_name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(320))
    phone: Mapped[str | None] = mapped_column(String(64))
    loan_amount: Mapped[str | None] = mapped_column(String(120))
    loan_purpose: Mapped[str | None] = mapped_column(String(255))
    loan_term: Mapped[str | None] = mapped_column(String(120))
    monthly_turnover: Mapped[str | None] = mapped_column(String(120))
    money_timeline: Mapped[str | None] = mapped_column(String(120))
    property_type: Mapped[str | None] = mapped_column(String(120))
    status: Mapped[str] = mapped_column(String(40), default=LeadStatus.NEW.value, nullable=False)
    sub_status: Mapped[str | None] = mapped_column(String(60))
    tags: Mapped[list[str] | None] = mapped_column(JSON)
    notes: Mapped[str | None] = mapped_column(Text)
    call_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    source: Mapped[str | None] = mapped_column(String(120))
    assigned_to: Mapped[str | None] = mapped_column(String(36))
