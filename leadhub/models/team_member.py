"""Team member model module."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadhub.models.base import AuditMixin, Base, BrokerScopedMixin, IdMixin


class TeamMember(Base, IdMixin, AuditMixin, BrokerScopedMixin):
    __tablename__ = "team_members"
    __table_args__ = (UniqueConstraint("broker_id", "user_id", name="uq_team_members_broker_user"),)

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))

    broker = relationship("Broker", back_populates="team_members")
