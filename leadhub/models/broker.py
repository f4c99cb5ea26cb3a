"""Broker (tenant) model module."""

from __future__ import annotations

from sqlalchemy import Boolean, Float, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leadhub.models.base import AuditMixin, Base, IdMixin


class Broker(Base, IdMixin, AuditMixin):
    """A sub-account. Its id doubles as the owner's user id."""

    __tablename__ = "brokers"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str | None] = mapped_column(String(255))
    commission_rate: Mapped[float | None] = mapped_column(Float)
    lead_distribution_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    team_members = relationship("TeamMember", back_populates="broker", cascade="all, delete-orphan")
