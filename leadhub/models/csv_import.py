"""CSV import audit record model."""

from __future__ import annotations

from sqlalchemy import Index, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from leadhub.models.base import AuditMixin, Base, BrokerScopedMixin, IdMixin


class CsvImport(Base, IdMixin, AuditMixin, BrokerScopedMixin):
    __tablename__ = "csv_imports"
    __table_args__ = (Index("idx_csv_imports_created_at", "created_at"),)

    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    total_rows: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    imported_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    skipped_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    error_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    errors: Mapped[list[dict] | None] = mapped_column(JSON)
    imported_by: Mapped[str | None] = mapped_column(String(36))
