"""Persistence operations the import engine needs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from leadhub.core.exceptions import DatabaseError
from leadhub.importing.dedup import LeadIdentity
from leadhub.importing.orchestrator import ImportSummary
from leadhub.models import CsvImport, Lead, LeadDistributionCounter
from leadhub.models.base import utcnow
from leadhub.services.base_service import BaseService, storage_message

logger = logging.getLogger(__name__)


class LeadStoreService(BaseService):
    """Lead inserts, distribution counter and import audit rows.

    Every write commits on its own so a failed batch can be retried row by
    row on the same session.
    """

    def existing_identities(self, tenant_id: str) -> list[LeadIdentity]:
        rows = (
            self.db.query(Lead.external_id, Lead.email, Lead.phone)
            .filter(Lead.broker_id == tenant_id)
            .all()
        )
        return [LeadIdentity(external_id=row[0], email=row[1], phone=row[2]) for row in rows]

    def insert_leads(self, leads: Sequence[dict[str, Any]]) -> None:
        try:
            self.db.add_all([Lead(**values) for values in leads])
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DatabaseError(storage_message(exc)) from exc
        self.commit()

    def load_counter(self, tenant_id: str) -> int:
        row = self.db.get(LeadDistributionCounter, tenant_id)
        return row.counter if row is not None else 0

    def save_counter(self, tenant_id: str, counter: int) -> None:
        row = self.db.get(LeadDistributionCounter, tenant_id)
        if row is None:
            self.db.add(LeadDistributionCounter(broker_id=tenant_id, counter=counter))
        else:
            row.counter = counter
            row.updated_at = utcnow()
        self.commit()
        logger.info(
            "distribution.counter_saved",
            extra={"event": "distribution.counter_saved", "tenant_id": tenant_id, "counter": counter},
        )

    def record_import(self, summary: ImportSummary) -> str | None:
        record = CsvImport(
            broker_id=summary.tenant_id,
            filename=summary.filename,
            total_rows=summary.total_rows,
            imported_count=summary.imported_count,
            skipped_count=summary.skipped_count,
            error_count=summary.error_count,
            errors=summary.errors or None,
            imported_by=summary.imported_by,
        )
        self.db.add(record)
        self.commit()
        return record.id

    def list_imports(self, tenant_id: str | None = None, limit: int = 50) -> list[CsvImport]:
        """Newest first; all tenants when `tenant_id` is None."""
        query = self.db.query(CsvImport)
        if tenant_id is not None:
            query = query.filter(CsvImport.broker_id == tenant_id)
        return query.order_by(CsvImport.created_at.desc()).limit(limit).all()
