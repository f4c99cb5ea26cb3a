"""Sequential CSV import pipeline with batched, retrying persistence."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from leadhub.core.enums import DEFAULT_IMPORT_SOURCE
from leadhub.core.exceptions import DatabaseError
from leadhub.core.logging import LogContext, build_log_event
from leadhub.importing.allocation import Allocation, DistributionAllocator
from leadhub.importing.assignment import AssignableUser, AssignmentResolver
from leadhub.importing.dedup import DuplicateDetector, LeadIdentity
from leadhub.importing.parsers import parse_call_count, parse_date, parse_tags
from leadhub.importing.status import normalize_status
from leadhub.schemas.imports import ImportResult, LeadRow, RowError
from leadhub.utils.ids import new_import_id

logger = logging.getLogger(__name__)

# Row 1 of the spreadsheet is the header, so rows[0] is row 2.
FIRST_DATA_ROW = 2
DEFAULT_BATCH_SIZE = 100
MISSING_FULL_NAME = "Missing full name"

_TEXT_FIELDS = (
    "business_name",
    "monthly_turnover",
    "money_timeline",
    "email",
    "phone",
    "loan_amount",
    "loan_purpose",
    "loan_term",
    "property_type",
    "external_id",
    "notes",
)


@dataclass(frozen=True)
class DistributionSettings:
    enabled: bool = False
    allocations: tuple[Allocation, ...] = ()


@dataclass(frozen=True)
class ImportSummary:
    tenant_id: str
    filename: str
    total_rows: int
    imported_count: int
    skipped_count: int
    error_count: int
    errors: list[dict[str, Any]]
    imported_by: str | None = None


class TenantDirectory(Protocol):
    def ensure_tenant(self, tenant_id: str) -> None: ...

    def list_assignable_users(self, tenant_id: str) -> list[AssignableUser]: ...

    def get_distribution_settings(self, tenant_id: str) -> DistributionSettings: ...


class LeadStore(Protocol):
    def existing_identities(self, tenant_id: str) -> list[LeadIdentity]: ...

    def insert_leads(self, leads: Sequence[dict[str, Any]]) -> None: ...

    def load_counter(self, tenant_id: str) -> int: ...

    def save_counter(self, tenant_id: str, counter: int) -> None: ...

    def record_import(self, summary: ImportSummary) -> str | None: ...


@dataclass
class PendingLead:
    row_number: int
    values: dict[str, Any]


@dataclass
class ImportTally:
    imported: int = 0
    skipped: int = 0
    errors: list[RowError] = field(default_factory=list)

    def fail(self, row_number: int, message: str) -> None:
        self.errors.append(RowError(row=row_number, message=message))


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def build_lead_values(tenant_id: str, row: LeadRow, assigned_to: str | None) -> dict[str, Any]:
    """Normalized column values for one accepted row."""
    mapping = normalize_status(row.status)
    values: dict[str, Any] = {
        "broker_id": tenant_id,
        "full_name": (row.full_name or "").strip(),
        "source": _clean(row.source) or DEFAULT_IMPORT_SOURCE,
        "status": mapping.status,
        "sub_status": mapping.sub_status,
        "call_count": parse_call_count(row.call_count),
        "tags": parse_tags(row.tags),
        "assigned_to": assigned_to,
    }
    for name in _TEXT_FIELDS:
        values[name] = _clean(getattr(row, name))
    created_at = parse_date(row.created_at)
    if created_at:
        values["created_at"] = datetime.fromisoformat(created_at)
    return values


class ImportOrchestrator:
    """Runs one CSV import for one tenant.

    Rows are handled strictly in order because duplicate detection and the
    distribution counter both depend on earlier rows. Every row ends up
    imported, skipped (duplicate) or errored; a failed batch insert is
    retried row by row so one bad row never sinks its neighbours.
    """

    def __init__(
        self,
        directory: TenantDirectory,
        store: LeadStore,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_response_errors: int | None = None,
    ) -> None:
        self.directory = directory
        self.store = store
        self.batch_size = max(1, batch_size)
        self.max_response_errors = max_response_errors

    def _build_allocator(self, tenant_id: str) -> DistributionAllocator:
        settings = self.directory.get_distribution_settings(tenant_id)
        if not settings.enabled or not settings.allocations:
            return DistributionAllocator.disabled()
        return DistributionAllocator(settings.allocations, counter=self.store.load_counter(tenant_id))

    def run_import(
        self,
        tenant_id: str,
        filename: str,
        rows: Sequence[LeadRow],
        imported_by: str | None = None,
    ) -> ImportResult:
        self.directory.ensure_tenant(tenant_id)
        context = LogContext(tenant_id=tenant_id, user_id=imported_by, import_id=new_import_id(), source_file=filename)
        logger.info("import.started", extra=build_log_event("import.started", context, total_rows=len(rows)))

        users = self.directory.list_assignable_users(tenant_id)
        allocator = self._build_allocator(tenant_id)
        resolver = AssignmentResolver(users, allocator)
        detector = DuplicateDetector(self.store.existing_identities(tenant_id))

        tally = ImportTally()
        pending: list[PendingLead] = []
        for index, row in enumerate(rows):
            row_number = index + FIRST_DATA_ROW
            if not row.full_name or not row.full_name.strip():
                tally.fail(row_number, MISSING_FULL_NAME)
                continue

            identity = LeadIdentity(external_id=row.external_id, email=row.email, phone=row.phone)
            if detector.is_duplicate(identity):
                tally.skipped += 1
                continue

            assigned_to = resolver.resolve(row.broker_email, row.broker_name)
            pending.append(PendingLead(row_number, build_lead_values(tenant_id, row, assigned_to)))
            detector.record(identity)

        self._persist(pending, tally, context)

        if allocator.was_used:
            self._save_counter(tenant_id, allocator.counter, context)

        summary = ImportSummary(
            tenant_id=tenant_id,
            filename=filename,
            total_rows=len(rows),
            imported_count=tally.imported,
            skipped_count=tally.skipped,
            error_count=len(tally.errors),
            errors=[error.model_dump() for error in tally.errors],
            imported_by=imported_by,
        )
        self._record(summary, context)

        logger.info(
            "import.completed",
            extra=build_log_event(
                "import.completed",
                context,
                imported_count=summary.imported_count,
                skipped_count=summary.skipped_count,
                error_count=summary.error_count,
                distributed_count=allocator.draws,
            ),
        )
        errors = tally.errors
        if self.max_response_errors is not None:
            errors = errors[: self.max_response_errors]
        return ImportResult(
            success=True,
            imported_count=summary.imported_count,
            skipped_count=summary.skipped_count,
            error_count=summary.error_count,
            errors=errors,
        )

    def _persist(self, pending: list[PendingLead], tally: ImportTally, context: LogContext) -> None:
        for start in range(0, len(pending), self.batch_size):
            batch = pending[start : start + self.batch_size]
            batch_number = start // self.batch_size + 1
            try:
                self.store.insert_leads([lead.values for lead in batch])
            except DatabaseError as exc:
                logger.warning(
                    "import.batch_failed",
                    extra=build_log_event(
                        "import.batch_failed", context, batch_number=batch_number, batch_rows=len(batch), error=str(exc)
                    ),
                )
                self._insert_one_by_one(batch, tally)
                continue
            tally.imported += len(batch)
            logger.debug(
                "import.batch_inserted",
                extra=build_log_event("import.batch_inserted", context, batch_number=batch_number, batch_rows=len(batch)),
            )

    def _insert_one_by_one(self, batch: list[PendingLead], tally: ImportTally) -> None:
        for lead in batch:
            try:
                self.store.insert_leads([lead.values])
            except DatabaseError as exc:
                tally.fail(lead.row_number, str(exc))
            else:
                tally.imported += 1

    def _save_counter(self, tenant_id: str, counter: int, context: LogContext) -> None:
        try:
            self.store.save_counter(tenant_id, counter)
        except DatabaseError:
            logger.exception(
                "distribution.counter_save_failed",
                extra=build_log_event("distribution.counter_save_failed", context, counter=counter),
            )

    def _record(self, summary: ImportSummary, context: LogContext) -> None:
        try:
            self.store.record_import(summary)
        except DatabaseError:
            logger.exception("import.record_failed", extra=build_log_event("import.record_failed", context))
