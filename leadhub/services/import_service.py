"""Database-backed entrypoint for CSV lead imports."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from sqlalchemy.orm import Session

from leadhub.core.config import Config, get_config
from leadhub.importing.csv_reader import read_csv_rows
from leadhub.importing.orchestrator import ImportOrchestrator
from leadhub.models import CsvImport
from leadhub.schemas.imports import ImportResult, LeadRow
from leadhub.services.base_service import BaseService
from leadhub.services.lead_store_service import LeadStoreService
from leadhub.services.tenant_directory_service import TenantDirectoryService


class ImportService(BaseService):
    """Wires the import orchestrator to the tenant directory and lead store."""

    def __init__(self, db: Session | None = None, config: Config | None = None) -> None:
        super().__init__(db)
        self.config = config or get_config()
        self.directory = TenantDirectoryService(db=self.db)
        self.store = LeadStoreService(db=self.db)

    def _orchestrator(self) -> ImportOrchestrator:
        return ImportOrchestrator(
            directory=self.directory,
            store=self.store,
            batch_size=self.config.IMPORT_BATCH_SIZE,
            max_response_errors=self.config.IMPORT_MAX_RESPONSE_ERRORS,
        )

    def run_import(
        self,
        tenant_id: str,
        filename: str,
        rows: Sequence[LeadRow],
        imported_by: str | None = None,
    ) -> ImportResult:
        return self._orchestrator().run_import(tenant_id, filename, rows, imported_by=imported_by)

    def import_csv(
        self,
        tenant_id: str,
        filename: str,
        content: bytes,
        mapping: Mapping[str, str],
        imported_by: str | None = None,
    ) -> ImportResult:
        self.directory.ensure_tenant(tenant_id)
        rows = read_csv_rows(content, mapping)
        return self.run_import(tenant_id, filename, rows, imported_by=imported_by)

    def history(self, tenant_id: str | None = None) -> list[CsvImport]:
        return self.store.list_imports(tenant_id=tenant_id, limit=self.config.IMPORT_HISTORY_LIMIT)
