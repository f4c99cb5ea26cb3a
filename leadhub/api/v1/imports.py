"""Admin CSV import endpoints for API v1."""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, File, Form, Header, Query, UploadFile
from sqlalchemy.orm import Session

from leadhub.api.v1._authz import authorize_or_raise, to_http_error
from leadhub.core.dependencies import get_db_session
from leadhub.core.exceptions import LeadHubException, ValidationError
from leadhub.importing.status import preview_status_mappings
from leadhub.schemas.imports import (
    ImportRecordResponse,
    ImportRequest,
    ImportResult,
    StatusPreviewItem,
    StatusPreviewRequest,
)
from leadhub.services.import_service import ImportService

router = APIRouter(prefix="/admin/import", tags=["imports"])


def _parse_mapping(raw: str) -> dict[str, str]:
    try:
        mapping = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError("mapping must be a JSON object of field -> column.") from exc
    if not isinstance(mapping, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in mapping.items()
    ):
        raise ValidationError("mapping must be a JSON object of field -> column.")
    return {key: value for key, value in mapping.items() if value}


@router.post("", response_model=ImportResult)
def import_leads(
    payload: ImportRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ImportResult:
    user = authorize_or_raise(authorization, scopes=["imports.write"])
    try:
        return ImportService(db=db).run_import(
            tenant_id=payload.tenant_id,
            filename=payload.filename,
            rows=payload.rows,
            imported_by=user.user_id,
        )
    except LeadHubException as exc:
        raise to_http_error(exc) from exc


@router.post("/csv", response_model=ImportResult)
def import_csv_file(
    tenant_id: str = Form(...),
    mapping: str = Form(...),
    file: UploadFile = File(...),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ImportResult:
    user = authorize_or_raise(authorization, scopes=["imports.write"])
    try:
        field_mapping = _parse_mapping(mapping)
        content = file.file.read()
        return ImportService(db=db).import_csv(
            tenant_id=tenant_id,
            filename=file.filename or "upload.csv",
            content=content,
            mapping=field_mapping,
            imported_by=user.user_id,
        )
    except LeadHubException as exc:
        raise to_http_error(exc) from exc


@router.post("/status-preview", response_model=list[StatusPreviewItem])
def status_preview(
    payload: StatusPreviewRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> list[StatusPreviewItem]:
    authorize_or_raise(authorization, scopes=["imports.read"])
    return [StatusPreviewItem(**vars(item)) for item in preview_status_mappings(payload.statuses)]


@router.get("/history", response_model=list[ImportRecordResponse])
def import_history(
    tenant_id: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[ImportRecordResponse]:
    authorize_or_raise(authorization, scopes=["imports.read"])
    records = ImportService(db=db).history(tenant_id=tenant_id)
    return [ImportRecordResponse.model_validate(record) for record in records]
