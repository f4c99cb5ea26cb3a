"""Lead distribution settings endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from leadhub.api.v1._authz import authorize_or_raise, resolve_tenant, to_http_error
from leadhub.core.dependencies import get_db_session
from leadhub.core.exceptions import LeadHubException
from leadhub.schemas.distribution import (
    DistributionSettingsRequest,
    DistributionSettingsResponse,
    NextAssigneeResponse,
)
from leadhub.services.distribution_service import DistributionService

router = APIRouter(tags=["distribution"])


@router.get("/settings/lead-distribution", response_model=DistributionSettingsResponse)
def get_lead_distribution(
    tenant_id: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> DistributionSettingsResponse:
    user = authorize_or_raise(authorization, scopes=["distribution.read"])
    try:
        return DistributionService(db=db).get_settings(resolve_tenant(user, db, tenant_id))
    except LeadHubException as exc:
        raise to_http_error(exc) from exc


@router.put("/settings/lead-distribution", response_model=DistributionSettingsResponse)
def put_lead_distribution(
    payload: DistributionSettingsRequest,
    tenant_id: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> DistributionSettingsResponse:
    user = authorize_or_raise(authorization, scopes=["distribution.write"])
    try:
        return DistributionService(db=db).save_settings(
            resolve_tenant(user, db, tenant_id),
            enabled=payload.enabled,
            allocations=payload.allocations,
        )
    except LeadHubException as exc:
        raise to_http_error(exc) from exc


@router.get("/leads/assign", response_model=NextAssigneeResponse)
def next_assignee(
    tenant_id: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> NextAssigneeResponse:
    user = authorize_or_raise(authorization, scopes=["leads.assign"])
    try:
        return DistributionService(db=db).assign_next(resolve_tenant(user, db, tenant_id))
    except LeadHubException as exc:
        raise to_http_error(exc) from exc
