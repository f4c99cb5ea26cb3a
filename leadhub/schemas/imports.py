"""CSV import request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LeadRow(BaseModel):
    """One column-mapped CSV row. Every cell is optional text."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    business_name: str | None = None
    loan_amount: str | None = None
    loan_purpose: str | None = None
    loan_term: str | None = None
    monthly_turnover: str | None = None
    money_timeline: str | None = None
    property_type: str | None = None
    external_id: str | None = None
    notes: str | None = None
    source: str | None = None
    tags: str | None = None
    call_count: str | None = None
    created_at: str | None = None
    status: str | None = None
    broker_email: str | None = None
    broker_name: str | None = None


LEAD_ROW_FIELDS = tuple(LeadRow.model_fields)


class ImportRequest(BaseModel):
    tenant_id: str = Field(min_length=1, max_length=36)
    filename: str = Field(min_length=1, max_length=255)
    rows: list[LeadRow]


class RowError(BaseModel):
    row: int
    message: str


class ImportResult(BaseModel):
    success: bool = True
    imported_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    errors: list[RowError] = Field(default_factory=list)


class StatusPreviewRequest(BaseModel):
    statuses: list[str | None]


class StatusPreviewItem(BaseModel):
    csv_value: str
    mapped_status: str
    mapped_sub_status: str | None = None
    is_recognized: bool


class ImportRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    broker_id: str
    filename: str
    total_rows: int
    imported_count: int
    skipped_count: int
    error_count: int
    errors: list[RowError] | None = None
    imported_by: str | None = None
    created_at: datetime | None = None
