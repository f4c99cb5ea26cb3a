"""Pydantic schema package for API contracts."""

from leadhub.schemas.distribution import (
    AllocationInput,
    AllocationResponse,
    DistributionSettingsRequest,
    DistributionSettingsResponse,
    NextAssigneeResponse,
)
from leadhub.schemas.imports import (
    LEAD_ROW_FIELDS,
    ImportRecordResponse,
    ImportRequest,
    ImportResult,
    LeadRow,
    RowError,
    StatusPreviewItem,
    StatusPreviewRequest,
)

__all__ = [
    "AllocationInput",
    "AllocationResponse",
    "DistributionSettingsRequest",
    "DistributionSettingsResponse",
    "ImportRecordResponse",
    "ImportRequest",
    "ImportResult",
    "LEAD_ROW_FIELDS",
    "LeadRow",
    "NextAssigneeResponse",
    "RowError",
    "StatusPreviewItem",
    "StatusPreviewRequest",
]
