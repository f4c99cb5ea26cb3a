"""Lead distribution settings schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AllocationInput(BaseModel):
    user_id: str = Field(min_length=1, max_length=36)
    user_name: str = Field(min_length=1, max_length=255)
    percentage: int = Field(ge=0, le=100)


class AllocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    user_name: str
    percentage: int


class DistributionSettingsRequest(BaseModel):
    enabled: bool
    allocations: list[AllocationInput] = Field(default_factory=list)


class DistributionSettingsResponse(BaseModel):
    enabled: bool
    allocations: list[AllocationResponse] = Field(default_factory=list)


class NextAssigneeResponse(BaseModel):
    assigned_to: str | None = None
    assigned_name: str | None = None
