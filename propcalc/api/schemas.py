"""Pydantic schemas for API request/response models."""

import dataclasses
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


def plain(value: Any) -> Any:
    """Flatten result dataclasses into JSON-ready dicts (enums by value)."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [plain(item) for item in value]
    if isinstance(value, dict):
        return {key: plain(item) for key, item in value.items()}
    return value


# ---- Request schemas ----

class CalculateRequest(BaseModel):
    inputs: dict[str, Any] = Field(default_factory=dict, description="Raw form values keyed by field name")


class StartDealRequest(BaseModel):
    address: str
    local_authority: str = ""


# ---- Response schemas ----

class CalculatorInfo(BaseModel):
    slug: str
    category: str
    title: str
    description: str
    inputs: dict[str, Any]
    upstream: list[str] = []
    downstream: list[str] = []
    related: list[str] = []


class CalculateResponse(BaseModel):
    slug: str
    category: str
    inputs: dict[str, Any]
    metrics: dict[str, Any]


class DealResponse(BaseModel):
    draft: dict[str, Any] | None


class SubmitResponse(BaseModel):
    metrics: dict[str, Any]
    draft: dict[str, Any] | None


class SavedDeal(BaseModel):
    id: str
    name: str
    address: str
    local_authority: str
    status: str
    current_step: int
    created_at: str
    updated_at: str
