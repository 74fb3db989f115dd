# -*- coding: utf-8 -*-
"""Events: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..auth.models import UserSummary
from ..db_models import EventType
from ..food_instances.models import NutrientTotal


class EventCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    event_type: EventType
    expected_duration: int = Field(..., gt=0, description="Seconds")
    private: bool = False


class EventUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    event_type: Optional[EventType] = None
    expected_duration: Optional[int] = Field(None, gt=0)
    private: Optional[bool] = None

    @model_validator(mode="after")
    def _not_empty(self) -> "EventUpdateRequest":
        if not self.model_fields_set or all(getattr(self, f) is None for f in self.model_fields_set):
            raise ValueError("At least one field must be provided")
        return self


class TriathlonAttributesRequest(BaseModel):
    event_id: str = Field(..., min_length=1)
    swim_duration_seconds: int = Field(..., ge=0)
    bike_duration_seconds: int = Field(..., ge=0)
    run_duration_seconds: int = Field(..., ge=0)
    t1_duration_seconds: int = Field(0, ge=0)
    t2_duration_seconds: int = Field(0, ge=0)

    @property
    def total_seconds(self) -> int:
        return (
            self.swim_duration_seconds
            + self.bike_duration_seconds
            + self.run_duration_seconds
            + self.t1_duration_seconds
            + self.t2_duration_seconds
        )


class TriathlonAttributesOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    swim_duration_seconds: int
    bike_duration_seconds: int
    run_duration_seconds: int
    t1_duration_seconds: int
    t2_duration_seconds: int


class TriathlonAttributesResponse(BaseModel):
    attributes: TriathlonAttributesOut
    message: Optional[str] = None


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_user_id: str
    name: str
    event_type: str
    expected_duration: int
    private: bool
    created_at: datetime
    updated_at: datetime
    triathlon_attributes: Optional[TriathlonAttributesOut] = None


class CommunityEventOut(EventOut):
    owner: UserSummary


class EventListResponse(BaseModel):
    events: List[EventOut]
    count: int


class CommunityEventListResponse(BaseModel):
    events: List[CommunityEventOut]
    count: int


class EventResponse(BaseModel):
    event: EventOut
    message: Optional[str] = None


class EventDetailResponse(BaseModel):
    event: EventOut
    is_owner: bool


class EventDuplicateResponse(BaseModel):
    event: EventOut
    food_instances_copied: int
    message: Optional[str] = None


class SummaryWindow(BaseModel):
    start_seconds: int
    end_seconds: int
    food_instance_count: int
    totals: List[NutrientTotal]


class NutritionSummaryResponse(BaseModel):
    event_id: str
    expected_duration: int
    window_seconds: int
    windows: List[SummaryWindow]
    totals: List[NutrientTotal]
    goals: List[NutrientTotal]
