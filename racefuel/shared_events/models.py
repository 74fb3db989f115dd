# -*- coding: utf-8 -*-
"""Shared events: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..auth.models import UserSummary
from ..events.models import EventOut


class SharedEventCreateRequest(BaseModel):
    event_id: str = Field(..., min_length=1)
    receiver_id: str = Field(..., min_length=1)


class SharedEventStatusRequest(BaseModel):
    status: Literal["ACCEPTED", "DENIED"]


class SharedEventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    sender_id: str
    receiver_id: str
    status: str
    copied_event_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PendingSharedEventOut(SharedEventOut):
    event: EventOut
    sender: UserSummary


class PendingSharedEventListResponse(BaseModel):
    shared_events: List[PendingSharedEventOut]
    count: int


class ConnectedUsersResponse(BaseModel):
    users: List[UserSummary]
    current_user_id: str


class SharedEventResponse(BaseModel):
    shared_event: SharedEventOut
    message: str


class SharedEventDecisionResponse(BaseModel):
    shared_event: SharedEventOut
    copied_event: Optional[EventOut] = None
    message: str
