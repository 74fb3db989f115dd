# -*- coding: utf-8 -*-
"""User connections: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..auth.models import UserSummary


class ConnectionCreateRequest(BaseModel):
    receiving_user: str = Field(..., min_length=1)


class ConnectionStatusRequest(BaseModel):
    status: Literal["ACCEPTED", "DENIED"]


class ConnectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    initiating_user: str
    receiving_user: str
    status: str
    created_at: datetime
    updated_at: datetime


class ConnectionWithUserOut(ConnectionOut):
    type: Literal["INITIATED", "RECEIVED"]
    other_user: UserSummary


class ConnectionListResponse(BaseModel):
    connections: List[ConnectionWithUserOut]
    count: int


class ConnectionResponse(BaseModel):
    connection: ConnectionOut
    message: Optional[str] = None
