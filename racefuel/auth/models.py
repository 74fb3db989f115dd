# -*- coding: utf-8 -*-
"""Auth / users: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SyncUserRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=128)
    last_name: str = Field("", max_length=128)
    email: Optional[str] = Field(None, min_length=3, max_length=254)


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    auth0_sub: str
    email: Optional[str] = None
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: Optional[str] = None


class SyncUserResponse(BaseModel):
    user: UserPublic
    message: str


class UserResponse(BaseModel):
    user: UserPublic


class ConnectionInfo(BaseModel):
    connection_id: str
    status: str
    type: Literal["INITIATED", "RECEIVED"]


class DirectoryUser(BaseModel):
    id: str
    first_name: str
    last_name: str
    connection: Optional[ConnectionInfo] = None
    shared_plans_count: int = 0


class DirectoryResponse(BaseModel):
    users: List[DirectoryUser]
