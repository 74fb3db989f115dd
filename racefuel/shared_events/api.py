# -*- coding: utf-8 -*-
"""Shared events: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.models import UserSummary
from ..auth.security import get_current_user
from ..db import get_db
from ..db_models import RequestStatus, User
from ..events.models import EventOut
from .models import (
    ConnectedUsersResponse,
    PendingSharedEventListResponse,
    PendingSharedEventOut,
    SharedEventCreateRequest,
    SharedEventDecisionResponse,
    SharedEventOut,
    SharedEventResponse,
    SharedEventStatusRequest,
)
from .storage import create_shared_event, list_connected_users, list_pending_for_receiver, respond_to_shared_event

router = APIRouter(prefix="/api/shared-events", tags=["Shared events"])


@router.get("/pending", response_model=PendingSharedEventListResponse, summary="Offers waiting for the caller")
def list_pending_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    items = [PendingSharedEventOut.model_validate(s) for s in list_pending_for_receiver(db, user_id=user.id)]
    return PendingSharedEventListResponse(shared_events=items, count=len(items))


@router.get("/connections", response_model=ConnectedUsersResponse, summary="Users the caller can share with")
def list_connected_users_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    users = [UserSummary.model_validate(u) for u in list_connected_users(db, user_id=user.id)]
    return ConnectedUsersResponse(users=users, current_user_id=user.id)


@router.post("", response_model=SharedEventResponse, status_code=201, summary="Offer an event to a connection")
def create_shared_event_api(
    request: SharedEventCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    share = create_shared_event(db, user_id=user.id, event_id=request.event_id, receiver_id=request.receiver_id)
    return SharedEventResponse(shared_event=SharedEventOut.model_validate(share), message="Event shared successfully")


@router.put("/{shared_event_id}", response_model=SharedEventDecisionResponse, summary="Accept or deny an offer")
def respond_to_shared_event_api(
    shared_event_id: str,
    request: SharedEventStatusRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    share, copied = respond_to_shared_event(
        db, user_id=user.id, shared_event_id=shared_event_id, status=request.status
    )
    if share.status == RequestStatus.accepted.value:
        message = "Shared event accepted and copied to your events"
    else:
        message = "Shared event denied"
    return SharedEventDecisionResponse(
        shared_event=SharedEventOut.model_validate(share),
        copied_event=EventOut.model_validate(copied) if copied is not None else None,
        message=message,
    )
