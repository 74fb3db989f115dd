# -*- coding: utf-8 -*-
"""Events: API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..db_models import User
from .models import (
    CommunityEventListResponse,
    CommunityEventOut,
    EventCreateRequest,
    EventDetailResponse,
    EventDuplicateResponse,
    EventListResponse,
    EventOut,
    EventResponse,
    EventUpdateRequest,
    NutritionSummaryResponse,
    TriathlonAttributesOut,
    TriathlonAttributesRequest,
    TriathlonAttributesResponse,
)
from .storage import (
    create_event,
    delete_event,
    delete_triathlon_attributes,
    duplicate_event,
    get_triathlon_attributes,
    get_visible_event,
    list_community_events,
    list_events,
    nutrition_summary,
    update_event,
    upsert_triathlon_attributes,
)

router = APIRouter(prefix="/api/events", tags=["Events"])
triathlon_router = APIRouter(prefix="/api/triathlon-attributes", tags=["Events"])


@router.get("", response_model=EventListResponse, summary="List the caller's events")
def list_events_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    events = [EventOut.model_validate(e) for e in list_events(db, user_id=user.id)]
    return EventListResponse(events=events, count=len(events))


@router.get("/community", response_model=CommunityEventListResponse, summary="Public events of connected users")
def list_community_events_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    events = [CommunityEventOut.model_validate(e) for e in list_community_events(db, user_id=user.id)]
    return CommunityEventListResponse(events=events, count=len(events))


@router.get("/{event_id}", response_model=EventDetailResponse, summary="Get one event")
def get_event_api(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    event = get_visible_event(db, user_id=user.id, event_id=event_id)
    return EventDetailResponse(event=EventOut.model_validate(event), is_owner=event.event_user_id == user.id)


@router.post("", response_model=EventResponse, status_code=201, summary="Create an event")
def create_event_api(
    request: EventCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    event = create_event(db, user_id=user.id, request=request)
    return EventResponse(event=EventOut.model_validate(event), message="Event created successfully")


@router.put("/{event_id}", response_model=EventResponse, summary="Update an event")
def update_event_api(
    event_id: str,
    request: EventUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    event = update_event(db, user_id=user.id, event_id=event_id, request=request)
    return EventResponse(event=EventOut.model_validate(event), message="Event updated successfully")


@router.post(
    "/{event_id}/duplicate",
    response_model=EventDuplicateResponse,
    status_code=201,
    summary="Copy an event with its food instances and goals",
)
def duplicate_event_api(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    event, copied = duplicate_event(db, user_id=user.id, event_id=event_id)
    return EventDuplicateResponse(
        event=EventOut.model_validate(event),
        food_instances_copied=copied,
        message="Event duplicated successfully",
    )


@router.delete("/{event_id}", summary="Delete an event and everything attached to it")
def delete_event_api(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    delete_event(db, user_id=user.id, event_id=event_id)
    return {"message": "Event deleted successfully", "event_id": event_id}


@router.get(
    "/{event_id}/nutrition-summary",
    response_model=NutritionSummaryResponse,
    summary="Nutrient totals per time window against the caller's goals",
)
def nutrition_summary_api(
    event_id: str,
    window_seconds: Optional[int] = Query(default=None, gt=0, description="Window size in seconds"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return nutrition_summary(db, user_id=user.id, event_id=event_id, window_seconds=window_seconds)


@triathlon_router.get("/{event_id}", response_model=TriathlonAttributesResponse, summary="Get triathlon segments")
def get_triathlon_attributes_api(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    attrs = get_triathlon_attributes(db, user_id=user.id, event_id=event_id)
    return TriathlonAttributesResponse(attributes=TriathlonAttributesOut.model_validate(attrs))


@triathlon_router.post("", response_model=TriathlonAttributesResponse, summary="Create or replace triathlon segments")
def upsert_triathlon_attributes_api(
    request: TriathlonAttributesRequest,
    response: Response,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    attrs, created = upsert_triathlon_attributes(db, user_id=user.id, request=request)
    response.status_code = 201 if created else 200
    return TriathlonAttributesResponse(
        attributes=TriathlonAttributesOut.model_validate(attrs),
        message="Triathlon attributes saved",
    )


@triathlon_router.delete("/{event_id}", summary="Remove triathlon segments from an event")
def delete_triathlon_attributes_api(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    delete_triathlon_attributes(db, user_id=user.id, event_id=event_id)
    return {"message": "Triathlon attributes deleted successfully", "event_id": event_id}
