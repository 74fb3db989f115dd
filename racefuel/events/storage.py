# -*- coding: utf-8 -*-
"""Events: DB storage helpers (events, triathlon attributes, copies, summaries)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.orm import Session

from .. import nutrition
from ..db import transaction, utc_now
from ..db_models import (
    Event,
    EventGoalBase,
    EventGoalHourly,
    EventType,
    FoodInstance,
    RequestStatus,
    TriathlonAttributes,
    UserConnection,
)
from .models import EventCreateRequest, EventUpdateRequest, TriathlonAttributesRequest

logger = logging.getLogger(__name__)

COPY_SUFFIX = " - copy"
EVENT_NAME_MAX = 255


def list_events(db: Session, *, user_id: str) -> List[Event]:
    stmt = select(Event).where(Event.event_user_id == user_id).order_by(Event.updated_at.desc())
    return list(db.scalars(stmt).all())


def accepted_partner_ids(db: Session, *, user_id: str) -> List[str]:
    """Users with an ACCEPTED connection to `user_id`, in either direction."""
    rows = db.execute(
        select(UserConnection.initiating_user, UserConnection.receiving_user).where(
            UserConnection.status == RequestStatus.accepted.value,
            or_(UserConnection.initiating_user == user_id, UserConnection.receiving_user == user_id),
        )
    ).all()
    return sorted({b if a == user_id else a for a, b in rows})


def list_community_events(db: Session, *, user_id: str) -> List[Event]:
    partners = accepted_partner_ids(db, user_id=user_id)
    if not partners:
        return []
    stmt = (
        select(Event)
        .where(and_(Event.event_user_id.in_(partners), Event.private.is_(False)))
        .order_by(Event.updated_at.desc())
    )
    return list(db.scalars(stmt).all())


def get_event_or_404(db: Session, event_id: str) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def get_visible_event(db: Session, *, user_id: str, event_id: str) -> Event:
    """Owner sees everything; others only see public events."""
    event = get_event_or_404(db, event_id)
    if event.private and event.event_user_id != user_id:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def get_owned_event(db: Session, *, user_id: str, event_id: str) -> Event:
    event = get_event_or_404(db, event_id)
    if event.event_user_id != user_id:
        raise HTTPException(status_code=403, detail="You do not have permission to modify this event")
    return event


def create_event(db: Session, *, user_id: str, request: EventCreateRequest) -> Event:
    with transaction(db):
        event = Event(
            event_user_id=user_id,
            name=request.name,
            event_type=request.event_type.value,
            expected_duration=request.expected_duration,
            private=request.private,
        )
        db.add(event)
    logger.info("Event created: %s name=%s type=%s", event.id, event.name, event.event_type)
    return event


def _latest_instance_time(db: Session, event_id: str) -> Optional[int]:
    return db.scalar(
        select(func.max(FoodInstance.time_elapsed_at_consumption)).where(FoodInstance.event_id == event_id)
    )


def update_event(db: Session, *, user_id: str, event_id: str, request: EventUpdateRequest) -> Event:
    event = get_owned_event(db, user_id=user_id, event_id=event_id)

    if request.expected_duration is not None:
        latest = _latest_instance_time(db, event_id)
        if latest is not None and latest > request.expected_duration:
            raise HTTPException(
                status_code=400,
                detail=(
                    f"expected_duration ({request.expected_duration}s) is shorter than an existing "
                    f"food instance ({latest}s)"
                ),
            )

    with transaction(db):
        if request.name is not None:
            event.name = request.name
        if request.event_type is not None:
            event.event_type = request.event_type.value
            if request.event_type != EventType.triathlon and event.triathlon_attributes is not None:
                event.triathlon_attributes = None
        if request.expected_duration is not None:
            event.expected_duration = request.expected_duration
            pruned = db.execute(
                delete(EventGoalHourly).where(
                    EventGoalHourly.event_id == event.id,
                    EventGoalHourly.hour >= nutrition.hour_count(request.expected_duration),
                )
            ).rowcount
            if pruned:
                logger.info("Pruned %s hourly goals past the new duration of event %s", pruned, event.id)
        if request.private is not None:
            event.private = request.private
    db.refresh(event)
    logger.info("Event updated: %s fields=%s", event.id, sorted(request.model_fields_set))
    return event


def delete_event(db: Session, *, user_id: str, event_id: str) -> None:
    event = get_owned_event(db, user_id=user_id, event_id=event_id)
    with transaction(db):
        db.delete(event)
    logger.info("Event deleted: %s by user %s", event_id, user_id)


# ==================== copying ====================


def copy_name(name: str, suffix: str) -> str:
    """`name` plus `suffix`, cutting the name so the result still fits the column."""
    return f"{name[: EVENT_NAME_MAX - len(suffix)]}{suffix}"


def copy_food_instances(db: Session, *, source_event_id: str, target_event_id: str) -> int:
    rows = db.scalars(select(FoodInstance).where(FoodInstance.event_id == source_event_id)).all()
    db.add_all(
        [
            FoodInstance(
                event_id=target_event_id,
                food_item_id=row.food_item_id,
                time_elapsed_at_consumption=row.time_elapsed_at_consumption,
                servings=row.servings,
            )
            for row in rows
        ]
    )
    return len(rows)


def copy_event_goals(db: Session, *, source_event_id: str, target_event_id: str, target_user_id: str) -> int:
    base = db.scalars(select(EventGoalBase).where(EventGoalBase.event_id == source_event_id)).all()
    hourly = db.scalars(select(EventGoalHourly).where(EventGoalHourly.event_id == source_event_id)).all()
    db.add_all(
        [
            EventGoalBase(
                user_id=target_user_id,
                event_id=target_event_id,
                nutrient_id=g.nutrient_id,
                quantity=g.quantity,
                unit=g.unit,
            )
            for g in base
        ]
        + [
            EventGoalHourly(
                user_id=target_user_id,
                event_id=target_event_id,
                nutrient_id=g.nutrient_id,
                hour=g.hour,
                quantity=g.quantity,
                unit=g.unit,
            )
            for g in hourly
        ]
    )
    return len(base) + len(hourly)


def copy_triathlon_attributes(db: Session, *, source: Event, target_event_id: str) -> bool:
    attrs = source.triathlon_attributes
    if attrs is None:
        return False
    db.add(
        TriathlonAttributes(
            event_id=target_event_id,
            swim_duration_seconds=attrs.swim_duration_seconds,
            bike_duration_seconds=attrs.bike_duration_seconds,
            run_duration_seconds=attrs.run_duration_seconds,
            t1_duration_seconds=attrs.t1_duration_seconds,
            t2_duration_seconds=attrs.t2_duration_seconds,
        )
    )
    return True


def duplicate_event(db: Session, *, user_id: str, event_id: str) -> Tuple[Event, int]:
    source = get_owned_event(db, user_id=user_id, event_id=event_id)
    with transaction(db):
        copy = Event(
            event_user_id=user_id,
            name=copy_name(source.name, COPY_SUFFIX),
            event_type=source.event_type,
            expected_duration=source.expected_duration,
            private=source.private,
        )
        db.add(copy)
        db.flush()
        copied = copy_food_instances(db, source_event_id=source.id, target_event_id=copy.id)
        copy_event_goals(db, source_event_id=source.id, target_event_id=copy.id, target_user_id=user_id)
        copy_triathlon_attributes(db, source=source, target_event_id=copy.id)
    db.refresh(copy)
    logger.info("Event duplicated: %s -> %s instances=%s", source.id, copy.id, copied)
    return copy, copied


# ==================== triathlon attributes ====================


def get_triathlon_attributes(db: Session, *, user_id: str, event_id: str) -> TriathlonAttributes:
    event = get_visible_event(db, user_id=user_id, event_id=event_id)
    if event.triathlon_attributes is None:
        raise HTTPException(status_code=404, detail="Triathlon attributes not found")
    return event.triathlon_attributes


def upsert_triathlon_attributes(
    db: Session, *, user_id: str, request: TriathlonAttributesRequest
) -> Tuple[TriathlonAttributes, bool]:
    event = get_owned_event(db, user_id=user_id, event_id=request.event_id)
    if event.event_type != EventType.triathlon.value:
        raise HTTPException(status_code=400, detail="Triathlon attributes require a TRIATHLON event")
    if request.total_seconds != event.expected_duration:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Triathlon segments ({request.total_seconds}s) must add up to "
                f"expected_duration ({event.expected_duration}s)"
            ),
        )

    values = request.model_dump(exclude={"event_id"})
    with transaction(db):
        attrs = event.triathlon_attributes
        created = attrs is None
        if created:
            attrs = TriathlonAttributes(event_id=event.id, **values)
            db.add(attrs)
        else:
            for field, value in values.items():
                setattr(attrs, field, value)
    logger.info("Triathlon attributes %s for event %s", "created" if created else "updated", event.id)
    return attrs, created


def delete_triathlon_attributes(db: Session, *, user_id: str, event_id: str) -> None:
    event = get_owned_event(db, user_id=user_id, event_id=event_id)
    if event.triathlon_attributes is None:
        raise HTTPException(status_code=404, detail="Triathlon attributes not found")
    with transaction(db):
        event.triathlon_attributes = None
        event.updated_at = utc_now()
    logger.info("Triathlon attributes deleted for event %s", event.id)


# ==================== summary ====================


def nutrition_summary(
    db: Session, *, user_id: str, event_id: str, window_seconds: Optional[int] = None
) -> Dict[str, Any]:
    event = get_visible_event(db, user_id=user_id, event_id=event_id)
    window = window_seconds or nutrition.default_window_seconds(event.expected_duration)

    instances = db.scalars(
        select(FoodInstance)
        .where(FoodInstance.event_id == event.id)
        .order_by(FoodInstance.time_elapsed_at_consumption)
    ).all()
    base = db.scalars(
        select(EventGoalBase).where(EventGoalBase.event_id == event.id, EventGoalBase.user_id == user_id)
    ).all()
    hourly = db.scalars(
        select(EventGoalHourly).where(EventGoalHourly.event_id == event.id, EventGoalHourly.user_id == user_id)
    ).all()

    return {
        "event_id": event.id,
        "expected_duration": event.expected_duration,
        "window_seconds": window,
        "windows": nutrition.window_totals(instances, event.expected_duration, window),
        "totals": nutrition.sum_totals(nutrition.instance_totals(i) for i in instances),
        "goals": nutrition.goal_totals(event.expected_duration, base, hourly),
    }
