# -*- coding: utf-8 -*-
"""Food instances: DB storage helpers."""

from __future__ import annotations

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import transaction
from ..db_models import Event, FoodInstance, FoodItem
from ..events.storage import get_owned_event, get_visible_event
from .models import FoodInstanceCreateRequest, FoodInstanceUpdateRequest

logger = logging.getLogger(__name__)


def check_time_within_event(event: Event, seconds: int) -> None:
    if seconds < 0:
        raise HTTPException(status_code=400, detail="time_elapsed_at_consumption cannot be negative")
    if seconds > event.expected_duration:
        raise HTTPException(
            status_code=400,
            detail=(
                f"time_elapsed_at_consumption ({seconds}s) cannot exceed "
                f"event duration ({event.expected_duration}s)"
            ),
        )


def list_event_food_instances(db: Session, *, user_id: str, event_id: str) -> List[FoodInstance]:
    get_visible_event(db, user_id=user_id, event_id=event_id)
    stmt = (
        select(FoodInstance)
        .where(FoodInstance.event_id == event_id)
        .order_by(FoodInstance.time_elapsed_at_consumption, FoodInstance.created_at)
    )
    return list(db.scalars(stmt).all())


def _owned_instance(db: Session, *, user_id: str, instance_id: str) -> FoodInstance:
    instance = db.get(FoodInstance, instance_id)
    if not instance:
        raise HTTPException(status_code=404, detail="Food instance not found")
    if instance.event.event_user_id != user_id:
        raise HTTPException(status_code=403, detail="You do not have permission to modify this food instance")
    return instance


def create_food_instance(db: Session, *, user_id: str, request: FoodInstanceCreateRequest) -> FoodInstance:
    event = get_owned_event(db, user_id=user_id, event_id=request.event_id)
    if not db.get(FoodItem, request.food_item_id):
        raise HTTPException(status_code=404, detail="Food item not found")
    check_time_within_event(event, request.time_elapsed_at_consumption)

    with transaction(db):
        instance = FoodInstance(
            event_id=event.id,
            food_item_id=request.food_item_id,
            time_elapsed_at_consumption=request.time_elapsed_at_consumption,
            servings=request.servings,
        )
        db.add(instance)
    db.refresh(instance)
    logger.info(
        "Food instance created: %s event=%s item=%s t=%ss servings=%s",
        instance.id,
        event.id,
        instance.food_item_id,
        instance.time_elapsed_at_consumption,
        instance.servings,
    )
    return instance


def update_food_instance(
    db: Session, *, user_id: str, instance_id: str, request: FoodInstanceUpdateRequest
) -> FoodInstance:
    instance = _owned_instance(db, user_id=user_id, instance_id=instance_id)
    if request.time_elapsed_at_consumption is not None:
        check_time_within_event(instance.event, request.time_elapsed_at_consumption)

    with transaction(db):
        if request.time_elapsed_at_consumption is not None:
            instance.time_elapsed_at_consumption = request.time_elapsed_at_consumption
        if request.servings is not None:
            instance.servings = request.servings
    db.refresh(instance)
    logger.info("Food instance updated: %s", instance.id)
    return instance


def delete_food_instance(db: Session, *, user_id: str, instance_id: str) -> None:
    instance = _owned_instance(db, user_id=user_id, instance_id=instance_id)
    with transaction(db):
        db.delete(instance)
    logger.info("Food instance deleted: %s by user %s", instance_id, user_id)
