# -*- coding: utf-8 -*-
"""Event goals: DB storage helpers.

Saving a goal set is an upsert on the natural key (user, event, nutrient[, hour]):
rows already present keep their id and created_at, new keys are inserted and
keys missing from the submitted set are removed.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, List, Sequence, Type, Union

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import nutrition
from ..db import transaction
from ..db_models import EventGoalBase, EventGoalHourly
from ..events.storage import get_owned_event, get_visible_event
from ..nutrients.storage import missing_nutrient_ids
from .models import BaseGoalsRequest, HourlyGoalsRequest

logger = logging.getLogger(__name__)

Goal = Union[EventGoalBase, EventGoalHourly]


def list_base_goals(db: Session, *, user_id: str, event_id: str) -> List[EventGoalBase]:
    get_visible_event(db, user_id=user_id, event_id=event_id)
    stmt = (
        select(EventGoalBase)
        .where(EventGoalBase.event_id == event_id, EventGoalBase.user_id == user_id)
        .order_by(EventGoalBase.created_at)
    )
    return list(db.scalars(stmt).all())


def list_hourly_goals(db: Session, *, user_id: str, event_id: str) -> List[EventGoalHourly]:
    get_visible_event(db, user_id=user_id, event_id=event_id)
    stmt = (
        select(EventGoalHourly)
        .where(EventGoalHourly.event_id == event_id, EventGoalHourly.user_id == user_id)
        .order_by(EventGoalHourly.hour, EventGoalHourly.created_at)
    )
    return list(db.scalars(stmt).all())


def _check_nutrients(db: Session, goals: Sequence[Any]) -> None:
    missing = missing_nutrient_ids(db, (g.nutrient_id for g in goals))
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown nutrient_id: {', '.join(sorted(missing))}")


def _sync(
    db: Session,
    existing: Sequence[Goal],
    wanted: Dict[Hashable, Any],
    key_of: Callable[[Any], Hashable],
    build: Callable[[Any], Goal],
) -> Dict[str, int]:
    counts = {"created": 0, "updated": 0, "deleted": 0}
    current = {key_of(row): row for row in existing}
    for key, row in current.items():
        if key not in wanted:
            db.delete(row)
            counts["deleted"] += 1
    # Deletes go out first so a removed key can never collide with an insert.
    db.flush()
    for key, goal in wanted.items():
        row = current.get(key)
        if row is None:
            db.add(build(goal))
            counts["created"] += 1
        elif row.quantity != goal.quantity or row.unit != goal.unit:
            row.quantity = goal.quantity
            row.unit = goal.unit
            counts["updated"] += 1
    return counts


def save_base_goals(db: Session, *, user_id: str, request: BaseGoalsRequest) -> List[EventGoalBase]:
    event = get_owned_event(db, user_id=user_id, event_id=request.event_id)
    _check_nutrients(db, request.goals)

    existing = db.scalars(
        select(EventGoalBase).where(EventGoalBase.event_id == event.id, EventGoalBase.user_id == user_id)
    ).all()
    with transaction(db):
        counts = _sync(
            db,
            existing,
            {g.nutrient_id: g for g in request.goals},
            key_of=lambda row: row.nutrient_id,
            build=lambda g: EventGoalBase(
                user_id=user_id, event_id=event.id, nutrient_id=g.nutrient_id, quantity=g.quantity, unit=g.unit
            ),
        )
    logger.info("Base goals saved for event %s user %s: %s", event.id, user_id, counts)
    return list_base_goals(db, user_id=user_id, event_id=event.id)


def save_hourly_goals(db: Session, *, user_id: str, request: HourlyGoalsRequest) -> List[EventGoalHourly]:
    event = get_owned_event(db, user_id=user_id, event_id=request.event_id)
    hours = nutrition.hour_count(event.expected_duration)
    for goal in request.goals:
        if goal.hour >= hours:
            raise HTTPException(
                status_code=400,
                detail=f"hour {goal.hour} is outside the event (valid hours 0-{hours - 1})",
            )
    _check_nutrients(db, request.goals)

    existing = db.scalars(
        select(EventGoalHourly).where(EventGoalHourly.event_id == event.id, EventGoalHourly.user_id == user_id)
    ).all()
    with transaction(db):
        counts = _sync(
            db,
            existing,
            {(g.nutrient_id, g.hour): g for g in request.goals},
            key_of=lambda row: (row.nutrient_id, row.hour),
            build=lambda g: EventGoalHourly(
                user_id=user_id,
                event_id=event.id,
                nutrient_id=g.nutrient_id,
                hour=g.hour,
                quantity=g.quantity,
                unit=g.unit,
            ),
        )
    logger.info("Hourly goals saved for event %s user %s: %s", event.id, user_id, counts)
    return list_hourly_goals(db, user_id=user_id, event_id=event.id)


def delete_goal(db: Session, model: Type[Goal], *, user_id: str, goal_id: str) -> None:
    goal = db.get(model, goal_id)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    if goal.user_id != user_id:
        raise HTTPException(status_code=403, detail="You do not have permission to delete this goal")
    with transaction(db):
        db.delete(goal)
    logger.info("%s deleted: %s by user %s", model.__name__, goal_id, user_id)
