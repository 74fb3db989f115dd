# -*- coding: utf-8 -*-
"""Event goals: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..db_models import EventGoalBase, EventGoalHourly, User
from .models import (
    BaseGoalListResponse,
    BaseGoalOut,
    BaseGoalsRequest,
    HourlyGoalListResponse,
    HourlyGoalOut,
    HourlyGoalsRequest,
)
from .storage import delete_goal, list_base_goals, list_hourly_goals, save_base_goals, save_hourly_goals

router = APIRouter(prefix="/api/event-goals", tags=["Event goals"])


@router.get("/base", response_model=BaseGoalListResponse, summary="Per-hour goals for an event")
def list_base_goals_api(
    event_id: str = Query(..., min_length=1),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goals = [BaseGoalOut.model_validate(g) for g in list_base_goals(db, user_id=user.id, event_id=event_id)]
    return BaseGoalListResponse(goals=goals, count=len(goals))


@router.put("/base", response_model=BaseGoalListResponse, summary="Save the per-hour goal set")
@router.post("/base", response_model=BaseGoalListResponse, include_in_schema=False)
def save_base_goals_api(
    request: BaseGoalsRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goals = [BaseGoalOut.model_validate(g) for g in save_base_goals(db, user_id=user.id, request=request)]
    return BaseGoalListResponse(goals=goals, count=len(goals), message="Base goals saved")


@router.delete("/base/{goal_id}", summary="Delete one per-hour goal")
def delete_base_goal_api(goal_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    delete_goal(db, EventGoalBase, user_id=user.id, goal_id=goal_id)
    return {"message": "Goal deleted successfully", "goal_id": goal_id}


@router.get("/hourly", response_model=HourlyGoalListResponse, summary="Hour-specific goals for an event")
def list_hourly_goals_api(
    event_id: str = Query(..., min_length=1),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goals = [HourlyGoalOut.model_validate(g) for g in list_hourly_goals(db, user_id=user.id, event_id=event_id)]
    return HourlyGoalListResponse(goals=goals, count=len(goals))


@router.put("/hourly", response_model=HourlyGoalListResponse, summary="Save the hour-specific goal set")
@router.post("/hourly", response_model=HourlyGoalListResponse, include_in_schema=False)
def save_hourly_goals_api(
    request: HourlyGoalsRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goals = [HourlyGoalOut.model_validate(g) for g in save_hourly_goals(db, user_id=user.id, request=request)]
    return HourlyGoalListResponse(goals=goals, count=len(goals), message="Hourly goals saved")


@router.delete("/hourly/{goal_id}", summary="Delete one hour-specific goal")
def delete_hourly_goal_api(goal_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    delete_goal(db, EventGoalHourly, user_id=user.id, goal_id=goal_id)
    return {"message": "Goal deleted successfully", "goal_id": goal_id}
