# -*- coding: utf-8 -*-
"""Food instances: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import nutrition
from ..auth.security import get_current_user
from ..db import get_db
from ..db_models import FoodInstance, User
from .models import (
    FoodInstanceCreateRequest,
    FoodInstanceDeleteResponse,
    FoodInstanceListResponse,
    FoodInstanceOut,
    FoodInstanceResponse,
    FoodInstanceUpdateRequest,
    NutrientTotal,
)
from .storage import create_food_instance, delete_food_instance, list_event_food_instances, update_food_instance

router = APIRouter(prefix="/api/food-instances", tags=["Food instances"])


def _instance_out(instance: FoodInstance) -> FoodInstanceOut:
    out = FoodInstanceOut.model_validate(instance)
    out.nutrient_totals = [NutrientTotal(**row) for row in nutrition.instance_totals(instance)]
    return out


@router.get("/event/{event_id}", response_model=FoodInstanceListResponse, summary="Food instances of an event")
def list_food_instances_api(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    instances = list_event_food_instances(db, user_id=user.id, event_id=event_id)
    items = [_instance_out(i) for i in instances]
    return FoodInstanceListResponse(
        food_instances=items,
        count=len(items),
        totals=nutrition.sum_totals(nutrition.instance_totals(i) for i in instances),
    )


@router.post("", response_model=FoodInstanceResponse, status_code=201, summary="Schedule a food item in an event")
def create_food_instance_api(
    request: FoodInstanceCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    instance = create_food_instance(db, user_id=user.id, request=request)
    return FoodInstanceResponse(food_instance=_instance_out(instance), message="Food instance created successfully")


@router.put("/{instance_id}", response_model=FoodInstanceResponse, summary="Move or resize a food instance")
def update_food_instance_api(
    instance_id: str,
    request: FoodInstanceUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    instance = update_food_instance(db, user_id=user.id, instance_id=instance_id, request=request)
    return FoodInstanceResponse(food_instance=_instance_out(instance), message="Food instance updated successfully")


@router.delete("/{instance_id}", response_model=FoodInstanceDeleteResponse, summary="Remove a food instance")
def delete_food_instance_api(instance_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    delete_food_instance(db, user_id=user.id, instance_id=instance_id)
    return FoodInstanceDeleteResponse(message="Food instance deleted successfully", deleted_instance_id=instance_id)
