# -*- coding: utf-8 -*-
"""Food items: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..db_models import User
from .models import FoodItemListResponse, FoodItemOut, FoodItemResponse, FoodItemWriteRequest
from .storage import create_food_item, delete_food_item, get_food_item_or_404, list_food_items, update_food_item

router = APIRouter(prefix="/api/food-items", tags=["Food items"])


@router.get("", response_model=FoodItemListResponse, summary="List food items")
def list_food_items_api(
    my_items_only: bool = Query(default=False, description="Only items created by the caller"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    items = [FoodItemOut.model_validate(i) for i in list_food_items(db, user_id=user.id, my_items_only=my_items_only)]
    return FoodItemListResponse(food_items=items, count=len(items))


@router.get("/{food_item_id}", response_model=FoodItemResponse, summary="Get a food item")
def get_food_item_api(food_item_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return FoodItemResponse(food_item=FoodItemOut.model_validate(get_food_item_or_404(db, food_item_id)))


@router.post("", response_model=FoodItemResponse, status_code=201, summary="Create a food item with nutrients")
def create_food_item_api(
    request: FoodItemWriteRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = create_food_item(db, user_id=user.id, request=request)
    return FoodItemResponse(food_item=FoodItemOut.model_validate(item), message="Food item created successfully")


@router.put("/{food_item_id}", response_model=FoodItemResponse, summary="Replace a food item and its nutrients")
def update_food_item_api(
    food_item_id: str,
    request: FoodItemWriteRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = update_food_item(db, user_id=user.id, food_item_id=food_item_id, request=request)
    return FoodItemResponse(food_item=FoodItemOut.model_validate(item), message="Food item updated successfully")


@router.delete("/{food_item_id}", summary="Delete a food item")
def delete_food_item_api(food_item_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    delete_food_item(db, user_id=user.id, food_item_id=food_item_id)
    return {"message": "Food item deleted successfully", "food_item_id": food_item_id}
