# -*- coding: utf-8 -*-
"""Food items: DB storage helpers."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db import transaction
from ..db_models import FoodInstance, FoodItem, FoodItemNutrient
from ..nutrients.storage import missing_nutrient_ids
from .models import FoodItemWriteRequest

logger = logging.getLogger(__name__)


def list_food_items(db: Session, *, user_id: str, my_items_only: bool = False) -> List[FoodItem]:
    stmt = select(FoodItem).order_by(FoodItem.created_at.desc())
    if my_items_only:
        stmt = stmt.where(FoodItem.created_by == user_id)
    return list(db.scalars(stmt).all())


def get_food_item_or_404(db: Session, food_item_id: str) -> FoodItem:
    item = db.get(FoodItem, food_item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Food item not found")
    return item


def _owned_food_item(db: Session, *, user_id: str, food_item_id: str) -> FoodItem:
    item = get_food_item_or_404(db, food_item_id)
    if item.created_by != user_id:
        raise HTTPException(status_code=403, detail="You do not have permission to modify this food item")
    return item


def _check_nutrients(db: Session, request: FoodItemWriteRequest) -> None:
    missing = missing_nutrient_ids(db, (n.nutrient_id for n in request.nutrients))
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown nutrient_id: {', '.join(sorted(missing))}")


def _cost(value):
    return Decimal(str(value)) if value is not None else None


def create_food_item(db: Session, *, user_id: str, request: FoodItemWriteRequest) -> FoodItem:
    _check_nutrients(db, request)
    with transaction(db):
        item = FoodItem(
            item_name=request.item_name,
            brand=request.brand or None,
            category=request.category.value if request.category else None,
            cost=_cost(request.cost),
            created_by=user_id,
        )
        item.nutrients = [
            FoodItemNutrient(nutrient_id=n.nutrient_id, quantity=n.quantity, unit=n.unit)
            for n in request.nutrients
        ]
        db.add(item)
    logger.info("Food item created: %s name=%s nutrients=%s", item.id, item.item_name, len(item.nutrients))
    return item


def update_food_item(db: Session, *, user_id: str, food_item_id: str, request: FoodItemWriteRequest) -> FoodItem:
    item = _owned_food_item(db, user_id=user_id, food_item_id=food_item_id)
    _check_nutrients(db, request)
    with transaction(db):
        item.item_name = request.item_name
        item.brand = request.brand or None
        item.category = request.category.value if request.category else None
        item.cost = _cost(request.cost)

        # Sync nutrient rows by nutrient id so (food item, nutrient) never repeats.
        existing = {row.nutrient_id: row for row in item.nutrients}
        wanted = {n.nutrient_id: n for n in request.nutrients}
        for nutrient_id, row in existing.items():
            if nutrient_id not in wanted:
                item.nutrients.remove(row)
        for nutrient_id, amount in wanted.items():
            row = existing.get(nutrient_id)
            if row:
                row.quantity = amount.quantity
                row.unit = amount.unit
            else:
                item.nutrients.append(
                    FoodItemNutrient(nutrient_id=nutrient_id, quantity=amount.quantity, unit=amount.unit)
                )
    db.refresh(item)
    logger.info("Food item updated: %s name=%s", item.id, item.item_name)
    return item


def delete_food_item(db: Session, *, user_id: str, food_item_id: str) -> None:
    item = _owned_food_item(db, user_id=user_id, food_item_id=food_item_id)
    in_use = db.scalar(select(func.count(FoodInstance.id)).where(FoodInstance.food_item_id == food_item_id)) or 0
    if in_use:
        raise HTTPException(
            status_code=400,
            detail=f"Food item is used by {in_use} food instance(s) and cannot be deleted",
        )
    with transaction(db):
        db.delete(item)
    logger.info("Food item deleted: %s by user %s", food_item_id, user_id)
