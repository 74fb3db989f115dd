# -*- coding: utf-8 -*-
"""Favorite food items: DB storage helpers."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import transaction
from ..db_models import FavoriteFoodItem, FoodItem

logger = logging.getLogger(__name__)


def _find(db: Session, user_id: str, food_item_id: str) -> Optional[FavoriteFoodItem]:
    return db.scalar(
        select(FavoriteFoodItem).where(
            FavoriteFoodItem.user_id == user_id, FavoriteFoodItem.food_item_id == food_item_id
        )
    )


def list_favorites(db: Session, *, user_id: str) -> List[FavoriteFoodItem]:
    stmt = select(FavoriteFoodItem).where(FavoriteFoodItem.user_id == user_id).order_by(FavoriteFoodItem.created_at.desc())
    return list(db.scalars(stmt).all())


def add_favorite(db: Session, *, user_id: str, food_item_id: str) -> FavoriteFoodItem:
    if not db.get(FoodItem, food_item_id):
        raise HTTPException(status_code=404, detail="Food item not found")
    if _find(db, user_id, food_item_id):
        raise HTTPException(status_code=400, detail="Food item is already a favorite")
    with transaction(db):
        fav = FavoriteFoodItem(user_id=user_id, food_item_id=food_item_id)
        db.add(fav)
    db.refresh(fav)
    logger.info("Favorite added: user=%s item=%s", user_id, food_item_id)
    return fav


def remove_favorite(db: Session, *, user_id: str, food_item_id: str) -> None:
    fav = _find(db, user_id, food_item_id)
    if not fav:
        raise HTTPException(status_code=404, detail="Favorite not found")
    with transaction(db):
        db.delete(fav)
    logger.info("Favorite removed: user=%s item=%s", user_id, food_item_id)
