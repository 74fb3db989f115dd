# -*- coding: utf-8 -*-
"""Favorite food items: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..db_models import User
from .models import FavoriteCreateRequest, FavoriteListResponse, FavoriteOut, FavoriteResponse
from .storage import add_favorite, list_favorites, remove_favorite

router = APIRouter(prefix="/api/favorite-food-items", tags=["Favorites"])


@router.get("", response_model=FavoriteListResponse, summary="The caller's favorite food items")
def list_favorites_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    items = [FavoriteOut.model_validate(f) for f in list_favorites(db, user_id=user.id)]
    return FavoriteListResponse(favorites=items, count=len(items))


@router.post("", response_model=FavoriteResponse, status_code=201, summary="Mark a food item as favorite")
def add_favorite_api(
    request: FavoriteCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    fav = add_favorite(db, user_id=user.id, food_item_id=request.food_item_id)
    return FavoriteResponse(favorite=FavoriteOut.model_validate(fav), message="Added to favorites")


@router.delete("/{food_item_id}", summary="Remove a favorite")
def remove_favorite_api(food_item_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    remove_favorite(db, user_id=user.id, food_item_id=food_item_id)
    return {"message": "Removed from favorites", "food_item_id": food_item_id}
