# -*- coding: utf-8 -*-
"""Favorite food items: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..food_items.models import FoodItemOut


class FavoriteCreateRequest(BaseModel):
    food_item_id: str = Field(..., min_length=1)


class FavoriteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    food_item_id: str
    created_at: datetime
    food_item: FoodItemOut


class FavoriteListResponse(BaseModel):
    favorites: List[FavoriteOut]
    count: int


class FavoriteResponse(BaseModel):
    favorite: FavoriteOut
    message: Optional[str] = None
