# -*- coding: utf-8 -*-
"""Food instances: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..food_items.models import FoodItemOut


class NutrientTotal(BaseModel):
    nutrient_id: str
    nutrient_name: str
    nutrient_abbreviation: str
    quantity: float
    unit: str


class FoodInstanceCreateRequest(BaseModel):
    event_id: str = Field(..., min_length=1)
    food_item_id: str = Field(..., min_length=1)
    time_elapsed_at_consumption: int = Field(..., ge=0)
    servings: float = Field(1.0, gt=0)


class FoodInstanceUpdateRequest(BaseModel):
    time_elapsed_at_consumption: Optional[int] = Field(None, ge=0)
    servings: Optional[float] = Field(None, gt=0)

    @model_validator(mode="after")
    def _not_empty(self) -> "FoodInstanceUpdateRequest":
        if self.time_elapsed_at_consumption is None and self.servings is None:
            raise ValueError("At least one of time_elapsed_at_consumption or servings is required")
        return self


class FoodInstanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    food_item_id: str
    time_elapsed_at_consumption: int
    servings: float
    created_at: datetime
    updated_at: datetime
    food_item: FoodItemOut
    nutrient_totals: List[NutrientTotal] = Field(default_factory=list)


class FoodInstanceListResponse(BaseModel):
    food_instances: List[FoodInstanceOut]
    count: int
    totals: List[NutrientTotal]


class FoodInstanceResponse(BaseModel):
    food_instance: FoodInstanceOut
    message: Optional[str] = None


class FoodInstanceDeleteResponse(BaseModel):
    message: str
    deleted_instance_id: str
