# -*- coding: utf-8 -*-
"""Food items: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..db_models import FoodCategory
from ..nutrients.models import NutrientOut


class NutrientAmount(BaseModel):
    nutrient_id: str = Field(..., min_length=1)
    quantity: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=16)


class FoodItemWriteRequest(BaseModel):
    """Body for create and full update; nutrient rows are unique per nutrient."""

    item_name: str = Field(..., min_length=1, max_length=255)
    brand: Optional[str] = Field(None, max_length=255)
    category: Optional[FoodCategory] = None
    cost: Optional[float] = Field(None, ge=0)
    nutrients: List[NutrientAmount] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_nutrients(self) -> "FoodItemWriteRequest":
        seen = set()
        for row in self.nutrients:
            if row.nutrient_id in seen:
                raise ValueError(f"Duplicate nutrient_id in nutrients: {row.nutrient_id}")
            seen.add(row.nutrient_id)
        return self


class FoodItemNutrientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    nutrient_id: str
    quantity: float
    unit: str
    nutrient: NutrientOut


class FoodItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    item_name: str
    brand: Optional[str] = None
    category: Optional[str] = None
    cost: Optional[float] = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    nutrients: List[FoodItemNutrientOut] = Field(default_factory=list)

    @field_validator("cost", mode="before")
    @classmethod
    def _decimal_cost(cls, value: Any) -> Any:
        if isinstance(value, Decimal):
            return float(value)
        return value


class FoodItemListResponse(BaseModel):
    food_items: List[FoodItemOut]
    count: int


class FoodItemResponse(BaseModel):
    food_item: FoodItemOut
    message: Optional[str] = None
