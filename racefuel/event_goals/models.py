# -*- coding: utf-8 -*-
"""Event goals: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..nutrients.models import NutrientOut


class BaseGoalIn(BaseModel):
    nutrient_id: str = Field(..., min_length=1)
    quantity: float = Field(..., ge=0, description="Per hour")
    unit: str = Field(..., min_length=1, max_length=16)


class HourlyGoalIn(BaseGoalIn):
    hour: int = Field(..., ge=0, description="0-based hour within the event")


class BaseGoalsRequest(BaseModel):
    event_id: str = Field(..., min_length=1)
    goals: List[BaseGoalIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_nutrients(self) -> "BaseGoalsRequest":
        seen = set()
        for goal in self.goals:
            if goal.nutrient_id in seen:
                raise ValueError(f"Duplicate goal for nutrient_id {goal.nutrient_id}")
            seen.add(goal.nutrient_id)
        return self


class HourlyGoalsRequest(BaseModel):
    event_id: str = Field(..., min_length=1)
    goals: List[HourlyGoalIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_keys(self) -> "HourlyGoalsRequest":
        seen = set()
        for goal in self.goals:
            key = (goal.nutrient_id, goal.hour)
            if key in seen:
                raise ValueError(f"Duplicate goal for nutrient_id {goal.nutrient_id} at hour {goal.hour}")
            seen.add(key)
        return self


class BaseGoalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    event_id: str
    nutrient_id: str
    quantity: float
    unit: str
    created_at: datetime
    updated_at: datetime
    nutrient: NutrientOut


class HourlyGoalOut(BaseGoalOut):
    hour: int


class BaseGoalListResponse(BaseModel):
    goals: List[BaseGoalOut]
    count: int
    message: Optional[str] = None


class HourlyGoalListResponse(BaseModel):
    goals: List[HourlyGoalOut]
    count: int
    message: Optional[str] = None
