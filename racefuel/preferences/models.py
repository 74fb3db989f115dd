# -*- coding: utf-8 -*-
"""Preferences: Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UserPreferencesOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    dark_mode: bool


class UserPreferencesUpdateRequest(BaseModel):
    dark_mode: Optional[bool] = None

    @model_validator(mode="after")
    def _not_empty(self) -> "UserPreferencesUpdateRequest":
        if self.dark_mode is None:
            raise ValueError("At least one preference must be provided")
        return self


class UserPreferencesResponse(BaseModel):
    preferences: UserPreferencesOut
    message: Optional[str] = None


class ColorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    hex: str
    color_name: str


class FoodCategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category_name: str


class ReferenceDataResponse(BaseModel):
    colors: List[ColorOut]
    categories: List[FoodCategoryOut]


class UserColorIn(BaseModel):
    food_category_id: str = Field(..., min_length=1)
    color_id: str = Field(..., min_length=1)


class UserColorsRequest(BaseModel):
    preferences: List[UserColorIn]

    @model_validator(mode="after")
    def _unique_categories(self) -> "UserColorsRequest":
        seen = set()
        for pref in self.preferences:
            if pref.food_category_id in seen:
                raise ValueError(f"Duplicate food_category_id {pref.food_category_id}")
            seen.add(pref.food_category_id)
        return self


class UserColorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    food_category: str
    color_id: str
    color: ColorOut
    category: FoodCategoryOut


class UserColorsResponse(BaseModel):
    preferences: List[UserColorOut]


class UserColorsSavedResponse(BaseModel):
    message: str
    count: int
