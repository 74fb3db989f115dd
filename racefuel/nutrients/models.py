# -*- coding: utf-8 -*-
"""Nutrients: Pydantic models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


class NutrientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    nutrient_name: str
    nutrient_abbreviation: str


class NutrientListResponse(BaseModel):
    nutrients: List[NutrientOut]
    count: int
