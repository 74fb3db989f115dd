# -*- coding: utf-8 -*-
"""Relational schema (SQLAlchemy declarative models).

Ids are UUID strings. Every table carries created_at/updated_at. Child rows are
removed by ON DELETE CASCADE foreign keys; FoodInstance -> FoodItem is the one
RESTRICT edge (a food item in use cannot be deleted).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base, utc_now


class EventType(str, Enum):
    run = "RUN"
    bike = "BIKE"
    triathlon = "TRIATHLON"
    other = "OTHER"


class FoodCategory(str, Enum):
    energy_gel = "ENERGY_GEL"
    energy_bar = "ENERGY_BAR"
    sports_drink = "SPORTS_DRINK"
    fruit = "FRUIT"
    snack = "SNACK"
    other = "OTHER"


class RequestStatus(str, Enum):
    pending = "PENDING"
    accepted = "ACCEPTED"
    denied = "DENIED"


def _uuid() -> str:
    return str(uuid4())


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    auth0_sub: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(254), nullable=True)
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False, default="")


class Nutrient(TimestampMixin, Base):
    __tablename__ = "nutrients"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    nutrient_name: Mapped[str] = mapped_column(String(128), nullable=False)
    nutrient_abbreviation: Mapped[str] = mapped_column(String(32), nullable=False)


class FoodItem(TimestampMixin, Base):
    __tablename__ = "food_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    brand: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    created_by: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    nutrients: Mapped[List["FoodItemNutrient"]] = relationship(
        back_populates="food_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )


class FoodItemNutrient(TimestampMixin, Base):
    __tablename__ = "food_item_nutrients"
    __table_args__ = (UniqueConstraint("food_item_id", "nutrient_id", name="uq_food_item_nutrient"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    food_item_id: Mapped[str] = mapped_column(ForeignKey("food_items.id", ondelete="CASCADE"), nullable=False)
    nutrient_id: Mapped[str] = mapped_column(ForeignKey("nutrients.id", ondelete="CASCADE"), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(16), nullable=False)

    food_item: Mapped[FoodItem] = relationship(back_populates="nutrients")
    nutrient: Mapped[Nutrient] = relationship(lazy="selectin")


class Event(TimestampMixin, Base):
    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    event_user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    event_type: Mapped[str] = mapped_column(String(16), nullable=False, default=EventType.other.value)
    expected_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    owner: Mapped[User] = relationship()
    triathlon_attributes: Mapped[Optional["TriathlonAttributes"]] = relationship(
        back_populates="event",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )


class TriathlonAttributes(TimestampMixin, Base):
    __tablename__ = "triathlon_attributes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    event_id: Mapped[str] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    swim_duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    bike_duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    run_duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    t1_duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    t2_duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    event: Mapped[Event] = relationship(back_populates="triathlon_attributes")


class FoodInstance(TimestampMixin, Base):
    __tablename__ = "food_instances"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    food_item_id: Mapped[str] = mapped_column(ForeignKey("food_items.id", ondelete="RESTRICT"), nullable=False)
    time_elapsed_at_consumption: Mapped[int] = mapped_column(Integer, nullable=False)
    servings: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    event: Mapped[Event] = relationship()
    food_item: Mapped[FoodItem] = relationship(lazy="selectin")


class EventGoalBase(TimestampMixin, Base):
    __tablename__ = "event_goals_base"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", "nutrient_id", name="uq_event_goal_base"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    nutrient_id: Mapped[str] = mapped_column(ForeignKey("nutrients.id", ondelete="CASCADE"), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(16), nullable=False)

    nutrient: Mapped[Nutrient] = relationship(lazy="selectin")


class EventGoalHourly(TimestampMixin, Base):
    __tablename__ = "event_goals_hourly"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", "nutrient_id", "hour", name="uq_event_goal_hourly"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    nutrient_id: Mapped[str] = mapped_column(ForeignKey("nutrients.id", ondelete="CASCADE"), nullable=False)
    hour: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(16), nullable=False)

    nutrient: Mapped[Nutrient] = relationship(lazy="selectin")


class UserConnection(TimestampMixin, Base):
    __tablename__ = "user_connections"
    __table_args__ = (
        UniqueConstraint("initiating_user", "receiving_user", name="uq_user_connection_pair"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    initiating_user: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    receiving_user: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=RequestStatus.pending.value)

    initiator: Mapped[User] = relationship(foreign_keys=[initiating_user])
    receiver: Mapped[User] = relationship(foreign_keys=[receiving_user])


class SharedEvent(TimestampMixin, Base):
    __tablename__ = "shared_events"
    __table_args__ = (
        Index("ix_shared_events_receiver_id", "receiver_id"),
        Index("ix_shared_events_status", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    sender_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    receiver_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=RequestStatus.pending.value)
    copied_event_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), nullable=True
    )

    event: Mapped[Event] = relationship(foreign_keys=[event_id])
    copied_event: Mapped[Optional[Event]] = relationship(foreign_keys=[copied_event_id])
    sender: Mapped[User] = relationship(foreign_keys=[sender_id])
    receiver: Mapped[User] = relationship(foreign_keys=[receiver_id])


class FavoriteFoodItem(TimestampMixin, Base):
    __tablename__ = "favorite_food_items"
    __table_args__ = (UniqueConstraint("user_id", "food_item_id", name="uq_favorite_food_item"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    food_item_id: Mapped[str] = mapped_column(ForeignKey("food_items.id", ondelete="CASCADE"), nullable=False)

    food_item: Mapped[FoodItem] = relationship(lazy="selectin")


class UserPreferences(TimestampMixin, Base):
    __tablename__ = "user_preferences"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    dark_mode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class ReferenceColor(TimestampMixin, Base):
    __tablename__ = "reference_colors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    hex: Mapped[str] = mapped_column(String(7), unique=True, nullable=False)
    color_name: Mapped[str] = mapped_column(String(64), nullable=False)


class ReferenceFoodCategory(TimestampMixin, Base):
    __tablename__ = "reference_food_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    category_name: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)


class PreferenceUserColor(TimestampMixin, Base):
    __tablename__ = "preference_user_colors"
    __table_args__ = (UniqueConstraint("user_id", "food_category", name="uq_preference_user_color"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    food_category: Mapped[str] = mapped_column(
        ForeignKey("reference_food_categories.id", ondelete="CASCADE"), nullable=False
    )
    color_id: Mapped[str] = mapped_column(ForeignKey("reference_colors.id", ondelete="CASCADE"), nullable=False)

    color: Mapped[ReferenceColor] = relationship(lazy="selectin")
    category: Mapped[ReferenceFoodCategory] = relationship(lazy="selectin")
