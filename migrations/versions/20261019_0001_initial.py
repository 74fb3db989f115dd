"""Initial schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("auth0_sub", sa.String(length=255), nullable=False, unique=True),
        sa.Column("email", sa.String(length=254), nullable=True),
        sa.Column("first_name", sa.String(length=128), nullable=False),
        sa.Column("last_name", sa.String(length=128), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "nutrients",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("nutrient_name", sa.String(length=128), nullable=False),
        sa.Column("nutrient_abbreviation", sa.String(length=32), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "reference_colors",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("hex", sa.String(length=7), nullable=False, unique=True),
        sa.Column("color_name", sa.String(length=64), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "reference_food_categories",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("category_name", sa.String(length=32), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "food_items",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("item_name", sa.String(length=255), nullable=False),
        sa.Column("brand", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=32), nullable=True),
        sa.Column("cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("created_by", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_food_items_created_by", "food_items", ["created_by"])

    op.create_table(
        "food_item_nutrients",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "food_item_id", sa.String(length=36), sa.ForeignKey("food_items.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "nutrient_id", sa.String(length=36), sa.ForeignKey("nutrients.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("food_item_id", "nutrient_id", name="uq_food_item_nutrient"),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("event_user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("event_type", sa.String(length=16), nullable=False),
        sa.Column("expected_duration", sa.Integer(), nullable=False),
        sa.Column("private", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_events_event_user_id", "events", ["event_user_id"])

    op.create_table(
        "triathlon_attributes",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "event_id", sa.String(length=36), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False, unique=True
        ),
        sa.Column("swim_duration_seconds", sa.Integer(), nullable=False),
        sa.Column("bike_duration_seconds", sa.Integer(), nullable=False),
        sa.Column("run_duration_seconds", sa.Integer(), nullable=False),
        sa.Column("t1_duration_seconds", sa.Integer(), nullable=False),
        sa.Column("t2_duration_seconds", sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "food_instances",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("event_id", sa.String(length=36), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "food_item_id", sa.String(length=36), sa.ForeignKey("food_items.id", ondelete="RESTRICT"), nullable=False
        ),
        sa.Column("time_elapsed_at_consumption", sa.Integer(), nullable=False),
        sa.Column("servings", sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_food_instances_event_id", "food_instances", ["event_id"])

    for table, extra, unique in (
        ("event_goals_base", [], ["user_id", "event_id", "nutrient_id"]),
        ("event_goals_hourly", [sa.Column("hour", sa.Integer(), nullable=False)], ["user_id", "event_id", "nutrient_id", "hour"]),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("event_id", sa.String(length=36), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
            sa.Column(
                "nutrient_id", sa.String(length=36), sa.ForeignKey("nutrients.id", ondelete="CASCADE"), nullable=False
            ),
            *extra,
            sa.Column("quantity", sa.Float(), nullable=False),
            sa.Column("unit", sa.String(length=16), nullable=False),
            *_timestamps(),
            sa.UniqueConstraint(*unique, name=table.replace("event_goals", "uq_event_goal")),
        )
        op.create_index(f"ix_{table}_event_id", table, ["event_id"])

    op.create_table(
        "user_connections",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("initiating_user", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("receiving_user", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("initiating_user", "receiving_user", name="uq_user_connection_pair"),
    )

    op.create_table(
        "shared_events",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("event_id", sa.String(length=36), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sender_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("receiver_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column(
            "copied_event_id", sa.String(length=36), sa.ForeignKey("events.id", ondelete="SET NULL"), nullable=True
        ),
        *_timestamps(),
    )
    op.create_index("ix_shared_events_receiver_id", "shared_events", ["receiver_id"])
    op.create_index("ix_shared_events_status", "shared_events", ["status"])

    op.create_table(
        "favorite_food_items",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "food_item_id", sa.String(length=36), sa.ForeignKey("food_items.id", ondelete="CASCADE"), nullable=False
        ),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "food_item_id", name="uq_favorite_food_item"),
    )

    op.create_table(
        "user_preferences",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
        ),
        sa.Column("dark_mode", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "preference_user_colors",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "food_category",
            sa.String(length=36),
            sa.ForeignKey("reference_food_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "color_id", sa.String(length=36), sa.ForeignKey("reference_colors.id", ondelete="CASCADE"), nullable=False
        ),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "food_category", name="uq_preference_user_color"),
    )


def downgrade() -> None:
    op.drop_table("preference_user_colors")
    op.drop_table("user_preferences")
    op.drop_table("favorite_food_items")
    op.drop_index("ix_shared_events_status", table_name="shared_events")
    op.drop_index("ix_shared_events_receiver_id", table_name="shared_events")
    op.drop_table("shared_events")
    op.drop_table("user_connections")
    for table in ("event_goals_hourly", "event_goals_base"):
        op.drop_index(f"ix_{table}_event_id", table_name=table)
        op.drop_table(table)
    op.drop_index("ix_food_instances_event_id", table_name="food_instances")
    op.drop_table("food_instances")
    op.drop_table("triathlon_attributes")
    op.drop_index("ix_events_event_user_id", table_name="events")
    op.drop_table("events")
    op.drop_table("food_item_nutrients")
    op.drop_index("ix_food_items_created_by", table_name="food_items")
    op.drop_table("food_items")
    op.drop_table("reference_food_categories")
    op.drop_table("reference_colors")
    op.drop_table("nutrients")
    op.drop_table("users")
