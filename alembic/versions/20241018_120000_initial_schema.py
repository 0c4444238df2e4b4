"""Initial schema: promotions, fighters, events, bouts, belts, ranking entries

Revision ID: 5f0c1e7a9b21
Revises:
Create Date: 2024-10-18 12:00:00.000000+00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers, used by Alembic.
revision: str = "5f0c1e7a9b21"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "promotions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("region", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )

    op.create_table(
        "fighters",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("hometown", sa.String(length=255), nullable=True),
        sa.Column("sport", sa.String(length=30), nullable=False),
        sa.Column("gender", sa.String(length=10), nullable=False),
        sa.Column("weight_class", sa.String(length=50), nullable=False),
        sa.Column("fighter_level", sa.String(length=5), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint("fighter_level IN ('pro', 'am')", name="ck_fighters_level"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("idx_fighters_division", "fighters", ["sport", "gender", "weight_class"])

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("promotion_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=True),
        sa.Column("venue", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("state", sa.String(length=50), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["promotion_id"], ["promotions.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("idx_events_date", "events", ["event_date"])
    op.create_index("idx_events_published", "events", ["is_published"])

    op.create_table(
        "belts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("promotion_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("sport", sa.String(length=30), nullable=False),
        sa.Column("gender", sa.String(length=10), nullable=False),
        sa.Column("weight_class", sa.String(length=50), nullable=False),
        sa.Column("current_champion_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["promotion_id"], ["promotions.id"]),
        sa.ForeignKeyConstraint(["current_champion_id"], ["fighters.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "bouts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("bout_order", sa.Integer(), nullable=False),
        sa.Column("sport", sa.String(length=30), nullable=False),
        sa.Column("gender", sa.String(length=10), nullable=False),
        sa.Column("weight_class", sa.String(length=50), nullable=False),
        sa.Column("red_fighter_id", sa.Integer(), nullable=False),
        sa.Column("blue_fighter_id", sa.Integer(), nullable=False),
        sa.Column("winner_id", sa.Integer(), nullable=True),
        sa.Column("method", sa.String(length=20), nullable=True),
        sa.Column("round", sa.Integer(), nullable=True),
        sa.Column("time", sa.String(length=10), nullable=True),
        sa.Column("is_title_bout", sa.Boolean(), nullable=False),
        sa.Column("belt_id", sa.Integer(), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["red_fighter_id"], ["fighters.id"]),
        sa.ForeignKeyConstraint(["blue_fighter_id"], ["fighters.id"]),
        sa.ForeignKeyConstraint(["winner_id"], ["fighters.id"]),
        sa.ForeignKeyConstraint(["belt_id"], ["belts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_bouts_event", "bouts", ["event_id", "bout_order"])
    op.create_index("idx_bouts_red", "bouts", ["red_fighter_id"])
    op.create_index("idx_bouts_blue", "bouts", ["blue_fighter_id"])
    op.create_index("idx_bouts_published", "bouts", ["is_published"])

    op.create_table(
        "ranking_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("as_of_date", sa.Date(), nullable=False),
        sa.Column("sport", sa.String(length=30), nullable=False),
        sa.Column("gender", sa.String(length=10), nullable=False),
        sa.Column("weight_class", sa.String(length=50), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("fighter_id", sa.Integer(), nullable=False),
        sa.Column("score", sa.Numeric(precision=8, scale=1), nullable=False),
        sa.Column("previous_rank", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["fighter_id"], ["fighters.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "as_of_date", "sport", "gender", "weight_class", "fighter_id",
            name="uq_ranking_entries_snapshot_fighter",
        ),
    )
    op.create_index(
        "idx_ranking_entries_division_rank",
        "ranking_entries",
        ["sport", "gender", "weight_class", "rank"],
    )


def downgrade() -> None:
    op.drop_index("idx_ranking_entries_division_rank", table_name="ranking_entries")
    op.drop_table("ranking_entries")

    op.drop_index("idx_bouts_published", table_name="bouts")
    op.drop_index("idx_bouts_blue", table_name="bouts")
    op.drop_index("idx_bouts_red", table_name="bouts")
    op.drop_index("idx_bouts_event", table_name="bouts")
    op.drop_table("bouts")

    op.drop_table("belts")

    op.drop_index("idx_events_published", table_name="events")
    op.drop_index("idx_events_date", table_name="events")
    op.drop_table("events")

    op.drop_index("idx_fighters_division", table_name="fighters")
    op.drop_table("fighters")

    op.drop_table("promotions")
