"""create_identity_and_inventory_tables

Revision ID: 3f1e2d4c5b6a
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1e2d4c5b6a"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts, registration challenges, rooms and assets."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("confirmed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_accounts_email"), "accounts", ["email"], unique=True)

    op.create_table(
        "pending_registrations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_pending_registrations_email"),
        "pending_registrations",
        ["email"],
        unique=True,
    )

    op.create_table(
        "otp_challenges",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("code", sa.String(length=12), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("attempts", sa.Integer(), nullable=False),
        sa.Column("max_attempts", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["email"], ["pending_registrations.email"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_otp_challenges_email"), "otp_challenges", ["email"], unique=True
    )

    op.create_table(
        "password_reset_challenges",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("token", sa.String(length=12), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["email"], ["accounts.email"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_password_reset_challenges_email"),
        "password_reset_challenges",
        ["email"],
        unique=True,
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("length_m", sa.Float(), nullable=False),
        sa.Column("width_m", sa.Float(), nullable=False),
        sa.Column("door_position", sa.String(length=20), nullable=True),
        sa.Column("door_width_cm", sa.Integer(), nullable=True),
        sa.Column("window_position", sa.String(length=20), nullable=True),
        sa.Column("window_width_cm", sa.Integer(), nullable=True),
        sa.Column("power_outlet_positions", sa.JSON(), nullable=True),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_rooms_user_id"), "rooms", ["user_id"], unique=False)

    op.create_table(
        "assets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("room_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "category",
            sa.Enum(
                "TEMPAT_TIDUR",
                "MEJA",
                "LEMARI",
                "KURSI",
                "LAINNYA",
                name="asset_category",
                native_enum=False,
            ),
            nullable=True,
        ),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("length_cm", sa.Integer(), nullable=False),
        sa.Column("width_cm", sa.Integer(), nullable=False),
        sa.Column("height_cm", sa.Integer(), nullable=False),
        sa.Column("clearance_front_cm", sa.Integer(), nullable=False),
        sa.Column("clearance_sides_cm", sa.Integer(), nullable=False),
        sa.Column("clearance_back_cm", sa.Integer(), nullable=False),
        sa.Column(
            "function_zone",
            sa.Enum(
                "SLEEPING",
                "STUDY",
                "STORAGE",
                "LEISURE",
                name="function_zone",
                native_enum=False,
            ),
            nullable=True,
        ),
        sa.Column("must_be_near_wall", sa.Boolean(), nullable=False),
        sa.Column("must_be_near_window", sa.Boolean(), nullable=False),
        sa.Column("must_be_near_outlet", sa.Boolean(), nullable=False),
        sa.Column("can_rotate", sa.Boolean(), nullable=False),
        sa.Column("cannot_adjacent_to", sa.JSON(), nullable=True),
        sa.Column("purchase_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("purchase_price", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column(
            "condition",
            sa.Enum(
                "NEW",
                "GOOD",
                "FAIR",
                "NEEDS_REPAIR",
                name="asset_condition",
                native_enum=False,
            ),
            nullable=True,
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_assets_room_id"), "assets", ["room_id"], unique=False)
    op.create_index(op.f("ix_assets_user_id"), "assets", ["user_id"], unique=False)


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index(op.f("ix_assets_user_id"), table_name="assets")
    op.drop_index(op.f("ix_assets_room_id"), table_name="assets")
    op.drop_table("assets")
    op.drop_index(op.f("ix_rooms_user_id"), table_name="rooms")
    op.drop_table("rooms")
    op.drop_index(
        op.f("ix_password_reset_challenges_email"),
        table_name="password_reset_challenges",
    )
    op.drop_table("password_reset_challenges")
    op.drop_index(op.f("ix_otp_challenges_email"), table_name="otp_challenges")
    op.drop_table("otp_challenges")
    op.drop_index(
        op.f("ix_pending_registrations_email"), table_name="pending_registrations"
    )
    op.drop_table("pending_registrations")
    op.drop_index(op.f("ix_accounts_email"), table_name="accounts")
    op.drop_table("accounts")
