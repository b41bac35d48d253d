"""initial_invite_schema

Create the schema for the invite engine:
- Profiles and Properties (owned by the wider application, read here)
- Invites (keyed token hashes, never plaintext)
- Tenant-property links (one per tenant and property)
- Rate limits (shared fixed window counters)

Revision ID: 3c1f9a7e52d4
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7e52d4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False, default: bool = True) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=nullable,
        server_default=sa.text("NOW()") if default else None,
    )


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from Postgres 13, pgcrypto covers older servers
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "role IS NULL OR role IN ('tenant', 'landlord')",
            name="profile_role_valid",
        ),
    )

    # ========================================================================
    # PROPERTIES table
    # ========================================================================
    op.create_table(
        "properties",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["owner_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_properties_owner_id", "properties", ["owner_id"])

    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("property_id", sa.UUID(), nullable=False),
        sa.Column("created_by", sa.UUID(), nullable=False),
        sa.Column("token_hash", sa.String(64), nullable=False),
        sa.Column("delivery_method", sa.String(10), nullable=False),
        sa.Column("intended_email", sa.String(320), nullable=True),
        _timestamp("created_at"),
        _timestamp("expires_at", default=False),
        _timestamp("accepted_at", nullable=True, default=False),
        sa.Column("accepted_by", sa.UUID(), nullable=True),
        _timestamp("deleted_at", nullable=True, default=False),
        sa.Column("revoked_by", sa.UUID(), nullable=True),
        sa.Column("max_uses", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("use_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "validation_attempts", sa.Integer(), nullable=False, server_default="0"
        ),
        _timestamp("last_validation_attempt", nullable=True, default=False),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["accepted_by"], ["profiles.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["revoked_by"], ["profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        # Upper bound mirrors MAX_USES_CEILING in tenantlink.config
        sa.CheckConstraint("max_uses BETWEEN 1 AND 100", name="invite_max_uses_range"),
        sa.CheckConstraint(
            "use_count >= 0 AND use_count <= max_uses", name="invite_use_count_range"
        ),
        sa.CheckConstraint(
            "(accepted_at IS NULL) = (accepted_by IS NULL)",
            name="invite_acceptance_paired",
        ),
        sa.CheckConstraint(
            "delivery_method IN ('email', 'code')",
            name="invite_delivery_method_valid",
        ),
    )
    # A hash may only be reused once its previous invite is soft-deleted
    op.create_index(
        "idx_invites_token_hash_active",
        "invites",
        ["token_hash"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )
    op.create_index("idx_invites_property_id", "invites", ["property_id"])
    op.create_index("idx_invites_expires_at", "invites", ["expires_at"])

    # ========================================================================
    # TENANT_PROPERTY_LINKS table
    # ========================================================================
    op.create_table(
        "tenant_property_links",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("property_id", sa.UUID(), nullable=False),
        sa.Column("landlord_id", sa.UUID(), nullable=False),
        sa.Column("invite_id", sa.UUID(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["tenant_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["landlord_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "property_id", name="uq_tenant_property"),
    )
    op.create_index(
        "idx_tenant_property_links_property_id",
        "tenant_property_links",
        ["property_id"],
    )
    op.create_index(
        "idx_tenant_property_links_invite_id", "tenant_property_links", ["invite_id"]
    )

    # ========================================================================
    # RATE_LIMITS table
    # ========================================================================
    op.create_table(
        "rate_limits",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("limiter_key", sa.Text(), nullable=False),
        _timestamp("window_start", default=False),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_rate_limits_key", "rate_limits", ["limiter_key"], unique=True)
    op.create_index("idx_rate_limits_updated_at", "rate_limits", ["updated_at"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("rate_limits")
    op.drop_table("tenant_property_links")
    op.drop_table("invites")
    op.drop_table("properties")
    op.drop_table("profiles")
