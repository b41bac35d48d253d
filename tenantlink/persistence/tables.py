"""SQLAlchemy table definitions for the invite engine.

Domain models are pydantic, so these Core tables are mapped by hand in
mappers.py. They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from tenantlink.config import MAX_USES_CEILING

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE (owned by the wider application)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True),  # Identity provider user id
    Column("display_name", String(255), nullable=True),
    Column("role", String(20), nullable=True),  # 'tenant', 'landlord'
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "role IS NULL OR role IN ('tenant', 'landlord')", name="profile_role_valid"
    ),
)

# ============================================================================
# PROPERTIES TABLE (owned by the wider application)
# ============================================================================
properties_table = Table(
    "properties",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "owner_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column("name", String(255), nullable=False),
    Column("address", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_properties_owner_id", properties_table.c.owner_id)

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "property_id",
        UUID,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_by", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column("token_hash", String(64), nullable=False),  # HMAC-SHA256 hex, never plaintext
    Column("delivery_method", String(10), nullable=False),  # 'email', 'code'
    Column("intended_email", String(320), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "accepted_by",
        UUID,
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "revoked_by", UUID, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    ),
    Column("max_uses", Integer, nullable=False, server_default="1"),
    Column("use_count", Integer, nullable=False, server_default="0"),
    Column("validation_attempts", Integer, nullable=False, server_default="0"),
    Column("last_validation_attempt", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        f"max_uses BETWEEN 1 AND {MAX_USES_CEILING}", name="invite_max_uses_range"
    ),
    CheckConstraint(
        "use_count >= 0 AND use_count <= max_uses", name="invite_use_count_range"
    ),
    CheckConstraint(
        "(accepted_at IS NULL) = (accepted_by IS NULL)",
        name="invite_acceptance_paired",
    ),
    CheckConstraint(
        "delivery_method IN ('email', 'code')", name="invite_delivery_method_valid"
    ),
)

# A hash may only be reused once its previous invite is soft-deleted
Index(
    "idx_invites_token_hash_active",
    invites_table.c.token_hash,
    unique=True,
    postgresql_where=invites_table.c.deleted_at.is_(None),
)
Index("idx_invites_property_id", invites_table.c.property_id)
Index("idx_invites_expires_at", invites_table.c.expires_at)

# ============================================================================
# TENANT_PROPERTY_LINKS TABLE
# ============================================================================
tenant_property_links_table = Table(
    "tenant_property_links",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "tenant_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "property_id",
        UUID,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "landlord_id",
        UUID,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "invite_id", UUID, ForeignKey("invites.id", ondelete="SET NULL"), nullable=True
    ),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("tenant_id", "property_id", name="uq_tenant_property"),
)

Index("idx_tenant_property_links_property_id", tenant_property_links_table.c.property_id)
Index("idx_tenant_property_links_invite_id", tenant_property_links_table.c.invite_id)

# ============================================================================
# RATE_LIMITS TABLE (fixed window counters)
# ============================================================================
rate_limits_table = Table(
    "rate_limits",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("limiter_key", Text, nullable=False),  # e.g. 'validate-invite:203.0.113.7'
    Column("window_start", TIMESTAMP(timezone=True), nullable=False),
    Column("attempts", Integer, nullable=False, server_default="0"),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_rate_limits_key", rate_limits_table.c.limiter_key, unique=True)
Index("idx_rate_limits_updated_at", rate_limits_table.c.updated_at)
