"""SQLAlchemy table definitions for Certis.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

ROLE_ENUM = Enum(
    "SUDOER", "STAFF", "OWNER", "ADMIN", "USER", name="user_role", create_type=False
)

# ============================================================================
# ORGANIZATIONS TABLE (Tenants)
# ============================================================================
organizations_table = Table(
    "organizations",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("name", String(50), nullable=False),
    Column("domain", String(255), nullable=False, unique=True),
    Column("description", String(1024), nullable=True),
    # Explicit owner reference, kept in step with users.role
    Column(
        "owner_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL", use_alter=True),
        nullable=True,
    ),
    Column("member_count", Integer, nullable=False, server_default="0"),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    CheckConstraint("member_count >= 0", name="check_member_count_non_negative"),
)

Index("uq_organizations_owner", organizations_table.c.owner_user_id, unique=True)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("email", String(255), nullable=False, unique=True),  # Lower-cased
    Column("password_hash", Text, nullable=False),
    Column("first_name", String(100), nullable=False, server_default=""),
    Column("last_name", String(100), nullable=False, server_default=""),
    Column("role", ROLE_ENUM, nullable=False, server_default="USER"),
    Column(
        "organization_id",
        UUID,
        ForeignKey("organizations.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("joined_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    CheckConstraint(
        "role NOT IN ('SUDOER', 'STAFF') OR organization_id IS NULL",
        name="check_system_role_unaffiliated",
    ),
)

Index("idx_users_organization_id", users_table.c.organization_id)
# At most one OWNER per organization
Index(
    "uq_users_one_owner_per_org",
    users_table.c.organization_id,
    unique=True,
    postgresql_where=text("role = 'OWNER'"),
)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("token", String(255), nullable=False, unique=True),  # URL-safe token
    Column("email", String(255), nullable=False),  # Lower-cased
    Column("role", ROLE_ENUM, nullable=False),
    Column(
        "organization_id",
        UUID,
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "invited_by_user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "expired",
            "revoked",
            name="invitation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
)

# At most one PENDING invitation per (email, organization)
Index(
    "uq_invitations_pending_email_org",
    invitations_table.c.email,
    invitations_table.c.organization_id,
    unique=True,
    postgresql_where=text("status = 'pending'"),
)
Index(
    "idx_invitations_status_expires_at",
    invitations_table.c.status,
    invitations_table.c.expires_at,
)

# ============================================================================
# COURSES TABLE
# ============================================================================
courses_table = Table(
    "courses",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column(
        "organization_id",
        UUID,
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_by_user_id",
        UUID,
        ForeignKey("users.id"),
        nullable=False,
    ),
    Column("title", String(100), nullable=False),
    Column("slug", String(100), nullable=False),
    Column("description", String(2048), nullable=True),
    Column("is_active", Boolean, nullable=False, server_default=text("true")),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    UniqueConstraint("organization_id", "slug", name="uq_courses_organization_slug"),
)

# ============================================================================
# CERTIFICATES TABLE
# ============================================================================
certificates_table = Table(
    "certificates",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column(
        "organization_id",
        UUID,
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "issued_by_user_id",
        UUID,
        ForeignKey("users.id"),
        nullable=False,
    ),
    Column(
        "course_id",
        UUID,
        ForeignKey("courses.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    Column("recipient_name", String(255), nullable=False),
    Column("recipient_email", String(255), nullable=False),
    Column("title", String(255), nullable=False),
    Column(
        "issued_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column("revoked_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "revoked_by_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("version", Integer, nullable=False, server_default="1"),
)

# Tenant-scoped listing
Index(
    "idx_certificates_organization_issued_at",
    certificates_table.c.organization_id,
    certificates_table.c.issued_at,
)
Index("idx_certificates_course_id", certificates_table.c.course_id)
