"""add_courses

Add the per-organization course catalog and let a certificate reference the
course it was issued for. A course cannot be deleted while certificates
reference it.

Revision ID: 8d4e2b7c1a05
Revises: 3c1f6d2a9b47
Create Date: 2026-10-19 14:03:17.552903

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8d4e2b7c1a05"
down_revision: Union[str, Sequence[str], None] = "3c1f6d2a9b47"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "courses",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("organization_id", sa.UUID(), nullable=False),
        sa.Column("created_by_user_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("description", sa.String(2048), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "organization_id", "slug", name="uq_courses_organization_slug"
        ),
    )

    op.add_column("certificates", sa.Column("course_id", sa.UUID(), nullable=True))
    op.create_foreign_key(
        "fk_certificates_course_id",
        "certificates",
        "courses",
        ["course_id"],
        ["id"],
        ondelete="RESTRICT",
    )
    op.create_index("idx_certificates_course_id", "certificates", ["course_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_certificates_course_id", table_name="certificates")
    op.drop_constraint("fk_certificates_course_id", "certificates", type_="foreignkey")
    op.drop_column("certificates", "course_id")
    op.drop_table("courses")
