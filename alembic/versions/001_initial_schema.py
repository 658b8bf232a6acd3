"""Create master resume, job description, application, interview and reminder tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-16 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "master_resume",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("resume_data", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime()),
    )

    op.create_table(
        "job_descriptions",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("company", sa.String(), nullable=False),
        sa.Column("position", sa.String(), nullable=False),
        sa.Column("location", sa.String()),
        sa.Column("salary_range", sa.String()),
        sa.Column("required_skills", sa.Text()),
        sa.Column("preferred_skills", sa.Text()),
        sa.Column("keywords", sa.Text()),
        sa.Column("raw_text", sa.Text()),
        sa.Column("created_at", sa.DateTime()),
    )

    op.create_table(
        "applications",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("company", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("location", sa.String()),
        sa.Column("status", sa.String()),
        sa.Column("applied_date", sa.Date()),
        sa.Column("job_description_id", sa.String(32)),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime()),
    )
    op.create_index("ix_applications_status", "applications", ["status"])

    for table, extra_columns in (
        ("interviews", [
            sa.Column("time", sa.String(5), nullable=False),
            sa.Column("notes", sa.Text()),
        ]),
        ("reminders", [
            sa.Column("note", sa.Text()),
        ]),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.String(32), primary_key=True),
            sa.Column(
                "application_id", sa.String(32),
                sa.ForeignKey("applications.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("position", sa.Integer(), nullable=False),
            sa.Column("date", sa.Date(), nullable=False),
            sa.Column("type", sa.String(), nullable=False),
            sa.Column("completed", sa.Boolean()),
            *extra_columns,
        )
        op.create_index(f"ix_{table}_application_id", table, ["application_id"])


def downgrade() -> None:
    for table in ("reminders", "interviews"):
        op.drop_index(f"ix_{table}_application_id", table_name=table)
        op.drop_table(table)
    op.drop_index("ix_applications_status", table_name="applications")
    op.drop_table("applications")
    op.drop_table("job_descriptions")
    op.drop_table("master_resume")
