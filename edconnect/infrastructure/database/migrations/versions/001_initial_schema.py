# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial EdConnect schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-06-02

Creates the organization, account, academic and learning tables defined
in edconnect/infrastructure/database/models/. SQLite development
databases are created with ``create_all_tables`` instead.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer, primary_key=True, autoincrement=True)


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    )


def upgrade() -> None:
    """Create EdConnect tables."""
    # ==========================================================================
    # Organization
    # ==========================================================================
    op.create_table(
        "districts",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("code", sa.String(50), unique=True, nullable=False),
        sa.Column("address", sa.String(255)),
        sa.Column("city", sa.String(100)),
        sa.Column("state", sa.String(50)),
        sa.Column("zip_code", sa.String(20)),
        sa.Column("phone_number", sa.String(30)),
        sa.Column("website", sa.String(255)),
        _created_at(),
    )

    op.create_table(
        "schools",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("code", sa.String(50), unique=True, nullable=False),
        sa.Column(
            "district_id",
            sa.Integer,
            sa.ForeignKey("districts.id", ondelete="SET NULL"),
        ),
        sa.Column("address", sa.String(255)),
        sa.Column("city", sa.String(100)),
        sa.Column("state", sa.String(50)),
        sa.Column("zip_code", sa.String(20)),
        sa.Column("phone_number", sa.String(30)),
        sa.Column("grade_range", sa.String(50)),
        _created_at(),
    )
    op.create_index("ix_schools_district_id", "schools", ["district_id"])

    # chair_person_id gets its foreign key once users exists
    op.create_table(
        "departments",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column(
            "school_id",
            sa.Integer,
            sa.ForeignKey("schools.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("chair_person_id", sa.Integer),
        sa.Column("description", sa.Text),
    )
    op.create_index("ix_departments_school_id", "departments", ["school_id"])

    # ==========================================================================
    # Accounts and profiles
    # ==========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("username", sa.String(100), unique=True, nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("school_id", sa.Integer, sa.ForeignKey("schools.id", ondelete="SET NULL")),
        sa.Column("district_id", sa.Integer, sa.ForeignKey("districts.id", ondelete="SET NULL")),
        sa.Column(
            "department_id",
            sa.Integer,
            sa.ForeignKey("departments.id", ondelete="SET NULL"),
        ),
        sa.Column("admin_level", sa.String(20)),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
        _created_at(),
        sa.CheckConstraint(
            "role IN ('student', 'educator', 'admin')",
            name="valid_user_role",
        ),
        sa.CheckConstraint(
            "admin_level IS NULL OR admin_level IN ('district', 'school', 'department')",
            name="valid_admin_level",
        ),
    )
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_school_id", "users", ["school_id"])
    op.create_index("ix_users_district_id", "users", ["district_id"])
    op.create_index("ix_users_department_id", "users", ["department_id"])

    op.create_foreign_key(
        "fk_departments_chair_person_id_users",
        "departments",
        "users",
        ["chair_person_id"],
        ["id"],
        ondelete="SET NULL",
    )

    op.create_table(
        "students",
        _id(),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("school_id", sa.Integer, sa.ForeignKey("schools.id", ondelete="SET NULL")),
        sa.Column("grade", sa.String(20)),
        sa.Column("date_of_birth", sa.Date),
        sa.Column("student_number", sa.String(50), unique=True),
        sa.Column("guardian_name", sa.String(200)),
        sa.Column("guardian_email", sa.String(255)),
        sa.Column("guardian_phone", sa.String(30)),
    )
    op.create_index("ix_students_user_id", "students", ["user_id"])
    op.create_index("ix_students_school_id", "students", ["school_id"])

    op.create_table(
        "educators",
        _id(),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("school_id", sa.Integer, sa.ForeignKey("schools.id", ondelete="SET NULL")),
        sa.Column(
            "department_id",
            sa.Integer,
            sa.ForeignKey("departments.id", ondelete="SET NULL"),
        ),
        sa.Column("subject_specialty", sa.String(100)),
        sa.Column("employee_id", sa.String(50), unique=True),
        sa.Column("office_location", sa.String(100)),
        sa.Column("office_hours", sa.String(100)),
    )
    op.create_index("ix_educators_user_id", "educators", ["user_id"])
    op.create_index("ix_educators_school_id", "educators", ["school_id"])
    op.create_index("ix_educators_department_id", "educators", ["department_id"])

    # ==========================================================================
    # Academic records
    # ==========================================================================
    op.create_table(
        "classes",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column(
            "educator_id",
            sa.Integer,
            sa.ForeignKey("educators.id", ondelete="SET NULL"),
        ),
        sa.Column("school_id", sa.Integer, sa.ForeignKey("schools.id", ondelete="SET NULL")),
        sa.Column(
            "department_id",
            sa.Integer,
            sa.ForeignKey("departments.id", ondelete="SET NULL"),
        ),
        sa.Column("room_number", sa.String(30)),
        sa.Column("period", sa.String(30)),
        sa.Column("semester", sa.String(30)),
        sa.Column("school_year", sa.String(20)),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_classes_educator_id", "classes", ["educator_id"])
    op.create_index("ix_classes_school_id", "classes", ["school_id"])
    op.create_index("ix_classes_department_id", "classes", ["department_id"])

    op.create_table(
        "enrollments",
        _id(),
        sa.Column(
            "student_id",
            sa.Integer,
            sa.ForeignKey("students.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "class_id",
            sa.Integer,
            sa.ForeignKey("classes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at("enrollment_date"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.UniqueConstraint("student_id", "class_id", name="uq_enrollments_student_class"),
        sa.CheckConstraint(
            "status IN ('active', 'dropped', 'completed')",
            name="valid_enrollment_status",
        ),
    )
    op.create_index("ix_enrollments_student_id", "enrollments", ["student_id"])
    op.create_index("ix_enrollments_class_id", "enrollments", ["class_id"])

    op.create_table(
        "grades",
        _id(),
        sa.Column(
            "student_id",
            sa.Integer,
            sa.ForeignKey("students.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "class_id",
            sa.Integer,
            sa.ForeignKey("classes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("assignment_name", sa.String(200), nullable=False),
        sa.Column("assignment_type", sa.String(50)),
        sa.Column("score", sa.Float, nullable=False),
        sa.Column("max_score", sa.Float, nullable=False, server_default="100"),
        sa.Column("submission_date", sa.DateTime(timezone=True)),
        _created_at("graded_date"),
        sa.Column("comments", sa.Text),
    )
    op.create_index("ix_grades_student_id", "grades", ["student_id"])
    op.create_index("ix_grades_class_id", "grades", ["class_id"])

    op.create_table(
        "attendance",
        _id(),
        sa.Column(
            "student_id",
            sa.Integer,
            sa.ForeignKey("students.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "class_id",
            sa.Integer,
            sa.ForeignKey("classes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("notes", sa.Text),
        sa.Column("recorded_by", sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.CheckConstraint(
            "status IN ('present', 'absent', 'tardy', 'excused')",
            name="valid_attendance_status",
        ),
    )
    op.create_index("ix_attendance_student_id", "attendance", ["student_id"])
    op.create_index("ix_attendance_class_id", "attendance", ["class_id"])

    op.create_table(
        "achievements",
        _id(),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("type", sa.String(20), nullable=False),
        _created_at("earned_at"),
        sa.Column("subject", sa.String(100)),
        sa.Column("path_node_id", sa.String(100)),
        sa.Column("progress", sa.Integer),
        sa.Column("max_progress", sa.Integer),
        sa.Column("level", sa.Integer),
        sa.Column("icon_type", sa.String(50)),
        sa.Column("shared", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("visible", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column(
            "created_by_educator",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.CheckConstraint(
            "type IN ('badge', 'certificate', 'milestone', 'level-up')",
            name="valid_achievement_type",
        ),
    )
    op.create_index("ix_achievements_user_id", "achievements", ["user_id"])

    # ==========================================================================
    # Learning
    # ==========================================================================
    op.create_table(
        "tutoring_sessions",
        _id(),
        sa.Column(
            "student_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at("started_at"),
        sa.Column("ended_at", sa.DateTime(timezone=True)),
        sa.Column("subject", sa.String(100)),
        sa.Column("topic", sa.String(200)),
        sa.Column("difficulty", sa.String(30)),
        sa.Column("total_messages", sa.Integer, nullable=False, server_default="0"),
        sa.Column("student_questions", sa.Integer, nullable=False, server_default="0"),
        sa.Column("concepts_covered", sa.JSON, nullable=False),
        sa.Column("session_summary", sa.Text),
        sa.Column("performance_score", sa.Integer),
        sa.Column("improvement_areas", sa.JSON, nullable=False),
        sa.Column("strength_areas", sa.JSON, nullable=False),
    )
    op.create_index("ix_tutoring_sessions_student_id", "tutoring_sessions", ["student_id"])

    op.create_table(
        "tutoring_messages",
        _id(),
        sa.Column(
            "session_id",
            sa.Integer,
            sa.ForeignKey("tutoring_sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        _created_at("timestamp"),
        sa.Column("concepts_discussed", sa.JSON, nullable=False),
        sa.CheckConstraint(
            "role IN ('user', 'assistant')",
            name="valid_message_role",
        ),
    )
    op.create_index("ix_tutoring_messages_session_id", "tutoring_messages", ["session_id"])

    op.create_table(
        "homework",
        _id(),
        sa.Column(
            "student_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("subject", sa.String(100)),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        sa.Column("priority", sa.String(10), nullable=False, server_default="medium"),
        _created_at(),
        sa.Column("notes", sa.Text),
        sa.Column("attachment_url", sa.String(500)),
        sa.Column("attachment_name", sa.String(200)),
        sa.CheckConstraint(
            "priority IN ('low', 'medium', 'high')",
            name="valid_homework_priority",
        ),
    )
    op.create_index("ix_homework_student_id", "homework", ["student_id"])


def downgrade() -> None:
    """Drop EdConnect tables."""
    op.drop_table("homework")
    op.drop_table("tutoring_messages")
    op.drop_table("tutoring_sessions")
    op.drop_table("achievements")
    op.drop_table("attendance")
    op.drop_table("grades")
    op.drop_table("enrollments")
    op.drop_table("classes")
    op.drop_table("educators")
    op.drop_table("students")
    op.drop_constraint("fk_departments_chair_person_id_users", "departments", type_="foreignkey")
    op.drop_table("users")
    op.drop_table("departments")
    op.drop_table("schools")
    op.drop_table("districts")
