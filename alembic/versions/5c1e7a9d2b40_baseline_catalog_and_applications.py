"""baseline_catalog_and_applications

Revision ID: 5c1e7a9d2b40
Revises: 
Create Date: 2026-10-19 10:12:31.118204

Idempotent baseline: tables are only created when missing.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if not table_exists('profiles'):
        op.create_table('profiles',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('full_name', sa.String(), nullable=False),
            sa.Column('education_level', sa.String(), nullable=True),
            sa.Column('current_gpa', sa.Float(), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )

    if not table_exists('user_sessions'):
        op.create_table('user_sessions',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_user_sessions_user_id'), 'user_sessions', ['user_id'], unique=False)

    if not table_exists('universities'):
        op.create_table('universities',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('location', sa.String(), nullable=True),
            sa.Column('country', sa.String(), nullable=True),
            sa.Column('tuition_fee', sa.Integer(), nullable=True),
            sa.Column('acceptance_rate', sa.Integer(), nullable=True),
            sa.Column('scholarship_available', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('minimum_gpa', sa.Float(), nullable=True),
            sa.Column('education_gap', sa.Integer(), nullable=True),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('image_url', sa.String(), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_universities_id'), 'universities', ['id'], unique=False)
        op.create_index(op.f('ix_universities_name'), 'universities', ['name'], unique=False)

    if not table_exists('courses'):
        op.create_table('courses',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('university_id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('level', sa.String(), nullable=False),
            sa.Column('overview', sa.Text(), nullable=True),
            sa.Column('duration', sa.String(), nullable=True),
            sa.Column('start_admission', sa.String(), nullable=True),
            sa.Column('application_deadline', sa.String(), nullable=True),
            sa.Column('program_structure', sa.Text(), nullable=True),
            sa.Column('academic_requirements', sa.Text(), nullable=True),
            sa.Column('tuition_fee', sa.Integer(), nullable=True),
            sa.Column('scholarship_info', sa.Text(), nullable=True),
            sa.Column('visa_info', sa.Text(), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['university_id'], ['universities.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_courses_id'), 'courses', ['id'], unique=False)
        op.create_index(op.f('ix_courses_university_id'), 'courses', ['university_id'], unique=False)

    if not table_exists('applications'):
        op.create_table('applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('university_id', sa.Integer(), nullable=False),
            sa.Column('course_id', sa.Integer(), nullable=True),
            sa.Column('status', sa.String(), nullable=False, server_default='pending'),
            *_timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.ForeignKeyConstraint(['university_id'], ['universities.id'], ),
            sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_applications_id'), 'applications', ['id'], unique=False)
        op.create_index(op.f('ix_applications_user_id'), 'applications', ['user_id'], unique=False)
        op.create_index('idx_applications_user_created', 'applications', ['user_id', 'created_at'], unique=False)

    if not table_exists('application_documents'):
        op.create_table('application_documents',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('application_id', sa.Integer(), nullable=False),
            sa.Column('document_type', sa.String(), nullable=False),
            sa.Column('file_path', sa.String(), nullable=False),
            sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('status', sa.String(), nullable=False, server_default='pending'),
            sa.Column('has_english_test', sa.Boolean(), nullable=True),
            sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_application_documents_id'), 'application_documents', ['id'], unique=False)
        op.create_index(op.f('ix_application_documents_application_id'), 'application_documents', ['application_id'], unique=False)


def downgrade() -> None:
    op.drop_table('application_documents')
    op.drop_table('applications')
    op.drop_table('courses')
    op.drop_table('universities')
    op.drop_table('user_sessions')
    op.drop_table('profiles')
    op.drop_table('users')
