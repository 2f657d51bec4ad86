"""initial schema: users, staff, issues, upvotes, activity

Creates the users, staff and issues tables, the issue_upvotes voter set and
the issue_activity timeline.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('user', 'staff', 'admin', name='userrole')
membership = sa.Enum('free', 'standard', 'premium', name='membership')
staff_status = sa.Enum('pending', 'approved', name='staffstatus')
availability = sa.Enum('available', 'busy', 'not_available', name='availability')
issue_status = sa.Enum('pending', 'approved', 'rejected', name='issuestatus')
# enum members are stored by name
issue_workflow = sa.Enum('in_queue', 'in_progress', 'working', 'resolved', 'rejected', name='issueworkflow')
assign_state = sa.Enum('waiting', 'assigned', name='assignstate')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=True),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('membership', membership, nullable=False),
        sa.Column('post_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_logged_in', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'staff',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('photo', sa.String(length=500), nullable=True),
        sa.Column('address', sa.String(length=300), nullable=True),
        sa.Column('district', sa.String(length=120), nullable=True),
        sa.Column('status', staff_status, nullable=False),
        sa.Column('availability', availability, nullable=False),
        sa.Column('applied_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_staff_email', 'staff', ['email'], unique=True)
    op.create_index('ix_staff_district', 'staff', ['district'])
    op.create_index('ix_staff_status', 'staff', ['status'])

    op.create_table(
        'issues',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('issue_name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=4000), nullable=True),
        sa.Column('category', sa.String(length=120), nullable=True),
        sa.Column('priority', sa.String(length=30), nullable=True),
        sa.Column('division', sa.String(length=120), nullable=True),
        sa.Column('district', sa.String(length=120), nullable=True),
        sa.Column('upazila', sa.String(length=120), nullable=True),
        sa.Column('address', sa.String(length=300), nullable=True),
        sa.Column('issue_image_url', sa.String(length=1000), nullable=True),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('status', issue_status, nullable=False),
        sa.Column('workflow', issue_workflow, nullable=False),
        sa.Column('assign', assign_state, nullable=False),
        sa.Column('tracking_id', sa.String(length=40), nullable=True),
        sa.Column('upvotes', sa.Integer(), server_default='0', nullable=False),
        sa.Column('assigned_staff_id', sa.Integer(), nullable=True),
        sa.Column('assigned_staff_name', sa.String(length=120), nullable=True),
        sa.Column('assigned_staff_email', sa.String(length=255), nullable=True),
        sa.Column('assigned_staff_phone', sa.String(length=30), nullable=True),
        sa.Column('assigned_staff_photo', sa.String(length=500), nullable=True),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejected_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('accept_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('tracking_id'),
    )
    op.create_index('ix_issues_email', 'issues', ['email'])
    op.create_index('ix_issues_issue_name', 'issues', ['issue_name'])
    op.create_index('ix_issues_category', 'issues', ['category'])
    op.create_index('ix_issues_district', 'issues', ['district'])
    op.create_index('ix_issues_status', 'issues', ['status'])
    op.create_index('ix_issues_workflow', 'issues', ['workflow'])
    op.create_index('ix_issues_assigned_staff_email', 'issues', ['assigned_staff_email'])
    op.create_index('ix_issues_created_at', 'issues', ['created_at'])
    op.create_index('ix_issues_status_workflow', 'issues', ['status', 'workflow'])

    op.create_table(
        'issue_upvotes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('issue_id', sa.Integer(), sa.ForeignKey('issues.id', ondelete='CASCADE'), nullable=False),
        sa.Column('voter_email', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('issue_id', 'voter_email', name='uq_issue_upvote'),
    )
    op.create_index('ix_issue_upvotes_issue_id', 'issue_upvotes', ['issue_id'])

    op.create_table(
        'issue_activity',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('issue_id', sa.Integer(), sa.ForeignKey('issues.id', ondelete='CASCADE'), nullable=False),
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('actor_email', sa.String(length=255), nullable=True),
        sa.Column('at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_issue_activity_issue_id', 'issue_activity', ['issue_id'])
    op.create_index('ix_issue_activity_at', 'issue_activity', ['at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('issue_activity')
    op.drop_table('issue_upvotes')
    op.drop_table('issues')
    op.drop_table('staff')
    op.drop_table('users')
    for enum in (assign_state, issue_workflow, issue_status, availability, staff_status, membership, user_role):
        enum.drop(op.get_bind(), checkfirst=True)
