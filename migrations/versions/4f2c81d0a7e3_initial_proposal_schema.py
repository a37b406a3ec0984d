"""Initial proposal schema

Revision ID: 4f2c81d0a7e3
Revises: 
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2c81d0a7e3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Create proposals table
    op.create_table(
        'proposals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=50), nullable=False),
        sa.Column('customer_address', sa.Text(), nullable=True),
        sa.Column('inputs', sa.JSON(), nullable=False),
        sa.Column('breakdown', sa.JSON(), nullable=False),
        sa.Column('subtotal', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('tax', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('total', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('deposit_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('balance', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('tax_rate', sa.Numeric(precision=5, scale=4), nullable=False),
        sa.Column('deposit_rate', sa.Numeric(precision=5, scale=4), nullable=False),
        sa.Column('pdf_path', sa.String(length=500), nullable=True),
        sa.Column('pdf_version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('web_url', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('valid_until', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sent_by', sa.String(length=255), nullable=True),
        sa.Column('viewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('accepted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('accepted_by_name', sa.String(length=255), nullable=True),
        sa.Column('accepted_by_signature', sa.Text(), nullable=True),
        sa.Column('accepted_ip', sa.String(length=64), nullable=True),
        sa.Column('accepted_user_agent', sa.String(length=500), nullable=True),
        sa.Column('payment_session_id', sa.String(length=255), nullable=True),
        sa.Column('payment_url', sa.String(length=1000), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('payment_reference', sa.String(length=255), nullable=True),
        sa.Column('expired_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_proposals_customer_email', 'proposals', ['customer_email'])
    op.create_index('ix_proposals_status', 'proposals', ['status'])
    op.create_index('ix_proposals_payment_session_id', 'proposals', ['payment_session_id'])
    op.create_index('idx_proposal_status_valid_until', 'proposals', ['status', 'valid_until'])

    # Create used approval tokens table
    op.create_table(
        'used_approval_tokens',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('proposal_id', sa.Uuid(), nullable=False),
        sa.Column('token_hash', sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['proposal_id'], ['proposals.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_used_approval_tokens_proposal_id', 'used_approval_tokens', ['proposal_id'])
    op.create_index(
        'idx_used_approval_token_unique',
        'used_approval_tokens',
        ['proposal_id', 'token_hash'],
        unique=True,
    )

    # Create proposal events table
    op.create_table(
        'proposal_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('proposal_id', sa.Uuid(), nullable=False),
        sa.Column('event_type', sa.String(length=50), nullable=False),
        sa.Column('actor', sa.String(length=255), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('occurred_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['proposal_id'], ['proposals.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_proposal_events_proposal_id', 'proposal_events', ['proposal_id'])
    op.create_index('ix_proposal_events_event_type', 'proposal_events', ['event_type'])
    op.create_index(
        'idx_proposal_event_proposal_occurred',
        'proposal_events',
        ['proposal_id', 'occurred_at'],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_proposal_event_proposal_occurred', table_name='proposal_events')
    op.drop_index('ix_proposal_events_event_type', table_name='proposal_events')
    op.drop_index('ix_proposal_events_proposal_id', table_name='proposal_events')
    op.drop_table('proposal_events')

    op.drop_index('idx_used_approval_token_unique', table_name='used_approval_tokens')
    op.drop_index('ix_used_approval_tokens_proposal_id', table_name='used_approval_tokens')
    op.drop_table('used_approval_tokens')

    op.drop_index('idx_proposal_status_valid_until', table_name='proposals')
    op.drop_index('ix_proposals_payment_session_id', table_name='proposals')
    op.drop_index('ix_proposals_status', table_name='proposals')
    op.drop_index('ix_proposals_customer_email', table_name='proposals')
    op.drop_table('proposals')
