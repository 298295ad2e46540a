"""Create the association, cash book and field reservation tables

Revision ID: b001_initial_schema
Revises:
Create Date: 2026-10-19

This migration creates:
- users, associations
- user_associations, association_admins, association_treasurers (roles)
- transactions (association cash book)
- fields, field_reservations
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'b001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('birthday', sa.DateTime(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('activity', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('personal_phone', sa.String(), nullable=True),
        sa.Column('commercial_phone', sa.String(), nullable=True),
        sa.Column('uses_whatsapp', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('signed_at', sa.DateTime(), nullable=True),
        sa.Column('identities', sa.String(), nullable=False, server_default=''),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'associations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('neighborhood', sa.String(), nullable=False),
        sa.Column('country', sa.String(), nullable=False),
        sa.Column('state', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=False),
        sa.Column('identity', sa.String(), nullable=True),
        *_timestamps(),
    )

    # Role tables
    for table in ('user_associations', 'association_admins'):
        op.create_table(
            table,
            sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
            sa.Column('association_id', sa.String(), sa.ForeignKey('associations.id', ondelete='CASCADE'), primary_key=True),
            *_timestamps(),
        )
        op.create_index(f'ix_{table}_association_id', table, ['association_id'])

    op.create_table(
        'association_treasurers',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('association_id', sa.String(), sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'association_id', 'start_date', name='unique_treasurer_term'),
    )
    op.create_index('ix_association_treasurers_user_id', 'association_treasurers', ['user_id'])
    op.create_index('ix_association_treasurers_association_id', 'association_treasurers', ['association_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('association_id', sa.String(), sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('creator_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('details', sa.String(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('reference_date', sa.Date(), nullable=False),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_transactions_association_id', 'transactions', ['association_id'])
    op.create_index('ix_transactions_creator_id', 'transactions', ['creator_id'])

    op.create_table(
        'fields',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('association_id', sa.String(), sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('reservation_rules', sa.Text(), nullable=True),
        sa.Column('latitude', sa.Numeric(9, 6), nullable=False),
        sa.Column('longitude', sa.Numeric(9, 6), nullable=False),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_fields_association_id', 'fields', ['association_id'])

    op.create_table(
        'field_reservations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('field_id', sa.String(), sa.ForeignKey('fields.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('start_date < end_date', name='check_reservation_interval'),
    )
    op.create_check_constraint(
        'check_reservation_status',
        'field_reservations',
        "status IN ('ACTIVE', 'DELETED')"
    )
    op.create_index('ix_field_reservations_field_id', 'field_reservations', ['field_id'])
    op.create_index('ix_field_reservations_user_id', 'field_reservations', ['user_id'])
    op.create_index(
        'ix_field_reservations_field_status_start',
        'field_reservations',
        ['field_id', 'status', 'start_date'],
    )
    op.create_index(
        'ix_field_reservations_user_status_start',
        'field_reservations',
        ['user_id', 'status', 'start_date'],
    )


def downgrade() -> None:
    op.drop_table('field_reservations')
    op.drop_table('fields')
    op.drop_table('transactions')
    op.drop_table('association_treasurers')
    op.drop_table('association_admins')
    op.drop_table('user_associations')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('associations')
    op.drop_table('users')
