"""Create clubs, events, registrations, payments, notifications and otp tables"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3a7c5e1d9b20'
down_revision = None
branch_labels = None
depends_on = None


def _registration_columns():
    return [
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('event_id', sa.String(64), nullable=False),
        sa.Column('club_id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('user_name', sa.String(200), nullable=False),
        sa.Column('user_email', sa.String(255), nullable=False),
        sa.Column('user_phone', sa.String(30), nullable=True),
        sa.Column('user_roll_number', sa.String(50), nullable=True),
        sa.Column('user_branch', sa.String(100), nullable=True),
        sa.Column('user_year', sa.String(20), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='confirmed'),
        sa.Column('payment_status', sa.String(20), nullable=True),
        sa.Column('payment_id', sa.String(100), nullable=True),
        sa.Column('registration_fee', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('check_in_status', sa.String(20), nullable=False, server_default='not_checked_in'),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('additional_info', sa.Text(), nullable=True),
        sa.Column('event_name', sa.String(200), nullable=True),
        sa.Column('event_date', sa.String(40), nullable=True),
        sa.Column('event_location', sa.String(200), nullable=True),
        sa.Column('is_guest', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('registration_date', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    ]


def _payment_columns():
    return [
        sa.Column('id', sa.String(100), nullable=False),
        sa.Column('registration_id', sa.String(64), nullable=False),
        sa.Column('event_id', sa.String(64), nullable=False),
        sa.Column('club_id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('user_name', sa.String(200), nullable=True),
        sa.Column('user_email', sa.String(255), nullable=True),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='paid'),
        sa.Column('payment_method', sa.String(50), nullable=True),
        sa.Column('transaction_id', sa.String(100), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    ]


def upgrade():
    # Create clubs table
    op.create_table(
        'clubs',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(50), nullable=False),
        sa.Column('tagline', sa.String(200), nullable=True),
        sa.Column('contact_email', sa.String(255), nullable=False),
        sa.Column('logo_url', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug')
    )
    op.create_index(op.f('ix_clubs_slug'), 'clubs', ['slug'])

    # Create events table
    op.create_table(
        'events',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('club_id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(50), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(20), nullable=True),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('registration_fee', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='Upcoming'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_events_club_id'), 'events', ['club_id'])

    # Member and guest registration partitions
    op.create_table('registrations', *_registration_columns())
    op.create_table(
        'guest_registrations',
        *_registration_columns(),
        sa.Column('guest_college', sa.String(200), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    )
    for table in ('registrations', 'guest_registrations'):
        op.create_index(op.f(f'ix_{table}_event_id'), table, ['event_id'])
        op.create_index(op.f(f'ix_{table}_club_id'), table, ['club_id'])
        op.create_index(op.f(f'ix_{table}_user_id'), table, ['user_id'])
    op.create_index(op.f('ix_guest_registrations_expires_at'), 'guest_registrations', ['expires_at'])

    # Payment bookkeeping, keyed by gateway payment id
    op.create_table('payments', *_payment_columns())
    op.create_table('guest_payments', *_payment_columns())
    for table in ('payments', 'guest_payments'):
        op.create_index(op.f(f'ix_{table}_registration_id'), table, ['registration_id'])
        op.create_index(op.f(f'ix_{table}_event_id'), table, ['event_id'])

    # Create notifications table
    op.create_table(
        'notifications',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('is_guest', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('event_id', sa.String(64), nullable=True),
        sa.Column('registration_id', sa.String(64), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'])
    op.create_index(op.f('ix_notifications_expires_at'), 'notifications', ['expires_at'])

    # Create otp_verifications table
    op.create_table(
        'otp_verifications',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('code_hash', sa.String(255), nullable=False),
        sa.Column('user_data', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )


def downgrade():
    op.drop_table('otp_verifications')
    op.drop_table('notifications')
    op.drop_table('guest_payments')
    op.drop_table('payments')
    op.drop_table('guest_registrations')
    op.drop_table('registrations')
    op.drop_table('events')
    op.drop_table('clubs')
