"""Create events, certificates and email_deliveries tables"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3a7c1e9b2d41'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create events table
    op.create_table(
        'events',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('template_url', sa.Text(), nullable=False),
        sa.Column('text_x', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('text_y', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('font_size', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('font_family', sa.String(100), nullable=False, server_default='Roboto'),
        sa.Column('font_color', sa.String(6), nullable=False, server_default='000000'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )

    # Create certificates table
    op.create_table(
        'certificates',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('event_id', sa.String(36), nullable=False),
        sa.Column('participant_name', sa.String(200), nullable=False),
        sa.Column('participant_email', sa.String(255), nullable=False),
        sa.Column('certificate_uuid', sa.String(36), nullable=False),
        sa.Column('cloudinary_url', sa.Text(), nullable=False),
        sa.Column('downloaded', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_certificates_event_id'), 'certificates', ['event_id'])
    op.create_index(op.f('ix_certificates_participant_email'), 'certificates', ['participant_email'])
    op.create_index(op.f('ix_certificates_certificate_uuid'), 'certificates', ['certificate_uuid'], unique=True)

    # Create email_deliveries table
    op.create_table(
        'email_deliveries',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('certificate_id', sa.String(36), nullable=True),
        sa.Column('recipient', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('status', sa.String(10), nullable=False, server_default='pending'),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('message_id', sa.String(255), nullable=True),
        sa.Column('last_error', sa.Text(), nullable=True),
        sa.Column('custom_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['certificate_id'], ['certificates.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_email_deliveries_certificate_id'), 'email_deliveries', ['certificate_id'])
    op.create_index(op.f('ix_email_deliveries_status'), 'email_deliveries', ['status'])


def downgrade():
    op.drop_index(op.f('ix_email_deliveries_status'), table_name='email_deliveries')
    op.drop_index(op.f('ix_email_deliveries_certificate_id'), table_name='email_deliveries')
    op.drop_table('email_deliveries')
    op.drop_index(op.f('ix_certificates_certificate_uuid'), table_name='certificates')
    op.drop_index(op.f('ix_certificates_participant_email'), table_name='certificates')
    op.drop_index(op.f('ix_certificates_event_id'), table_name='certificates')
    op.drop_table('certificates')
    op.drop_table('events')
