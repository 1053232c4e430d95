"""create user, motorcycle and motorcycle_image

Revision ID: 7f3b1c2d9a41
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7f3b1c2d9a41'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('middle_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('surname', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=False),
        sa.Column('picture_url', sa.String(length=2048), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_user'),
        sa.UniqueConstraint('email', name='uq_user_email'),
    )
    op.create_table(
        'motorcycle',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('post_title', sa.String(length=200), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('mileage', sa.BigInteger(), nullable=False),
        sa.Column('brand', sa.String(length=100), nullable=False),
        sa.Column('model', sa.String(length=100), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('engine', sa.String(length=100), nullable=False),
        sa.Column('color', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['user.id'], name='fk_motorcycle_owner_id_user', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_motorcycle'),
    )
    op.create_index('ix_motorcycle_owner_created', 'motorcycle', ['owner_id', 'created_at'])
    op.create_table(
        'motorcycle_image',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('motorcycle_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['motorcycle_id'],
            ['motorcycle.id'],
            name='fk_motorcycle_image_motorcycle_id_motorcycle',
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_motorcycle_image'),
    )
    op.create_index('ix_motorcycle_image_motorcycle', 'motorcycle_image', ['motorcycle_id'])


def downgrade():
    op.drop_index('ix_motorcycle_image_motorcycle', table_name='motorcycle_image')
    op.drop_table('motorcycle_image')
    op.drop_index('ix_motorcycle_owner_created', table_name='motorcycle')
    op.drop_table('motorcycle')
    op.drop_table('user')
