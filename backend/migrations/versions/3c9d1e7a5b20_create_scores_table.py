"""create scores table

Revision ID: 3c9d1e7a5b20
Revises:
Create Date: 2025-09-14 10:12:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c9d1e7a5b20'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # The store creates the table on first use; only fill in what is missing
    existing_tables = set(insp.get_table_names())
    if 'scores' not in existing_tables:
        op.create_table(
            'scores',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=24), nullable=False),
            sa.Column('score', sa.Integer(), server_default='0', nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )

    indexes = {ix['name'] for ix in insp.get_indexes('scores')} if 'scores' in existing_tables else set()
    if 'ix_scores_score' not in indexes:
        op.create_index('ix_scores_score', 'scores', ['score'], unique=False)


def downgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    if 'scores' in set(insp.get_table_names()):
        indexes = {ix['name'] for ix in insp.get_indexes('scores')}
        if 'ix_scores_score' in indexes:
            op.drop_index('ix_scores_score', table_name='scores')
        op.drop_table('scores')
