"""add http request logs table

Revision ID: a7c3e91d2f04
Revises:
Create Date: 2025-05-16 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from app.db.functions import utcnow
from app.db.indexing import url_index_options


# revision identifiers, used by Alembic.
revision: str = 'a7c3e91d2f04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
	"""Upgrade schema."""
	op.create_table(
		'http_request_logs',
		sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
		sa.Column('url', sa.String(length=1000), nullable=False),
		sa.Column('method', sa.String(length=20), nullable=False),
		sa.Column('duration_ms', sa.Integer(), nullable=False),
		sa.Column('status_code', sa.Integer(), nullable=True),
		sa.Column('request_body', sa.Text(), nullable=True),
		sa.Column('response_body', sa.Text(), nullable=True),
		sa.Column('request_headers', sa.Text(), nullable=True),
		sa.Column('response_headers', sa.Text(), nullable=True),
		sa.Column('error_message', sa.String(length=1000), nullable=True),
		sa.Column('success', sa.Boolean(), nullable=False, server_default=sa.false()),
		sa.Column('created_at', sa.DateTime(timezone=True), server_default=utcnow(), nullable=False),
		sa.PrimaryKeyConstraint('id')
	)
	op.create_index('ix_http_request_logs_created_at', 'http_request_logs', ['created_at'], unique=False)
	op.create_index('ix_http_request_logs_method', 'http_request_logs', ['method'], unique=False)
	op.create_index('ix_http_request_logs_status_code', 'http_request_logs', ['status_code'], unique=False)
	op.create_index('ix_http_request_logs_success', 'http_request_logs', ['success'], unique=False)
	# Engines with a bounded index key width get a prefix index on url
	op.create_index(
		'ix_http_request_logs_url',
		'http_request_logs',
		['url'],
		unique=False,
		**url_index_options(op.get_bind().dialect)
	)


def downgrade() -> None:
	"""Downgrade schema."""
	op.drop_table('http_request_logs')
