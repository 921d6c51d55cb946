"""baseline_schema

Revision ID: a1c3e5f7b9d2
Revises: 
Create Date: 2026-10-19 09:12:31.418204

"""
from typing import Sequence, Union

from alembic import op

from github_dashboard.db_base import Base
import github_dashboard.models  # noqa: F401 - required to register all model metadata


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f7b9d2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    Base.metadata.create_all(bind=bind)


def downgrade() -> None:
    bind = op.get_bind()
    Base.metadata.drop_all(bind=bind)
