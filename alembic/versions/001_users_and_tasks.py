"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_users_and_tasks (Alembic Migration)

Responsibilities:
  - Crear las tablas users y tasks desde cero.
  - Garantizar unicidad de username y el rol válido a nivel DB.
  - Indexar tasks por dueño (todas las queries filtran por "userId").

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres (usa este esquema como contrato)

Policy:
  - La columna de dueño se llama "userId" (case-sensitive, siempre entre
    comillas en SQL) por compatibilidad con el contrato JSON.
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_users_and_tasks"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =========================================================
    # 1) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("username", sa.Text, nullable=False),
        # Hash argon2 (nunca el password plano).
        sa.Column("password", sa.Text, nullable=False),
        sa.Column(
            "role",
            sa.Text,
            nullable=False,
            server_default=sa.text("'user'"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    # =========================================================
    # 2) TASKS
    # =========================================================
    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("title", sa.Text, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("userId", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_tasks"),
        sa.ForeignKeyConstraint(
            ["userId"],
            ["users.id"],
            name="fk_tasks_userId__users",
        ),
    )
    op.create_index("ix_tasks_userId", "tasks", ["userId"])


def downgrade() -> None:
    op.drop_index("ix_tasks_userId", table_name="tasks")
    op.drop_table("tasks")
    op.drop_table("users")
