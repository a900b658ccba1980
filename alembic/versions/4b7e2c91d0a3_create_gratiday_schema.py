"""Create usuario, categoria and frase tables

Revision ID: 4b7e2c91d0a3
Revises:
Create Date: 2026-10-18 19:05:12.418903

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4b7e2c91d0a3"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "usuario",
        sa.Column("id_user", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre", sa.String(length=100), nullable=False),
        sa.Column("correo_electronico", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "rol", sa.Enum("admin", "user", name="rol"), server_default="user", nullable=False
        ),
        sa.Column(
            "fecha_creacion",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id_user"),
    )
    op.create_index(
        op.f("ix_usuario_correo_electronico"), "usuario", ["correo_electronico"], unique=True
    )

    op.create_table(
        "categoria",
        sa.Column("id_category", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre", sa.String(length=80), nullable=False),
        sa.Column("descripcion", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id_category"),
        sa.UniqueConstraint("nombre"),
    )

    op.create_table(
        "frase",
        sa.Column("id_quote", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("texto", sa.Text(), nullable=False),
        sa.Column("autor", sa.String(length=120), nullable=True),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "status",
            sa.Enum("draft", "scheduled", "published", name="status"),
            server_default="draft",
            nullable=False,
        ),
        sa.Column("creado_por", sa.Integer(), nullable=False),
        sa.Column("categoria_id", sa.Integer(), nullable=False),
        sa.Column(
            "fecha_creacion",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        # No ON DELETE action: deleting a referenced user or category is rejected
        sa.ForeignKeyConstraint(["creado_por"], ["usuario.id_user"]),
        sa.ForeignKeyConstraint(["categoria_id"], ["categoria.id_category"]),
        sa.PrimaryKeyConstraint("id_quote"),
    )
    op.create_index(op.f("ix_frase_scheduled_at"), "frase", ["scheduled_at"], unique=False)
    op.create_index(op.f("ix_frase_status"), "frase", ["status"], unique=False)
    op.create_index(op.f("ix_frase_creado_por"), "frase", ["creado_por"], unique=False)
    op.create_index(op.f("ix_frase_categoria_id"), "frase", ["categoria_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_frase_categoria_id"), table_name="frase")
    op.drop_index(op.f("ix_frase_creado_por"), table_name="frase")
    op.drop_index(op.f("ix_frase_status"), table_name="frase")
    op.drop_index(op.f("ix_frase_scheduled_at"), table_name="frase")
    op.drop_table("frase")
    op.drop_table("categoria")
    op.drop_index(op.f("ix_usuario_correo_electronico"), table_name="usuario")
    op.drop_table("usuario")
    sa.Enum(name="status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="rol").drop(op.get_bind(), checkfirst=True)
