from alembic import op
import sqlalchemy as sa

revision = "0001_transactions"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tanggal", sa.DateTime(timezone=True), nullable=True),
        sa.Column("penghuni", sa.String(length=128), nullable=True),
        sa.Column("kamar", sa.String(length=32), nullable=True),
        sa.Column("keterangan", sa.String(length=256), nullable=False),
        sa.Column("jumlah", sa.BigInteger(), nullable=False),
        sa.Column("tipe", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.CheckConstraint("jumlah >= 0", name="ck_transactions_jumlah_non_negative"),
        sa.CheckConstraint("tipe IN ('pemasukan', 'pengeluaran')", name="ck_transactions_tipe"),
    )
    op.create_index("ix_transactions_tanggal", "transactions", ["tanggal"], unique=False)
    op.create_index("ix_transactions_tipe", "transactions", ["tipe"], unique=False)

def downgrade():
    op.drop_index("ix_transactions_tipe", table_name="transactions")
    op.drop_index("ix_transactions_tanggal", table_name="transactions")
    op.drop_table("transactions")
