from datetime import datetime

from sqlalchemy import Integer, DateTime, func, String, BigInteger, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from keuangan.db.base import Base

TIPE_PEMASUKAN = "pemasukan"
TIPE_PENGELUARAN = "pengeluaran"


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("jumlah >= 0", name="ck_transactions_jumlah_non_negative"),
        CheckConstraint("tipe IN ('pemasukan', 'pengeluaran')", name="ck_transactions_tipe"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tanggal: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    penghuni: Mapped[str | None] = mapped_column(String(128), nullable=True)
    kamar: Mapped[str | None] = mapped_column(String(32), nullable=True)
    keterangan: Mapped[str] = mapped_column(String(256))
    jumlah: Mapped[int] = mapped_column(BigInteger)
    tipe: Mapped[str] = mapped_column(String(16), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
