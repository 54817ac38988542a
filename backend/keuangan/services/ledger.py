from __future__ import annotations

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from keuangan.models.transaction import Transaction, TIPE_PEMASUKAN, TIPE_PENGELUARAN
from keuangan.schemas.transaction import TxCreate

logger = logging.getLogger(__name__)


class TransactionNotFound(LookupError):
    def __init__(self, tx_id: int):
        super().__init__(f"transaction {tx_id} not found")
        self.tx_id = tx_id


def list_transactions(s: Session) -> list[Transaction]:
    # insertion order; ids are never reused
    return list(s.execute(select(Transaction).order_by(Transaction.id.asc())).scalars().all())


def get_stats(s: Session) -> dict[str, int]:
    rows = s.execute(
        select(Transaction.tipe, func.coalesce(func.sum(Transaction.jumlah), 0)).group_by(Transaction.tipe)
    ).all()
    totals: dict[str, int] = {tipe: int(total or 0) for (tipe, total) in rows}

    pemasukan = totals.get(TIPE_PEMASUKAN, 0)
    pengeluaran = totals.get(TIPE_PENGELUARAN, 0)
    return {
        "pemasukan": pemasukan,
        "pengeluaran": pengeluaran,
        "saldo": pemasukan - pengeluaran,
    }


def create_transaction(s: Session, body: TxCreate) -> Transaction:
    t = Transaction(
        tanggal=body.tanggal,
        penghuni=body.penghuni,
        kamar=body.kamar,
        keterangan=body.keterangan,
        jumlah=body.jumlah,
        tipe=body.tipe,
    )
    s.add(t)
    s.commit()
    s.refresh(t)
    logger.info("transaction created id=%s tipe=%s jumlah=%s", t.id, t.tipe, t.jumlah)
    return t


def delete_transaction(s: Session, tx_id: int) -> None:
    t = s.execute(select(Transaction).where(Transaction.id == tx_id)).scalar_one_or_none()
    if t is None:
        raise TransactionNotFound(tx_id)
    details = (t.tipe, t.jumlah)
    s.delete(t)
    s.commit()
    logger.info("transaction deleted id=%s tipe=%s jumlah=%s", tx_id, *details)
