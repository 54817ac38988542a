from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from keuangan.api.deps import db, require_admin
from keuangan.schemas.transaction import TxCreate, TxOut, TxList
from keuangan.services import ledger

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=TxList)
def list_transactions(s: Session = Depends(db)):
    return {"items": ledger.list_transactions(s)}


@router.post("", response_model=TxOut, status_code=201)
def add_tx(body: TxCreate, s: Session = Depends(db), u=Depends(require_admin)):
    return ledger.create_transaction(s, body)


@router.delete("/{tx_id}")
def delete_tx(tx_id: int, s: Session = Depends(db), u=Depends(require_admin)):
    try:
        ledger.delete_transaction(s, tx_id)
    except ledger.TransactionNotFound:
        raise HTTPException(status_code=404, detail="tx_not_found")
    return {"ok": True}
