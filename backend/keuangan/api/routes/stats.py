from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from keuangan.api.deps import db
from keuangan.schemas.stats import StatsOut
from keuangan.services.ledger import get_stats

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=StatsOut)
def stats(s: Session = Depends(db)):
    return get_stats(s)
