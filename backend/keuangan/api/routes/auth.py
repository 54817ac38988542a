from fastapi import APIRouter, Depends
from keuangan.api.deps import require_admin
from keuangan.schemas.auth import TokenCheckOut

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/check", response_model=TokenCheckOut)
def check(u=Depends(require_admin)):
    return {"ok": True, "role": u.get("role")}
