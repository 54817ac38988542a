import logging

from fastapi import Header, HTTPException
from keuangan.db.session import SessionLocal
from keuangan.core.security import verify_admin_token

logger = logging.getLogger(__name__)

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def require_admin(x_admin_token: str | None = Header(default=None)):
    if not verify_admin_token(x_admin_token):
        logger.warning("rejected admin token (%s)", "missing" if not x_admin_token else "mismatch")
        raise HTTPException(status_code=401, detail="invalid_admin_token")
    return {"role": "admin"}
