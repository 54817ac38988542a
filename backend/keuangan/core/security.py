import hmac

from keuangan.core.config import settings


def admin_token_configured() -> bool:
    return bool((settings.admin_token or "").strip())


def verify_admin_token(token: str | None) -> bool:
    if token is None or not admin_token_configured():
        return False
    expected = settings.admin_token.strip().encode("utf-8")
    return hmac.compare_digest(str(token).strip().encode("utf-8"), expected)
