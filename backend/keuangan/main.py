import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from keuangan.core.config import settings
from keuangan.core.security import admin_token_configured, verify_admin_token
from keuangan.db.base import Base
from keuangan.db.session import engine
from keuangan.models.transaction import Transaction  # noqa: F401  # registers the table
from keuangan.api.routes.auth import router as auth_router
from keuangan.api.routes.transactions import router as tx_router
from keuangan.api.routes.stats import router as stats_router

logging.basicConfig(
    level=(settings.log_level or "INFO").upper(),
    format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Keuangan Asrama API")

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_LOC_SOURCES = {"body", "query", "path", "header"}
# every POST and DELETE route requires the admin token
_MUTATING_METHODS = {"POST", "DELETE"}


def _describe_validation_error(errors: list[dict]) -> str:
    if not errors:
        return "invalid_request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "body: invalid JSON"
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in _LOC_SOURCES) or "body"
    msg = str(first.get("msg") or "invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{field}: {msg}"


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # the body is decoded before require_admin runs; keep the token check first
    if request.method in _MUTATING_METHODS and not verify_admin_token(request.headers.get("x-admin-token")):
        logger.warning("rejected admin token on invalid %s %s", request.method, request.url.path)
        return JSONResponse(status_code=401, content={"detail": "invalid_admin_token"})
    errors = exc.errors()
    return JSONResponse(
        status_code=422,
        content={"detail": _describe_validation_error(errors), "errors": jsonable_encoder(errors)},
    )


@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(tx_router)
app.include_router(stats_router)

@app.on_event("startup")
def _startup():
    if not admin_token_configured():
        logger.warning("ADMIN_TOKEN is not set; all create/delete requests will be rejected")
    if settings.db_auto_create:
        Base.metadata.create_all(engine)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
