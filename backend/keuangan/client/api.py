from __future__ import annotations

import httpx

from keuangan.core.config import settings


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str | None = None):
        super().__init__(detail or f"http_{status_code}")
        self.status_code = status_code
        self.detail = detail


class NetworkError(Exception):
    pass


def _error_detail(r: httpx.Response) -> str | None:
    try:
        data = r.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        detail = data.get("detail")
        if isinstance(detail, str) and detail:
            return detail
    return None


class LedgerApi:
    """HTTP client for the ledger endpoints.

    Pass ``client`` to reuse an existing ``httpx.Client`` (its ``base_url`` is
    used as is); otherwise one is created against ``BACKEND_URL``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.Client | None = None,
        timeout_s: float | None = None,
    ):
        if client is not None and base_url is None:
            base_url = str(client.base_url)
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout_s if timeout_s is not None else settings.request_timeout_seconds,
        )

    def __enter__(self) -> "LedgerApi":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, path: str, *, token: str | None = None, json: dict | None = None):
        headers = {}
        if token is not None:
            headers["X-Admin-Token"] = token
        try:
            r = self._client.request(method, path, headers=headers, json=json)
        except httpx.RequestError as e:
            raise NetworkError(str(e) or e.__class__.__name__) from e
        if r.is_error:
            raise ApiError(r.status_code, _error_detail(r))
        if not r.content:
            return {}
        try:
            data = r.json()
        except ValueError:
            raise ApiError(r.status_code, None)
        if not isinstance(data, dict):
            raise ApiError(r.status_code, None)
        return data

    def list_transactions(self) -> list[dict]:
        data = self._request("GET", "/api/transactions")
        return list(data.get("items") or [])

    def get_stats(self) -> dict:
        return self._request("GET", "/api/stats")

    def create_transaction(self, payload: dict, token: str) -> dict:
        return self._request("POST", "/api/transactions", token=token, json=payload)

    def delete_transaction(self, tx_id, token: str) -> dict:
        return self._request("DELETE", f"/api/transactions/{tx_id}", token=token)

    def check_token(self, token: str) -> dict:
        return self._request("POST", "/api/auth/check", token=token)
