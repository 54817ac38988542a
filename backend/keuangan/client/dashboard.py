from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Callable

from keuangan.client.api import ApiError, LedgerApi, NetworkError

logger = logging.getLogger(__name__)

ADD_FAILED = "Gagal menambah transaksi"
DELETE_FAILED = "Gagal menghapus"
LOGIN_FAILED = "Token admin tidak valid"
LOGIN_CHECK_FAILED = "Gagal memeriksa token"
CONFIRM_DELETE = "Hapus transaksi ini?"

EMPTY_FORM = {
    "tanggal": "",
    "penghuni": "",
    "kamar": "",
    "keterangan": "",
    "jumlah": "",
    "tipe": "pemasukan",
}

EMPTY_STATS = {"pemasukan": 0, "pengeluaran": 0, "saldo": 0}


def console_alert(message: str) -> None:
    print(message)


def console_confirm(message: str) -> bool:
    return input(f"{message} [y/N] ").strip().lower() in ("y", "ya", "yes")


def coerce_jumlah(v):
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return v
    s = str(v).strip()
    if not s:
        return None
    try:
        return int(s)
    except ValueError:
        pass
    try:
        f = float(s)
    except ValueError:
        return None
    if f != f or f in (float("inf"), float("-inf")):
        return None
    return int(f) if f.is_integer() else f


def coerce_tanggal(v):
    """Turn the form's date value into an ISO-8601 timestamp.

    A bare ``YYYY-MM-DD`` is taken as midnight UTC. Values that do not parse
    are passed through untouched so the server reports them.
    """
    if v is None:
        return None
    if isinstance(v, datetime):
        d = v
    elif isinstance(v, date):
        d = datetime(v.year, v.month, v.day)
    else:
        s = str(v).strip()
        if not s:
            return None
        try:
            if len(s) == 10:
                dd = date.fromisoformat(s)
                d = datetime(dd.year, dd.month, dd.day)
            else:
                d = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            return s
    if d.tzinfo is None:
        d = d.replace(tzinfo=timezone.utc)
    return d.isoformat()


class Dashboard:
    """Client-side state of the dormitory finance dashboard.

    Holds the last fetched ledger and stats, the add-transaction form and the
    admin token. Every successful mutation is followed by a full refetch; no
    local patching of ``items`` or ``stats`` happens anywhere.
    """

    def __init__(
        self,
        api: LedgerApi,
        *,
        alert: Callable[[str], None] | None = None,
        confirm: Callable[[str], bool] | None = None,
    ):
        self.api = api
        self.alert = alert or console_alert
        self.confirm = confirm or console_confirm

        self.items: list[dict] = []
        self.stats: dict = dict(EMPTY_STATS)
        self.form: dict = dict(EMPTY_FORM)
        self.admin_token: str = ""
        self.is_admin: bool = False
        self.loading: bool = False

    def fetch_data(self) -> None:
        try:
            self.items = self.api.list_transactions()
        except (ApiError, NetworkError) as e:
            logger.warning("fetching transactions failed: %s", e)
        try:
            stats = self.api.get_stats()
        except (ApiError, NetworkError) as e:
            logger.warning("fetching stats failed: %s", e)
        else:
            self.stats = {k: stats.get(k, 0) for k in EMPTY_STATS}

    def login(self, token: str | None = None, *, verify: bool = True) -> bool:
        """Mark the dashboard privileged.

        With ``verify`` the token is checked against the server first. Without
        it any non-empty token is accepted and the server only judges it on
        the first create or delete.
        """
        if token is not None:
            self.admin_token = token
        if not self.admin_token:
            return False
        if verify:
            try:
                self.api.check_token(self.admin_token)
            except ApiError as e:
                self.is_admin = False
                self.alert(e.detail or LOGIN_FAILED)
                return False
            except NetworkError as e:
                logger.warning("token check failed: %s", e)
                self.is_admin = False
                self.alert(LOGIN_CHECK_FAILED)
                return False
        self.is_admin = True
        return True

    def logout(self) -> None:
        self.admin_token = ""
        self.is_admin = False

    def update_form(self, **fields) -> None:
        for k, v in fields.items():
            if k not in EMPTY_FORM:
                raise KeyError(k)
            self.form[k] = v

    def build_payload(self) -> dict:
        payload = dict(self.form)
        payload["jumlah"] = coerce_jumlah(self.form.get("jumlah"))
        payload["tanggal"] = coerce_tanggal(self.form.get("tanggal"))
        return payload

    def add_transaction(self) -> bool:
        if self.loading:
            return False
        self.loading = True
        try:
            try:
                self.api.create_transaction(self.build_payload(), self.admin_token)
            except ApiError as e:
                self.alert(e.detail or ADD_FAILED)
                return False
            except NetworkError as e:
                logger.warning("create failed: %s", e)
                self.alert(ADD_FAILED)
                return False
            self.form = dict(EMPTY_FORM)
            self.fetch_data()
            return True
        finally:
            self.loading = False

    def delete_transaction(self, tx_id) -> bool:
        if not self.confirm(CONFIRM_DELETE):
            return False
        try:
            self.api.delete_transaction(tx_id, self.admin_token)
        except ApiError as e:
            self.alert(e.detail or DELETE_FAILED)
            return False
        except NetworkError as e:
            logger.warning("delete failed: %s", e)
            self.alert(DELETE_FAILED)
            return False
        self.fetch_data()
        return True
