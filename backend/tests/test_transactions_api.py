import pytest

from keuangan.core.config import settings

IURAN = {"tanggal": "2024-01-05", "keterangan": "Iuran bulanan", "jumlah": 150000, "tipe": "income"}


def _items(client):
    r = client.get("/api/transactions")
    assert r.status_code == 200
    return r.json()["items"]


def _stats(client):
    r = client.get("/api/stats")
    assert r.status_code == 200
    return r.json()


def _create(client, token, body):
    return client.post("/api/transactions", json=body, headers={"X-Admin-Token": token})


def test_health(api_client):
    assert api_client.get("/api/health").json() == {"status": "ok"}


def test_empty_ledger(api_client):
    assert _items(api_client) == []
    assert _stats(api_client) == {"pemasukan": 0, "pengeluaran": 0, "saldo": 0}


def test_create_income_increases_income_total(api_client, admin_token):
    before = _stats(api_client)["pemasukan"]

    r = _create(api_client, admin_token, IURAN)

    assert r.status_code == 201
    created = r.json()
    assert isinstance(created["id"], int)
    assert created["tipe"] == "pemasukan"
    assert created["jumlah"] == 150000
    assert created["keterangan"] == "Iuran bulanan"
    assert created["tanggal"].startswith("2024-01-05")
    assert created["penghuni"] is None
    assert created["created_at"]

    items = _items(api_client)
    assert [t["id"] for t in items] == [created["id"]]
    assert _stats(api_client)["pemasukan"] == before + 150000


def test_stats_balance_is_income_minus_expense(api_client, admin_token):
    _create(api_client, admin_token, IURAN)
    _create(api_client, admin_token, {**IURAN, "keterangan": "Sewa kamar", "jumlah": 750000})
    _create(api_client, admin_token, {**IURAN, "keterangan": "Token listrik", "jumlah": 200000, "tipe": "pengeluaran"})

    st = _stats(api_client)
    assert st == {"pemasukan": 900000, "pengeluaran": 200000, "saldo": 700000}


def test_negative_amount_is_rejected(api_client, admin_token):
    r = _create(api_client, admin_token, {**IURAN, "jumlah": -10})

    assert r.status_code == 422
    assert r.json()["detail"] == "jumlah: must be >= 0"
    assert _items(api_client) == []


@pytest.mark.parametrize(
    "patch, field",
    [
        ({"keterangan": "  "}, "keterangan"),
        ({"tipe": "hibah"}, "tipe"),
        ({"tanggal": "bukan tanggal"}, "tanggal"),
        ({"jumlah": 10.5}, "jumlah"),
    ],
)
def test_validation_error_names_the_field(api_client, admin_token, patch, field):
    r = _create(api_client, admin_token, {**IURAN, **patch})

    assert r.status_code == 422
    assert r.json()["detail"].startswith(f"{field}: ")
    assert _items(api_client) == []


def test_missing_required_field_is_rejected(api_client, admin_token):
    body = dict(IURAN)
    del body["keterangan"]

    r = _create(api_client, admin_token, body)

    assert r.status_code == 422
    assert r.json()["detail"].startswith("keterangan: ")


@pytest.mark.parametrize("headers", [{}, {"X-Admin-Token": "salah"}, {"X-Admin-Token": ""}])
def test_create_without_valid_token_is_unauthorized(api_client, headers):
    r = api_client.post("/api/transactions", json=IURAN, headers=headers)

    assert r.status_code == 401
    assert r.json()["detail"] == "invalid_admin_token"
    assert _items(api_client) == []


def test_token_is_checked_before_payload(api_client):
    r = _create(api_client, "salah", {**IURAN, "jumlah": -10})
    assert r.status_code == 401


def test_delete_without_valid_token_leaves_ledger(api_client, admin_token):
    tx_id = _create(api_client, admin_token, IURAN).json()["id"]

    r = api_client.delete(f"/api/transactions/{tx_id}", headers={"X-Admin-Token": "salah"})

    assert r.status_code == 401
    assert [t["id"] for t in _items(api_client)] == [tx_id]


def test_delete_removes_exactly_one(api_client, admin_token):
    ids = [_create(api_client, admin_token, {**IURAN, "keterangan": f"tx {i}"}).json()["id"] for i in range(3)]

    r = api_client.delete(f"/api/transactions/{ids[1]}", headers={"X-Admin-Token": admin_token})

    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert [t["id"] for t in _items(api_client)] == [ids[0], ids[2]]
    assert _stats(api_client)["pemasukan"] == 300000


def test_delete_unknown_id_is_not_found(api_client, admin_token):
    _create(api_client, admin_token, IURAN)

    r = api_client.delete("/api/transactions/9999", headers={"X-Admin-Token": admin_token})

    assert r.status_code == 404
    assert r.json()["detail"] == "tx_not_found"
    assert len(_items(api_client)) == 1


def test_mutations_rejected_when_no_secret_configured(api_client, monkeypatch):
    monkeypatch.setattr(settings, "admin_token", "")

    r = _create(api_client, "", IURAN)

    assert r.status_code == 401
    assert _items(api_client) == []


def test_auth_check(api_client, admin_token):
    ok = api_client.post("/api/auth/check", headers={"X-Admin-Token": admin_token})
    assert ok.status_code == 200
    assert ok.json()["ok"] is True

    bad = api_client.post("/api/auth/check", headers={"X-Admin-Token": "salah"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "invalid_admin_token"


def test_amount_beyond_column_range_is_rejected(api_client, admin_token):
    r = _create(api_client, admin_token, {**IURAN, "jumlah": 10**20})

    assert r.status_code == 422
    assert r.json()["detail"].startswith("jumlah: must be <= ")
    assert _items(api_client) == []


def test_largest_amount_is_stored(api_client, admin_token):
    r = _create(api_client, admin_token, {**IURAN, "jumlah": 2**63 - 1})

    assert r.status_code == 201
    assert r.json()["jumlah"] == 2**63 - 1


@pytest.mark.parametrize(
    "patch, field",
    [({"penghuni": "x" * 129}, "penghuni"), ({"kamar": "x" * 33}, "kamar"), ({"keterangan": "x" * 257}, "keterangan")],
)
def test_text_longer_than_column_is_rejected(api_client, admin_token, patch, field):
    r = _create(api_client, admin_token, {**IURAN, **patch})

    assert r.status_code == 422
    assert r.json()["detail"].startswith(f"{field}: too long")
    assert _items(api_client) == []


def _post_raw(client, token, content):
    return client.post(
        "/api/transactions",
        content=content,
        headers={"X-Admin-Token": token, "Content-Type": "application/json"},
    )


def test_malformed_json_with_wrong_token_is_unauthorized(api_client):
    r = _post_raw(api_client, "salah", "{not json")

    assert r.status_code == 401
    assert r.json()["detail"] == "invalid_admin_token"


def test_malformed_json_with_valid_token_is_a_body_error(api_client, admin_token):
    r = _post_raw(api_client, admin_token, "{not json")

    assert r.status_code == 422
    assert r.json()["detail"] == "body: invalid JSON"
    assert _items(api_client) == []
