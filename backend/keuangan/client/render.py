from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from keuangan.client.dashboard import Dashboard

EMPTY_PLACEHOLDER = "Belum ada transaksi"
NO_VALUE = "-"

STAT_LABELS = [
    ("pemasukan", "Total Pemasukan"),
    ("pengeluaran", "Total Pengeluaran"),
    ("saldo", "Saldo"),
]


def format_idr(val) -> str:
    if isinstance(val, int) and not isinstance(val, bool):
        n = val
    else:
        try:
            n = int(Decimal(str(val or 0)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
        except (InvalidOperation, ValueError):
            n = 0
    sign = "-" if n < 0 else ""
    return f"{sign}Rp {abs(n):,}".replace(",", ".")


def format_tanggal(val) -> str:
    if val is None or val == "":
        return NO_VALUE
    if isinstance(val, datetime):
        d = val
    elif isinstance(val, date):
        d = datetime(val.year, val.month, val.day)
    else:
        try:
            d = datetime.fromisoformat(str(val).replace("Z", "+00:00"))
        except ValueError:
            return NO_VALUE
    return f"{d.day}/{d.month}/{d.year}"


@dataclass(frozen=True)
class TxRow:
    id: object
    tanggal: str
    penghuni: str
    kamar: str
    keterangan: str
    jumlah: str
    tipe: str


def transaction_row(tx: dict) -> TxRow:
    return TxRow(
        id=tx.get("id"),
        tanggal=format_tanggal(tx.get("tanggal") or tx.get("created_at")),
        penghuni=tx.get("penghuni") or NO_VALUE,
        kamar=tx.get("kamar") or NO_VALUE,
        keterangan=tx.get("keterangan") or "",
        jumlah=format_idr(tx.get("jumlah")),
        tipe=str(tx.get("tipe") or ""),
    )


def render_stats(stats: dict) -> str:
    return "\n".join(f"{label}: {format_idr(stats.get(key))}" for key, label in STAT_LABELS)


def render_table(items: list[dict], is_admin: bool = False) -> str:
    headers = ["Tanggal", "Penghuni", "Kamar", "Keterangan", "Jumlah", "Tipe"]
    if is_admin:
        headers.append("Aksi")

    if not items:
        return "\n".join([" | ".join(headers), EMPTY_PLACEHOLDER])

    rows: list[list[str]] = []
    for tx in items:
        r = transaction_row(tx)
        cells = [r.tanggal, r.penghuni, r.kamar, r.keterangan, r.jumlah, f"[{r.tipe}]"]
        if is_admin:
            cells.append(f"Hapus #{r.id}")
        rows.append(cells)

    widths = [max(len(h), *(len(row[i]) for row in rows)) for i, h in enumerate(headers)]
    jumlah_col = headers.index("Jumlah")

    def _line(cells: list[str]) -> str:
        out = []
        for i, c in enumerate(cells):
            out.append(c.rjust(widths[i]) if i == jumlah_col else c.ljust(widths[i]))
        return " | ".join(out).rstrip()

    return "\n".join([_line(headers)] + [_line(row) for row in rows])


def render_dashboard(dash: Dashboard) -> str:
    title = "Keuangan Asrama" + (" [Admin]" if dash.is_admin else "")
    return "\n\n".join(
        [
            title,
            render_stats(dash.stats),
            "Riwayat Transaksi\n" + render_table(dash.items, dash.is_admin),
        ]
    )
