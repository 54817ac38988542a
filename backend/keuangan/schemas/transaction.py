from pydantic import BaseModel, ValidationInfo, field_validator
from datetime import date, datetime, timezone
from typing import Literal

TxType = Literal["pemasukan", "pengeluaran"]

TIPE_ALIASES = {
    "income": "pemasukan",
    "expense": "pengeluaran",
}

# column widths of the transactions table
MAX_LENGTHS = {"penghuni": 128, "kamar": 32, "keterangan": 256}
MAX_JUMLAH = 2**63 - 1


class TxCreate(BaseModel):
    tanggal: datetime
    penghuni: str | None = None
    kamar: str | None = None
    keterangan: str
    jumlah: int
    tipe: TxType

    @field_validator("tanggal", mode="before")
    @classmethod
    def tanggal_parse(cls, v):
        if v is None:
            raise ValueError("is required")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("is required")
            if len(v) == 10:
                try:
                    d = date.fromisoformat(v)
                except ValueError:
                    raise ValueError("must be an ISO-8601 date or timestamp")
                return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
        elif isinstance(v, date) and not isinstance(v, datetime):
            return datetime(v.year, v.month, v.day, tzinfo=timezone.utc)
        return v

    @field_validator("tanggal")
    @classmethod
    def tanggal_tz(cls, v: datetime):
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("penghuni", "kamar")
    @classmethod
    def optional_trim(cls, v: str | None, info: ValidationInfo):
        if v is None:
            return None
        v = v.strip()
        if len(v) > MAX_LENGTHS[info.field_name]:
            raise ValueError(f"too long (max {MAX_LENGTHS[info.field_name]} characters)")
        return v or None

    @field_validator("keterangan")
    @classmethod
    def keterangan_required(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        if len(v) > MAX_LENGTHS["keterangan"]:
            raise ValueError(f"too long (max {MAX_LENGTHS['keterangan']} characters)")
        return v

    @field_validator("jumlah", mode="before")
    @classmethod
    def jumlah_whole_number(cls, v):
        if v is None:
            raise ValueError("is required")
        if isinstance(v, bool):
            raise ValueError("must be a number")
        if isinstance(v, float):
            if v != v or v in (float("inf"), float("-inf")):
                raise ValueError("must be a finite number")
            if not v.is_integer():
                raise ValueError("must be a whole number of Rupiah")
            return int(v)
        return v

    @field_validator("jumlah")
    @classmethod
    def jumlah_non_negative(cls, v: int):
        if v < 0:
            raise ValueError("must be >= 0")
        if v > MAX_JUMLAH:
            raise ValueError(f"must be <= {MAX_JUMLAH}")
        return v

    @field_validator("tipe", mode="before")
    @classmethod
    def tipe_normalize(cls, v):
        if isinstance(v, str):
            vv = v.strip().lower()
            return TIPE_ALIASES.get(vv, vv)
        return v


class TxOut(BaseModel):
    id: int
    tanggal: datetime | None
    penghuni: str | None
    kamar: str | None
    keterangan: str
    jumlah: int
    tipe: TxType
    created_at: datetime | None

    class Config:
        from_attributes = True


class TxList(BaseModel):
    items: list[TxOut]
