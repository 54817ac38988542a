from pydantic import BaseModel


class StatsOut(BaseModel):
    pemasukan: int = 0
    pengeluaran: int = 0
    saldo: int = 0
