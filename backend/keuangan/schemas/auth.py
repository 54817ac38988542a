from pydantic import BaseModel

class TokenCheckOut(BaseModel):
    ok: bool = True
    role: str = "admin"
