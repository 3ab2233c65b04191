from typing import Optional
from pydantic import BaseModel, Field


class Address(BaseModel):
    """Indirizzo (Sede) di cliente o emittente"""
    street: str = Field(default="", description="Via e numero civico")
    city: str = Field(default="", description="Comune")
    province: str = Field(default="", description="Sigla provincia, 2 lettere")
    postal_code: str = Field(default="", description="CAP, 5 cifre")
    country: Optional[str] = "Italia"
