from typing import Optional
from pydantic import BaseModel, Field

from fatturazione.models.address import Address
from fatturazione.models.fatturapa_enums import RegimeFiscale


class IssuerProfile(BaseModel):
    """Profilo emittente (cedente/prestatore), unico per processo"""
    ragione_sociale: str
    indirizzo: Address = Field(default_factory=Address)
    partita_iva: str
    codice_fiscale: Optional[str] = None
    regime_fiscale: RegimeFiscale = RegimeFiscale.RF01
    telefono: Optional[str] = None
    email: Optional[str] = None
