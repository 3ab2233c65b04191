from decimal import Decimal
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

from fatturazione.models.address import Address
from fatturazione.models.client import Client
from fatturazione.models.fatturapa_enums import ClientType, TipoRitenuta, CausalePagamento


class ClientSchema(BaseModel):
    """Schema per creazione/modifica cliente"""
    ragione_sociale: str = Field(..., min_length=1, max_length=200)
    partita_iva: Optional[str] = None
    codice_fiscale: Optional[str] = None
    client_type: ClientType = ClientType.COMPANY
    address: Address = Field(default_factory=Address)
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None

    subject_to_ritenuta: bool = False
    tipo_ritenuta: TipoRitenuta = TipoRitenuta.RT01
    ritenuta_percentage: Decimal = Decimal("20")
    ritenuta_base_percentage: Decimal = Decimal("100")
    causale_pagamento: Optional[CausalePagamento] = None

    subject_to_split_payment: bool = False
    codice_univoco_ufficio: Optional[str] = None
    cig: Optional[str] = None
    cup: Optional[str] = None
    codice_destinatario: Optional[str] = None
    pec: Optional[str] = None

    @field_validator('partita_iva', 'codice_fiscale', 'codice_destinatario')
    @classmethod
    def normalize_codes(cls, v):
        if v is None:
            return v
        v = v.replace(' ', '').upper()
        return v or None


class AllClientsResponseSchema(BaseModel):
    clients: List[Client]
    total: int
    page: int
    limit: int
