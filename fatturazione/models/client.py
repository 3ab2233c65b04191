"""
Modello Client (cessionario/committente)
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from fatturazione.models.address import Address
from fatturazione.models.fatturapa_enums import ClientType, TipoRitenuta, CausalePagamento


class Client(BaseModel):
    """Cliente con configurazione ritenuta, split payment e dati PA"""
    id: UUID = Field(default_factory=uuid4)
    ragione_sociale: str
    partita_iva: Optional[str] = None
    codice_fiscale: Optional[str] = None
    client_type: ClientType = ClientType.COMPANY
    address: Address = Field(default_factory=Address)
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None

    # Ritenuta d'acconto
    subject_to_ritenuta: bool = False
    tipo_ritenuta: TipoRitenuta = TipoRitenuta.RT01
    ritenuta_percentage: Decimal = Decimal("20")
    ritenuta_base_percentage: Decimal = Decimal("100")
    causale_pagamento: Optional[CausalePagamento] = None

    # Split payment (solo PA)
    subject_to_split_payment: bool = False

    # Dati Pubblica Amministrazione
    codice_univoco_ufficio: Optional[str] = None
    cig: Optional[str] = None
    cup: Optional[str] = None

    # Recapito SdI
    codice_destinatario: Optional[str] = None
    pec: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    @property
    def is_public_administration(self) -> bool:
        return self.client_type == ClientType.PUBLIC_ADMINISTRATION
