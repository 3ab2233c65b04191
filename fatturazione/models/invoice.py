"""
Modelli di dominio per fatture, righe e dati di pagamento
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List, Dict
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from fatturazione.models.client import Client
from fatturazione.models.fatturapa_enums import (
    TipoDocumento, InvoiceStatus, IvaRate, Natura, EsigibilitaIVA,
    CondizioniPagamento, ModalitaPagamento
)

ZERO = Decimal("0")


class InvoiceItem(BaseModel):
    """Riga di fattura. I campi calcolati sono valorizzati solo dal motore di calcolo"""
    description: str
    quantity: Decimal
    unit_price: Decimal
    iva_rate: IvaRate = IvaRate.STANDARD
    natura: Optional[Natura] = None
    discount_percentage: Decimal = ZERO
    discount_amount: Decimal = ZERO

    # Calcolati
    imponibile: Decimal = ZERO
    iva_amount: Decimal = ZERO
    total: Decimal = ZERO


class PaymentInfo(BaseModel):
    """Dati di pagamento"""
    condizioni: CondizioniPagamento = CondizioniPagamento.TP02_COMPLETO
    modalita: ModalitaPagamento = ModalitaPagamento.MP05_BONIFICO
    iban: Optional[str] = None
    bank_name: Optional[str] = None


class Invoice(BaseModel):
    """Fattura elettronica con totali calcolati e stato del ciclo di vita"""
    id: UUID = Field(default_factory=uuid4)
    invoice_number: Optional[str] = None
    document_type: TipoDocumento = TipoDocumento.TD01
    status: InvoiceStatus = InvoiceStatus.DRAFT
    invoice_date: date
    due_date: date
    data_operazione: Optional[date] = None

    client_id: Optional[UUID] = None
    client: Optional[Client] = None
    items: List[InvoiceItem] = Field(default_factory=list)

    is_regime_forfettario: bool = False
    is_simplified: bool = False
    notes: Optional[str] = None
    causale: Optional[str] = None

    # Documento collegato (solo note di credito/debito)
    related_invoice_id: Optional[UUID] = None
    related_invoice_number: Optional[str] = None

    payment_info: Optional[PaymentInfo] = None

    # Sconto a livello documento (vedi DocumentDiscountService)
    document_discount_percentage: Decimal = ZERO
    document_discount_amount: Decimal = ZERO

    # Totali calcolati
    imponibile_total: Decimal = ZERO
    iva_total: Decimal = ZERO
    sub_total: Decimal = ZERO
    ritenuta_amount: Decimal = ZERO
    bollo_amount: Decimal = ZERO
    total_due: Decimal = ZERO
    iva_by_rate: Dict[IvaRate, Decimal] = Field(default_factory=dict)
    esigibilita_iva: EsigibilitaIVA = EsigibilitaIVA.I
    bollo_virtuale: bool = False

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
