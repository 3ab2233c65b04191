from datetime import date
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from fatturazione.models.fatturapa_enums import TipoDocumento, InvoiceStatus, IvaRate, Natura
from fatturazione.models.invoice import Invoice, PaymentInfo


# ==================== SCHEMAS PER RIGHE ====================

class InvoiceItemSchema(BaseModel):
    """Schema per riga fattura"""
    description: str = Field(..., min_length=1, max_length=1000)
    quantity: Decimal = Field(..., gt=0, description="Quantità")
    unit_price: Decimal = Field(..., ge=0, description="Prezzo unitario")
    iva_rate: IvaRate = IvaRate.STANDARD
    natura: Optional[Natura] = Field(None, description="Obbligatoria solo con aliquota 0")
    discount_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    discount_amount: Decimal = Field(Decimal("0"), ge=0)

    @model_validator(mode='after')
    def check_discount_amount(self):
        if self.discount_percentage == 0 and self.discount_amount > self.quantity * self.unit_price:
            raise ValueError('Lo sconto non può superare il valore della riga')
        return self


# ==================== SCHEMAS PER FATTURE ====================

class InvoiceCreateSchema(BaseModel):
    """Schema per creazione/modifica fattura in bozza"""
    client_id: UUID
    document_type: TipoDocumento = TipoDocumento.TD01
    invoice_date: date
    due_date: date
    data_operazione: Optional[date] = None
    items: List[InvoiceItemSchema] = Field(default_factory=list)
    is_regime_forfettario: bool = False
    is_simplified: bool = False
    notes: Optional[str] = None
    causale: Optional[str] = Field(None, max_length=200)
    payment_info: Optional[PaymentInfo] = None
    document_discount_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    document_discount_amount: Decimal = Field(Decimal("0"), ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "0b6f1f9e-3c1e-4f47-9b7a-2d6c1f0e8a11",
                "document_type": "TD01",
                "invoice_date": "2026-03-10",
                "due_date": "2026-04-09",
                "items": [
                    {"description": "Consulenza", "quantity": "1", "unit_price": "1000.00", "iva_rate": 22}
                ],
                "payment_info": {"condizioni": "TP02_Completo", "modalita": "MP05_Bonifico",
                                 "iban": "IT60X0542811101000000123456"}
            }
        }


class AllInvoicesResponseSchema(BaseModel):
    invoices: List[Invoice]
    total: int
    page: int
    limit: int


class InvoiceStatusTransitionSchema(BaseModel):
    """Schema per cambio di stato"""
    new_status: InvoiceStatus


class InvoiceTransitionResponseSchema(BaseModel):
    """Fattura aggiornata con eventuale avviso (es. nota di credito obbligatoria)"""
    invoice: Invoice
    warning: Optional[str] = None


# ==================== SCHEMAS PER NOTE DI CREDITO/DEBITO ====================

class CreditNoteCreateSchema(BaseModel):
    """Schema per creazione nota di credito"""
    reason: str = Field(..., min_length=1, max_length=200, description="Motivazione dello storno")


class DebitNoteCreateSchema(BaseModel):
    """Schema per creazione nota di debito"""
    reason: str = Field(..., min_length=1, max_length=200)
    items: List[InvoiceItemSchema] = Field(..., min_length=1)
