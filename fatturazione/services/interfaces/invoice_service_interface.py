"""
Interfaccia per Invoice Service seguendo ISP
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from fatturazione.models.fatturapa_enums import InvoiceStatus
from fatturazione.models.invoice import Invoice
from fatturazione.schemas.invoice_schema import InvoiceCreateSchema, InvoiceItemSchema
from fatturazione.services.invoice_lifecycle_service import TransitionResult


class IInvoiceService(ABC):
    """Interface per il servizio fatture"""

    @abstractmethod
    async def create_invoice(self, invoice_data: InvoiceCreateSchema) -> Invoice:
        """Crea una fattura in bozza con totali calcolati"""
        pass

    @abstractmethod
    async def update_invoice(self, invoice_id: UUID, invoice_data: InvoiceCreateSchema) -> Invoice:
        """Aggiorna una fattura in bozza"""
        pass

    @abstractmethod
    async def get_invoice(self, invoice_id: UUID) -> Invoice:
        """Ottiene una fattura per ID"""
        pass

    @abstractmethod
    async def get_invoices(
        self,
        page: int = 1,
        limit: int = 10,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[UUID] = None
    ) -> Tuple[List[Invoice], int]:
        """Ottiene la lista delle fatture con filtri e il totale"""
        pass

    @abstractmethod
    async def delete_invoice(self, invoice_id: UUID) -> bool:
        """Elimina una fattura in bozza"""
        pass

    @abstractmethod
    async def recalculate_invoice(self, invoice_id: UUID) -> Invoice:
        """Ricalcola i totali di una bozza"""
        pass

    @abstractmethod
    async def issue_invoice(self, invoice_id: UUID) -> Invoice:
        """Emette la fattura assegnando il numero"""
        pass

    @abstractmethod
    async def transition_invoice(self, invoice_id: UUID, new_status: InvoiceStatus) -> TransitionResult:
        """Cambia lo stato della fattura"""
        pass

    @abstractmethod
    async def create_credit_note(self, invoice_id: UUID, reason: str) -> Invoice:
        """Crea una nota di credito collegata"""
        pass

    @abstractmethod
    async def create_debit_note(self, invoice_id: UUID, items: List[InvoiceItemSchema], reason: str) -> Invoice:
        """Crea una nota di debito collegata"""
        pass

    @abstractmethod
    async def generate_xml(self, invoice_id: UUID) -> str:
        """Genera l'XML FatturaPA"""
        pass
