from typing import List, Optional
from uuid import UUID

from fatturazione.core.base_repository import BaseRepository
from fatturazione.models.fatturapa_enums import InvoiceStatus
from fatturazione.models.invoice import Invoice
from fatturazione.repository.interfaces.invoice_repository_interface import IInvoiceRepository
from fatturazione.services.invoice_numbering_service import InvoiceNumberingService


class InvoiceRepository(BaseRepository[Invoice, UUID], IInvoiceRepository):
    """Repository fatture in memoria"""

    def __init__(self):
        super().__init__(Invoice)

    def get_all(self, status: Optional[InvoiceStatus] = None, client_id: Optional[UUID] = None) -> List[Invoice]:
        invoices = super().get_all(status=status, client_id=client_id)
        return sorted(invoices, key=lambda i: (i.invoice_date, i.created_at))

    def get_last_invoice_number(self) -> Optional[str]:
        with self._lock:
            numbers = [i.invoice_number for i in self._store.values() if i.invoice_number]
        if not numbers:
            return None
        return max(numbers, key=InvoiceNumberingService.parse_number)

    def exists_for_client(self, client_id: UUID) -> bool:
        with self._lock:
            return any(i.client_id == client_id for i in self._store.values())
