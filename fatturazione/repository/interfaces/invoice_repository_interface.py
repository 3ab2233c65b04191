"""
Interfaccia per Invoice Repository seguendo ISP
"""
from abc import abstractmethod
from typing import List, Optional
from uuid import UUID

from fatturazione.core.interfaces import IRepository
from fatturazione.models.fatturapa_enums import InvoiceStatus
from fatturazione.models.invoice import Invoice


class IInvoiceRepository(IRepository[Invoice, UUID]):
    """Interface per la repository delle fatture"""

    @abstractmethod
    def get_all(self, status: Optional[InvoiceStatus] = None, client_id: Optional[UUID] = None) -> List[Invoice]:
        """Ottiene le fatture filtrate per stato e cliente"""
        pass

    @abstractmethod
    def get_last_invoice_number(self) -> Optional[str]:
        """Ultimo numero assegnato (AAAA/NNN) o None se nessuna fattura è stata emessa"""
        pass

    @abstractmethod
    def exists_for_client(self, client_id: UUID) -> bool:
        """Verifica se esistono fatture intestate al cliente"""
        pass
