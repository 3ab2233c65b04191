"""
Dipendenze per i router
"""
from functools import lru_cache

from fatturazione.core.settings import get_settings
from fatturazione.repository.client_repository import ClientRepository
from fatturazione.repository.invoice_repository import InvoiceRepository
from fatturazione.repository.issuer_profile_repository import IssuerProfileRepository
from fatturazione.services.credit_note_service import CreditNoteService
from fatturazione.services.interfaces.client_service_interface import IClientService
from fatturazione.services.interfaces.invoice_service_interface import IInvoiceService
from fatturazione.services.interfaces.issuer_profile_service_interface import IIssuerProfileService
from fatturazione.services.routers.client_service import ClientService
from fatturazione.services.routers.invoice_service import InvoiceService
from fatturazione.services.routers.issuer_profile_service import IssuerProfileService

# Costanti per paginazione
LIMIT_DEFAULT = get_settings().limit_default
MAX_LIMIT = get_settings().max_limit


# Repository condivise dal processo
@lru_cache()
def get_invoice_repository() -> InvoiceRepository:
    return InvoiceRepository()


@lru_cache()
def get_client_repository() -> ClientRepository:
    return ClientRepository()


@lru_cache()
def get_issuer_profile_repository() -> IssuerProfileRepository:
    return IssuerProfileRepository()


@lru_cache()
def get_invoice_service() -> IInvoiceService:
    """Dependency per ottenere il servizio fatture"""
    settings = get_settings()
    return InvoiceService(
        invoice_repository=get_invoice_repository(),
        client_repository=get_client_repository(),
        issuer_profile_repository=get_issuer_profile_repository(),
        credit_note_service=CreditNoteService(due_days=settings.correction_note_due_days)
    )


def get_client_service() -> IClientService:
    """Dependency per ottenere il servizio clienti"""
    return ClientService(get_client_repository(), get_invoice_repository())


def get_issuer_profile_service() -> IIssuerProfileService:
    """Dependency per ottenere il servizio profilo emittente"""
    return IssuerProfileService(get_issuer_profile_repository())
