"""
Client Service seguendo i principi SOLID
"""
import logging
from datetime import datetime
from typing import List, Tuple
from uuid import UUID

from fatturazione.core.exceptions import (
    ValidationException,
    BusinessRuleException,
    ExceptionFactory,
    ErrorCode
)
from fatturazione.models.client import Client
from fatturazione.repository.interfaces.client_repository_interface import IClientRepository
from fatturazione.repository.interfaces.invoice_repository_interface import IInvoiceRepository
from fatturazione.schemas.client_schema import ClientSchema
from fatturazione.services.interfaces.client_service_interface import IClientService
from fatturazione.services.validators.client_validator import ClientValidator

logger = logging.getLogger(__name__)


class ClientService(IClientService):
    """Anagrafica clienti con validazione fiscale"""

    def __init__(
        self,
        client_repository: IClientRepository,
        invoice_repository: IInvoiceRepository,
        client_validator: ClientValidator = None
    ):
        self._client_repository = client_repository
        self._invoice_repository = invoice_repository
        self._client_validator = client_validator or ClientValidator()

    async def create_client(self, client_data: ClientSchema) -> Client:
        """Crea un nuovo client con validazioni business"""
        client = Client(**client_data.model_dump())
        self._validate(client)
        self._client_repository.create(client)
        logger.info(f"Cliente {client.ragione_sociale} creato", extra={"client_id": str(client.id)})
        return client

    async def update_client(self, client_id: UUID, client_data: ClientSchema) -> Client:
        existing = await self.get_client(client_id)
        client = Client(
            **client_data.model_dump(),
            id=existing.id,
            created_at=existing.created_at,
            updated_at=datetime.now()
        )
        self._validate(client)
        self._client_repository.update(client)
        return client

    async def get_client(self, client_id: UUID) -> Client:
        client = self._client_repository.get_by_id(client_id)
        if client is None:
            raise ExceptionFactory.client_not_found(client_id)
        return client

    async def get_clients(self, page: int = 1, limit: int = 10) -> Tuple[List[Client], int]:
        clients = self._client_repository.get_all()
        start = (page - 1) * limit
        return clients[start:start + limit], len(clients)

    async def delete_client(self, client_id: UUID) -> bool:
        await self.get_client(client_id)

        # Business Rule: un cliente con fatture non può essere eliminato
        if self._invoice_repository.exists_for_client(client_id):
            raise BusinessRuleException(
                "Il cliente ha fatture associate e non può essere eliminato",
                ErrorCode.CLIENT_IN_USE,
                {"client_id": str(client_id)}
            )
        return self._client_repository.delete(client_id)

    def _validate(self, client: Client) -> None:
        result = self._client_validator.validate(client)
        if not result.is_valid:
            raise ValidationException(
                "Dati cliente non validi",
                ErrorCode.VALIDATION_ERROR,
                errors=result.error_dicts()
            )
