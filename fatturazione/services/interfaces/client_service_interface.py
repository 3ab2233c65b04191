"""
Interfaccia per Client Service seguendo ISP
"""
from abc import ABC, abstractmethod
from typing import List, Tuple
from uuid import UUID

from fatturazione.models.client import Client
from fatturazione.schemas.client_schema import ClientSchema


class IClientService(ABC):
    """Interface per il servizio clienti"""

    @abstractmethod
    async def create_client(self, client_data: ClientSchema) -> Client:
        """Crea un nuovo cliente"""
        pass

    @abstractmethod
    async def update_client(self, client_id: UUID, client_data: ClientSchema) -> Client:
        """Aggiorna un cliente esistente"""
        pass

    @abstractmethod
    async def get_client(self, client_id: UUID) -> Client:
        """Ottiene un cliente per ID"""
        pass

    @abstractmethod
    async def get_clients(self, page: int = 1, limit: int = 10) -> Tuple[List[Client], int]:
        """Ottiene la lista dei clienti e il totale"""
        pass

    @abstractmethod
    async def delete_client(self, client_id: UUID) -> bool:
        """Elimina un cliente senza fatture"""
        pass
