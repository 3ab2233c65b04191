from typing import List
from uuid import UUID

from fatturazione.core.base_repository import BaseRepository
from fatturazione.models.client import Client
from fatturazione.repository.interfaces.client_repository_interface import IClientRepository


class ClientRepository(BaseRepository[Client, UUID], IClientRepository):
    """Repository clienti in memoria"""

    def __init__(self):
        super().__init__(Client)

    def get_all(self, **filters) -> List[Client]:
        clients = super().get_all(**filters)
        return sorted(clients, key=lambda c: c.ragione_sociale.lower())
