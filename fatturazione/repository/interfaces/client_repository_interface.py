"""
Interfaccia per Client Repository seguendo ISP
"""
from uuid import UUID

from fatturazione.core.interfaces import IRepository
from fatturazione.models.client import Client


class IClientRepository(IRepository[Client, UUID]):
    """Interface per la repository dei clienti"""
    pass
