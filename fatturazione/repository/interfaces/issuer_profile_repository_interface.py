"""
Interfaccia per IssuerProfile Repository
"""
from abc import ABC, abstractmethod
from typing import Optional

from fatturazione.models.issuer_profile import IssuerProfile


class IIssuerProfileRepository(ABC):
    """Profilo emittente: unico record configurato"""

    @abstractmethod
    def get(self) -> Optional[IssuerProfile]:
        """Restituisce il profilo configurato o None"""
        pass

    @abstractmethod
    def save(self, profile: IssuerProfile) -> IssuerProfile:
        """Salva (sostituisce) il profilo"""
        pass
