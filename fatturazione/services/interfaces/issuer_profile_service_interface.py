from abc import ABC, abstractmethod

from fatturazione.models.issuer_profile import IssuerProfile


class IIssuerProfileService(ABC):
    """Interface per il profilo emittente"""

    @abstractmethod
    async def get_profile(self) -> IssuerProfile:
        """Profilo configurato"""
        pass

    @abstractmethod
    async def set_profile(self, profile: IssuerProfile) -> IssuerProfile:
        """Configura il profilo emittente"""
        pass
