import threading
from typing import Optional

from fatturazione.models.issuer_profile import IssuerProfile
from fatturazione.repository.interfaces.issuer_profile_repository_interface import IIssuerProfileRepository


class IssuerProfileRepository(IIssuerProfileRepository):
    """Profilo emittente in memoria"""

    def __init__(self):
        self._profile: Optional[IssuerProfile] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[IssuerProfile]:
        with self._lock:
            return self._profile.model_copy(deep=True) if self._profile is not None else None

    def save(self, profile: IssuerProfile) -> IssuerProfile:
        with self._lock:
            self._profile = profile.model_copy(deep=True)
        return profile

    def clear(self) -> None:
        with self._lock:
            self._profile = None
