"""
Interfacce base per il sistema seguendo ISP (Interface Segregation Principle)
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List

T = TypeVar('T')
K = TypeVar('K')


class IRepository(Generic[T, K], ABC):
    """Interface base per repository seguendo ISP"""

    @abstractmethod
    def get_by_id(self, id: K) -> Optional[T]:
        """Ottiene un'entità per ID"""
        pass

    @abstractmethod
    def get_all(self, **filters) -> List[T]:
        """Ottiene tutte le entità con filtri opzionali"""
        pass

    @abstractmethod
    def create(self, entity: T) -> T:
        """Crea una nuova entità"""
        pass

    @abstractmethod
    def update(self, entity: T) -> T:
        """Aggiorna un'entità esistente"""
        pass

    @abstractmethod
    def delete(self, id: K) -> bool:
        """Elimina un'entità per ID"""
        pass
