"""
Base Repository in memoria seguendo SRP e OCP.

Le entità sono modelli pydantic con attributo `id`. Ogni lettura e scrittura
lavora su copie profonde: nessuna istanza è condivisa tra richieste.
"""
import threading
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from fatturazione.core.exceptions import NotFoundException, BusinessRuleException, ErrorCode
from fatturazione.core.interfaces import IRepository

T = TypeVar('T', bound=BaseModel)
K = TypeVar('K')


class BaseRepository(IRepository[T, K]):
    """Repository base con implementazioni comuni seguendo DRY e SRP"""

    def __init__(self, model_class: Type[T]):
        self._model_class = model_class
        self._store: Dict[K, T] = {}
        self._lock = threading.Lock()

    def get_by_id(self, id: K) -> Optional[T]:
        """Ottiene un'entità per ID"""
        with self._lock:
            entity = self._store.get(id)
            return entity.model_copy(deep=True) if entity is not None else None

    def get_by_id_or_raise(self, id: K) -> T:
        """Ottiene un'entità per ID o lancia NotFoundException"""
        entity = self.get_by_id(id)
        if entity is None:
            raise NotFoundException(self._model_class.__name__, id)
        return entity

    def get_all(self, **filters) -> List[T]:
        """Ottiene tutte le entità; i filtri con valore None sono ignorati"""
        active = {k: v for k, v in filters.items() if v is not None}
        with self._lock:
            entities = [
                e for e in self._store.values()
                if all(getattr(e, k, None) == v for k, v in active.items())
            ]
            return [e.model_copy(deep=True) for e in entities]

    def get_count(self, **filters) -> int:
        return len(self.get_all(**filters))

    def exists(self, id: K) -> bool:
        with self._lock:
            return id in self._store

    def create(self, entity: T) -> T:
        """Crea una nuova entità"""
        with self._lock:
            if entity.id in self._store:
                raise BusinessRuleException(
                    f"{self._model_class.__name__} with id '{entity.id}' already exists",
                    ErrorCode.BUSINESS_RULE_VIOLATION,
                    {"entity_id": str(entity.id)}
                )
            self._store[entity.id] = entity.model_copy(deep=True)
        return entity

    def update(self, entity: T) -> T:
        """Aggiorna un'entità esistente"""
        with self._lock:
            if entity.id not in self._store:
                raise NotFoundException(self._model_class.__name__, entity.id)
            self._store[entity.id] = entity.model_copy(deep=True)
        return entity

    def delete(self, id: K) -> bool:
        """Elimina un'entità per ID"""
        with self._lock:
            return self._store.pop(id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
