"""
Repository pattern implementation.
Abstracts the key-value entity store and provides a clean interface for domain services.
"""
import copy
import json
import logging
import uuid
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from django.conf import settings
from django.core.cache import caches
from django.core.cache.backends.base import BaseCache
from django.core.serializers.json import DjangoJSONEncoder

from core.constants import StorageKey
from core.dto import RecordMixin, SettingsDTO, UserDTO
from core.signals import store_changed

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=RecordMixin)


def generate_id() -> str:
    """Random 9-character record identifier"""
    return uuid.uuid4().hex[:9]


class EntityStore:
    """
    Synchronous key-value store holding named JSON collections.

    Wraps any Django cache backend. Values never expire. Every write sends
    ``store_changed`` with this store as sender.
    """

    def __init__(self, cache: BaseCache):
        self.cache = cache

    @classmethod
    def from_settings(cls) -> 'EntityStore':
        """Build a store over the cache alias named by RMS_STORE_CACHE"""
        return cls(caches[settings.RMS_STORE_CACHE])

    def get(self, key: str, default: Any = None) -> Any:
        raw = self.cache.get(key)
        if raw is None:
            return copy.deepcopy(default)
        return json.loads(raw)

    def save(self, key: str, value: Any) -> None:
        self.cache.set(key, json.dumps(value, cls=DjangoJSONEncoder), timeout=None)
        logger.debug("Store write: %s", key)
        self._notify(key)

    def delete(self, key: str) -> None:
        self.cache.delete(key)
        logger.debug("Store delete: %s", key)
        self._notify(key)

    def subscribe(self, handler: Callable[..., None]) -> None:
        """Connect ``handler(sender, key, **kwargs)`` to writes on this store"""
        store_changed.connect(handler, sender=self, weak=False)

    def unsubscribe(self, handler: Callable[..., None]) -> bool:
        return store_changed.disconnect(handler, sender=self)

    def _notify(self, key: str) -> None:
        store_changed.send(sender=self, key=key)


class CollectionRepository(Generic[T]):
    """
    Base repository providing CRUD over one stored collection.
    Every call reads or rewrites the whole collection; there is no indexing.
    """

    def __init__(self, store: EntityStore, key: str, dto_class: Type[T], initial: Optional[List[dict]] = None):
        self.store = store
        self.key = key
        self.dto_class = dto_class
        self.initial = initial or []

    def all(self) -> List[T]:
        """Get every record in stored order"""
        return [self.dto_class.from_dict(item) for item in self.store.get(self.key, self.initial)]

    def save_all(self, records: List[T]) -> None:
        self.store.save(self.key, [record.to_dict() for record in records])

    def get_by_id(self, id: str) -> Optional[T]:
        """Get a single record by ID"""
        return next((record for record in self.all() if record.id == id), None)

    def filter(self, **filters) -> List[T]:
        """Get all records whose fields equal the given values"""
        return [
            record for record in self.all()
            if all(getattr(record, name) == value for name, value in filters.items())
        ]

    def add(self, record: T) -> T:
        """Append a new record, assigning an ID when missing"""
        if not record.id:
            record.id = generate_id()
        records = self.all()
        records.append(record)
        self.save_all(records)
        return record

    def update(self, id: str, **changes) -> Optional[T]:
        """Merge ``changes`` into the record; None when the ID is absent"""
        records = self.all()
        for index, record in enumerate(records):
            if record.id == id:
                records[index] = record.merged(changes)
                self.save_all(records)
                return records[index]
        return None

    def delete(self, id: str) -> bool:
        records = self.all()
        remaining = [record for record in records if record.id != id]
        if len(remaining) == len(records):
            return False
        self.save_all(remaining)
        return True


class SessionRepository:
    """Single stored snapshot of the logged-in user"""

    key = StorageKey.SESSION

    def __init__(self, store: EntityStore):
        self.store = store

    def get(self) -> Optional[UserDTO]:
        data = self.store.get(self.key)
        return UserDTO.from_dict(data) if data else None

    def set(self, user: UserDTO) -> None:
        self.store.save(self.key, user.to_dict())

    def clear(self) -> None:
        self.store.delete(self.key)


class SettingsRepository:
    """Single stored settings record"""

    key = StorageKey.SETTINGS

    def __init__(self, store: EntityStore):
        self.store = store

    def get(self) -> SettingsDTO:
        return SettingsDTO.from_dict(self.store.get(self.key, SettingsDTO().to_dict()))

    def update(self, **changes) -> SettingsDTO:
        updated = self.get().merged(changes)
        self.store.save(self.key, updated.to_dict())
        return updated
