"""
Entity repositories - keyed storage per entity kind.

A repository maps identifiers to entities with get / put / list-all and
carries no business rules. Entities must expose ``id``, ``to_dict()`` and a
``from_dict()`` classmethod.
"""

import json
from abc import ABC, abstractmethod
from typing import Callable, Dict, Generic, List, Optional, Type, TypeVar

from artmarket.core.storage.sqlite_adapter import SQLiteAdapter
from artmarket.utils.logger import get_logger

logger = get_logger("storage.repository")

E = TypeVar("E")


def encode_entity(entity) -> str:
    return json.dumps(entity.to_dict(), sort_keys=True)


def decode_entity(entity_cls: Type[E], raw: str) -> E:
    return entity_cls.from_dict(json.loads(raw))


class Repository(ABC, Generic[E]):
    """Abstract keyed store for one entity kind."""

    def __init__(self, bucket: str, entity_cls: Type[E]):
        self.bucket = bucket
        self.entity_cls = entity_cls

    @abstractmethod
    def get(self, entity_id: str) -> Optional[E]:
        """Return the entity with this id, or None."""

    @abstractmethod
    def put(self, entity: E) -> None:
        """Insert or overwrite an entity under its id."""

    @abstractmethod
    def values(self) -> List[E]:
        """All entities in insertion order."""

    def contains(self, entity_id: str) -> bool:
        return self.get(entity_id) is not None

    def filter(self, predicate: Callable[[E], bool]) -> List[E]:
        return [entity for entity in self.values() if predicate(entity)]

    def __len__(self) -> int:
        return len(self.values())


class InMemoryRepository(Repository[E]):
    """Dictionary-backed repository, used for tests and demos."""

    def __init__(self, bucket: str, entity_cls: Type[E]):
        super().__init__(bucket, entity_cls)
        self._items: Dict[str, E] = {}

    def get(self, entity_id: str) -> Optional[E]:
        return self._items.get(entity_id)

    def put(self, entity: E) -> None:
        self._items[entity.id] = entity

    def values(self) -> List[E]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)


class SQLiteRepository(Repository[E]):
    """Repository persisting JSON-encoded entities through SQLiteAdapter."""

    def __init__(self, adapter: SQLiteAdapter, bucket: str, entity_cls: Type[E]):
        super().__init__(bucket, entity_cls)
        self.adapter = adapter

    def get(self, entity_id: str) -> Optional[E]:
        raw = self.adapter.get(self.bucket, entity_id)
        if raw is None:
            logger.debug(f"{self.bucket}: miss for {entity_id}")
            return None
        return decode_entity(self.entity_cls, raw)

    def put(self, entity: E) -> None:
        self.adapter.put(self.bucket, entity.id, encode_entity(entity))

    def values(self) -> List[E]:
        return [decode_entity(self.entity_cls, raw) for raw in self.adapter.values(self.bucket)]

    def __len__(self) -> int:
        return self.adapter.count(self.bucket)
