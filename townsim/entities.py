"""Entity identifiers and their lifecycle."""

from __future__ import annotations

import itertools
from collections import deque
from typing import ClassVar, Iterator

INVALID_ENTITY = 2**32 - 1
"""Identifier that never names a living entity."""


def is_valid_entity(entity_id: int) -> bool:
    """Whether ``entity_id`` is not the invalid marker."""
    return entity_id != INVALID_ENTITY


class Entity:
    """An object that receives a unique, increasing id when created."""

    _counter: ClassVar[Iterator[int]] = itertools.count()

    def __init__(self) -> None:
        self.uid = next(Entity._counter)

    def __repr__(self) -> str:
        return f"Entity(uid={self.uid})"


class EntityManager:
    """Creates and destroys entities, reusing the ids of destroyed ones."""

    def __init__(self) -> None:
        self._next_id = 1
        self._living: set[int] = set()
        self._free: deque[int] = deque()

    def create_entity(self) -> int:
        """Create an entity and return its id; freed ids are reused first."""
        if self._free:
            new_id = self._free.popleft()
        else:
            new_id = self._next_id
            self._next_id += 1
            if new_id == INVALID_ENTITY:
                new_id = 1
                self._next_id = 2
        self._living.add(new_id)
        return new_id

    def destroy_entity(self, entity_id: int) -> bool:
        """Destroy an entity; False if it was not alive."""
        if not self.is_alive(entity_id):
            return False
        self._living.discard(entity_id)
        self._free.append(entity_id)
        return True

    def is_alive(self, entity_id: int) -> bool:
        return is_valid_entity(entity_id) and entity_id in self._living

    def all_entities(self) -> list[int]:
        """Ids of all living entities."""
        return list(self._living)

    def clear(self) -> None:
        """Forget every entity and start numbering from 1 again."""
        self._living.clear()
        self._free.clear()
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._living)