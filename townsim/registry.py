"""Type-keyed storage of components per entity."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, ItemsView, Mapping, TypeVar

T = TypeVar("T")

_EMPTY: Mapping[int, Any] = MappingProxyType({})


class ComponentStorage:
    """Components of one type, keyed by entity id."""

    def __init__(self) -> None:
        self._components: dict[int, Any] = {}

    def add(self, entity_id: int, component: T) -> T:
        """Store ``component`` for the entity, replacing any previous one."""
        self._components[entity_id] = component
        return component

    def get(self, entity_id: int) -> Any | None:
        return self._components.get(entity_id)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._components

    def remove(self, entity_id: int) -> None:
        """Drop the entity's component; nothing happens if it has none."""
        self._components.pop(entity_id, None)

    def clear(self) -> None:
        self._components.clear()

    def items(self) -> ItemsView[int, Any]:
        return self._components.items()

    def as_mapping(self) -> Mapping[int, Any]:
        """Read-only live view of the stored components."""
        return MappingProxyType(self._components)


class ComponentRegistry:
    """Holds one storage for every component type in use."""

    def __init__(self) -> None:
        self._storages: dict[type, ComponentStorage] = {}

    def add_component(self, entity_id: int, component_type: type[T], *args: Any, **kwargs: Any) -> T:
        """Construct a component from the arguments and attach it to the entity."""
        component = component_type(*args, **kwargs)
        storage = self._storages.setdefault(component_type, ComponentStorage())
        return storage.add(entity_id, component)

    def get_component(self, entity_id: int, component_type: type[T]) -> T | None:
        storage = self._storages.get(component_type)
        return storage.get(entity_id) if storage is not None else None

    def has_component(self, entity_id: int, component_type: type) -> bool:
        storage = self._storages.get(component_type)
        return storage is not None and entity_id in storage

    def remove_component(self, entity_id: int, component_type: type) -> None:
        storage = self._storages.get(component_type)
        if storage is not None:
            storage.remove(entity_id)

    def remove_all_components(self, entity_id: int) -> None:
        for storage in self._storages.values():
            storage.remove(entity_id)

    def all_components(self, component_type: type[T]) -> Mapping[int, T]:
        """Read-only mapping of entity id to component for one type."""
        storage = self._storages.get(component_type)
        return storage.as_mapping() if storage is not None else _EMPTY

    def clear(self) -> None:
        """Remove every component, keeping the per-type storages."""
        for storage in self._storages.values():
            storage.clear()