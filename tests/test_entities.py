import pytest

from townsim.entities import INVALID_ENTITY, Entity, EntityManager, is_valid_entity


def test_invalid_entity_marker():
    assert is_valid_entity(INVALID_ENTITY) is False
    assert is_valid_entity(1) is True


def test_entities_get_consecutive_uids():
    a = Entity()
    b = Entity()
    assert b.uid == a.uid + 1


def test_first_ids_start_at_one():
    manager = EntityManager()
    first = manager.create_entity()
    second = manager.create_entity()
    assert first == 1
    assert second == 2
    assert len(manager) == 2


def test_destroy_and_alive():
    manager = EntityManager()
    eid = manager.create_entity()
    assert manager.is_alive(eid)
    assert manager.destroy_entity(eid) is True
    assert not manager.is_alive(eid)
    assert manager.destroy_entity(eid) is False
    assert len(manager) == 0


def test_destroy_invalid_returns_false():
    manager = EntityManager()
    assert manager.destroy_entity(INVALID_ENTITY) is False
    assert manager.is_alive(INVALID_ENTITY) is False


def test_destroyed_ids_reused_in_order():
    manager = EntityManager()
    ids = [manager.create_entity() for _ in range(4)]
    manager.destroy_entity(ids[2])
    manager.destroy_entity(ids[0])
    assert manager.create_entity() == ids[2]
    assert manager.create_entity() == ids[0]
    fresh = manager.create_entity()
    assert fresh not in ids


def test_all_entities_matches_living():
    manager = EntityManager()
    ids = {manager.create_entity() for _ in range(3)}
    removed = ids.pop()
    manager.destroy_entity(removed)
    assert set(manager.all_entities()) == ids


def test_clear_resets_numbering():
    manager = EntityManager()
    for _ in range(3):
        manager.create_entity()
    manager.destroy_entity(2)
    manager.clear()
    assert len(manager) == 0
    assert manager.all_entities() == []
    assert manager.create_entity() == 1


@pytest.mark.parametrize("count", [1, 5, 20])
def test_ids_unique(count):
    manager = EntityManager()
    ids = [manager.create_entity() for _ in range(count)]
    assert len(set(ids)) == count
    assert all(is_valid_entity(i) for i in ids)