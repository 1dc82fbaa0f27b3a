import math

import pytest

from townsim.components import (
    DescriptionComponent,
    InfoBoxComponent,
    Movement,
    MovementPhase,
    PositionComponent,
)
from townsim.world import MovementSystem, System, SystemManager, World


class _CountingSystem(System):
    def __init__(self, log, label):
        self.log = log
        self.label = label

    def update(self, delta_time):
        self.log.append((self.label, delta_time))


@pytest.fixture
def world():
    return World()


def test_system_is_abstract():
    with pytest.raises(TypeError):
        System()


def test_movement_system_name(world):
    system = world.add_system(MovementSystem, world)
    assert system.name == "MovementSystem"


def test_create_entities_get_sequential_ids(world):
    ids = [world.create_entity() for _ in range(3)]
    assert ids == [1, 2, 3]
    assert world.entity_count() == 3
    assert sorted(world.all_entities()) == ids


def test_component_access_and_queries(world):
    npc1 = world.create_entity()
    npc2 = world.create_entity()
    world.add_component(npc1, PositionComponent, 0.0, 0.0)
    world.add_component(npc1, DescriptionComponent, "Guard", "A vigilant guard")
    world.add_component(npc1, Movement, 100.0)
    world.add_component(npc2, InfoBoxComponent, "Merchant\nSelling goods")

    desc = world.get_component(npc1, DescriptionComponent)
    assert desc.name == "Guard"
    assert world.has_component(npc1, Movement)
    assert not world.has_component(npc2, Movement)
    assert world.has_component(npc2, InfoBoxComponent)
    assert world.get_component(npc2, InfoBoxComponent).text == "Merchant\nSelling goods"


def test_add_component_to_dead_entity_returns_none(world):
    assert world.add_component(42, PositionComponent, 1.0, 2.0) is None
    assert not world.has_component(42, PositionComponent)


def test_destroy_entity_removes_components(world):
    npc1 = world.create_entity()
    npc2 = world.create_entity()
    world.add_component(npc2, PositionComponent, 50.0, 50.0)
    assert world.destroy_entity(npc2) is True
    assert world.entity_count() == 1
    assert world.get_component(npc2, PositionComponent) is None
    assert not world.is_entity_alive(npc2)
    assert world.is_entity_alive(npc1)


def test_destroy_unknown_entity_fails(world):
    assert world.destroy_entity(7) is False


def test_destroyed_id_is_reused(world):
    world.create_entity()
    second = world.create_entity()
    world.destroy_entity(second)
    assert world.create_entity() == second


def test_remove_component(world):
    entity = world.create_entity()
    world.add_component(entity, PositionComponent, 100.0, 100.0)
    world.add_component(entity, DescriptionComponent, "Temp", "Temporary entity")
    world.remove_component(entity, DescriptionComponent)
    assert not world.has_component(entity, DescriptionComponent)
    assert world.has_component(entity, PositionComponent)


def test_all_components(world):
    a = world.create_entity()
    b = world.create_entity()
    pa = world.add_component(a, PositionComponent, 1.0, 2.0)
    pb = world.add_component(b, PositionComponent, 3.0, 4.0)
    assert dict(world.all_components(PositionComponent)) == {a: pa, b: pb}
    assert dict(world.all_components(Movement)) == {}


def test_systems_run_in_order(world):
    log = []
    world.add_system(_CountingSystem, log, "first")
    world.add_system(_CountingSystem, log, "second")
    world.update(0.25)
    assert log == [("first", 0.25), ("second", 0.25)]


def test_get_system(world):
    system = world.add_system(MovementSystem, world)
    assert world.get_system(MovementSystem) is system
    assert world.get_system(_CountingSystem) is None


def test_system_manager_clear():
    manager = SystemManager()
    log = []
    manager.add_system(_CountingSystem, log, "x")
    manager.clear()
    manager.update_systems(1.0)
    assert log == []
    assert len(manager) == 0


def test_world_clear(world):
    log = []
    world.add_system(_CountingSystem, log, "x")
    entity = world.create_entity()
    world.add_component(entity, PositionComponent, 1.0, 1.0)
    world.clear()
    world.update(1.0)
    assert log == []
    assert world.entity_count() == 0
    assert world.get_component(entity, PositionComponent) is None
    assert world.create_entity() == 1


def test_movement_advances_by_speed_times_delta(world):
    world.add_system(MovementSystem, world)
    npc = world.create_entity()
    pos = world.add_component(npc, PositionComponent, 0.0, 0.0)
    movement = world.add_component(npc, Movement, 100.0)
    movement.set_target(100.0, 50.0)

    start = math.hypot(100.0, 50.0)
    for frame in range(1, 4):
        world.update(0.1)
        remaining = math.hypot(100.0 - pos.x, 50.0 - pos.y)
        assert remaining == pytest.approx(start - 100.0 * 0.1 * frame)
        assert pos.y == pytest.approx(pos.x / 2)
    assert movement.is_moving


def test_movement_clamps_then_arrives(world):
    world.add_system(MovementSystem, world)
    npc = world.create_entity()
    pos = world.add_component(npc, PositionComponent, 25.0, 25.0)
    movement = world.add_component(npc, Movement, 10000.0)
    movement.set_target(200.0, 150.0)

    world.update(1.0)
    assert (pos.x, pos.y) == pytest.approx((200.0, 150.0))
    assert movement.is_moving

    world.update(1.0)
    assert (pos.x, pos.y) == (200.0, 150.0)
    assert not movement.is_moving
    assert movement.phase is MovementPhase.ARRIVING
    assert movement.phase_timer == 0.0


def test_idle_movement_does_not_move(world):
    world.add_system(MovementSystem, world)
    npc = world.create_entity()
    pos = world.add_component(npc, PositionComponent, 5.0, 6.0)
    world.add_component(npc, Movement, 100.0)
    world.update(1.0)
    assert (pos.x, pos.y) == (5.0, 6.0)


def test_movement_without_position_is_skipped(world):
    world.add_system(MovementSystem, world)
    npc = world.create_entity()
    movement = world.add_component(npc, Movement, 100.0)
    movement.set_target(10.0, 10.0)
    world.update(1.0)
    assert movement.is_moving
    assert movement.phase is MovementPhase.MOVING