from collections import deque

import pytest

from stellarsim.date import Date
from stellarsim.game_state import BodyType, Vec2
from stellarsim.orders import ShipOrders
from stellarsim.scenario import make_random_scenario, make_sol_scenario


def _by_name(mapping):
    return {entry.name: entry for entry in mapping.values()}


def _reachable_systems(state, start):
    seen = {start}
    queue = deque([start])
    while queue:
        sys_id = queue.popleft()
        for jp_id in state.systems[sys_id].jump_points:
            linked = state.jump_points[state.jump_points[jp_id].linked_jump_id]
            if linked.system_id not in seen:
                seen.add(linked.system_id)
                queue.append(linked.system_id)
    return seen


def test_sol_header_fields():
    state = make_sol_scenario()
    assert state.save_version == 12
    assert state.date == Date.from_ymd(2200, 1, 1)
    assert state.date.to_string() == "2200-01-01"


def test_sol_system_and_faction_names():
    state = make_sol_scenario()
    assert set(_by_name(state.systems)) == {"Sol", "Alpha Centauri", "Barnard's Star"}
    assert set(_by_name(state.factions)) == {"Terran Union", "Pirate Raiders"}
    assert state.systems[state.selected_system].name == "Sol"


def test_sol_bodies_listed_in_their_systems():
    state = make_sol_scenario()
    assert set(_by_name(state.bodies)) == {
        "Sun", "Earth", "Mars", "Jupiter", "Alpha Centauri A", "Centauri Prime", "Barnard's Star", "Barnard b",
    }
    for body_id, body in state.bodies.items():
        assert body_id in state.systems[body.system_id].bodies
    listed = sorted(b for s in state.systems.values() for b in s.bodies)
    assert listed == sorted(state.bodies)
    assert _by_name(state.bodies)["Jupiter"].type == BodyType.GAS_GIANT


def test_sol_jump_points_are_linked_pairs():
    state = make_sol_scenario()
    for jp_id, jp in state.jump_points.items():
        other = state.jump_points[jp.linked_jump_id]
        assert other.linked_jump_id == jp_id
        assert other.system_id != jp.system_id
        assert jp_id in state.systems[jp.system_id].jump_points
    assert _reachable_systems(state, state.selected_system) == set(state.systems)


def test_sol_colonies():
    state = make_sol_scenario()
    colonies = _by_name(state.colonies)
    earth = colonies["Earth"]
    assert earth.population_millions == 8500.0
    assert earth.minerals == {"Duranium": 10000.0, "Neutronium": 1500.0}
    assert earth.installations["research_lab"] == 20
    assert state.bodies[earth.body_id].name == "Earth"
    mars = colonies["Mars Outpost"]
    assert state.bodies[mars.body_id].name == "Mars"
    assert mars.faction_id == earth.faction_id
    assert state.factions[earth.faction_id].name == "Terran Union"


def test_sol_ships_have_empty_orders_and_positions():
    state = make_sol_scenario()
    ships = _by_name(state.ships)
    assert ships["Escort Gamma"].position_mkm == Vec2(149.6, -0.8)
    assert ships["Raider I"].position_mkm == Vec2(80.0, 0.5)
    assert state.systems[ships["Raider II"].system_id].name == "Alpha Centauri"
    for ship_id, ship in state.ships.items():
        assert state.ship_orders[ship_id] == ShipOrders()
        assert ship_id in state.systems[ship.system_id].ships


def test_sol_next_id_beyond_all_ids():
    state = make_sol_scenario()
    all_ids = (
        list(state.systems) + list(state.bodies) + list(state.jump_points)
        + list(state.ships) + list(state.colonies) + list(state.factions)
    )
    assert len(all_ids) == len(set(all_ids))
    assert state.next_id == max(all_ids) + 1


def test_random_is_deterministic():
    a = make_random_scenario(42, 12)
    b = make_random_scenario(42, 12)
    assert len(a.systems) == 12
    assert [s.galaxy_pos for s in a.systems.values()] == [s.galaxy_pos for s in b.systems.values()]
    assert [jp.position_mkm for jp in a.jump_points.values()] == [
        jp.position_mkm for jp in b.jump_points.values()
    ]
    assert sorted(a.bodies) == sorted(b.bodies)
    assert a.next_id == b.next_id


def test_random_seeds_differ():
    a = make_random_scenario(1, 12)
    b = make_random_scenario(2, 12)
    assert [s.galaxy_pos for s in a.systems.values()] != [s.galaxy_pos for s in b.systems.values()]
    assert len(a.systems) == len(b.systems)


@pytest.mark.parametrize("requested,expected", [(0, 1), (-5, 1), (100, 64), (7, 7)])
def test_random_system_count_is_clamped(requested, expected):
    state = make_random_scenario(3, requested)
    assert len(state.systems) == expected


@pytest.mark.parametrize("seed", [1, 5, 99])
def test_random_galaxy_connected_and_links_symmetric(seed):
    num = 20
    state = make_random_scenario(seed, num)
    for jp_id, jp in state.jump_points.items():
        assert state.jump_points[jp.linked_jump_id].linked_jump_id == jp_id
    edges = len(state.jump_points) // 2
    assert len(state.jump_points) % 2 == 0
    assert num - 1 <= edges <= num - 1 + num // 3
    assert _reachable_systems(state, state.selected_system) == set(state.systems)


@pytest.mark.parametrize("seed", [1, 8, 1234])
def test_random_system_layout(seed):
    state = make_random_scenario(seed, 12)
    for index, system in enumerate(sorted(state.systems.values(), key=lambda s: s.id), start=1):
        assert system.name == f"System {index}"
        stars = [b for b in system.bodies if state.bodies[b].type == BodyType.STAR]
        assert len(stars) == 1
        planets = len(system.bodies) - 1
        assert 1 <= planets <= 4
        for body_id in system.bodies:
            body = state.bodies[body_id]
            if body.type != BodyType.STAR:
                assert body.orbit_radius_mkm >= 10.0
                assert body.orbit_period_days >= 20.0
        for jp_id in system.jump_points:
            jp = state.jump_points[jp_id]
            radius = (jp.position_mkm.x ** 2 + jp.position_mkm.y ** 2) ** 0.5
            assert 120.0 - 1e-9 <= radius <= 220.0 + 1e-9
            target = state.systems[state.jump_points[jp.linked_jump_id].system_id]
            assert jp.name == "JP to " + target.name


def test_random_homeworld_and_fleet():
    state = make_random_scenario(7, 10)
    colony = _by_name(state.colonies)["Homeworld"]
    body = state.bodies[colony.body_id]
    assert body.system_id == state.selected_system
    assert body.orbit_phase_radians == 0.0
    ships = _by_name(state.ships)
    assert ships["Freighter Alpha"].position_mkm == Vec2(body.orbit_radius_mkm, 0.0)
    assert ships["Freighter Alpha"].system_id == state.selected_system
    raider = ships["Raider I"]
    assert raider.system_id != state.selected_system
    assert raider.position_mkm == Vec2(80.0, 0.5)
    pirates = _by_name(state.factions)["Pirate Raiders"]
    assert pirates.discovered_systems == [raider.system_id]
    terrans = _by_name(state.factions)["Terran Union"]
    assert terrans.discovered_systems == [state.selected_system]


def test_random_single_system_keeps_one_raider_at_home():
    state = make_random_scenario(11, 1)
    ships = _by_name(state.ships)
    assert "Raider II" not in ships
    home_pos = ships["Freighter Alpha"].position_mkm
    assert ships["Raider I"].position_mkm == home_pos + Vec2(10.0, 10.0)
    assert ships["Raider I"].system_id == state.selected_system
    assert state.jump_points == {}
    assert set(state.ship_orders) == set(state.ships)