"""Starting scenarios: the fixed Sol setup and a seeded random galaxy."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from stellarsim.date import Date
from stellarsim.game_state import (
    INVALID_ID,
    Body,
    BodyType,
    Colony,
    Faction,
    GameState,
    JumpPoint,
    Ship,
    StarSystem,
    Vec2,
    allocate_id,
)
from stellarsim.orders import ShipOrders

_SAVE_VERSION = 12
_TWO_PI = 2.0 * 3.14159265358979323846
_U32 = 0xFFFFFFFF
_TWO_32 = 4294967296.0


class _Mt19937Source:
    """A 32-bit Mersenne Twister seeded and sampled like the common C++ standard library.

    Real numbers follow generate_canonical<double, 53> (two draws per value) and
    integers follow the multiply-and-reject bounded sampling of that library.
    """

    def __init__(self, seed: int) -> None:
        words = [seed & _U32]
        for i in range(1, 624):
            prev = words[-1]
            words.append((1812433253 * (prev ^ (prev >> 30)) + i) & _U32)
        self._rng = random.Random()
        self._rng.setstate((3, tuple(words) + (624,), None))

    def next_u32(self) -> int:
        return self._rng.getrandbits(32)

    def uniform_real(self, lo: float, hi: float) -> float:
        total = float(self.next_u32())
        total += float(self.next_u32()) * _TWO_32
        canonical = total / (_TWO_32 * _TWO_32)
        if canonical >= 1.0:
            canonical = math.nextafter(1.0, 0.0)
        return canonical * (hi - lo) + lo

    def uniform_int(self, lo: int, hi: int) -> int:
        span = (hi - lo + 1) & _U32
        if span == 0:
            return lo + self.next_u32()
        product = self.next_u32() * span
        low = product & _U32
        if low < span:
            threshold = ((_TWO_32_INT - span) & _U32) % span
            while low < threshold:
                product = self.next_u32() * span
                low = product & _U32
        return lo + (product >> 32)


_TWO_32_INT = 1 << 32


def _add_terran_and_pirate_factions(state: GameState) -> Tuple[int, int]:
    terrans = allocate_id(state)
    state.factions[terrans] = Faction(
        id=terrans,
        name="Terran Union",
        research_points=0.0,
        known_techs=["chemistry_1"],
        research_queue=["nuclear_1", "propulsion_1"],
    )
    pirates = allocate_id(state)
    state.factions[pirates] = Faction(id=pirates, name="Pirate Raiders", research_points=0.0)
    return terrans, pirates


def _add_system(state: GameState, name: str, galaxy_pos: Vec2) -> int:
    system_id = allocate_id(state)
    state.systems[system_id] = StarSystem(id=system_id, name=name, galaxy_pos=galaxy_pos)
    return system_id


def _add_body(
    state: GameState,
    system_id: int,
    name: str,
    body_type: BodyType,
    radius_mkm: float,
    period_days: float,
    phase: float,
) -> int:
    body_id = allocate_id(state)
    state.bodies[body_id] = Body(
        id=body_id,
        name=name,
        type=body_type,
        system_id=system_id,
        orbit_radius_mkm=radius_mkm,
        orbit_period_days=period_days,
        orbit_phase_radians=phase,
    )
    state.systems[system_id].bodies.append(body_id)
    return body_id


def _add_jump_point(state: GameState, jump_id: int, name: str, system_id: int, pos: Vec2, linked: int) -> None:
    state.jump_points[jump_id] = JumpPoint(
        id=jump_id, name=name, system_id=system_id, position_mkm=pos, linked_jump_id=linked
    )
    state.systems[system_id].jump_points.append(jump_id)


def _add_ship(state: GameState, faction_id: int, system_id: int, pos: Vec2, name: str, design_id: str) -> int:
    ship_id = allocate_id(state)
    state.ships[ship_id] = Ship(
        id=ship_id,
        name=name,
        faction_id=faction_id,
        system_id=system_id,
        design_id=design_id,
        position_mkm=pos,
    )
    state.ship_orders[ship_id] = ShipOrders()
    state.systems[system_id].ships.append(ship_id)
    return ship_id


def _homeworld_colony(colony_id: int, name: str, faction_id: int, body_id: int) -> Colony:
    return Colony(
        id=colony_id,
        name=name,
        faction_id=faction_id,
        body_id=body_id,
        population_millions=8500.0,
        minerals={"Duranium": 10000.0, "Neutronium": 1500.0},
        installations={
            "automated_mine": 50,
            "construction_factory": 5,
            "shipyard": 1,
            "research_lab": 20,
            "sensor_station": 1,
        },
    )


def _new_state() -> GameState:
    state = GameState()
    state.save_version = _SAVE_VERSION
    state.date = Date.from_ymd(2200, 1, 1)
    return state


def make_sol_scenario() -> GameState:
    """The hand-built starting game: Sol, Alpha Centauri and Barnard's Star."""
    state = _new_state()
    terrans, pirates = _add_terran_and_pirate_factions(state)

    sol = _add_system(state, "Sol", Vec2(0.0, 0.0))
    centauri = _add_system(state, "Alpha Centauri", Vec2(4.3, 0.0))
    barnard = _add_system(state, "Barnard's Star", Vec2(6.0, -1.4))
    state.selected_system = sol

    _add_body(state, sol, "Sun", BodyType.STAR, 0.0, 1.0, 0.0)
    earth = _add_body(state, sol, "Earth", BodyType.PLANET, 149.6, 365.25, 0.0)
    mars = _add_body(state, sol, "Mars", BodyType.PLANET, 227.9, 686.98, 1.0)
    _add_body(state, sol, "Jupiter", BodyType.GAS_GIANT, 778.5, 4332.6, 2.0)

    _add_body(state, centauri, "Alpha Centauri A", BodyType.STAR, 0.0, 1.0, 0.0)
    _add_body(state, centauri, "Centauri Prime", BodyType.PLANET, 110.0, 320.0, 0.4)

    _add_body(state, barnard, "Barnard's Star", BodyType.STAR, 0.0, 1.0, 0.0)
    _add_body(state, barnard, "Barnard b", BodyType.PLANET, 60.0, 233.0, 0.2)

    jp_sol = allocate_id(state)
    jp_cen = allocate_id(state)
    _add_jump_point(state, jp_sol, "Sol Jump Point", sol, Vec2(170.0, 0.0), jp_cen)
    _add_jump_point(state, jp_cen, "Centauri Jump Point", centauri, Vec2(80.0, 0.0), jp_sol)

    jp_cen2 = allocate_id(state)
    jp_bar = allocate_id(state)
    _add_jump_point(state, jp_cen2, "Centauri Outer Jump", centauri, Vec2(140.0, -35.0), jp_bar)
    _add_jump_point(state, jp_bar, "Barnard Jump Point", barnard, Vec2(55.0, 10.0), jp_cen2)

    earth_colony = allocate_id(state)
    state.colonies[earth_colony] = _homeworld_colony(earth_colony, "Earth", terrans, earth)

    mars_colony = allocate_id(state)
    state.colonies[mars_colony] = Colony(
        id=mars_colony,
        name="Mars Outpost",
        faction_id=terrans,
        body_id=mars,
        population_millions=250.0,
        minerals={"Duranium": 200.0, "Neutronium": 20.0},
        installations={"automated_mine": 5, "construction_factory": 1, "research_lab": 2},
    )

    earth_pos = Vec2(149.6, 0.0)
    _add_ship(state, terrans, sol, earth_pos, "Freighter Alpha", "freighter_alpha")
    _add_ship(state, terrans, sol, earth_pos + Vec2(0.0, 0.8), "Surveyor Beta", "surveyor_beta")
    _add_ship(state, terrans, sol, earth_pos + Vec2(0.0, -0.8), "Escort Gamma", "escort_gamma")

    pirate_pos = Vec2(80.0, 0.5)
    _add_ship(state, pirates, centauri, pirate_pos, "Raider I", "pirate_raider")
    _add_ship(state, pirates, centauri, pirate_pos + Vec2(0.7, -0.3), "Raider II", "pirate_raider")

    return state


@dataclass
class _SysInfo:
    id: int
    name: str
    star_body: int = INVALID_ID
    planet_bodies: List[int] = field(default_factory=list)


def make_random_scenario(seed: int, num_systems: int) -> GameState:
    """A seeded random galaxy of 1 to 64 systems joined into one jump network."""
    state = _new_state()
    num_systems = max(1, min(64, num_systems))
    rng = _Mt19937Source(seed)

    terrans, pirates = _add_terran_and_pirate_factions(state)

    systems: List[_SysInfo] = []
    spread = max(3.0, math.sqrt(float(num_systems)) * 2.5)

    for i in range(num_systems):
        name = f"System {i + 1}"
        x = rng.uniform_real(-spread, spread)
        y = rng.uniform_real(-spread, spread)
        sys_id = _add_system(state, name, Vec2(x, y))
        info = _SysInfo(id=sys_id, name=name)
        info.star_body = _add_body(state, sys_id, name + " Star", BodyType.STAR, 0.0, 1.0, 0.0)

        for p in range(rng.uniform_int(1, 4)):
            gas = rng.uniform_real(0.0, 1.0) < 0.20
            body_type = BodyType.GAS_GIANT if gas else BodyType.PLANET
            radius = max(10.0, 60.0 + p * 70.0 + rng.uniform_real(-12.0, 12.0))
            period = max(20.0, 120.0 + p * 260.0 + rng.uniform_real(-25.0, 25.0))
            phase = rng.uniform_real(0.0, _TWO_PI)
            if i == 0 and p == 0:
                phase = 0.0
            planet = _add_body(state, sys_id, f"{name} {p + 1}", body_type, radius, period, phase)
            info.planet_bodies.append(planet)

        systems.append(info)

    home_system = systems[0].id
    pirate_system = systems[-1].id if len(systems) > 1 else home_system
    state.selected_system = home_system

    state.factions[terrans].discovered_systems = [home_system]
    state.factions[pirates].discovered_systems = [pirate_system]

    edges: Set[Tuple[int, int]] = set()

    def random_jump_pos() -> Vec2:
        r = rng.uniform_real(120.0, 220.0)
        ang = rng.uniform_real(0.0, _TWO_PI)
        return Vec2(r * math.cos(ang), r * math.sin(ang))

    def add_jump_link(ai: int, bi: int) -> None:
        if ai == bi:
            return
        key = (min(ai, bi), max(ai, bi))
        if key in edges:
            return
        edges.add(key)
        a, b = systems[ai], systems[bi]
        jp_a = allocate_id(state)
        jp_b = allocate_id(state)
        _add_jump_point(state, jp_a, "JP to " + b.name, a.id, random_jump_pos(), jp_b)
        _add_jump_point(state, jp_b, "JP to " + a.name, b.id, random_jump_pos(), jp_a)

    for i in range(1, num_systems):
        add_jump_link(i, rng.uniform_int(0, i - 1))

    for _ in range(max(0, num_systems // 3)):
        a = rng.uniform_int(0, num_systems - 1)
        b = rng.uniform_int(0, num_systems - 1)
        add_jump_link(a, b)

    home = systems[0]
    homeworld_body = home.planet_bodies[0] if home.planet_bodies else home.star_body

    home_colony = allocate_id(state)
    state.colonies[home_colony] = _homeworld_colony(home_colony, "Homeworld", terrans, homeworld_body)

    home_pos = Vec2(0.0, 0.0)
    body = state.bodies.get(homeworld_body)
    if body is not None:
        home_pos = Vec2(
            body.orbit_radius_mkm * math.cos(body.orbit_phase_radians),
            body.orbit_radius_mkm * math.sin(body.orbit_phase_radians),
        )

    _add_ship(state, terrans, home_system, home_pos, "Freighter Alpha", "freighter_alpha")
    _add_ship(state, terrans, home_system, home_pos + Vec2(0.0, 0.8), "Surveyor Beta", "surveyor_beta")
    _add_ship(state, terrans, home_system, home_pos + Vec2(0.0, -0.8), "Escort Gamma", "escort_gamma")

    pirate_pos = Vec2(80.0, 0.5)
    if pirate_system != home_system:
        _add_ship(state, pirates, pirate_system, pirate_pos, "Raider I", "pirate_raider")
        _add_ship(state, pirates, pirate_system, pirate_pos + Vec2(0.7, -0.3), "Raider II", "pirate_raider")
    else:
        _add_ship(state, pirates, pirate_system, home_pos + Vec2(10.0, 10.0), "Raider I", "pirate_raider")

    return state