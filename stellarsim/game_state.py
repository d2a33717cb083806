"""The world model: systems, bodies, ships, colonies, factions and events."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List

from stellarsim.date import Date

if TYPE_CHECKING:
    from stellarsim.orders import ShipOrders

INVALID_ID = 0
_ID_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)


class BodyType(Enum):
    STAR = 0
    PLANET = 1
    MOON = 2
    ASTEROID = 3
    GAS_GIANT = 4


class ShipRole(Enum):
    FREIGHTER = 0
    SURVEYOR = 1
    COMBATANT = 2
    UNKNOWN = 3


class EventLevel(Enum):
    INFO = 0
    WARN = 1
    ERROR = 2


class EventCategory(Enum):
    GENERAL = 0
    RESEARCH = 1
    SHIPYARD = 2
    CONSTRUCTION = 3
    MOVEMENT = 4
    COMBAT = 5
    INTEL = 6
    EXPLORATION = 7


@dataclass
class StarSystem:
    id: int = INVALID_ID
    name: str = ""
    galaxy_pos: Vec2 = field(default_factory=Vec2)
    bodies: List[int] = field(default_factory=list)
    ships: List[int] = field(default_factory=list)
    jump_points: List[int] = field(default_factory=list)


@dataclass
class Body:
    id: int = INVALID_ID
    name: str = ""
    type: BodyType = BodyType.PLANET
    system_id: int = INVALID_ID
    orbit_radius_mkm: float = 0.0
    orbit_period_days: float = 0.0
    orbit_phase_radians: float = 0.0
    position_mkm: Vec2 = field(default_factory=Vec2)


@dataclass
class JumpPoint:
    id: int = INVALID_ID
    name: str = ""
    system_id: int = INVALID_ID
    position_mkm: Vec2 = field(default_factory=Vec2)
    linked_jump_id: int = INVALID_ID


@dataclass
class Ship:
    id: int = INVALID_ID
    name: str = ""
    faction_id: int = INVALID_ID
    system_id: int = INVALID_ID
    position_mkm: Vec2 = field(default_factory=Vec2)
    design_id: str = ""
    speed_km_s: float = 0.0
    hp: float = 0.0
    cargo: Dict[str, float] = field(default_factory=dict)


@dataclass
class BuildOrder:
    design_id: str = ""
    tons_remaining: float = 0.0


@dataclass
class InstallationBuildOrder:
    installation_id: str = ""
    quantity_remaining: int = 0
    minerals_paid: bool = False
    cp_remaining: float = 0.0


@dataclass
class Colony:
    id: int = INVALID_ID
    name: str = ""
    faction_id: int = INVALID_ID
    body_id: int = INVALID_ID
    population_millions: float = 0.0
    minerals: Dict[str, float] = field(default_factory=dict)
    installations: Dict[str, int] = field(default_factory=dict)
    shipyard_queue: List[BuildOrder] = field(default_factory=list)
    construction_queue: List[InstallationBuildOrder] = field(default_factory=list)


@dataclass
class Contact:
    ship_id: int = INVALID_ID
    system_id: int = INVALID_ID
    last_seen_day: int = 0
    last_seen_position_mkm: Vec2 = field(default_factory=Vec2)
    last_seen_name: str = ""
    last_seen_design_id: str = ""
    last_seen_faction_id: int = INVALID_ID


@dataclass
class Faction:
    id: int = INVALID_ID
    name: str = ""
    research_points: float = 0.0
    active_research_id: str = ""
    active_research_progress: float = 0.0
    research_queue: List[str] = field(default_factory=list)
    known_techs: List[str] = field(default_factory=list)
    unlocked_components: List[str] = field(default_factory=list)
    unlocked_installations: List[str] = field(default_factory=list)
    discovered_systems: List[int] = field(default_factory=list)
    ship_contacts: Dict[int, Contact] = field(default_factory=dict)


@dataclass
class ShipDesign:
    id: str = ""
    name: str = ""
    role: ShipRole = ShipRole.UNKNOWN
    components: List[str] = field(default_factory=list)
    mass_tons: float = 0.0
    speed_km_s: float = 0.0
    cargo_tons: float = 0.0
    sensor_range_mkm: float = 0.0
    max_hp: float = 0.0
    weapon_damage: float = 0.0
    weapon_range_mkm: float = 0.0


@dataclass
class SimEvent:
    seq: int = 0
    day: int = 0
    level: EventLevel = EventLevel.INFO
    category: EventCategory = EventCategory.GENERAL
    faction_id: int = INVALID_ID
    faction_id2: int = INVALID_ID
    system_id: int = INVALID_ID
    ship_id: int = INVALID_ID
    colony_id: int = INVALID_ID
    message: str = ""


@dataclass
class GameState:
    save_version: int = 1
    date: Date = field(default_factory=Date)
    next_id: int = 1
    next_event_seq: int = 1
    selected_system: int = INVALID_ID
    systems: Dict[int, StarSystem] = field(default_factory=dict)
    bodies: Dict[int, Body] = field(default_factory=dict)
    jump_points: Dict[int, JumpPoint] = field(default_factory=dict)
    ships: Dict[int, Ship] = field(default_factory=dict)
    colonies: Dict[int, Colony] = field(default_factory=dict)
    factions: Dict[int, Faction] = field(default_factory=dict)
    custom_designs: Dict[str, ShipDesign] = field(default_factory=dict)
    ship_orders: Dict[int, "ShipOrders"] = field(default_factory=dict)
    events: List[SimEvent] = field(default_factory=list)


def allocate_id(state: GameState) -> int:
    """Hand out the next entity id, never returning the invalid id."""
    new_id = state.next_id
    state.next_id = (state.next_id + 1) & _ID_MASK
    if state.next_id == INVALID_ID:
        state.next_id += 1
    return new_id