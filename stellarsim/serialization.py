"""Saving and loading a whole game state as JSON text."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List

from stellarsim.date import Date
from stellarsim.game_state import (
    INVALID_ID,
    Body,
    BuildOrder,
    Colony,
    Contact,
    Faction,
    GameState,
    InstallationBuildOrder,
    JumpPoint,
    Ship,
    ShipDesign,
    SimEvent,
    StarSystem,
)
from stellarsim.order_codec import (
    as_object,
    body_type_from_string,
    body_type_to_string,
    bool_value,
    event_category_from_string,
    event_category_to_string,
    event_level_from_string,
    event_level_to_string,
    int_value,
    number_value,
    order_from_json,
    order_to_json,
    require,
    ship_role_from_string,
    ship_role_to_string,
    string_value,
    vec2_from_json,
    vec2_to_json,
)
from stellarsim.orders import Order, ShipOrders

logger = logging.getLogger(__name__)

CURRENT_SAVE_VERSION = 12
_MAX_DETAIL_LOGS = 8


def _as_array(value: Any) -> List[Any]:
    if not isinstance(value, list):
        raise ValueError(f"expected a JSON array, got {type(value).__name__}")
    return value


def _sorted_unique(values: Iterable[Any]) -> List[Any]:
    return sorted(set(values))


def _strings_from_json(value: Any) -> List[str]:
    return [string_value(item) for item in _as_array(value)]


def _float_map_from_json(value: Any) -> Dict[str, float]:
    return {key: number_value(item) for key, item in as_object(value).items()}


def _int_map_from_json(value: Any) -> Dict[str, int]:
    return {key: int_value(item) for key, item in as_object(value).items()}


# --- writing ---

def _system_to_json(sys: StarSystem) -> Dict[str, Any]:
    return {
        "id": sys.id,
        "name": sys.name,
        "galaxy_pos": vec2_to_json(sys.galaxy_pos),
        "bodies": sorted(sys.bodies),
        "ships": sorted(sys.ships),
        "jump_points": sorted(sys.jump_points),
    }


def _body_to_json(body: Body) -> Dict[str, Any]:
    return {
        "id": body.id,
        "name": body.name,
        "type": body_type_to_string(body.type),
        "system_id": body.system_id,
        "orbit_radius_mkm": body.orbit_radius_mkm,
        "orbit_period_days": body.orbit_period_days,
        "orbit_phase_radians": body.orbit_phase_radians,
    }


def _jump_point_to_json(jp: JumpPoint) -> Dict[str, Any]:
    return {
        "id": jp.id,
        "name": jp.name,
        "system_id": jp.system_id,
        "position_mkm": vec2_to_json(jp.position_mkm),
        "linked_jump_id": jp.linked_jump_id,
    }


def _ship_to_json(ship: Ship) -> Dict[str, Any]:
    return {
        "id": ship.id,
        "name": ship.name,
        "faction_id": ship.faction_id,
        "system_id": ship.system_id,
        "position_mkm": vec2_to_json(ship.position_mkm),
        "design_id": ship.design_id,
        "speed_km_s": ship.speed_km_s,
        "hp": ship.hp,
        "cargo": dict(ship.cargo),
    }


def _colony_to_json(colony: Colony) -> Dict[str, Any]:
    return {
        "id": colony.id,
        "name": colony.name,
        "faction_id": colony.faction_id,
        "body_id": colony.body_id,
        "population_millions": colony.population_millions,
        "minerals": dict(colony.minerals),
        "installations": dict(colony.installations),
        "shipyard_queue": [
            {"design_id": bo.design_id, "tons_remaining": bo.tons_remaining} for bo in colony.shipyard_queue
        ],
        "construction_queue": [
            {
                "installation_id": ord_.installation_id,
                "quantity_remaining": ord_.quantity_remaining,
                "minerals_paid": ord_.minerals_paid,
                "cp_remaining": ord_.cp_remaining,
            }
            for ord_ in colony.construction_queue
        ],
    }


def _contact_to_json(contact: Contact) -> Dict[str, Any]:
    return {
        "ship_id": contact.ship_id,
        "system_id": contact.system_id,
        "last_seen_day": contact.last_seen_day,
        "last_seen_position_mkm": vec2_to_json(contact.last_seen_position_mkm),
        "last_seen_name": contact.last_seen_name,
        "last_seen_design_id": contact.last_seen_design_id,
        "last_seen_faction_id": contact.last_seen_faction_id,
    }


def _faction_to_json(faction: Faction) -> Dict[str, Any]:
    return {
        "id": faction.id,
        "name": faction.name,
        "research_points": faction.research_points,
        "active_research_id": faction.active_research_id,
        "active_research_progress": faction.active_research_progress,
        "research_queue": list(faction.research_queue),
        "known_techs": _sorted_unique(faction.known_techs),
        "unlocked_components": _sorted_unique(faction.unlocked_components),
        "unlocked_installations": _sorted_unique(faction.unlocked_installations),
        "discovered_systems": _sorted_unique(faction.discovered_systems),
        "ship_contacts": [_contact_to_json(faction.ship_contacts[sid]) for sid in sorted(faction.ship_contacts)],
    }


def _design_to_json(design: ShipDesign) -> Dict[str, Any]:
    return {
        "id": design.id,
        "name": design.name,
        "role": ship_role_to_string(design.role),
        "components": list(design.components),
        "mass_tons": design.mass_tons,
        "speed_km_s": design.speed_km_s,
        "cargo_tons": design.cargo_tons,
        "sensor_range_mkm": design.sensor_range_mkm,
        "max_hp": design.max_hp,
        "weapon_damage": design.weapon_damage,
        "weapon_range_mkm": design.weapon_range_mkm,
    }


def _event_to_json(ev: SimEvent) -> Dict[str, Any]:
    return {
        "seq": ev.seq,
        "day": ev.day,
        "level": event_level_to_string(ev.level),
        "category": event_category_to_string(ev.category),
        "faction_id": ev.faction_id,
        "faction_id2": ev.faction_id2,
        "system_id": ev.system_id,
        "ship_id": ev.ship_id,
        "colony_id": ev.colony_id,
        "message": ev.message,
    }


def serialize_game_to_json(state: GameState) -> str:
    """Canonical, pretty-printed JSON text for a game state."""
    root: Dict[str, Any] = {
        "save_version": state.save_version,
        "date": state.date.to_string(),
        "next_id": state.next_id,
        "next_event_seq": state.next_event_seq,
        "selected_system": state.selected_system,
        "systems": [_system_to_json(state.systems[i]) for i in sorted(state.systems)],
        "bodies": [_body_to_json(state.bodies[i]) for i in sorted(state.bodies)],
        "jump_points": [_jump_point_to_json(state.jump_points[i]) for i in sorted(state.jump_points)],
        "ships": [_ship_to_json(state.ships[i]) for i in sorted(state.ships)],
        "colonies": [_colony_to_json(state.colonies[i]) for i in sorted(state.colonies)],
        "factions": [_faction_to_json(state.factions[i]) for i in sorted(state.factions)],
        "custom_designs": [_design_to_json(state.custom_designs[i]) for i in sorted(state.custom_designs)],
        "ship_orders": [
            {
                "ship_id": ship_id,
                "queue": [order_to_json(o) for o in state.ship_orders[ship_id].queue],
                "repeat": state.ship_orders[ship_id].repeat,
                "repeat_template": [order_to_json(o) for o in state.ship_orders[ship_id].repeat_template],
            }
            for ship_id in sorted(state.ship_orders)
        ],
        "events": [_event_to_json(ev) for ev in state.events],
    }
    return json.dumps(root, indent=2, sort_keys=True, ensure_ascii=False)


# --- reading ---

def _system_from_json(value: Any) -> StarSystem:
    obj = as_object(value)
    sys = StarSystem(
        id=int_value(require(obj, "id")),
        name=string_value(require(obj, "name")),
        galaxy_pos=vec2_from_json(require(obj, "galaxy_pos")),
        bodies=[int_value(v) for v in _as_array(require(obj, "bodies"))],
        ships=[int_value(v) for v in _as_array(require(obj, "ships"))],
    )
    if "jump_points" in obj:
        sys.jump_points = [int_value(v) for v in _as_array(obj["jump_points"])]
    return sys


def _body_from_json(value: Any) -> Body:
    obj = as_object(value)
    return Body(
        id=int_value(require(obj, "id")),
        name=string_value(require(obj, "name")),
        type=body_type_from_string(string_value(require(obj, "type"))),
        system_id=int_value(require(obj, "system_id")),
        orbit_radius_mkm=number_value(require(obj, "orbit_radius_mkm")),
        orbit_period_days=number_value(require(obj, "orbit_period_days")),
        orbit_phase_radians=number_value(require(obj, "orbit_phase_radians")),
    )


def _jump_point_from_json(value: Any) -> JumpPoint:
    obj = as_object(value)
    return JumpPoint(
        id=int_value(require(obj, "id")),
        name=string_value(require(obj, "name")),
        system_id=int_value(require(obj, "system_id")),
        position_mkm=vec2_from_json(require(obj, "position_mkm")),
        linked_jump_id=int_value(require(obj, "linked_jump_id"), INVALID_ID),
    )


def _ship_from_json(value: Any) -> Ship:
    obj = as_object(value)
    ship = Ship(
        id=int_value(require(obj, "id")),
        name=string_value(require(obj, "name")),
        faction_id=int_value(require(obj, "faction_id")),
        system_id=int_value(require(obj, "system_id")),
        position_mkm=vec2_from_json(require(obj, "position_mkm")),
        design_id=string_value(require(obj, "design_id")),
        speed_km_s=number_value(require(obj, "speed_km_s"), 0.0),
        hp=number_value(require(obj, "hp"), 0.0),
    )
    if "cargo" in obj:
        ship.cargo = _float_map_from_json(obj["cargo"])
    return ship


def _colony_from_json(value: Any) -> Colony:
    obj = as_object(value)
    colony = Colony(
        id=int_value(require(obj, "id")),
        name=string_value(require(obj, "name")),
        faction_id=int_value(require(obj, "faction_id")),
        body_id=int_value(require(obj, "body_id")),
        population_millions=number_value(require(obj, "population_millions")),
        minerals=_float_map_from_json(require(obj, "minerals")),
        installations=_int_map_from_json(require(obj, "installations")),
    )
    for item in _as_array(obj.get("shipyard_queue", [])):
        qo = as_object(item)
        colony.shipyard_queue.append(
            BuildOrder(
                design_id=string_value(require(qo, "design_id")),
                tons_remaining=number_value(require(qo, "tons_remaining")),
            )
        )
    for item in _as_array(obj.get("construction_queue", [])):
        qo = as_object(item)
        order = InstallationBuildOrder(
            installation_id=string_value(require(qo, "installation_id")),
            quantity_remaining=int_value(require(qo, "quantity_remaining"), 0),
        )
        if "minerals_paid" in qo:
            order.minerals_paid = bool_value(qo["minerals_paid"], False)
        if "cp_remaining" in qo:
            order.cp_remaining = number_value(qo["cp_remaining"], 0.0)
        colony.construction_queue.append(order)
    return colony


def _contact_from_json(value: Any) -> Contact:
    obj = as_object(value)
    contact = Contact(
        ship_id=int_value(require(obj, "ship_id")),
        system_id=int_value(require(obj, "system_id"), INVALID_ID),
        last_seen_day=int_value(require(obj, "last_seen_day"), 0),
    )
    if "last_seen_position_mkm" in obj:
        contact.last_seen_position_mkm = vec2_from_json(obj["last_seen_position_mkm"])
    if "last_seen_name" in obj:
        contact.last_seen_name = string_value(obj["last_seen_name"])
    if "last_seen_design_id" in obj:
        contact.last_seen_design_id = string_value(obj["last_seen_design_id"])
    if "last_seen_faction_id" in obj:
        contact.last_seen_faction_id = int_value(obj["last_seen_faction_id"], INVALID_ID)
    return contact


def _faction_from_json(value: Any) -> Faction:
    obj = as_object(value)
    faction = Faction(
        id=int_value(require(obj, "id")),
        name=string_value(require(obj, "name")),
        research_points=number_value(require(obj, "research_points"), 0.0),
    )
    if "active_research_id" in obj:
        faction.active_research_id = string_value(obj["active_research_id"])
    if "active_research_progress" in obj:
        faction.active_research_progress = number_value(obj["active_research_progress"], 0.0)
    for key in ("research_queue", "known_techs", "unlocked_components", "unlocked_installations"):
        if key in obj:
            setattr(faction, key, _strings_from_json(obj[key]))
    if "discovered_systems" in obj:
        faction.discovered_systems = [int_value(v, INVALID_ID) for v in _as_array(obj["discovered_systems"])]
    for item in _as_array(obj.get("ship_contacts", [])):
        contact = _contact_from_json(item)
        if contact.ship_id != INVALID_ID:
            faction.ship_contacts[contact.ship_id] = contact
    return faction


def _design_from_json(value: Any) -> ShipDesign:
    obj = as_object(value)
    design = ShipDesign(
        id=string_value(require(obj, "id")),
        name=string_value(require(obj, "name")),
        role=ship_role_from_string(string_value(require(obj, "role"), "unknown")),
    )
    if "components" in obj:
        design.components = _strings_from_json(obj["components"])
    for key in (
        "mass_tons",
        "speed_km_s",
        "cargo_tons",
        "sensor_range_mkm",
        "max_hp",
        "weapon_damage",
        "weapon_range_mkm",
    ):
        setattr(design, key, number_value(require(obj, key), 0.0))
    return design


class _OrderLoader:
    """Reads ship order entries, dropping and counting the ones that cannot be read."""

    def __init__(self) -> None:
        self.dropped = 0
        self._detail_logs = 0

    def orders(self, value: Any, label: str, ship_id: int) -> List[Order]:
        if not isinstance(value, list):
            self.dropped += 1
            return []
        out: List[Order] = []
        for item in value:
            try:
                out.append(order_from_json(item))
            except (ValueError, TypeError) as exc:
                self.dropped += 1
                if self._detail_logs < _MAX_DETAIL_LOGS:
                    self._detail_logs += 1
                    logger.warning(
                        "Save load: dropped invalid order in '%s' for ship_id=%d: %s", label, ship_id, exc
                    )
        return out

    def load(self, entries: List[Any]) -> Dict[int, ShipOrders]:
        result: Dict[int, ShipOrders] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                self.dropped += 1
                continue
            ship_id = int_value(entry.get("ship_id"), INVALID_ID) if "ship_id" in entry else INVALID_ID
            if ship_id == INVALID_ID:
                self.dropped += 1
                continue
            orders = ShipOrders()
            if "queue" in entry:
                orders.queue = self.orders(entry["queue"], "queue", ship_id)
            if "repeat" in entry:
                orders.repeat = bool_value(entry["repeat"], False)
            if "repeat_template" in entry:
                orders.repeat_template = self.orders(entry["repeat_template"], "repeat_template", ship_id)
            result[ship_id] = orders
        if self.dropped > 0:
            logger.warning("Save load: dropped %d invalid ship order entries", self.dropped)
        return result


def _events_from_json(entries: List[Any]) -> List[SimEvent]:
    events: List[SimEvent] = []
    seq_cursor = 0
    for item in entries:
        obj = as_object(item)
        wanted = int_value(obj["seq"], 0) if "seq" in obj else 0
        if wanted <= seq_cursor:
            wanted = seq_cursor + 1
        seq_cursor = wanted

        ev = SimEvent(seq=wanted, day=int_value(require(obj, "day"), 0))
        if "level" in obj:
            ev.level = event_level_from_string(string_value(obj["level"], "info"))
        if "category" in obj:
            ev.category = event_category_from_string(string_value(obj["category"], "general"))
        for key in ("faction_id", "faction_id2", "system_id", "ship_id", "colony_id"):
            if key in obj:
                setattr(ev, key, int_value(obj[key], INVALID_ID))
        if "message" in obj:
            ev.message = string_value(obj["message"])
        events.append(ev)
    return events


def deserialize_game_from_json(json_text: str) -> GameState:
    """Build a game state from saved JSON text; ValueError when required data is missing or malformed."""
    root = as_object(json.loads(json_text))

    state = GameState()
    loaded_version = int_value(root["save_version"], 1) if "save_version" in root else 1
    state.save_version = max(loaded_version, CURRENT_SAVE_VERSION)

    state.date = Date.parse_iso_ymd(string_value(require(root, "date")))

    state.next_id = int_value(root["next_id"], 1) if "next_id" in root else 1
    state.next_event_seq = int_value(root["next_event_seq"], 1) if "next_event_seq" in root else 1
    if state.next_event_seq == 0:
        state.next_event_seq = 1
    if "selected_system" in root:
        state.selected_system = int_value(root["selected_system"], INVALID_ID)

    for item in _as_array(require(root, "systems")):
        sys = _system_from_json(item)
        state.systems[sys.id] = sys
    if state.selected_system != INVALID_ID and state.selected_system not in state.systems:
        state.selected_system = INVALID_ID

    for item in _as_array(require(root, "bodies")):
        body = _body_from_json(item)
        state.bodies[body.id] = body

    for item in _as_array(root.get("jump_points", [])):
        jp = _jump_point_from_json(item)
        state.jump_points[jp.id] = jp

    for item in _as_array(require(root, "ships")):
        ship = _ship_from_json(item)
        state.ships[ship.id] = ship

    for item in _as_array(require(root, "colonies")):
        colony = _colony_from_json(item)
        state.colonies[colony.id] = colony

    for item in _as_array(require(root, "factions")):
        faction = _faction_from_json(item)
        state.factions[faction.id] = faction

    for item in _as_array(root.get("custom_designs", [])):
        design = _design_from_json(item)
        state.custom_designs[design.id] = design

    if "ship_orders" in root:
        entries = root["ship_orders"]
        if not isinstance(entries, list):
            logger.warning("Save load: 'ship_orders' is not an array; ignoring")
        else:
            state.ship_orders = _OrderLoader().load(entries)

    if "events" in root:
        state.events = _events_from_json(_as_array(root["events"]))
        if state.events and state.next_event_seq <= state.events[-1].seq:
            state.next_event_seq = state.events[-1].seq + 1

    max_id = max(
        (
            *state.systems,
            *state.bodies,
            *state.jump_points,
            *state.ships,
            *state.colonies,
            *state.factions,
        ),
        default=0,
    )
    if state.next_id <= max_id:
        state.next_id = max_id + 1

    return state