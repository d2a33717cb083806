"""Conversion of orders, vectors and enum labels to and from JSON-ready values.

JSON values here are the plain Python values produced and consumed by the
standard json module: dicts, lists, strings, numbers and booleans. Decoding
problems raise ValueError.
"""

from __future__ import annotations

from typing import Any, Dict

from stellarsim.game_state import (
    INVALID_ID,
    BodyType,
    EventCategory,
    EventLevel,
    ShipRole,
    Vec2,
)
from stellarsim.orders import (
    AttackShip,
    LoadMineral,
    MoveToBody,
    MoveToPoint,
    OrbitBody,
    Order,
    ScrapShip,
    TransferCargoToShip,
    TravelViaJump,
    UnloadMineral,
    WaitDays,
)

_BODY_TYPE_NAMES = {
    BodyType.STAR: "star",
    BodyType.PLANET: "planet",
    BodyType.MOON: "moon",
    BodyType.ASTEROID: "asteroid",
    BodyType.GAS_GIANT: "gas_giant",
}
_BODY_TYPES_BY_NAME = {name: kind for kind, name in _BODY_TYPE_NAMES.items()}

_SHIP_ROLE_NAMES = {
    ShipRole.FREIGHTER: "freighter",
    ShipRole.SURVEYOR: "surveyor",
    ShipRole.COMBATANT: "combatant",
}
_SHIP_ROLES_BY_NAME = {name: role for role, name in _SHIP_ROLE_NAMES.items()}

_EVENT_LEVEL_NAMES = {
    EventLevel.INFO: "info",
    EventLevel.WARN: "warn",
    EventLevel.ERROR: "error",
}
_EVENT_LEVELS_BY_NAME = {name: level for level, name in _EVENT_LEVEL_NAMES.items()}

_EVENT_CATEGORY_NAMES = {
    EventCategory.GENERAL: "general",
    EventCategory.RESEARCH: "research",
    EventCategory.SHIPYARD: "shipyard",
    EventCategory.CONSTRUCTION: "construction",
    EventCategory.MOVEMENT: "movement",
    EventCategory.COMBAT: "combat",
    EventCategory.INTEL: "intel",
    EventCategory.EXPLORATION: "exploration",
}
_EVENT_CATEGORIES_BY_NAME = {name: cat for cat, name in _EVENT_CATEGORY_NAMES.items()}


# --- helpers for reading loosely typed JSON values ---

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_object(value: Any) -> Dict[str, Any]:
    """The value as a JSON object, or ValueError."""
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return value


def require(obj: Dict[str, Any], key: str) -> Any:
    """The member named key, or ValueError when it is missing."""
    try:
        return obj[key]
    except KeyError:
        raise ValueError(f"missing key: {key!r}") from None


def number_value(value: Any, default: float = 0.0) -> float:
    return float(value) if _is_number(value) else default


def int_value(value: Any, default: int = 0) -> int:
    return int(value) if _is_number(value) else default


def string_value(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def bool_value(value: Any, default: bool = False) -> bool:
    return value if isinstance(value, bool) else default


# --- vectors and enum labels ---

def vec2_to_json(v: Vec2) -> Dict[str, float]:
    return {"x": v.x, "y": v.y}


def vec2_from_json(value: Any) -> Vec2:
    obj = as_object(value)
    return Vec2(number_value(require(obj, "x")), number_value(require(obj, "y")))


def body_type_to_string(body_type: BodyType) -> str:
    return _BODY_TYPE_NAMES.get(body_type, "planet")


def body_type_from_string(text: str) -> BodyType:
    """Unknown labels read as a planet."""
    return _BODY_TYPES_BY_NAME.get(text, BodyType.PLANET)


def ship_role_to_string(role: ShipRole) -> str:
    return _SHIP_ROLE_NAMES.get(role, "unknown")


def ship_role_from_string(text: str) -> ShipRole:
    return _SHIP_ROLES_BY_NAME.get(text, ShipRole.UNKNOWN)


def event_level_to_string(level: EventLevel) -> str:
    return _EVENT_LEVEL_NAMES.get(level, "info")


def event_level_from_string(text: str) -> EventLevel:
    return _EVENT_LEVELS_BY_NAME.get(text, EventLevel.INFO)


def event_category_to_string(category: EventCategory) -> str:
    return _EVENT_CATEGORY_NAMES.get(category, "general")


def event_category_from_string(text: str) -> EventCategory:
    return _EVENT_CATEGORIES_BY_NAME.get(text, EventCategory.GENERAL)


# --- orders ---

def _with_cargo(obj: Dict[str, Any], mineral: str, tons: float) -> Dict[str, Any]:
    if mineral:
        obj["mineral"] = mineral
    obj["tons"] = tons
    return obj


def order_to_json(order: Order) -> Dict[str, Any]:
    """Encode an order as a JSON object tagged by its "type" member."""
    if isinstance(order, MoveToPoint):
        return {"type": "move_to_point", "target": vec2_to_json(order.target_mkm)}
    if isinstance(order, MoveToBody):
        return {"type": "move_to_body", "body_id": order.body_id}
    if isinstance(order, OrbitBody):
        return {"type": "orbit_body", "body_id": order.body_id, "duration_days": order.duration_days}
    if isinstance(order, TravelViaJump):
        return {"type": "travel_via_jump", "jump_point_id": order.jump_point_id}
    if isinstance(order, AttackShip):
        obj: Dict[str, Any] = {"type": "attack_ship", "target_ship_id": order.target_ship_id}
        if order.has_last_known:
            obj["has_last_known"] = True
            obj["last_known_position_mkm"] = vec2_to_json(order.last_known_position_mkm)
        return obj
    if isinstance(order, WaitDays):
        return {"type": "wait_days", "days_remaining": order.days_remaining}
    if isinstance(order, LoadMineral):
        return _with_cargo({"type": "load_mineral", "colony_id": order.colony_id}, order.mineral, order.tons)
    if isinstance(order, UnloadMineral):
        return _with_cargo({"type": "unload_mineral", "colony_id": order.colony_id}, order.mineral, order.tons)
    if isinstance(order, TransferCargoToShip):
        return _with_cargo(
            {"type": "transfer_cargo_to_ship", "target_ship_id": order.target_ship_id},
            order.mineral,
            order.tons,
        )
    if isinstance(order, ScrapShip):
        return {"type": "scrap_ship", "colony_id": order.colony_id}
    raise TypeError(f"not an order: {type(order).__name__}")


def _cargo_fields(obj: Dict[str, Any]) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    if "mineral" in obj:
        fields["mineral"] = string_value(obj["mineral"])
    if "tons" in obj:
        fields["tons"] = number_value(obj["tons"], 0.0)
    return fields


def order_from_json(value: Any) -> Order:
    """Decode an order object; ValueError on an unknown type or a missing member."""
    obj = as_object(value)
    kind = string_value(require(obj, "type"))

    if kind == "move_to_point":
        return MoveToPoint(target_mkm=vec2_from_json(require(obj, "target")))
    if kind == "move_to_body":
        return MoveToBody(body_id=int_value(require(obj, "body_id")))
    if kind == "orbit_body":
        return OrbitBody(
            body_id=int_value(require(obj, "body_id")),
            duration_days=int_value(require(obj, "duration_days"), -1),
        )
    if kind == "travel_via_jump":
        return TravelViaJump(jump_point_id=int_value(require(obj, "jump_point_id")))
    if kind == "attack_ship":
        attack = AttackShip(target_ship_id=int_value(require(obj, "target_ship_id")))
        if "last_known_position_mkm" in obj:
            attack.last_known_position_mkm = vec2_from_json(obj["last_known_position_mkm"])
            attack.has_last_known = True
        if "has_last_known" in obj:
            attack.has_last_known = bool_value(obj["has_last_known"], attack.has_last_known)
        return attack
    if kind == "wait_days":
        if "days_remaining" in obj:
            return WaitDays(days_remaining=int_value(obj["days_remaining"], 0))
        if "days" in obj:
            return WaitDays(days_remaining=int_value(obj["days"], 0))
        return WaitDays()
    if kind == "load_mineral":
        return LoadMineral(colony_id=int_value(require(obj, "colony_id"), INVALID_ID), **_cargo_fields(obj))
    if kind == "unload_mineral":
        return UnloadMineral(colony_id=int_value(require(obj, "colony_id"), INVALID_ID), **_cargo_fields(obj))
    if kind == "transfer_cargo_to_ship":
        return TransferCargoToShip(
            target_ship_id=int_value(require(obj, "target_ship_id"), INVALID_ID), **_cargo_fields(obj)
        )
    if kind == "scrap_ship":
        return ScrapShip(colony_id=int_value(require(obj, "colony_id"), INVALID_ID))
    raise ValueError("Unknown order type: " + kind)