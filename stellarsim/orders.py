"""Ship orders and order queues."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from stellarsim.game_state import INVALID_ID, Vec2


def _num(value: float) -> str:
    return f"{value:g}"


@dataclass
class MoveToPoint:
    target_mkm: Vec2 = field(default_factory=Vec2)


@dataclass
class MoveToBody:
    body_id: int = INVALID_ID


@dataclass
class OrbitBody:
    body_id: int = INVALID_ID
    duration_days: int = -1


@dataclass
class TravelViaJump:
    jump_point_id: int = INVALID_ID


@dataclass
class AttackShip:
    target_ship_id: int = INVALID_ID
    has_last_known: bool = False
    last_known_position_mkm: Vec2 = field(default_factory=Vec2)


@dataclass
class WaitDays:
    days_remaining: int = 0


@dataclass
class LoadMineral:
    colony_id: int = INVALID_ID
    mineral: str = ""
    tons: float = 0.0


@dataclass
class UnloadMineral:
    colony_id: int = INVALID_ID
    mineral: str = ""
    tons: float = 0.0


@dataclass
class TransferCargoToShip:
    target_ship_id: int = INVALID_ID
    mineral: str = ""
    tons: float = 0.0


@dataclass
class ScrapShip:
    colony_id: int = INVALID_ID


Order = Union[
    MoveToPoint,
    MoveToBody,
    OrbitBody,
    TravelViaJump,
    AttackShip,
    WaitDays,
    LoadMineral,
    UnloadMineral,
    TransferCargoToShip,
    ScrapShip,
]


@dataclass
class ShipOrders:
    """A ship's pending orders, optionally refilled from a template when empty."""

    queue: List[Order] = field(default_factory=list)
    repeat: bool = False
    repeat_template: List[Order] = field(default_factory=list)


def _mineral_suffix(mineral: str, tons: float) -> str:
    text = ""
    if mineral:
        text += f", mineral={mineral}"
    if tons > 0.0:
        text += f", tons={_num(tons)}"
    return text + ")"


def order_to_string(order: Order) -> str:
    """A short human-readable description of an order ('' for types without one)."""
    if isinstance(order, MoveToPoint):
        return f"MoveToPoint({_num(order.target_mkm.x)}, {_num(order.target_mkm.y)})"
    if isinstance(order, MoveToBody):
        return f"MoveToBody(id={order.body_id})"
    if isinstance(order, TravelViaJump):
        return f"TravelViaJump(jump_id={order.jump_point_id})"
    if isinstance(order, AttackShip):
        text = f"AttackShip(target_id={order.target_ship_id}"
        if order.has_last_known:
            pos = order.last_known_position_mkm
            text += f", last=({_num(pos.x)}, {_num(pos.y)})"
        return text + ")"
    if isinstance(order, WaitDays):
        return f"WaitDays({order.days_remaining})"
    if isinstance(order, LoadMineral):
        return f"LoadMineral(colony_id={order.colony_id}" + _mineral_suffix(order.mineral, order.tons)
    if isinstance(order, UnloadMineral):
        return f"UnloadMineral(colony_id={order.colony_id}" + _mineral_suffix(order.mineral, order.tons)
    return ""