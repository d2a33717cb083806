from stellarsim.game_state import Vec2
from stellarsim.orders import (
    AttackShip,
    LoadMineral,
    MoveToBody,
    MoveToPoint,
    OrbitBody,
    ScrapShip,
    ShipOrders,
    TransferCargoToShip,
    TravelViaJump,
    UnloadMineral,
    WaitDays,
    order_to_string,
)


def test_move_to_point():
    assert order_to_string(MoveToPoint(Vec2(1.5, -2.0))) == "MoveToPoint(1.5, -2)"


def test_move_to_body():
    assert order_to_string(MoveToBody(body_id=7)) == "MoveToBody(id=7)"


def test_wait_days():
    assert order_to_string(WaitDays(days_remaining=3)) == "WaitDays(3)"


def test_travel_via_jump_mentions_id():
    text = order_to_string(TravelViaJump(jump_point_id=42))
    assert text.startswith("TravelViaJump(")
    assert "42" in text


def test_attack_ship_last_known_only_when_set():
    plain = order_to_string(AttackShip(target_ship_id=5))
    assert "last=" not in plain
    with_last = order_to_string(AttackShip(target_ship_id=5, has_last_known=True,
                                           last_known_position_mkm=Vec2(3.0, 4.0)))
    assert "last=(3, 4)" in with_last
    assert with_last.startswith(plain[:-1])


def test_load_mineral_optional_parts():
    bare = order_to_string(LoadMineral(colony_id=9))
    assert "mineral=" not in bare and "tons=" not in bare
    full = order_to_string(LoadMineral(colony_id=9, mineral="Duranium", tons=100.0))
    assert "mineral=Duranium" in full
    assert "tons=100" in full


def test_unload_mineral_negative_tons_hidden():
    text = order_to_string(UnloadMineral(colony_id=2, mineral="Neutronium", tons=-1.0))
    assert text.startswith("UnloadMineral(")
    assert "tons=" not in text
    assert "mineral=Neutronium" in text


def test_types_without_description_give_empty_string():
    assert order_to_string(OrbitBody(body_id=1)) == ""
    assert order_to_string(TransferCargoToShip(target_ship_id=1)) == ""
    assert order_to_string(ScrapShip(colony_id=1)) == ""


def test_defaults():
    assert OrbitBody().duration_days == -1
    orders = ShipOrders()
    assert orders.queue == [] and orders.repeat is False and orders.repeat_template == []
    other = ShipOrders()
    orders.queue.append(WaitDays(1))
    assert other.queue == []