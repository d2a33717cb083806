# stellarsim

The data model of a turn-based space strategy game. It covers star systems,
bodies, jump points, ships, colonies, factions and a persistent event log.
The package also provides two starting scenarios, validation of game content
(components, ship designs, installations, tech tree) and a stable JSON save
format.

## Installation

```
pip install .
```

## Modules

- `stellarsim.date`
  - `Date` is a frozen, ordered dataclass that counts whole days from
    2200-01-01.
  - `Date.from_ymd(year, month, day)` and `Date.parse_iso_ymd("YYYY-MM-DD")`
    build a date. Both raise `ValueError` on a month or day out of range or
    on a malformed string.
  - `to_ymd()` returns a `YMD`. `to_string()` and `str()` give the ISO form.
    `days_since_epoch()` returns the day count.
- `stellarsim.game_state`
  - The data model: `GameState`, `StarSystem`, `Body`, `JumpPoint`, `Ship`,
    `Colony`, `BuildOrder`, `InstallationBuildOrder`, `Faction`, `Contact`,
    `ShipDesign` and `SimEvent`.
  - The enums `BodyType`, `ShipRole`, `EventLevel` and `EventCategory`.
  - The immutable vector `Vec2`, which supports `+`.
  - `allocate_id(state)` hands out the next entity id and never returns the
    invalid id `0`.
- `stellarsim.orders`
  - The order types: `MoveToPoint`, `MoveToBody`, `OrbitBody`,
    `TravelViaJump`, `AttackShip`, `WaitDays`, `LoadMineral`,
    `UnloadMineral`, `TransferCargoToShip` and `ScrapShip`.
  - `ShipOrders` holds a queue of orders plus an optional repeat template.
  - `order_to_string(order)` gives a short readable description. It returns
    `""` for order types it does not describe (`OrbitBody`,
    `TransferCargoToShip`, `ScrapShip`).
- `stellarsim.content_validation`
  - The content definitions: `ContentDB`, `ComponentDef`, `InstallationDef`,
    `TechDef` and `TechEffect`.
  - `validate_content_db(db)` returns a sorted list of problem messages. The
    list is empty when nothing is wrong. The checks cover:
    - key/id mismatches;
    - negative or non-finite numbers;
    - unknown component, prerequisite and unlock references;
    - unknown tech effect types;
    - tech prerequisite cycles.
- `stellarsim.scenario`
  - `make_sol_scenario()` builds the hand-made start: Sol, Alpha Centauri
    and Barnard's Star, with Terran colonies and ships and a pirate presence.
  - `make_random_scenario(seed, num_systems)` builds a seeded random galaxy
    of 1 to 64 systems, linked by jump points into one connected network. The
    same seed always gives the same galaxy.
- `stellarsim.order_codec`
  - Converts vectors, enum labels and orders to and from plain JSON-ready
    values.
  - `order_from_json` raises `ValueError` on an unknown order type or a
    missing member.
- `stellarsim.serialization`
  - `serialize_game_to_json(state)` writes a game state as JSON text.
  - `deserialize_game_from_json(text)` reads it back.

## Example

```python
from stellarsim.scenario import make_random_scenario
from stellarsim.serialization import serialize_game_to_json, deserialize_game_from_json

state = make_random_scenario(seed=42, num_systems=12)
text = serialize_game_to_json(state)
restored = deserialize_game_from_json(text)
assert serialize_game_to_json(restored) == text
print(restored.date.to_string())   # 2200-01-01
```

## Save files

The serializer writes indented JSON with sorted keys and with entities in id
order, so save files diff cleanly.

When loading:

- Saves from older versions are raised to the current save version (12).
- `next_id` and `next_event_seq` are bumped past any id or event sequence
  number already in use.
- Ship order entries that cannot be read are dropped. Warnings go to the
  `stellarsim.serialization` logger: one per dropped order, for up to eight
  orders, and then a summary count.
- Missing required data or malformed values raise `ValueError`.

## What the package does not do

The package holds game state. It does not run the game:

- It does not advance days, move ships, resolve combat or progress research
  and construction.
- It does not load content definitions or tech trees from files; you build
  `ContentDB` yourself.
- It does not export the event log.
- It has no command-line program and no user interface.

## Tests

```
pip install .[test]
pytest
```