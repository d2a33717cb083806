import math

import pytest

from stellarsim.content_validation import (
    ComponentDef,
    ContentDB,
    InstallationDef,
    TechDef,
    TechEffect,
    validate_content_db,
)
from stellarsim.game_state import ShipDesign


@pytest.fixture
def db():
    return ContentDB(
        components={"engine": ComponentDef(id="engine", name="Engine", speed_km_s=1000.0)},
        designs={"ship": ShipDesign(id="ship", name="Ship", components=["engine"], max_hp=10.0)},
        installations={"mine": InstallationDef(id="mine", name="Mine", produces_per_day={"Duranium": 1.0})},
        techs={
            "a": TechDef(id="a", name="A", cost=10.0,
                         effects=[TechEffect("unlock_component", "engine")]),
            "b": TechDef(id="b", name="B", cost=20.0, prereqs=["a"],
                         effects=[TechEffect("unlock_installation", "mine")]),
        },
    )


def test_valid_content_has_no_errors(db):
    assert validate_content_db(db) == []


def test_empty_component_key(db):
    db.components[""] = ComponentDef(id="x")
    errors = validate_content_db(db)
    assert "Component map contains an empty key" in errors
    assert any("key/id mismatch" not in e for e in errors)


def test_key_id_mismatch(db):
    db.components["engine"].id = "motor"
    errors = validate_content_db(db)
    assert any("key/id mismatch" in e and "'motor'" in e for e in errors)


def test_design_problems(db):
    db.designs["empty"] = ShipDesign(id="empty", max_hp=0.0)
    db.designs["ship"].components.append("laser")
    errors = validate_content_db(db)
    assert any("'empty'" in e and "has no components" in e for e in errors)
    assert any("'empty'" in e and "invalid max_hp" in e for e in errors)
    assert any("unknown component id 'laser'" in e for e in errors)


def test_negative_and_nonfinite_values(db):
    db.components["engine"].mass_tons = -5.0
    db.installations["mine"].build_costs = {"": 1.0, "Neutronium": math.inf}
    errors = validate_content_db(db)
    assert any("invalid mass_tons" in e and "-5" in e for e in errors)
    assert any("build_cost with empty mineral id" in e for e in errors)
    assert any("invalid build_cost for 'Neutronium'" in e for e in errors)


def test_tech_reference_errors(db):
    db.techs["c"] = TechDef(id="c", name="", cost=1.0, prereqs=["", "c", "zzz"],
                            effects=[TechEffect("", "x"), TechEffect("unlock_component", ""),
                                     TechEffect("boost", "x"), TechEffect("unlock_installation", "lab")])
    errors = validate_content_db(db)
    joined = "\n".join(errors)
    assert "empty name field" in joined
    assert "empty prereq tech id" in joined
    assert "lists itself as a prerequisite" in joined
    assert "unknown prereq tech 'zzz'" in joined
    assert "effect with empty type" in joined
    assert "effect with empty value" in joined
    assert "unknown effect type 'boost'" in joined
    assert "unlocks unknown installation 'lab'" in joined


def test_prereq_cycle_reported_once(db):
    db.techs["a"].prereqs = ["b"]
    errors = validate_content_db(db)
    cycles = [e for e in errors if e.startswith("Tech prerequisite cycle detected among: ")]
    assert len(cycles) == 1
    assert "'a'" in cycles[0] and "'b'" in cycles[0]


def test_errors_are_sorted(db):
    db.components["engine"].power = -1.0
    db.designs["ship"].components = []
    db.techs["a"].cost = -1.0
    errors = validate_content_db(db)
    assert len(errors) >= 3
    assert errors == sorted(errors)