"""Static content (components, designs, installations, techs) and its validation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Set

from stellarsim.game_state import ShipDesign


@dataclass
class ComponentDef:
    id: str = ""
    name: str = ""
    mass_tons: float = 0.0
    speed_km_s: float = 0.0
    cargo_tons: float = 0.0
    sensor_range_mkm: float = 0.0
    power: float = 0.0
    weapon_damage: float = 0.0
    weapon_range_mkm: float = 0.0
    hp_bonus: float = 0.0


@dataclass
class InstallationDef:
    id: str = ""
    name: str = ""
    produces_per_day: Dict[str, float] = field(default_factory=dict)
    construction_cost: float = 0.0
    construction_points_per_day: float = 0.0
    build_costs: Dict[str, float] = field(default_factory=dict)
    build_costs_per_ton: Dict[str, float] = field(default_factory=dict)
    build_rate_tons_per_day: float = 0.0
    sensor_range_mkm: float = 0.0
    research_points_per_day: float = 0.0


@dataclass
class TechEffect:
    type: str = ""
    value: str = ""


@dataclass
class TechDef:
    id: str = ""
    name: str = ""
    cost: float = 0.0
    prereqs: List[str] = field(default_factory=list)
    effects: List[TechEffect] = field(default_factory=list)


@dataclass
class ContentDB:
    components: Dict[str, ComponentDef] = field(default_factory=dict)
    designs: Dict[str, ShipDesign] = field(default_factory=dict)
    installations: Dict[str, InstallationDef] = field(default_factory=dict)
    techs: Dict[str, TechDef] = field(default_factory=dict)


def _num(value: float) -> str:
    return f"{value:g}"


def _non_negative(value: float) -> bool:
    return value >= 0.0 and math.isfinite(value)


def _check_identity(errors: List[str], kind: str, key: str, entry_id: str) -> None:
    if not key:
        errors.append(f"{kind} map contains an empty key")
    if not entry_id:
        errors.append(f"{kind} '{key}' has an empty id field")
    if entry_id and key and entry_id != key:
        errors.append(f"{kind} key/id mismatch: key '{key}' != id '{entry_id}'")


def _check_fields(errors: List[str], kind: str, key: str, obj: object, names: List[str]) -> None:
    for name in names:
        value = getattr(obj, name)
        if not _non_negative(value):
            errors.append(f"{kind} '{key}' has invalid {name}: {_num(value)}")


def _check_minerals(errors: List[str], key: str, amounts: Dict[str, float], label: str, empty_msg: str) -> None:
    for mineral, amount in amounts.items():
        if not mineral:
            errors.append(f"Installation '{key}' {empty_msg}")
        if not _non_negative(amount):
            errors.append(f"Installation '{key}' has invalid {label} for '{mineral}': {_num(amount)}")


def _prereq_cycles(db: ContentDB) -> List[str]:
    errors: List[str] = []
    visit: Dict[str, int] = {}  # 1 = on the stack, 2 = finished
    stack: List[str] = []
    stack_pos: Dict[str, int] = {}
    reported: Set[str] = set()

    def dfs(tech_id: str) -> None:
        visit[tech_id] = 1
        stack_pos[tech_id] = len(stack)
        stack.append(tech_id)

        tech = db.techs.get(tech_id)
        if tech is not None:
            for pre in sorted(set(tech.prereqs)):
                if not pre or pre not in db.techs:
                    continue
                state = visit.get(pre, 0)
                if state == 0:
                    dfs(pre)
                elif state == 1:
                    cycle = sorted(set(stack[stack_pos.get(pre, 0):]))
                    canonical = "|".join(cycle)
                    if canonical not in reported:
                        reported.add(canonical)
                        listed = ", ".join(f"'{c}'" for c in cycle)
                        errors.append("Tech prerequisite cycle detected among: " + listed)

        stack.pop()
        del stack_pos[tech_id]
        visit[tech_id] = 2

    for tech_id in sorted(db.techs):
        if visit.get(tech_id, 0) == 0:
            dfs(tech_id)
    return errors


def validate_content_db(db: ContentDB) -> List[str]:
    """Return every problem found in the content, sorted; empty when the content is sound."""
    errors: List[str] = []

    for key, comp in db.components.items():
        _check_identity(errors, "Component", key, comp.id)
        _check_fields(errors, "Component", key, comp, [
            "mass_tons", "speed_km_s", "cargo_tons", "sensor_range_mkm",
            "power", "weapon_damage", "weapon_range_mkm", "hp_bonus",
        ])

    for key, design in db.designs.items():
        _check_identity(errors, "Design", key, design.id)
        if not design.components:
            errors.append(f"Design '{key}' has no components")
        for cid in design.components:
            if cid not in db.components:
                errors.append(f"Design '{key}' references unknown component id '{cid}'")
        _check_fields(errors, "Design", key, design, [
            "mass_tons", "speed_km_s", "cargo_tons", "sensor_range_mkm",
        ])
        if not _non_negative(design.max_hp) or design.max_hp <= 0.0:
            errors.append(f"Design '{key}' has invalid max_hp: {_num(design.max_hp)}")
        _check_fields(errors, "Design", key, design, ["weapon_damage", "weapon_range_mkm"])

    for key, inst in db.installations.items():
        _check_identity(errors, "Installation", key, inst.id)
        _check_fields(errors, "Installation", key, inst, [
            "construction_cost", "construction_points_per_day", "build_rate_tons_per_day",
            "sensor_range_mkm", "research_points_per_day",
        ])
        _check_minerals(errors, key, inst.produces_per_day, "production", "produces an empty mineral id")
        _check_minerals(errors, key, inst.build_costs, "build_cost", "has a build_cost with empty mineral id")
        _check_minerals(errors, key, inst.build_costs_per_ton, "build_costs_per_ton",
                        "has a build_costs_per_ton with empty mineral id")

    for key, tech in db.techs.items():
        _check_identity(errors, "Tech", key, tech.id)
        if not tech.name:
            errors.append(f"Tech '{key}' has an empty name field")
        if not _non_negative(tech.cost):
            errors.append(f"Tech '{key}' has invalid cost: {_num(tech.cost)}")

        for prereq in tech.prereqs:
            if not prereq:
                errors.append(f"Tech '{key}' has an empty prereq tech id")
            elif prereq == key:
                errors.append(f"Tech '{key}' lists itself as a prerequisite")
            elif prereq not in db.techs:
                errors.append(f"Tech '{key}' references unknown prereq tech '{prereq}'")

        for eff in tech.effects:
            if not eff.type:
                errors.append(f"Tech '{key}' has an effect with empty type")
            elif not eff.value:
                errors.append(f"Tech '{key}' has an effect with empty value")
            elif eff.type == "unlock_component":
                if eff.value not in db.components:
                    errors.append(f"Tech '{key}' unlocks unknown component '{eff.value}'")
            elif eff.type == "unlock_installation":
                if eff.value not in db.installations:
                    errors.append(f"Tech '{key}' unlocks unknown installation '{eff.value}'")
            else:
                errors.append(f"Tech '{key}' has unknown effect type '{eff.type}'")

    errors.extend(_prereq_cycles(db))
    return sorted(errors)