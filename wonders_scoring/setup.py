import json
import os
from functools import lru_cache
from typing import Any, Dict
from .constants import AGES, CardColor, PenaltyKind, RewardKind, RuleKind, VpPer
from .models import CatalogEntry, CatalogRule, ProjectDefinition, ProjectPenalty, ProjectReward

def load_json(path: str) -> Any:
    """Load a JSON rules table, relative paths resolve inside the package."""
    if not os.path.isabs(path):
        path = os.path.join(os.path.dirname(__file__), path)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)

def _by_age(data: Dict[str, int]) -> Dict[int, int]:
    return {age: data[str(age)] for age in AGES}

@lru_cache(maxsize=None)
def conflict_tables() -> Dict[str, Dict]:
    """Victory, defeat and boarding values for both conflict systems, keyed by age."""
    data = load_json("db/conflicts.json")
    military = data["military"]
    naval = data["naval"]
    return {
        "military": {
            "victory": _by_age(military["victory"]),
            "defeat": military["defeat"],
            "boarding_offsets": _by_age(military["boarding_offsets"]),
            "boarding_sources": {age: military["boarding_sources"][str(age)] for age in AGES},
        },
        "naval": {
            "first": _by_age(naval["first"]),
            "second": _by_age(naval["second"]),
            "last": _by_age(naval["last"]),
        },
    }

def create_rule_from_data(rule_data: Dict) -> CatalogRule:
    """Helper to convert a rule dictionary to a CatalogRule."""
    return CatalogRule(
        kind=RuleKind(rule_data["kind"]),
        fields=tuple(rule_data.get("fields", ())),
        multiplier=rule_data.get("multiplier", 1),
        divisor=rule_data.get("divisor", 1),
        include_self=rule_data.get("include_self", False),
        bonus=rule_data.get("bonus", 0),
        minimum=rule_data.get("minimum"),
        maximum=rule_data.get("maximum"),
        cap=rule_data.get("cap"),
        token_values=tuple(rule_data.get("token_values", ())),
    )

def create_entry_from_data(entry_data: Dict) -> CatalogEntry:
    return CatalogEntry(
        card_id=entry_data["id"],
        name=entry_data["name"],
        rule=create_rule_from_data(entry_data["rule"]),
        notes=entry_data.get("notes", ""),
    )

def load_catalog(path: str) -> Dict[str, CatalogEntry]:
    catalog = {}
    for entry_data in load_json(path):
        entry = create_entry_from_data(entry_data)
        if entry.card_id in catalog:
            raise ValueError(f"Duplicate catalog id {entry.card_id!r} in {path}")
        catalog[entry.card_id] = entry
    return catalog

@lru_cache(maxsize=None)
def guild_catalog() -> Dict[str, CatalogEntry]:
    return load_catalog("db/guilds.json")

@lru_cache(maxsize=None)
def leader_catalog() -> Dict[str, CatalogEntry]:
    return load_catalog("db/leaders.json")

def create_project_from_data(project_data: Dict) -> ProjectDefinition:
    reward_data = project_data["reward"]
    penalty_data = project_data["penalty"]
    vp_per = reward_data.get("vp_per")
    color = penalty_data.get("color")
    return ProjectDefinition(
        project_id=project_data["id"],
        name=project_data["name"],
        age=project_data["age"],
        participation_cost=project_data.get("participation_cost", 0),
        reward=ProjectReward(
            kind=RewardKind(reward_data["kind"]),
            amount=reward_data.get("amount", 0),
            token_age=reward_data.get("token_age"),
            vp_per=VpPer(vp_per) if vp_per else None,
            description=reward_data.get("description", ""),
        ),
        penalty=ProjectPenalty(
            kind=PenaltyKind(penalty_data["kind"]),
            amount=penalty_data.get("amount", 0),
            color_to_remove=CardColor(color) if color else None,
            description=penalty_data.get("description", ""),
        ),
        description=project_data.get("description", ""),
    )

@lru_cache(maxsize=None)
def edifice_projects() -> Dict[str, ProjectDefinition]:
    return {p["id"]: create_project_from_data(p) for p in load_json("db/edifice.json")}

