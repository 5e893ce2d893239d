"""
Edifice projects: buildings the players fund together, one per age.

A player who paid into a completed project gains its reward. A player who
did not pay into a project that was never completed suffers its penalty.
The two other combinations change nothing.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from .constants import AGES, CardColor, PenaltyKind, RewardKind, Seat, VpPer
from .models import FieldRef, ProjectDefinition, ProjectOutcome
from .player import EMPTY_SNAPSHOT, CitySnapshot
from .seating import check_age
from .setup import conflict_tables, edifice_projects

logger = logging.getLogger(__name__)

BROWN_GREY_SET_VP = 3

# Archives counts black (Cities) only when it was entered
BASE_COLORS = [color for color in CardColor if color != CardColor.BLACK]

def get_project(project_id: str) -> Optional[ProjectDefinition]:
    return edifice_projects().get(project_id)

def _new_parts() -> Dict:
    """Working copy of an outcome; frozen into a ProjectOutcome by _freeze."""
    return {
        "points": 0,
        "coins_delta": 0,
        "victory_tokens": {age: 0 for age in AGES},
        "strength_delta": 0,
        "lose_victory_tokens": 0,
        "remove_card_colors": [],
        "resource_generation": False,
        "specials": [],
        "missing_fields": [],
        "notes": [],
    }

def _freeze(project_id: str, parts: Dict) -> ProjectOutcome:
    return ProjectOutcome(
        project_id=project_id,
        points=parts["points"],
        coins_delta=parts["coins_delta"],
        victory_tokens=dict(parts["victory_tokens"]),
        strength_delta=parts["strength_delta"],
        lose_victory_tokens=parts["lose_victory_tokens"],
        remove_card_colors=tuple(parts["remove_card_colors"]),
        resource_generation=parts["resource_generation"],
        specials=tuple(parts["specials"]),
        missing_fields=tuple(parts["missing_fields"]),
        notes=tuple(parts["notes"]),
    )

def _require(city: CitySnapshot, names: Iterable[str], parts: Dict):
    for name in names:
        if city.is_missing(name):
            parts["missing_fields"].append(FieldRef(Seat.SELF, name))

def _end_game_vp(project: ProjectDefinition, city: CitySnapshot, parts: Dict):
    vp_per = project.reward.vp_per
    if vp_per == VpPer.WONDER_STAGE:
        _require(city, ["wonder_stages"], parts)
        parts["points"] += city.count("wonder_stages")
        parts["notes"].append(f"Reward: +{city.count('wonder_stages')} VP (1 x wonder stages built)")
    elif vp_per == VpPer.BLUE_CARD:
        _require(city, ["blue"], parts)
        parts["points"] += city.count("blue")
        parts["notes"].append(f"Reward: +{city.count('blue')} VP (1 x blue cards)")
    elif vp_per == VpPer.BROWN_GREY_SET:
        _require(city, ["brown", "grey"], parts)
        sets = min(city.count("brown"), city.count("grey"))
        parts["points"] += sets * BROWN_GREY_SET_VP
        parts["notes"].append(f"Reward: +{sets * BROWN_GREY_SET_VP} VP ({BROWN_GREY_SET_VP} x {sets} brown+grey sets)")
    elif vp_per == VpPer.AGE_CARD_COLOR:
        _require(city, [color.value for color in BASE_COLORS], parts)
        colors = city.age_card_colors()
        parts["points"] += colors
        parts["notes"].append(f"Reward: +{colors} VP (1 x different colours of Age cards)")

def _apply_reward(project: ProjectDefinition, city: CitySnapshot, parts: Dict):
    reward = project.reward

    if reward.kind == RewardKind.COINS:
        parts["coins_delta"] += reward.amount
        parts["notes"].append(f"Reward: +{reward.amount} coins")

    elif reward.kind == RewardKind.VICTORY_TOKEN:
        parts["victory_tokens"][reward.token_age] += reward.amount
        parts["notes"].append(f"Reward: +{reward.amount} Age {reward.token_age} military victory token(s)")

    elif reward.kind == RewardKind.STRENGTH:
        parts["strength_delta"] += reward.amount
        parts["notes"].append(f"Reward: +{reward.amount} military strength")

    elif reward.kind == RewardKind.END_GAME_VP:
        _end_game_vp(project, city, parts)

    elif reward.kind == RewardKind.RESOURCE_GENERATION:
        parts["resource_generation"] = True
        parts["notes"].append(f"Reward: {reward.description}")

    elif reward.kind == RewardKind.SPECIAL:
        parts["specials"].append(reward.description)
        parts["notes"].append(f"Reward (special): {reward.description}")

def _apply_penalty(project: ProjectDefinition, parts: Dict):
    penalty = project.penalty

    if penalty.kind == PenaltyKind.COINS:
        parts["coins_delta"] -= penalty.amount
        parts["notes"].append(f"Penalty: -{penalty.amount} coins")

    elif penalty.kind == PenaltyKind.REMOVE_CARD:
        parts["remove_card_colors"].append(penalty.color_to_remove)
        parts["notes"].append(f"Penalty: must discard one {penalty.color_to_remove.value} card")

    elif penalty.kind == PenaltyKind.LOSE_VICTORY_TOKENS:
        parts["lose_victory_tokens"] += penalty.amount
        parts["notes"].append(f"Penalty: lose {penalty.amount} military victory token(s)")

    elif penalty.kind == PenaltyKind.SPECIAL:
        parts["specials"].append(penalty.description)
        parts["notes"].append(f"Penalty (special): {penalty.description}")

def _evaluate(project_id: str, completed: bool, contributed: bool, city: CitySnapshot, parts: Dict):
    project = get_project(project_id)
    if project is None:
        logger.warning("Unknown Edifice project %r", project_id)
        parts["notes"].append(f"Unknown project: {project_id}")
        return

    if completed and contributed:
        _apply_reward(project, city, parts)
    elif not completed and not contributed:
        _apply_penalty(project, parts)
    else:
        parts["notes"].append("No reward or penalty for this player based on contribution/completion rules.")

def evaluate_project(project_id: str, completed: bool, contributed: bool,
                     city: CitySnapshot = EMPTY_SNAPSHOT) -> ProjectOutcome:
    """
    Reward or penalty a single project hands to one player.

    Args:
        project_id: Edifice project id
        completed: Whether the project was built by the end of its age
        contributed: Whether the player holds a participation pawn for it
        city: The player's city, read by end-game VP rewards

    Returns:
        A new ProjectOutcome; unknown projects give an empty one with a note
    """
    parts = _new_parts()
    _evaluate(project_id, completed, contributed, city, parts)
    return _freeze(project_id, parts)

def evaluate_player_projects(
    selected: Mapping[int, str],
    completed: Mapping[int, bool],
    city: CitySnapshot,
) -> Dict[int, ProjectOutcome]:
    """
    Outcome of each age's project for one player.

    Contribution is read from the city's participation pawns; when they were
    never entered the player counts as not having contributed and the pawns
    are reported missing.
    """
    outcomes = {}
    for age, project_id in sorted(selected.items()):
        check_age(age)
        if not project_id:
            continue
        parts = _new_parts()
        contributed = bool(city.edifice_pawns[age - 1]) if city.edifice_pawns is not None else False
        _evaluate(project_id, completed.get(age, False), contributed, city, parts)
        if city.edifice_pawns is None:
            parts["missing_fields"].append(FieldRef(Seat.SELF, "edifice_pawns"))
        outcomes[age] = _freeze(project_id, parts)
    return outcomes

def victory_token_points(outcome: ProjectOutcome) -> int:
    """VP worth of the military victory tokens a project granted."""
    victory = conflict_tables()["military"]["victory"]
    return sum(victory[age] * count for age, count in outcome.victory_tokens.items())

def summarize(outcomes: Mapping[int, ProjectOutcome]) -> ProjectOutcome:
    """All ages folded into one outcome, notes prefixed with their age."""
    parts = _new_parts()
    for age, outcome in sorted(outcomes.items()):
        parts["points"] += outcome.points
        parts["coins_delta"] += outcome.coins_delta
        for token_age in AGES:
            parts["victory_tokens"][token_age] += outcome.victory_tokens[token_age]
        parts["strength_delta"] += outcome.strength_delta
        parts["lose_victory_tokens"] += outcome.lose_victory_tokens
        parts["remove_card_colors"].extend(outcome.remove_card_colors)
        parts["resource_generation"] = parts["resource_generation"] or outcome.resource_generation
        parts["specials"].extend(outcome.specials)
        for ref in outcome.missing_fields:
            if ref not in parts["missing_fields"]:
                parts["missing_fields"].append(ref)
        parts["notes"].extend(f"Age {age}: {note}" for note in outcome.notes)
    project_id = ",".join(o.project_id for _, o in sorted(outcomes.items()))
    return _freeze(project_id, parts)

def projects_for_age(age: int) -> List[ProjectDefinition]:
    check_age(age)
    return [p for p in edifice_projects().values() if p.age == age]
