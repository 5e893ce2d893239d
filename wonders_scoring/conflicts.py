"""
End-of-age conflict resolution for land (military) and sea (naval) strength.

Ages never interact: each one is resolved on its own and the per-age points
are summed into a total.

Land conflicts are pairwise. Every active player fights the next active
player round the table; players with Diplomacy for an age sit that age out
and their neighbors face each other instead. Boarding tokens (Pontoon,
Ballista, Pier) add a fight against the player two seats away even when
Diplomacy was taken. A pair never fights twice in the same age.

Naval conflicts rank all participants of an age at once: first, second and
last place take tokens, with ties handled as described in `naval_awards_for_age`.
"""

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from .constants import AGES
from .models import ConflictTotals, MilitaryInput, NavalInput
from .seating import PlayerId, SeatingRing, active_ring, as_ring, check_age, ring_pairs
from .setup import conflict_tables

logger = logging.getLogger(__name__)

_NO_MILITARY = MilitaryInput()
_NO_NAVAL = NavalInput()

def _totals(ring: SeatingRing, by_age: Dict[PlayerId, Dict[int, int]]) -> Dict[PlayerId, ConflictTotals]:
    return {pid: ConflictTotals(by_age=dict(by_age[pid]), total=sum(by_age[pid].values())) for pid in ring}

def military_pairs_for_age(
    ring, inputs: Mapping[PlayerId, MilitaryInput], age: int
) -> List[Tuple[PlayerId, PlayerId]]:
    """
    Conflicts fought in one age, each pair listed once.

    Ring pairs come first in seating order, then boarding pairs.
    """
    ring = as_ring(ring)
    ring.check_players(inputs, "Military input")
    check_age(age)
    tables = conflict_tables()["military"]

    diplomats = {pid: inputs.get(pid, _NO_MILITARY).diplomacy[age - 1] for pid in ring}
    pairs: List[Tuple[PlayerId, PlayerId]] = []
    seen = set()

    def add_pair(a, b):
        key = frozenset((a, b))
        if a == b or key in seen:
            return
        seen.add(key)
        pairs.append((a, b))

    for a, b in ring_pairs(active_ring(ring, diplomats)):
        add_pair(a, b)

    offset = tables["boarding_offsets"][age]
    boarders = [pid for pid in ring if inputs.get(pid, _NO_MILITARY).boarding[age - 1]]
    for pid in boarders:
        add_pair(pid, ring.at_offset(pid, offset))

    logger.debug("Age %d: %d military conflicts (%d players on diplomacy, %d %s boardings)",
                 age, len(pairs), sum(diplomats.values()), len(boarders), tables["boarding_sources"][age])
    return pairs

def resolve_military(ring, inputs: Mapping[PlayerId, MilitaryInput]) -> Dict[PlayerId, ConflictTotals]:
    """
    Military victory and defeat points for every seated player.

    Equal strength in a pair gives no token; otherwise the stronger player
    earns the age's victory value and the weaker one the defeat value.
    """
    ring = as_ring(ring)
    tables = conflict_tables()["military"]
    by_age = {pid: {age: 0 for age in AGES} for pid in ring}

    for age in AGES:
        for a, b in military_pairs_for_age(ring, inputs, age):
            a_strength = inputs.get(a, _NO_MILITARY).strength(age)
            b_strength = inputs.get(b, _NO_MILITARY).strength(age)
            if a_strength == b_strength:
                continue
            winner, loser = (a, b) if a_strength > b_strength else (b, a)
            by_age[winner][age] += tables["victory"][age]
            by_age[loser][age] += tables["defeat"]

    return _totals(ring, by_age)

def naval_awards_for_age(ring, inputs: Mapping[PlayerId, NavalInput], age: int) -> Dict[PlayerId, int]:
    """
    Naval points taken by each participant in one age.

    - If every participant has the same strength, nobody takes a token.
    - Every player tied for the lowest strength takes the defeat value.
    - A unique strongest player takes the first-place value and a unique
      runner-up the second-place value; runners-up tied with each other
      take nothing.
    - Players tied for the strongest each take the second-place value, and
      nobody takes the first-place value or a runner-up token.
    Players who opted out of the age are left out entirely.
    """
    ring = as_ring(ring)
    ring.check_players(inputs, "Naval input")
    check_age(age)
    tables = conflict_tables()["naval"]

    strengths = {
        pid: inputs.get(pid, _NO_NAVAL).strength(age)
        for pid in ring
        if not inputs.get(pid, _NO_NAVAL).opt_out[age - 1]
    }
    awards: Dict[PlayerId, int] = {}
    if not strengths:
        return awards

    lowest = min(strengths.values())
    highest = max(strengths.values())
    if lowest == highest:
        logger.debug("Age %d: all %d naval participants tied", age, len(strengths))
        return awards

    def award(pid, points):
        awards[pid] = awards.get(pid, 0) + points

    for pid, strength in strengths.items():
        if strength == lowest:
            award(pid, tables["last"][age])

    first_group = [pid for pid, strength in strengths.items() if strength == highest]
    if len(first_group) > 1:
        for pid in first_group:
            award(pid, tables["second"][age])
    else:
        award(first_group[0], tables["first"][age])
        runner_up: Optional[int] = max((s for s in strengths.values() if s < highest), default=None)
        second_group = [pid for pid, strength in strengths.items() if strength == runner_up]
        if len(second_group) == 1:
            award(second_group[0], tables["second"][age])

    logger.debug("Age %d naval awards: %s", age, awards)
    return awards

def resolve_naval(ring, inputs: Mapping[PlayerId, NavalInput]) -> Dict[PlayerId, ConflictTotals]:
    """Naval points per age and in total for every seated player."""
    ring = as_ring(ring)
    by_age = {pid: {age: 0 for age in AGES} for pid in ring}

    for age in AGES:
        for pid, points in naval_awards_for_age(ring, inputs, age).items():
            by_age[pid][age] += points

    return _totals(ring, by_age)
