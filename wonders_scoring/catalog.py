"""
Guild and leader end-game VP that depend on a player's own city and on the
cities of the left and right neighbors.

Each selected card is scored by its catalog rule. Counts that were never
entered score as zero, and the result lists them so the caller can flag
the score as provisional.
"""

import logging
from typing import Dict, List, Mapping

from .constants import RuleKind, Seat
from .models import CatalogEntry, CatalogTotals, FieldRef, ScoredEntry
from .player import EMPTY_SNAPSHOT, CitySnapshot
from .seating import PlayerId, as_ring
from .setup import guild_catalog, leader_catalog

logger = logging.getLogger(__name__)

def _read(seat: Seat, city: CitySnapshot, names, missing: List[FieldRef]) -> List[int]:
    values = []
    for name in names:
        if city.is_missing(name):
            missing.append(FieldRef(seat, name))
        values.append(city.count(name))
    return values

def evaluate_entry(entry: CatalogEntry, me: CitySnapshot, left: CitySnapshot, right: CitySnapshot) -> ScoredEntry:
    """
    VP of one card for the player owning `me`.

    Returns:
        ScoredEntry with the value and the snapshot fields that were absent
    """
    rule = entry.rule
    missing: List[FieldRef] = []
    vp = 0

    if rule.kind == RuleKind.FLAT:
        vp = rule.bonus

    elif rule.kind == RuleKind.OWN_COUNT:
        count = sum(_read(Seat.SELF, me, rule.fields, missing))
        vp = (count // rule.divisor) * rule.multiplier

    elif rule.kind == RuleKind.NEIGHBOR_SUM:
        count = 0
        if rule.include_self:
            count += sum(_read(Seat.SELF, me, rule.fields, missing))
        count += sum(_read(Seat.LEFT, left, rule.fields, missing))
        count += sum(_read(Seat.RIGHT, right, rule.fields, missing))
        vp = count * rule.multiplier

    elif rule.kind == RuleKind.SET_COMPLETION:
        counts = _read(Seat.SELF, me, rule.fields, missing)
        vp = min(counts) * rule.multiplier

    elif rule.kind == RuleKind.BEATS_NEIGHBORS:
        mine = sum(_read(Seat.SELF, me, rule.fields, missing))
        left_count = sum(_read(Seat.LEFT, left, rule.fields, missing))
        right_count = sum(_read(Seat.RIGHT, right, rule.fields, missing))
        vp = rule.bonus if mine > left_count and mine > right_count else 0

    elif rule.kind == RuleKind.NEIGHBOR_CAPPED:
        count = sum(_read(Seat.LEFT, left, rule.fields, missing))
        count += sum(_read(Seat.RIGHT, right, rule.fields, missing))
        vp = count // rule.divisor
        if rule.cap is not None:
            vp = min(rule.cap, vp)

    elif rule.kind == RuleKind.THRESHOLD:
        count = sum(_read(Seat.SELF, me, rule.fields, missing))
        passed = True
        if rule.minimum is not None and count < rule.minimum:
            passed = False
        if rule.maximum is not None and count > rule.maximum:
            passed = False
        vp = rule.bonus if passed else 0

    elif rule.kind == RuleKind.ALL_PAWNS:
        pawns = None
        for name in rule.fields:
            pawns = me.get(name)
            if pawns is None:
                missing.append(FieldRef(Seat.SELF, name))
        vp = rule.bonus if pawns is not None and all(pawns) else 0

    elif rule.kind == RuleKind.TOKEN_PAIRS:
        counts = _read(Seat.SELF, me, rule.fields, missing)
        vp = sum((count // 2) * value for count, value in zip(counts, rule.token_values))

    return ScoredEntry(card_id=entry.card_id, name=entry.name, value=vp, missing_fields=tuple(missing))

def _unknown(card_id: str, kind: str) -> ScoredEntry:
    logger.warning("Unknown %s card id %r scored as 0", kind, card_id)
    return ScoredEntry(card_id=card_id, name=card_id, value=0, note=f"Unknown {kind} card: {card_id}")

def resolve_catalog(
    ring,
    snapshots: Mapping[PlayerId, CitySnapshot],
    catalog: Mapping[str, CatalogEntry],
    selected: str,
    kind: str,
) -> Dict[PlayerId, CatalogTotals]:
    """
    Score the cards each player selected from one catalog.

    Args:
        ring: Seating order (SeatingRing or sequence of player ids)
        snapshots: City snapshot per player; unseen players count as empty cities
        catalog: Card id to catalog entry
        selected: Name of the snapshot attribute listing the selected card ids
        kind: Catalog label used in notes and log messages
    """
    ring = as_ring(ring)
    ring.check_players(snapshots, "City snapshots")
    result = {}

    for pid in ring:
        left_id, right_id = ring.neighbors(pid)
        me = snapshots.get(pid, EMPTY_SNAPSHOT)
        left = snapshots.get(left_id, EMPTY_SNAPSHOT)
        right = snapshots.get(right_id, EMPTY_SNAPSHOT)

        breakdown: List[ScoredEntry] = []
        for card_id in dict.fromkeys(getattr(me, selected)):
            entry = catalog.get(card_id)
            if entry is None:
                breakdown.append(_unknown(card_id, kind))
            else:
                breakdown.append(evaluate_entry(entry, me, left, right))

        result[pid] = CatalogTotals(total=sum(e.value for e in breakdown), breakdown=tuple(breakdown))

    return result

def resolve_guilds(ring, snapshots: Mapping[PlayerId, CitySnapshot]) -> Dict[PlayerId, CatalogTotals]:
    return resolve_catalog(ring, snapshots, guild_catalog(), "selected_guilds", "guild")

def resolve_leaders(ring, snapshots: Mapping[PlayerId, CitySnapshot]) -> Dict[PlayerId, CatalogTotals]:
    return resolve_catalog(ring, snapshots, leader_catalog(), "selected_leaders", "leader")

