"""
Science scoring with wildcard symbols.

A city scores 7 VP per complete set of three different symbols plus the
square of each symbol count. Wildcards (Babylon, Scientists Guild, ...) may
each become any symbol; the best assignment is found by scoring every
integer split of the wildcards over the three symbols.
"""

import logging
from enum import Enum
from typing import Tuple

import numpy as np

from .errors import ScoringValidationError
from .models import ScienceResult

logger = logging.getLogger(__name__)

SET_BONUS = 7

class ScienceHint(Enum):
    NEEDS_THIRD_SYMBOL = "needs_third_symbol"
    UNBALANCED = "unbalanced"
    BALANCED = "balanced"
    KEEP_COLLECTING = "keep_collecting"

HINT_MESSAGES = {
    ScienceHint.NEEDS_THIRD_SYMBOL: "Focus on collecting all three symbol types to form complete sets",
    ScienceHint.UNBALANCED: "Try to balance your science symbols for more efficient scoring",
    ScienceHint.BALANCED: "Great science balance! Consider leaders or guilds that provide wild science",
    ScienceHint.KEEP_COLLECTING: "Collect more science symbols to increase your score",
}

def score_symbols(compass: int, tablet: int, gear: int) -> int:
    """Calculates science VP: (sets of 3 = 7pts) + (identical symbols^2)."""
    return SET_BONUS * min(compass, tablet, gear) + compass ** 2 + tablet ** 2 + gear ** 2

def _check_counts(**counts: int):
    for name, value in counts.items():
        if value is None or value < 0:
            raise ScoringValidationError(f"Science count {name} cannot be negative, got {value}")

def wildcard_splits(wildcards: int, add_compass: int) -> np.ndarray:
    """
    Ways to hand out `wildcards` symbols once `add_compass` went to compass.

    Rows are (compass, tablet, gear) additions with the tablet share ascending.
    """
    add_tablet = np.arange(wildcards - add_compass + 1, dtype=np.int64)
    add_gear = wildcards - add_compass - add_tablet
    return np.stack([np.full_like(add_tablet, add_compass), add_tablet, add_gear], axis=1)

def distribute_wildcards(compass: int, tablet: int, gear: int, wildcards: int) -> Tuple[int, int, int]:
    """Symbol counts after the best wildcard assignment; ties keep the first split found."""
    if wildcards == 0:
        return compass, tablet, gear
    base = np.array([compass, tablet, gear], dtype=np.int64)
    best_counts = None
    best_total = -1
    # one compass share per pass; arrays stay linear in the wildcard count
    for add_compass in range(wildcards + 1):
        counts = wildcard_splits(wildcards, add_compass) + base
        totals = SET_BONUS * counts.min(axis=1) + (counts ** 2).sum(axis=1)
        row = int(np.argmax(totals))
        if totals[row] > best_total:
            best_total = int(totals[row])
            best_counts = counts[row]
    logger.debug("Best wildcard split: %s scoring %d", best_counts.tolist(), best_total)
    return tuple(int(c) for c in best_counts)

def _breakdown(compass: int, tablet: int, gear: int, sets: int, set_bonus: int, squares: int, wildcards: int) -> str:
    lines = [f"{compass} Compass, {tablet} Tablet, {gear} Gear"]
    if wildcards > 0:
        lines.append(f"({wildcards} wild science optimally distributed)")
    lines.append(f"{sets} complete sets x {SET_BONUS} = {set_bonus} points")
    lines.append(f"Symbol squares: {compass}^2 + {tablet}^2 + {gear}^2 = {squares} points")
    return "\n".join(lines)

def optimize(compass: int, tablet: int, gear: int, wildcards: int = 0) -> ScienceResult:
    """
    Best science score reachable with the given symbols and wildcards.

    Raises:
        ScoringValidationError: if any count is negative
    """
    _check_counts(compass=compass, tablet=tablet, gear=gear, wildcards=wildcards)
    compass, tablet, gear = distribute_wildcards(compass, tablet, gear, wildcards)

    sets = min(compass, tablet, gear)
    set_bonus = sets * SET_BONUS
    squares = compass ** 2 + tablet ** 2 + gear ** 2
    symbols = compass + tablet + gear
    efficiency = (sets * 3 / symbols) * 100 if symbols > 0 else 0.0

    return ScienceResult(
        compass=compass,
        tablet=tablet,
        gear=gear,
        wildcards=wildcards,
        sets=sets,
        set_bonus=set_bonus,
        squares=squares,
        total=set_bonus + squares,
        breakdown=_breakdown(compass, tablet, gear, sets, set_bonus, squares, wildcards),
        efficiency=round(efficiency, 1),
    )

def suggest(compass: int, tablet: int, gear: int) -> Tuple[ScienceHint, str]:
    """Classify a finished distribution for a UI hint."""
    _check_counts(compass=compass, tablet=tablet, gear=gear)
    low = min(compass, tablet, gear)
    high = max(compass, tablet, gear)

    if low == 0:
        hint = ScienceHint.NEEDS_THIRD_SYMBOL
    elif high - low > 3:
        hint = ScienceHint.UNBALANCED
    elif low >= 3:
        hint = ScienceHint.BALANCED
    else:
        hint = ScienceHint.KEEP_COLLECTING
    return hint, HINT_MESSAGES[hint]
