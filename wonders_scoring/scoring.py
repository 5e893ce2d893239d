"""
Per-game score sheet: every scoring category of every player, summed into totals.

Categories are computed from the detailed inputs when they exist, or taken
from a direct point entry when the player scored that category by hand.
Computed values are memoised per (player, category) in a ScoreCache owned by
the sheet; every setter invalidates the keys its input can affect before
returning.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from . import catalog, conflicts, edifice, science
from .constants import AGES, Category, ScienceSymbol, ScoreSource, Seat
from .errors import ScoringValidationError
from .models import FieldRef, MilitaryInput, NavalInput
from .player import CitySnapshot
from .seating import PlayerId, SeatingRing, as_ring, check_age
from .setup import conflict_tables

logger = logging.getLogger(__name__)

_TOKEN_FIELDS = ("victory_tokens_age1", "victory_tokens_age2", "victory_tokens_age3", "defeat_tokens")

@dataclass(frozen=True)
class CategoryScore:
    category: Category
    points: int
    source: ScoreSource
    missing_fields: Tuple[FieldRef, ...] = ()
    notes: Tuple[str, ...] = ()

@dataclass(frozen=True)
class PlayerBreakdown:
    player_id: PlayerId
    categories: Dict[Category, CategoryScore]
    total: int

    @property
    def incomplete(self) -> bool:
        """True while any detailed category is working from missing fields."""
        return any(score.missing_fields for score in self.categories.values())

@dataclass(frozen=True)
class Standing:
    player_id: PlayerId
    total: int
    rank: int

class ScoreCache:
    """Memoised category scores keyed by (player, category)."""

    def __init__(self):
        self._scores: Dict[Tuple[PlayerId, Category], CategoryScore] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._scores)

    def __contains__(self, key) -> bool:
        return key in self._scores

    def get(self, player_id: PlayerId, category: Category) -> Optional[CategoryScore]:
        score = self._scores.get((player_id, category))
        if score is None:
            self.misses += 1
        else:
            self.hits += 1
        return score

    def put(self, player_id: PlayerId, category: Category, score: CategoryScore):
        self._scores[(player_id, category)] = score

    def invalidate(self, player_id: PlayerId, category: Category):
        if self._scores.pop((player_id, category), None) is not None:
            logger.debug("Invalidated %s/%s", player_id, category.value)

    def invalidate_player(self, player_id: PlayerId):
        for category in Category:
            self.invalidate(player_id, category)

    def invalidate_category(self, category: Category):
        for key in [k for k in self._scores if k[1] == category]:
            self.invalidate(*key)

    def clear(self):
        self._scores.clear()

def _category(category) -> Category:
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        raise ScoringValidationError(f"Unknown score category {category!r}") from None

class ScoreSheet:
    """
    Scores of one game.

    Holds the seating ring and every caller-supplied input, and owns the
    cache. One instance per game; nothing is shared between sheets.
    """

    def __init__(
        self,
        ring,
        snapshots: Optional[Mapping[PlayerId, CitySnapshot]] = None,
        military: Optional[Mapping[PlayerId, MilitaryInput]] = None,
        naval: Optional[Mapping[PlayerId, NavalInput]] = None,
    ):
        self.ring: SeatingRing = as_ring(ring)
        self.snapshots: Dict[PlayerId, CitySnapshot] = {}
        self.military: Dict[PlayerId, MilitaryInput] = {}
        self.naval: Dict[PlayerId, NavalInput] = {}
        self.edifice_selected: Dict[int, str] = {}
        self.edifice_completed: Dict[int, bool] = {}
        self.direct_points: Dict[Tuple[PlayerId, Category], int] = {}
        self.cache = ScoreCache()

        for pid, snapshot in (snapshots or {}).items():
            self.set_snapshot(pid, snapshot)
        for pid, value in (military or {}).items():
            self.set_military(pid, value)
        for pid, value in (naval or {}).items():
            self.set_naval(pid, value)

    # Mutations

    def set_snapshot(self, player_id: PlayerId, snapshot: CitySnapshot):
        """Replace a player's city; neighbors' guild and leader scores depend on it too."""
        self.ring.seat_of(player_id)
        self.snapshots[player_id] = snapshot
        self.cache.invalidate_player(player_id)
        for neighbor in self.ring.neighbors(player_id):
            self.cache.invalidate(neighbor, Category.GUILD)
            self.cache.invalidate(neighbor, Category.LEADERS)

    def set_military(self, player_id: PlayerId, value: MilitaryInput):
        self.ring.seat_of(player_id)
        self.military[player_id] = value
        self.cache.invalidate_category(Category.MILITARY)

    def set_naval(self, player_id: PlayerId, value: NavalInput):
        self.ring.seat_of(player_id)
        self.naval[player_id] = value
        self.cache.invalidate_category(Category.NAVY)

    def set_edifice_project(self, age: int, project_id: Optional[str], completed: bool = False):
        """Select the project of an age (None clears it) and whether it was completed."""
        check_age(age)
        if project_id:
            self.edifice_selected[age] = project_id
        else:
            self.edifice_selected.pop(age, None)
        self.edifice_completed[age] = completed
        self.cache.invalidate_category(Category.EDIFICE)

    def set_direct_points(self, player_id: PlayerId, category, points: Optional[int]):
        """Enter a category by hand; None goes back to the detailed score."""
        self.ring.seat_of(player_id)
        category = _category(category)
        if points is None:
            self.direct_points.pop((player_id, category), None)
        else:
            self.direct_points[(player_id, category)] = points
        self.cache.invalidate(player_id, category)

    # Reads

    def category_score(self, player_id: PlayerId, category) -> CategoryScore:
        self.ring.seat_of(player_id)
        category = _category(category)
        score = self.cache.get(player_id, category)
        if score is None:
            score = self._compute(player_id, category)
            self.cache.put(player_id, category, score)
        return score

    def breakdown_for(self, player_id: PlayerId) -> PlayerBreakdown:
        categories = {category: self.category_score(player_id, category) for category in Category}
        return PlayerBreakdown(
            player_id=player_id,
            categories=categories,
            total=sum(score.points for score in categories.values()),
        )

    def total_for(self, player_id: PlayerId) -> int:
        return self.breakdown_for(player_id).total

    def totals(self) -> Dict[PlayerId, int]:
        return {pid: self.total_for(pid) for pid in self.ring}

    def _coins(self, player_id: PlayerId) -> int:
        snapshot = self.snapshots.get(player_id)
        return snapshot.count("coins") if snapshot else 0

    def leaderboard(self) -> List[Standing]:
        """Players by total, ties broken by coins in treasury, then seating order."""
        totals = self.totals()
        ordered = sorted(
            self.ring,
            key=lambda pid: (-totals[pid], -self._coins(pid), self.ring.seat_of(pid)),
        )
        return [Standing(player_id=pid, total=totals[pid], rank=i + 1) for i, pid in enumerate(ordered)]

    def winner(self) -> PlayerId:
        """
        Determine the winner. Tiebreaker: most coins in treasury.
        """
        return self.leaderboard()[0].player_id

    # Category evaluation

    def _compute(self, player_id: PlayerId, category: Category) -> CategoryScore:
        direct = self.direct_points.get((player_id, category))
        if direct is not None:
            return CategoryScore(category, direct, ScoreSource.DIRECT)

        compute = self._detailed.get(category)
        score = compute(self, player_id) if compute else None
        if score is None:
            return CategoryScore(category, 0, ScoreSource.EMPTY)
        logger.debug("Computed %s/%s = %d", player_id, category.value, score.points)
        return score

    def _military(self, player_id):
        if not self.military:
            return self._military_tokens(player_id)
        result = conflicts.resolve_military(self.ring, self.military)[player_id]
        notes = tuple(f"Age {age}: {points:+d}" for age, points in result.by_age.items())
        return CategoryScore(Category.MILITARY, result.total, ScoreSource.DETAILED, notes=notes)

    def _military_tokens(self, player_id):
        """Tokens already on the score pad when no strengths were entered."""
        snapshot = self.snapshots.get(player_id)
        if snapshot is None or all(snapshot.is_missing(name) for name in _TOKEN_FIELDS):
            return None
        missing = tuple(FieldRef(Seat.SELF, name) for name in _TOKEN_FIELDS if snapshot.is_missing(name))
        tables = conflict_tables()["military"]
        by_age = {age: tables["victory"][age] * snapshot.victory_tokens(age) for age in AGES}
        defeats = tables["defeat"] * snapshot.count("defeat_tokens")
        notes = tuple(f"Age {age}: {points:+d}" for age, points in by_age.items()) + (f"Defeats: {defeats:+d}",)
        return CategoryScore(
            Category.MILITARY, sum(by_age.values()) + defeats, ScoreSource.DETAILED, missing, notes,
        )

    def _navy(self, player_id):
        if not self.naval:
            return None
        result = conflicts.resolve_naval(self.ring, self.naval)[player_id]
        notes = tuple(f"Age {age}: {points:+d}" for age, points in result.by_age.items())
        return CategoryScore(Category.NAVY, result.total, ScoreSource.DETAILED, notes=notes)

    def _treasury(self, player_id):
        snapshot = self.snapshots.get(player_id)
        if snapshot is None:
            return None
        missing = ()
        if snapshot.is_missing("coins"):
            missing = (FieldRef(Seat.SELF, "coins"),)
        return CategoryScore(Category.TREASURY, snapshot.count("coins") // 3, ScoreSource.DETAILED, missing)

    def _science(self, player_id):
        snapshot = self.snapshots.get(player_id)
        if snapshot is None:
            return None
        missing = tuple(
            FieldRef(Seat.SELF, symbol.value)
            for symbol in ScienceSymbol
            if snapshot.is_missing(symbol.value)
        )
        result = science.optimize(
            snapshot.count("compass"), snapshot.count("tablet"), snapshot.count("gear"),
            snapshot.count("wild_science"),
        )
        return CategoryScore(Category.SCIENCE, result.total, ScoreSource.DETAILED, missing, (result.breakdown,))

    def _catalog(self, player_id, category, resolve):
        snapshot = self.snapshots.get(player_id)
        if snapshot is None:
            return None
        totals = resolve(self.ring, self.snapshots)[player_id]
        notes = tuple(
            entry.note or f"{entry.name}: {entry.value}"
            for entry in totals.breakdown
        )
        return CategoryScore(category, totals.total, ScoreSource.DETAILED, totals.missing_fields, notes)

    def _guild(self, player_id):
        return self._catalog(player_id, Category.GUILD, catalog.resolve_guilds)

    def _leaders(self, player_id):
        return self._catalog(player_id, Category.LEADERS, catalog.resolve_leaders)

    def _edifice(self, player_id):
        snapshot = self.snapshots.get(player_id)
        if snapshot is None or not self.edifice_selected:
            return None
        outcomes = edifice.evaluate_player_projects(self.edifice_selected, self.edifice_completed, snapshot)
        summary = edifice.summarize(outcomes)
        points = summary.points + edifice.victory_token_points(summary)
        return CategoryScore(
            Category.EDIFICE, points, ScoreSource.DETAILED,
            tuple(summary.missing_fields), tuple(summary.notes),
        )

    _detailed = {
        Category.MILITARY: _military,
        Category.NAVY: _navy,
        Category.TREASURY: _treasury,
        Category.SCIENCE: _science,
        Category.GUILD: _guild,
        Category.LEADERS: _leaders,
        Category.EDIFICE: _edifice,
    }
