from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from .constants import CardColor, PenaltyKind, RewardKind, RuleKind, Seat, VpPer

@dataclass(frozen=True)
class FieldRef:
    seat: Seat
    field: str

    def __str__(self) -> str:
        return f"{self.seat.value}.{self.field}"

@dataclass(frozen=True)
class ScoredEntry:
    card_id: str
    name: str
    value: int
    missing_fields: Tuple[FieldRef, ...] = ()
    note: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields

@dataclass(frozen=True)
class CatalogRule:
    kind: RuleKind
    fields: Tuple[str, ...] = ()
    multiplier: int = 1
    divisor: int = 1
    include_self: bool = False
    bonus: int = 0
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    cap: Optional[int] = None
    token_values: Tuple[int, ...] = ()

@dataclass(frozen=True)
class CatalogEntry:
    card_id: str
    name: str
    rule: CatalogRule
    notes: str = ""

@dataclass(frozen=True)
class CatalogTotals:
    total: int
    breakdown: Tuple[ScoredEntry, ...]

    @property
    def missing_fields(self) -> Tuple[FieldRef, ...]:
        return tuple(ref for entry in self.breakdown for ref in entry.missing_fields)

@dataclass(frozen=True)
class MilitaryInput:
    strengths: Tuple[int, int, int] = (0, 0, 0)
    diplomacy: Tuple[bool, bool, bool] = (False, False, False)
    boarding: Tuple[bool, bool, bool] = (False, False, False)

    def strength(self, age: int) -> int:
        return self.strengths[age - 1]

@dataclass(frozen=True)
class NavalInput:
    strengths: Tuple[int, int, int] = (0, 0, 0)
    opt_out: Tuple[bool, bool, bool] = (False, False, False)

    def strength(self, age: int) -> int:
        return self.strengths[age - 1]

@dataclass(frozen=True)
class ConflictTotals:
    by_age: Dict[int, int]
    total: int

@dataclass(frozen=True)
class ScienceResult:
    compass: int
    tablet: int
    gear: int
    wildcards: int
    sets: int
    set_bonus: int
    squares: int
    total: int
    breakdown: str
    efficiency: float

@dataclass(frozen=True)
class ProjectReward:
    kind: RewardKind
    amount: int = 0
    token_age: Optional[int] = None
    vp_per: Optional[VpPer] = None
    description: str = ""

@dataclass(frozen=True)
class ProjectPenalty:
    kind: PenaltyKind
    amount: int = 0
    color_to_remove: Optional[CardColor] = None
    description: str = ""

@dataclass(frozen=True)
class ProjectDefinition:
    project_id: str
    name: str
    age: int
    participation_cost: int
    reward: ProjectReward
    penalty: ProjectPenalty
    description: str = ""

@dataclass(frozen=True)
class ProjectOutcome:
    project_id: str
    points: int = 0
    coins_delta: int = 0
    victory_tokens: Dict[int, int] = field(default_factory=lambda: {1: 0, 2: 0, 3: 0})
    strength_delta: int = 0
    lose_victory_tokens: int = 0
    remove_card_colors: Tuple[CardColor, ...] = ()
    resource_generation: bool = False
    specials: Tuple[str, ...] = ()
    missing_fields: Tuple[FieldRef, ...] = ()
    notes: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return (self.points == 0 and self.coins_delta == 0
                and not any(self.victory_tokens.values())
                and self.strength_delta == 0 and self.lose_victory_tokens == 0
                and not self.remove_card_colors and not self.resource_generation
                and not self.specials)
