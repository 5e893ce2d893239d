from typing import Optional, Tuple
from dataclasses import dataclass, field, fields
from .constants import CardColor
from .errors import ScoringValidationError

@dataclass(frozen=True)
class CitySnapshot:
    """
    Everything the end-game resolvers may read about one player's city.

    Counts left as None were never entered; resolvers score them as zero but
    report them back as missing.
    """
    brown: Optional[int] = None
    grey: Optional[int] = None
    blue: Optional[int] = None
    yellow: Optional[int] = None
    red: Optional[int] = None
    green: Optional[int] = None
    purple: Optional[int] = None
    black: Optional[int] = None

    leaders: Optional[int] = None
    wonder_stages: Optional[int] = None
    coins: Optional[int] = None

    victory_tokens_age1: Optional[int] = None
    victory_tokens_age2: Optional[int] = None
    victory_tokens_age3: Optional[int] = None
    defeat_tokens: Optional[int] = None

    compass: Optional[int] = None
    tablet: Optional[int] = None
    gear: Optional[int] = None
    wild_science: Optional[int] = None

    # Edifice participation pawns for Ages I, II and III
    edifice_pawns: Optional[Tuple[bool, bool, bool]] = None

    selected_guilds: Tuple[str, ...] = field(default_factory=tuple)
    selected_leaders: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, int) and not isinstance(value, bool) and value < 0:
                raise ScoringValidationError(f"{f.name} cannot be negative, got {value}")

    def get(self, name: str) -> Optional[int]:
        return getattr(self, name)

    def count(self, name: str) -> int:
        value = getattr(self, name)
        return value or 0

    def is_missing(self, name: str) -> bool:
        return getattr(self, name) is None

    def victory_tokens(self, age: int) -> int:
        return self.count(f"victory_tokens_age{age}")

    def age_card_colors(self) -> int:
        """Number of different card colours present in the city."""
        return sum(1 for color in CardColor if self.count(color.value) > 0)

EMPTY_SNAPSHOT = CitySnapshot()
