from .constants import Category, CardColor, ScienceSymbol, ScoreSource, Seat
from .errors import ScoringValidationError
from .models import FieldRef, MilitaryInput, NavalInput, ScoredEntry
from .player import CitySnapshot
from .seating import SeatingRing
from .scoring import ScoreCache, ScoreSheet

__all__ = [
    "Category",
    "CardColor",
    "ScienceSymbol",
    "ScoreSource",
    "Seat",
    "ScoringValidationError",
    "FieldRef",
    "MilitaryInput",
    "NavalInput",
    "ScoredEntry",
    "CitySnapshot",
    "SeatingRing",
    "ScoreCache",
    "ScoreSheet"
]
