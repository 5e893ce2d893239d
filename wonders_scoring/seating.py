from typing import Hashable, Iterable, List, Mapping, Sequence, Tuple
from .constants import AGES, MAX_PLAYERS, MIN_PLAYERS
from .errors import ScoringValidationError

PlayerId = Hashable

class SeatingRing:
    """
    Circular seating order of a game.

    The player after the last seat is the first one. Index i - 1 is a
    player's left neighbor and index i + 1 the right neighbor.
    """

    def __init__(self, order: Iterable[PlayerId]):
        order = tuple(order)
        if not MIN_PLAYERS <= len(order) <= MAX_PLAYERS:
            raise ScoringValidationError(
                f"Number of players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {len(order)}"
            )
        if len(set(order)) != len(order):
            duplicates = sorted({str(pid) for pid in order if order.count(pid) > 1})
            raise ScoringValidationError(f"Seating ring has duplicate players: {', '.join(duplicates)}")
        self.order: Tuple[PlayerId, ...] = order
        self._seats = {pid: i for i, pid in enumerate(order)}

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self):
        return iter(self.order)

    def __contains__(self, player_id) -> bool:
        return player_id in self._seats

    def __eq__(self, other) -> bool:
        return isinstance(other, SeatingRing) and self.order == other.order

    def __hash__(self) -> int:
        return hash(self.order)

    def __repr__(self) -> str:
        return f"SeatingRing({list(self.order)!r})"

    def seat_of(self, player_id: PlayerId) -> int:
        try:
            return self._seats[player_id]
        except KeyError:
            raise ScoringValidationError(f"Player {player_id!r} is not seated in this game") from None

    def at_offset(self, player_id: PlayerId, offset: int) -> PlayerId:
        """Player `offset` seats to the right (negative: to the left)."""
        return self.order[(self.seat_of(player_id) + offset) % len(self.order)]

    def neighbors(self, player_id: PlayerId) -> Tuple[PlayerId, PlayerId]:
        """Get the (left, right) neighbors of a player."""
        return self.at_offset(player_id, -1), self.at_offset(player_id, 1)

    def check_players(self, players: Iterable[PlayerId], what: str = "input"):
        """Every player named by a per-player mapping must be seated."""
        strangers = [pid for pid in players if pid not in self._seats]
        if strangers:
            raise ScoringValidationError(
                f"{what} names players who are not seated: {', '.join(map(str, strangers))}"
            )

def as_ring(ring) -> SeatingRing:
    if isinstance(ring, SeatingRing):
        return ring
    return SeatingRing(ring)

def check_age(age: int):
    if age not in AGES:
        raise ScoringValidationError(f"Age must be one of {AGES}, got {age!r}")

def active_ring(ring: SeatingRing, excluded: Mapping[PlayerId, bool]) -> List[PlayerId]:
    """Seating order with excluded players removed; their neighbors close the gap."""
    return [pid for pid in ring if not excluded.get(pid, False)]

def ring_pairs(order: Sequence[PlayerId]) -> List[Tuple[PlayerId, PlayerId]]:
    """Each player paired with the next one round the table."""
    if len(order) < 2:
        return []
    return [(order[i], order[(i + 1) % len(order)]) for i in range(len(order))]
