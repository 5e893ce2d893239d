from enum import Enum

AGES = (1, 2, 3)
MIN_PLAYERS = 3
MAX_PLAYERS = 7

class CardColor(Enum):
    BROWN = "brown"
    GREY = "grey"
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    BLACK = "black"

class ScienceSymbol(Enum):
    COMPASS = "compass"
    TABLET = "tablet"
    GEAR = "gear"

class Seat(Enum):
    SELF = "self"
    LEFT = "left"
    RIGHT = "right"

class RuleKind(Enum):
    FLAT = "flat"
    OWN_COUNT = "own_count"
    NEIGHBOR_SUM = "neighbor_sum"
    SET_COMPLETION = "set_completion"
    BEATS_NEIGHBORS = "beats_neighbors"
    NEIGHBOR_CAPPED = "neighbor_capped"
    THRESHOLD = "threshold"
    ALL_PAWNS = "all_pawns"
    TOKEN_PAIRS = "token_pairs"

class RewardKind(Enum):
    COINS = "coins"
    VICTORY_TOKEN = "victory_token"
    STRENGTH = "strength"
    END_GAME_VP = "end_game_vp"
    RESOURCE_GENERATION = "resource_generation"
    SPECIAL = "special"

class PenaltyKind(Enum):
    COINS = "coins"
    REMOVE_CARD = "remove_card"
    LOSE_VICTORY_TOKENS = "lose_victory_tokens"
    SPECIAL = "special"

class VpPer(Enum):
    WONDER_STAGE = "wonder_stage"
    BLUE_CARD = "blue_card"
    BROWN_GREY_SET = "brown_grey_set"
    AGE_CARD_COLOR = "age_card_color"

class Category(Enum):
    WONDER = "wonder"
    TREASURY = "treasury"
    MILITARY = "military"
    CIVIL = "civil"
    COMMERCIAL = "commercial"
    SCIENCE = "science"
    GUILD = "guild"
    CITIES = "cities"
    LEADERS = "leaders"
    NAVY = "navy"
    ISLANDS = "islands"
    EDIFICE = "edifice"

class ScoreSource(Enum):
    DIRECT = "direct"
    DETAILED = "detailed"
    EMPTY = "empty"
