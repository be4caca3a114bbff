"""Enumerations and constants for the round scorer."""

from __future__ import annotations
from enum import Enum, IntEnum


class Suit(str, Enum):
    CLUBS = "Clubs"
    DIAMONDS = "Diamonds"
    HEARTS = "Hearts"
    SPADES = "Spades"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def is_black(self) -> bool:
        return self in (Suit.CLUBS, Suit.SPADES)


_SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


class Rank(IntEnum):
    """Card ranks with numeric values for comparison. Ace = 14."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def chip_value(self) -> int:
        """Chip value of this rank when scored."""
        if self.value <= 10:
            return self.value
        if self.value in (11, 12, 13):  # J, Q, K
            return 10
        return 11  # Ace

    @property
    def display(self) -> str:
        _map = {11: "J", 12: "Q", 13: "K", 14: "A"}
        return _map.get(self.value, str(self.value))

    @property
    def is_face(self) -> bool:
        return self.value in (11, 12, 13)

    @property
    def straight_orders(self) -> tuple[int, ...]:
        """Ordinals this rank occupies in a straight (Ace plays high and low)."""
        if self is Rank.ACE:
            return (14, 1)
        return (self.value,)


class Edition(str, Enum):
    FOIL = "Foil"
    HOLOGRAPHIC = "Holographic"
    POLYCHROME = "Polychrome"


class Enhancement(str, Enum):
    BONUS = "Bonus"
    MULT = "Mult"
    WILD = "Wild"
    GLASS = "Glass"
    STEEL = "Steel"


class HandType(str, Enum):
    """Poker hand types, ordered by rank. Values are the explain-output names."""
    HIGH_CARD = "High Card"
    PAIR = "Pair"
    TWO_PAIR = "Two Pair"
    THREE_OF_A_KIND = "Three Of A Kind"
    STRAIGHT = "Straight"
    FLUSH = "Flush"
    FULL_HOUSE = "Full House"
    FOUR_OF_A_KIND = "Four of a Kind"
    STRAIGHT_FLUSH = "Straight Flush"
    FIVE_OF_A_KIND = "Five of a Kind"
    FLUSH_HOUSE = "Flush House"
    FLUSH_FIVE = "Flush Five"

    @property
    def rank(self) -> int:
        return _HAND_RANK[self]

    @property
    def base(self) -> tuple[int, int]:
        return HAND_BASE[self]


# Hand type rank (higher = better)
_HAND_RANK: dict[HandType, int] = {
    HandType.HIGH_CARD: 1,
    HandType.PAIR: 2,
    HandType.TWO_PAIR: 3,
    HandType.THREE_OF_A_KIND: 4,
    HandType.STRAIGHT: 5,
    HandType.FLUSH: 6,
    HandType.FULL_HOUSE: 7,
    HandType.FOUR_OF_A_KIND: 8,
    HandType.STRAIGHT_FLUSH: 9,
    HandType.FIVE_OF_A_KIND: 10,
    HandType.FLUSH_HOUSE: 11,
    HandType.FLUSH_FIVE: 12,
}

# Base chips and mult for each hand type
HAND_BASE: dict[HandType, tuple[int, int]] = {
    HandType.FLUSH_FIVE:       (160, 16),
    HandType.FLUSH_HOUSE:      (140, 14),
    HandType.FIVE_OF_A_KIND:   (120, 12),
    HandType.STRAIGHT_FLUSH:   (100,  8),
    HandType.FOUR_OF_A_KIND:   ( 60,  7),
    HandType.FULL_HOUSE:       ( 40,  4),
    HandType.FLUSH:            ( 35,  4),
    HandType.STRAIGHT:         ( 30,  4),
    HandType.THREE_OF_A_KIND:  ( 30,  3),
    HandType.TWO_PAIR:         ( 20,  2),
    HandType.PAIR:             ( 10,  2),
    HandType.HIGH_CARD:        (  5,  1),
}


class Activation(str, Enum):
    """When a joker fires during scoring."""
    ON_SCORED = "OnScored"        # once per scored card
    ON_HELD = "OnHeld"            # once per held card
    INDEPENDENT = "Independent"   # once per round, no card


class ScoringScope(str, Enum):
    """Which played cards receive per-card scoring."""
    BEST_HAND = "BestHand"
    ALL_PLAYED = "AllPlayed"
    CUSTOM = "Custom"  # reserved, not supported


class JokerKind(str, Enum):
    """Every joker the scorer knows. Values are display names."""
    JOKER = "Joker"
    JOLLY_JOKER = "Jolly Joker"
    ZANY_JOKER = "Zany Joker"
    MAD_JOKER = "Mad Joker"
    CRAZY_JOKER = "Crazy Joker"
    DROLL_JOKER = "Droll Joker"
    SLY_JOKER = "Sly Joker"
    WILY_JOKER = "Wily Joker"
    CLEVER_JOKER = "Clever Joker"
    DEVIOUS_JOKER = "Devious Joker"
    CRAFTY_JOKER = "Crafty Joker"
    ABSTRACT_JOKER = "Abstract Joker"
    RAISED_FIST = "Raised Fist"
    BLACKBOARD = "Blackboard"
    BARON = "Baron"
    GREEDY_JOKER = "Greedy Joker"
    LUSTY_JOKER = "Lusty Joker"
    WRATHFUL_JOKER = "Wrathful Joker"
    GLUTTONOUS_JOKER = "Gluttonous Joker"
    FIBONACCI = "Fibonacci"
    SCARY_FACE = "Scary Face"
    EVEN_STEVEN = "Even Steven"
    ODD_TODD = "Odd Todd"
    PHOTOGRAPH = "Photograph"
    SMILEY_FACE = "Smiley Face"
    FLOWER_POT = "Flower Pot"
    FOUR_FINGERS = "Four Fingers"
    SHORTCUT = "Shortcut"
    MIME = "Mime"
    PAREIDOLIA = "Pareidolia"
    SPLASH = "Splash"
    SOCK_AND_BUSKIN = "Sock and Buskin"
    SMEARED_JOKER = "Smeared Joker"
    BLUEPRINT = "Blueprint"
