"""Card, Joker and Round data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .enums import Suit, Rank, Edition, Enhancement, JokerKind


@dataclass(frozen=True)
class Card:
    """A playing card with its optional enhancement and edition."""
    rank: Rank
    suit: Suit
    enhancement: Optional[Enhancement] = None
    edition: Optional[Edition] = None

    @property
    def chip_value(self) -> int:
        """Base chip value of this card when scored."""
        return self.rank.chip_value

    @property
    def is_wild(self) -> bool:
        return self.enhancement is Enhancement.WILD

    def display(self) -> str:
        s = f"{self.rank.display}{self.suit.symbol}"
        if self.enhancement is not None:
            s += f"[{self.enhancement.value}]"
        if self.edition is not None:
            s += f"({self.edition.value})"
        return s

    def __repr__(self) -> str:
        return self.display()


@dataclass(frozen=True)
class JokerCard:
    """A Joker held for the round."""
    kind: JokerKind
    edition: Optional[Edition] = None

    @property
    def name(self) -> str:
        return self.kind.value

    def display(self) -> str:
        if self.edition is not None:
            return f"{self.name}({self.edition.value})"
        return self.name

    def __repr__(self) -> str:
        return self.display()


@dataclass(frozen=True)
class Round:
    """One round to score: what was played, what stayed in hand, and the jokers."""
    cards_played: tuple[Card, ...] = field(default_factory=tuple)
    cards_held_in_hand: tuple[Card, ...] = field(default_factory=tuple)
    jokers: tuple[JokerCard, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable but store tuples so a Round stays immutable.
        object.__setattr__(self, "cards_played", tuple(self.cards_played))
        object.__setattr__(self, "cards_held_in_hand", tuple(self.cards_held_in_hand))
        object.__setattr__(self, "jokers", tuple(self.jokers))


def format_cards(cards) -> str:
    """Format a list of cards as 'K♠ Q♠ J♠ 10♠'."""
    return " ".join(c.display() for c in cards)
