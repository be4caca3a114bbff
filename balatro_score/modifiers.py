"""Per-card chip/mult modifiers: enhancements and editions.

Both tables cover every member of their enum; every card or joker attribute
maps to exactly one effect function.
"""

from __future__ import annotations

from typing import Callable, Optional

from .enums import Enhancement, Edition
from .cards import Card


class ScoreTally:
    """Chips and mult accumulated through the scoring pipeline."""

    __slots__ = ("chips", "mult")

    def __init__(self, chips: float = 0.0, mult: float = 0.0):
        self.chips = float(chips)
        self.mult = float(mult)

    def add_chips(self, n: float):
        self.chips += n

    def add_mult(self, n: float):
        self.mult += n

    def x_mult(self, n: float):
        self.mult *= n

    def copy(self) -> "ScoreTally":
        return ScoreTally(self.chips, self.mult)

    def absorb(self, other: "ScoreTally"):
        """Take over the values of a scratch tally."""
        self.chips = other.chips
        self.mult = other.mult

    @property
    def score(self) -> float:
        return self.chips * self.mult

    def __repr__(self) -> str:
        return f"ScoreTally(chips={self.chips:g}, mult={self.mult:g})"


# ---------------------------------------------------------------------------
# Enhancements
# ---------------------------------------------------------------------------

EnhancementFn = Callable[[ScoreTally, bool], None]


def _bonus(tally: ScoreTally, held: bool):
    tally.add_chips(30)


def _mult(tally: ScoreTally, held: bool):
    tally.add_mult(4)


def _wild(tally: ScoreTally, held: bool):
    pass  # only affects suit matching


def _glass(tally: ScoreTally, held: bool):
    tally.x_mult(2.0)


def _steel(tally: ScoreTally, held: bool):
    if held:
        tally.x_mult(1.5)


ENHANCEMENT_EFFECTS: dict[Enhancement, EnhancementFn] = {
    Enhancement.BONUS: _bonus,
    Enhancement.MULT: _mult,
    Enhancement.WILD: _wild,
    Enhancement.GLASS: _glass,
    Enhancement.STEEL: _steel,
}


def apply_enhancement(tally: ScoreTally, card: Card, held: bool = False):
    """Apply the card's enhancement, if any. Steel only counts when held."""
    if card.enhancement is not None:
        ENHANCEMENT_EFFECTS[card.enhancement](tally, held)


# ---------------------------------------------------------------------------
# Editions (cards and jokers)
# ---------------------------------------------------------------------------

EDITION_EFFECTS: dict[Edition, Callable[[ScoreTally], None]] = {
    Edition.FOIL: lambda t: t.add_chips(50),
    Edition.HOLOGRAPHIC: lambda t: t.add_mult(10),
    Edition.POLYCHROME: lambda t: t.x_mult(1.5),
}


def apply_edition(tally: ScoreTally, edition: Optional[Edition]):
    if edition is not None:
        EDITION_EFFECTS[edition](tally)


def score_card_face(tally: ScoreTally, card: Card):
    """Rank chips, then enhancement, then edition: one scoring trigger of a card."""
    tally.add_chips(card.chip_value)
    apply_enhancement(tally, card, held=False)
    apply_edition(tally, card.edition)


