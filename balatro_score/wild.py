"""Wild card and suit resolution for hand evaluation.

Produces the card set the hand evaluator sees. Wild cards are turned into
the ranks and suit that complete the strongest straight flush; Smeared
Joker folds Diamonds into Hearts and Clubs into Spades. Cards that need no
change are passed through as the same objects.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from typing import Optional, Sequence

from .enums import Suit, Rank, JokerKind
from .cards import Card, JokerCard, format_cards

logger = logging.getLogger(__name__)

_SMEARED_SUITS: dict[Suit, Suit] = {
    Suit.DIAMONDS: Suit.HEARTS,
    Suit.CLUBS: Suit.SPADES,
}


def _sequences() -> list[tuple[Rank, ...]]:
    """Every five-rank straight, each listed highest rank first."""
    ranks = list(Rank)
    runs = [tuple(reversed(ranks[i:i + 5])) for i in range(len(ranks) - 4)]
    runs.append((Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO, Rank.ACE))
    return runs


def strongest_sequence() -> tuple[Rank, ...]:
    """The straight a set of wild cards should aim for (A K Q J 10)."""
    return max(_sequences())


def _majority_suit(cards: Sequence[Card]) -> Suit:
    if not cards:
        return Suit.CLUBS
    return Counter(c.suit for c in cards).most_common(1)[0][0]


def _synthesize(cards: Sequence[Card]) -> list[Card]:
    """Every played card is wild: build the strongest straight flush."""
    suit = _majority_suit(cards)
    result = []
    for i, rank in enumerate(strongest_sequence()):
        source = cards[i] if i < len(cards) else cards[0]
        result.append(replace(source, rank=rank, suit=suit, enhancement=None))
    return result


def _fill_with_wilds(cards: Sequence[Card]) -> Optional[list[Card]]:
    """Complete the strongest straight flush with wild cards, or None."""
    wilds = [c for c in cards if c.is_wild]
    naturals = [c for c in cards if not c.is_wild]
    suit = _majority_suit(naturals)

    found: list[Card] = []
    missing: list[Rank] = []
    for rank in strongest_sequence():
        match = next((c for c in naturals if c.rank is rank and c.suit is suit), None)
        if match is None:
            missing.append(rank)
        else:
            found.append(match)

    if len(missing) > len(wilds):
        return None

    for rank, wild in zip(missing, wilds):
        found.append(replace(wild, rank=rank, suit=suit, enhancement=None))
    found.sort(key=lambda c: c.rank, reverse=True)
    return found if len(found) == 5 else None


def smear_suits(cards: Sequence[Card]) -> list[Card]:
    """Fold Diamonds into Hearts and Clubs into Spades."""
    return [
        replace(c, suit=_SMEARED_SUITS[c.suit]) if c.suit in _SMEARED_SUITS else c
        for c in cards
    ]


def resolve_played_cards(cards: Sequence[Card], jokers: Sequence[JokerCard] = ()) -> list[Card]:
    """Return the cards the hand evaluator should classify.

    Args:
        cards: Played cards in play order.
        jokers: Held jokers; only Smeared Joker matters here.
    """
    if not cards:
        return []

    wild_count = sum(1 for c in cards if c.is_wild)

    if wild_count == len(cards):
        resolved = _synthesize(cards)
        logger.debug("all %d played cards wild, synthesized %s", wild_count, format_cards(resolved))
        return resolved

    if wild_count:
        filled = _fill_with_wilds(cards)
        if filled is not None:
            logger.debug("wild cards completed %s", format_cards(filled))
            return filled
        return list(cards)

    if any(j.kind is JokerKind.SMEARED_JOKER for j in jokers):
        smeared = smear_suits(cards)
        logger.debug("smeared suits: %s", format_cards(smeared))
        return smeared

    return list(cards)
