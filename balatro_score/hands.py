"""Hand type identification.

Identifies the best poker hand from a set of played cards, including the
Balatro-only types: Five of a Kind, Flush House, Flush Five. Four Fingers
shrinks flushes and straights to four cards; Shortcut lets straights skip
one rank between cards.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .enums import Suit, Rank, HandType, JokerKind, HAND_BASE
from .cards import Card, JokerCard


def has_joker(jokers: Iterable[JokerCard], kind: JokerKind) -> bool:
    return any(j.kind is kind for j in jokers)


def min_cards_needed(jokers: Sequence[JokerCard]) -> int:
    """Cards required for a flush or straight (4 with Four Fingers)."""
    return 4 if has_joker(jokers, JokerKind.FOUR_FINGERS) else 5


def _rank_groups(cards: Sequence[Card]) -> dict[Rank, list[Card]]:
    groups: dict[Rank, list[Card]] = {}
    for c in cards:
        groups.setdefault(c.rank, []).append(c)
    return groups


def _suit_groups(cards: Sequence[Card]) -> dict[Suit, list[Card]]:
    """Cards grouped by suit, in fixed Suit order."""
    groups: dict[Suit, list[Card]] = {s: [] for s in Suit}
    for c in cards:
        groups[c.suit].append(c)
    return {s: g for s, g in groups.items() if g}


def _ranks_with_count(groups: dict[Rank, list[Card]], at_least: int, below: int = 99) -> list[Rank]:
    """Ranks whose group size is in [at_least, below), highest first."""
    return sorted((r for r, g in groups.items() if at_least <= len(g) < below), reverse=True)


# ---------------------------------------------------------------------------
# Pattern helpers shared by several hand types
# ---------------------------------------------------------------------------

def _straight_cards(cards: Sequence[Card], size: int, shortcut: bool) -> list[Card]:
    """Find a straight of `size` cards; returns its cards highest first, or [].

    Windows are scanned from the low end. A plain run of consecutive
    ordinals is preferred; with Shortcut a window may also step by two, as
    long as at least one step is exactly two.
    """
    if len(cards) < size:
        return []

    by_order: dict[int, list[Card]] = {}
    for c in cards:
        for order in c.rank.straight_orders:
            by_order.setdefault(order, []).append(c)
    orders = sorted(by_order)

    def pick(window: list[int]) -> list[Card]:
        return [by_order[o][0] for o in reversed(window[-size:])]

    for i in range(len(orders) - size + 1):
        window = orders[i:i + size]
        if window[-1] - window[0] == size - 1:
            return pick(window)

    if shortcut:
        for width in range(size, len(orders) + 1):
            for i in range(len(orders) - width + 1):
                window = orders[i:i + width]
                steps = [b - a for a, b in zip(window, window[1:])]
                if all(s <= 2 for s in steps) and any(s == 2 for s in steps):
                    return pick(window)

    return []


def _full_house_cards(cards: Sequence[Card]) -> list[Card]:
    """Best triplet plus best pair (or a second triplet cut to two), or []."""
    groups = _rank_groups(cards)
    triplets = _ranks_with_count(groups, 3)
    pairs = _ranks_with_count(groups, 2, below=3)
    if not triplets or (not pairs and len(triplets) < 2):
        return []

    result = groups[triplets[0]][:3]
    if pairs:
        result += groups[pairs[0]][:2]
    else:
        result += groups[triplets[1]][:2]
    return result


# ---------------------------------------------------------------------------
# Evaluators
# ---------------------------------------------------------------------------

class HandEvaluator:
    """One hand category: does it match, and which cards make it up."""

    hand_type: HandType

    def evaluate(self, cards: Sequence[Card], jokers: Sequence[JokerCard]) -> bool:
        return bool(self.get_cards(cards, jokers))

    def get_cards(self, cards: Sequence[Card], jokers: Sequence[JokerCard]) -> list[Card]:
        raise NotImplementedError

    @property
    def name(self) -> str:
        return self.hand_type.value

    @property
    def value(self) -> tuple[int, int]:
        return HAND_BASE[self.hand_type]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class HighCard(HandEvaluator):
    hand_type = HandType.HIGH_CARD

    def get_cards(self, cards, jokers):
        if not cards:
            return []
        return [max(cards, key=lambda c: c.rank)]


class OfAKind(HandEvaluator):
    """Pair, Three/Four/Five of a Kind: n cards of the highest qualifying rank."""

    def __init__(self, hand_type: HandType, n: int):
        self.hand_type = hand_type
        self.n = n

    def get_cards(self, cards, jokers):
        groups = _rank_groups(cards)
        ranks = _ranks_with_count(groups, self.n)
        if not ranks:
            return []
        return groups[ranks[0]][:self.n]


class TwoPair(HandEvaluator):
    hand_type = HandType.TWO_PAIR

    def get_cards(self, cards, jokers):
        groups = _rank_groups(cards)
        ranks = _ranks_with_count(groups, 2)
        if len(ranks) < 2:
            return []
        return groups[ranks[0]][:2] + groups[ranks[1]][:2]


class FullHouse(HandEvaluator):
    hand_type = HandType.FULL_HOUSE

    def get_cards(self, cards, jokers):
        if len(cards) < 5:
            return []
        return _full_house_cards(cards)


class Flush(HandEvaluator):
    hand_type = HandType.FLUSH

    def get_cards(self, cards, jokers):
        need = min_cards_needed(jokers)
        if len(cards) < need:
            return []
        candidates = [g for g in _suit_groups(cards).values() if len(g) >= need]
        if not candidates:
            return []
        best = max(candidates, key=len)
        return sorted(best, key=lambda c: c.rank, reverse=True)[:need]


class Straight(HandEvaluator):
    hand_type = HandType.STRAIGHT

    def get_cards(self, cards, jokers):
        return _straight_cards(cards, min_cards_needed(jokers), has_joker(jokers, JokerKind.SHORTCUT))


class StraightFlush(HandEvaluator):
    hand_type = HandType.STRAIGHT_FLUSH

    def get_cards(self, cards, jokers):
        need = min_cards_needed(jokers)
        shortcut = has_joker(jokers, JokerKind.SHORTCUT)
        if len(cards) < need:
            return []
        for group in _suit_groups(cards).values():
            if len(group) < need:
                continue
            found = _straight_cards(group, need, shortcut)
            if found:
                return found
        return []


class FlushHouse(HandEvaluator):
    hand_type = HandType.FLUSH_HOUSE

    def get_cards(self, cards, jokers):
        if len(cards) < 5:
            return []
        for group in _suit_groups(cards).values():
            if len(group) < 5:
                continue
            found = _full_house_cards(group)
            if found:
                return found
        return []


class FlushFive(HandEvaluator):
    hand_type = HandType.FLUSH_FIVE

    def get_cards(self, cards, jokers):
        if len(cards) < 5:
            return []
        for group in _suit_groups(cards).values():
            by_rank = _rank_groups(group)
            ranks = _ranks_with_count(by_rank, 5)
            if ranks:
                return by_rank[ranks[0]][:5]
        return []


# Strongest first; the first evaluator that matches decides the hand.
EVALUATORS: tuple[HandEvaluator, ...] = (
    FlushFive(),
    FlushHouse(),
    OfAKind(HandType.FIVE_OF_A_KIND, 5),
    StraightFlush(),
    OfAKind(HandType.FOUR_OF_A_KIND, 4),
    FullHouse(),
    Flush(),
    Straight(),
    OfAKind(HandType.THREE_OF_A_KIND, 3),
    TwoPair(),
    OfAKind(HandType.PAIR, 2),
    HighCard(),
)

_BY_TYPE: dict[HandType, HandEvaluator] = {e.hand_type: e for e in EVALUATORS}


def evaluator_for(hand_type: HandType) -> HandEvaluator:
    return _BY_TYPE[hand_type]


def find_best_hand(
    cards: Sequence[Card],
    jokers: Sequence[JokerCard] = (),
) -> Optional[tuple[HandType, list[Card]]]:
    """Evaluate cards and return (hand_type, contributing cards), or None.

    Args:
        cards: The cards to classify (already wild/suit resolved).
        jokers: Held jokers; Four Fingers and Shortcut change the rules.
    """
    for evaluator in EVALUATORS:
        found = evaluator.get_cards(cards, jokers)
        if found:
            return evaluator.hand_type, found
    return None
