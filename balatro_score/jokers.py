"""Joker effects.

Every JokerKind maps to one JokerEffect in JOKER_EFFECTS. An effect fires
at one point of the scoring pipeline (its Activation), mutates the tally it
is given and reports whether it triggered. The scorer decides how often an
effect runs; effects only decide what happens when they do.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, Sequence

from .enums import Activation, HandType, JokerKind, Rank, ScoringScope, Suit
from .cards import Card, JokerCard
from .hands import Flush, Straight
from .modifiers import ScoreTally, apply_edition, apply_enhancement


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class JokerContext:
    """What a joker may look at while it fires.

    Built once before the best hand is known and rebuilt with it afterwards.
    """
    cards_played: tuple[Card, ...]
    cards_held: tuple[Card, ...]
    jokers: tuple[JokerCard, ...]
    resolved_cards: tuple[Card, ...]
    best_hand: Optional[HandType] = None

    def has(self, kind: JokerKind) -> bool:
        return any(j.kind is kind for j in self.jokers)

    def is_face(self, card: Card) -> bool:
        """Face check that honours Pareidolia."""
        return card.rank.is_face or self.has(JokerKind.PAREIDOLIA)

    def with_best_hand(self, hand_type: Optional[HandType]) -> "JokerContext":
        return replace(self, best_hand=hand_type)


ApplyFn = Callable[[ScoreTally, Optional[Card], JokerContext], bool]
ScopeFn = Callable[[JokerContext], Optional[ScoringScope]]


@dataclass(frozen=True)
class JokerEffect:
    kind: JokerKind
    activation: Activation
    apply: ApplyFn
    supports_retrigger: bool = False
    is_passive: bool = False
    is_copyable: bool = True
    scoring_scope: Optional[ScopeFn] = None
    preferred_scoring_scope: Optional[ScopeFn] = None

    @property
    def name(self) -> str:
        return self.kind.value


JOKER_EFFECTS: dict[JokerKind, JokerEffect] = {}


def _register(kind: JokerKind, activation: Activation, apply: ApplyFn, **flags):
    JOKER_EFFECTS[kind] = JokerEffect(kind, activation, apply, **flags)


def effect_for(kind: JokerKind) -> JokerEffect:
    return JOKER_EFFECTS[kind]


# ---------------------------------------------------------------------------
# Ordering and dedup
# ---------------------------------------------------------------------------

def distinct_kinds(jokers: Iterable[JokerCard]) -> list[JokerKind]:
    """Joker kinds in first-seen order, each once."""
    seen: set[JokerKind] = set()
    kinds = []
    for j in jokers:
        if j.kind not in seen:
            seen.add(j.kind)
            kinds.append(j.kind)
    return kinds


def physical_effects(jokers: Iterable[JokerCard], activation: Activation) -> list[JokerEffect]:
    """One effect per held joker, duplicates included."""
    effects = (effect_for(j.kind) for j in jokers)
    return [e for e in effects if e.activation is activation]


def distinct_effects(jokers: Iterable[JokerCard], activation: Activation) -> list[JokerEffect]:
    """One effect per joker kind."""
    effects = (effect_for(k) for k in distinct_kinds(jokers))
    return [e for e in effects if e.activation is activation]


# ---------------------------------------------------------------------------
# Plain and hand-pattern jokers (Independent)
# ---------------------------------------------------------------------------

def _joker(tally, card, ctx):
    tally.add_mult(4)
    return False


def _rank_counts(cards: Sequence[Card]) -> list[int]:
    counts: dict[Rank, int] = {}
    for c in cards:
        counts[c.rank] = counts.get(c.rank, 0) + 1
    return list(counts.values())


def _has_pair(ctx: JokerContext) -> bool:
    return any(n >= 2 for n in _rank_counts(ctx.cards_played))


def _has_three(ctx: JokerContext) -> bool:
    return any(n >= 3 for n in _rank_counts(ctx.cards_played))


def _has_two_pair(ctx: JokerContext) -> bool:
    return sum(1 for n in _rank_counts(ctx.cards_played) if n >= 2) >= 2


def _has_straight(ctx: JokerContext) -> bool:
    """Five consecutive ranks; Four Fingers and Shortcut do not apply here."""
    return Straight().evaluate(ctx.cards_played, ())


def _has_flush(ctx: JokerContext) -> bool:
    """Five cards of one suit; Four Fingers does not apply here."""
    return Flush().evaluate(ctx.cards_played, ())


def _pattern_bonus(test: Callable[[JokerContext], bool], chips: int = 0, mult: int = 0) -> ApplyFn:
    def apply(tally, card, ctx):
        if not test(ctx):
            return False
        tally.add_chips(chips)
        tally.add_mult(mult)
        return True
    return apply


_PATTERN_JOKERS = (
    (JokerKind.JOLLY_JOKER, _has_pair, 0, 8),
    (JokerKind.ZANY_JOKER, _has_three, 0, 12),
    (JokerKind.MAD_JOKER, _has_two_pair, 0, 10),
    (JokerKind.CRAZY_JOKER, _has_straight, 0, 12),
    (JokerKind.DROLL_JOKER, _has_flush, 0, 10),
    (JokerKind.SLY_JOKER, _has_pair, 50, 0),
    (JokerKind.WILY_JOKER, _has_three, 100, 0),
    (JokerKind.CLEVER_JOKER, _has_two_pair, 80, 0),
    (JokerKind.DEVIOUS_JOKER, _has_straight, 100, 0),
    (JokerKind.CRAFTY_JOKER, _has_flush, 80, 0),
)


def _abstract(tally, card, ctx):
    tally.add_mult(3 * len(ctx.jokers))
    return True


def _blackboard(tally, card, ctx):
    if all(c.suit.is_black or c.is_wild for c in ctx.cards_held):
        tally.x_mult(3)
        return True
    return False


def _flower_pot(tally, card, ctx):
    if len(ctx.cards_played) < 4:
        return False
    suits = {c.suit for c in ctx.cards_played}
    if ctx.has(JokerKind.SMEARED_JOKER):
        matched = Suit.HEARTS in suits and any(s.is_black for s in suits)
    else:
        matched = len(suits) == len(Suit)
    if matched:
        tally.x_mult(3)
    return matched


# ---------------------------------------------------------------------------
# Per scored card (OnScored)
# ---------------------------------------------------------------------------

def _suit_mult(suit: Suit) -> ApplyFn:
    def apply(tally, card, ctx):
        if card is None or not (card.suit is suit or card.is_wild):
            return False
        tally.add_mult(3)
        return True
    return apply


def _rank_bonus(ranks: frozenset, chips: int = 0, mult: int = 0) -> ApplyFn:
    def apply(tally, card, ctx):
        if card is None or card.rank not in ranks:
            return False
        tally.add_chips(chips)
        tally.add_mult(mult)
        return True
    return apply


def _face_bonus(chips: int = 0, mult: int = 0) -> ApplyFn:
    def apply(tally, card, ctx):
        if card is None or not ctx.is_face(card):
            return False
        tally.add_chips(chips)
        tally.add_mult(mult)
        return True
    return apply


_FIBONACCI = frozenset({Rank.ACE, Rank.TWO, Rank.THREE, Rank.FIVE, Rank.EIGHT})
_EVEN = frozenset({Rank.TWO, Rank.FOUR, Rank.SIX, Rank.EIGHT, Rank.TEN})
_ODD = frozenset({Rank.THREE, Rank.FIVE, Rank.SEVEN, Rank.NINE, Rank.ACE})


def _index_of(card: Card, cards: Sequence[Card]) -> Optional[int]:
    for i, c in enumerate(cards):
        if c is card:
            return i
    return None


def _photograph(tally, card, ctx):
    """x2 mult on the first face card played."""
    if card is None or not ctx.is_face(card):
        return False
    for cards in (ctx.cards_played, ctx.resolved_cards):
        i = _index_of(card, cards)
        if i is not None:
            break
    else:
        return False
    if any(ctx.is_face(c) for c in cards[:i]):
        return False
    tally.x_mult(2)
    return True


def _sock_and_buskin(tally, card, ctx):
    """Score a face card a second time, per-card jokers included."""
    if card is None or not ctx.is_face(card):
        return False
    tally.add_chips(card.chip_value)
    apply_enhancement(tally, card, held=False)
    apply_edition(tally, card.edition)
    for effect in physical_effects(ctx.jokers, Activation.ON_SCORED):
        if effect.kind is not JokerKind.SOCK_AND_BUSKIN:
            effect.apply(tally, card, ctx)
    return True


# ---------------------------------------------------------------------------
# Per held card (OnHeld)
# ---------------------------------------------------------------------------

def _raised_fist(tally, card, ctx):
    if card is None or not ctx.cards_held:
        return False
    lowest = ctx.cards_held[0]
    for c in ctx.cards_held[1:]:
        if c.rank <= lowest.rank:
            lowest = c
    if card is not lowest:
        return False
    tally.add_mult(2 * card.chip_value)
    return True


def _baron(tally, card, ctx):
    if card is None or card.rank is not Rank.KING:
        return False
    tally.x_mult(1.5)
    return True


def _mime(tally, card, ctx):
    """Run every other held-card joker on this card again."""
    if card is None:
        return False
    for effect in distinct_effects(ctx.jokers, Activation.ON_HELD):
        if effect.kind is not JokerKind.MIME:
            effect.apply(tally, card, ctx)
    return True


# ---------------------------------------------------------------------------
# Rule-changing jokers
# ---------------------------------------------------------------------------

_ROYAL_RANKS = frozenset({Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK, Rank.TEN})


def _four_fingers_scope(ctx: JokerContext) -> Optional[ScoringScope]:
    if ctx.best_hand is None:
        return None
    played = {c.rank for c in ctx.cards_played}
    if _ROYAL_RANKS <= played or ctx.has(JokerKind.SHORTCUT):
        return ScoringScope.ALL_PLAYED
    return None


def _splash_scope(ctx: JokerContext) -> Optional[ScoringScope]:
    return ScoringScope.ALL_PLAYED if ctx.cards_played else None


def _never(tally, card, ctx):
    return False


def _always(tally, card, ctx):
    return True


def _any_card(tally, card, ctx):
    return bool(ctx.cards_played or ctx.cards_held)


def _any_played(tally, card, ctx):
    return bool(ctx.cards_played)


# ---------------------------------------------------------------------------
# Blueprint
# ---------------------------------------------------------------------------

def copy_effect(tally: ScoreTally, ctx: JokerContext) -> bool:
    """Replay the joker right of the first Blueprint into a scratch tally.

    The scratch result is committed only when the copied joker triggered at
    least once and cards were played. Other Blueprints are never copied.
    """
    kinds = [j.kind for j in ctx.jokers]
    if JokerKind.BLUEPRINT not in kinds:
        return False
    start = kinds.index(JokerKind.BLUEPRINT)

    target = None
    for kind in kinds[start + 1:]:
        effect = effect_for(kind)
        if effect.is_passive or kind is JokerKind.BLUEPRINT:
            continue
        target = effect
        break
    if target is None or not target.is_copyable:
        return False

    scratch = tally.copy()
    triggered = False
    if target.activation is Activation.ON_SCORED:
        for card in ctx.cards_played:
            triggered |= target.apply(scratch, card, ctx)
    elif target.activation is Activation.ON_HELD:
        for card in ctx.cards_held:
            triggered |= target.apply(scratch, card, ctx)
    else:
        triggered = target.apply(scratch, None, ctx)

    if triggered and ctx.cards_played:
        tally.absorb(scratch)
        return True
    return False


def _blueprint(tally, card, ctx):
    return copy_effect(tally, ctx)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_register(JokerKind.JOKER, Activation.INDEPENDENT, _joker)
for _kind, _test, _chips, _mult in _PATTERN_JOKERS:
    _register(_kind, Activation.INDEPENDENT, _pattern_bonus(_test, chips=_chips, mult=_mult))
_register(JokerKind.ABSTRACT_JOKER, Activation.INDEPENDENT, _abstract)
_register(JokerKind.BLACKBOARD, Activation.INDEPENDENT, _blackboard)
_register(JokerKind.FLOWER_POT, Activation.INDEPENDENT, _flower_pot)

_register(JokerKind.GREEDY_JOKER, Activation.ON_SCORED, _suit_mult(Suit.DIAMONDS))
_register(JokerKind.LUSTY_JOKER, Activation.ON_SCORED, _suit_mult(Suit.HEARTS))
_register(JokerKind.WRATHFUL_JOKER, Activation.ON_SCORED, _suit_mult(Suit.SPADES))
_register(JokerKind.GLUTTONOUS_JOKER, Activation.ON_SCORED, _suit_mult(Suit.CLUBS))
_register(JokerKind.FIBONACCI, Activation.ON_SCORED, _rank_bonus(_FIBONACCI, mult=8))
_register(JokerKind.EVEN_STEVEN, Activation.ON_SCORED, _rank_bonus(_EVEN, mult=4))
_register(JokerKind.ODD_TODD, Activation.ON_SCORED, _rank_bonus(_ODD, chips=31))
_register(JokerKind.SCARY_FACE, Activation.ON_SCORED, _face_bonus(chips=30))
_register(JokerKind.SMILEY_FACE, Activation.ON_SCORED, _face_bonus(mult=5))
_register(JokerKind.PHOTOGRAPH, Activation.ON_SCORED, _photograph)
_register(JokerKind.SOCK_AND_BUSKIN, Activation.ON_SCORED, _sock_and_buskin)

_register(JokerKind.RAISED_FIST, Activation.ON_HELD, _raised_fist)
_register(JokerKind.BARON, Activation.ON_HELD, _baron)
_register(JokerKind.MIME, Activation.ON_HELD, _mime)

_register(JokerKind.FOUR_FINGERS, Activation.INDEPENDENT, _never,
          is_copyable=False, preferred_scoring_scope=_four_fingers_scope)
_register(JokerKind.SHORTCUT, Activation.INDEPENDENT, _always, is_copyable=False)
_register(JokerKind.PAREIDOLIA, Activation.INDEPENDENT, _any_card, is_copyable=False)
_register(JokerKind.SPLASH, Activation.INDEPENDENT, _any_played,
          is_copyable=False, scoring_scope=_splash_scope)
_register(JokerKind.SMEARED_JOKER, Activation.INDEPENDENT, _any_played, is_copyable=False)
_register(JokerKind.BLUEPRINT, Activation.INDEPENDENT, _blueprint)

_missing = [k.value for k in JokerKind if k not in JOKER_EFFECTS]
if _missing:
    raise RuntimeError(f"jokers without an effect: {', '.join(_missing)}")
