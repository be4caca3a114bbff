"""Scoring engine: one round through the fixed trigger pipeline.

Pipeline:
1. Resolve wild cards and smeared suits for hand evaluation
2. Scoring scope (Splash) and best hand; no hand scores 0
3. Preferred scope override (Four Fingers) once the hand is known
4. Base chips & mult from hand type
5. Per scoring card (L→R): chips + enhancement + edition + per-card jokers,
   the whole card step repeated once if a retriggering joker fired
6. Held-in-hand: Steel cards, then held-card jokers (others, Mime, retriggers)
7. Joker Foil/Holographic editions, independent jokers, Polychrome editions
8. final_score = floor(chips × mult)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .enums import Activation, Edition, Enhancement, HandType, JokerKind, ScoringScope
from .cards import Card, Round, format_cards
from .errors import UnsupportedScopeError
from .hands import find_best_hand
from .jokers import JokerContext, distinct_effects, effect_for, physical_effects
from .modifiers import ScoreTally, apply_edition, apply_enhancement, score_card_face
from .wild import resolve_played_cards

logger = logging.getLogger(__name__)

NO_HAND = "No valid poker hand identified"


@dataclass
class ScoreResult:
    """Result of scoring a round."""
    hand_type: Optional[HandType]
    scope: ScoringScope
    scoring_cards: list[Card]
    chips: float
    mult: float
    final_score: int
    steps: list[str] = field(default_factory=list)

    def explain(self) -> str:
        if self.hand_type is None:
            return NO_HAND
        return f"{self.hand_type.value} (Final Score: {self.final_score})"

    def __repr__(self) -> str:
        name = self.hand_type.value if self.hand_type else "No hand"
        return f"{name}: {self.chips:g} × {self.mult:g} = {self.final_score}"


class RoundScorer:
    """Scores a single round. Create a new one per round."""

    def __init__(self, round: Round):
        self.round = round
        self.tally = ScoreTally()
        self.steps: list[str] = []

    def _step(self, msg: str, *args):
        text = msg % args if args else msg
        self.steps.append(text)
        logger.debug(text)

    def _result(self, hand_type, scope, scoring_cards) -> ScoreResult:
        final = int(math.floor(self.tally.score))
        self._step("final: %g x %g = %d", self.tally.chips, self.tally.mult, final)
        return ScoreResult(
            hand_type=hand_type,
            scope=scope,
            scoring_cards=list(scoring_cards),
            chips=self.tally.chips,
            mult=self.tally.mult,
            final_score=final,
            steps=self.steps,
        )

    # ---- scope ----

    def _scoring_scope(self, ctx: JokerContext) -> ScoringScope:
        for joker in ctx.jokers:
            effect = effect_for(joker.kind)
            if effect.scoring_scope and effect.scoring_scope(ctx) is ScoringScope.ALL_PLAYED:
                self._step("%s: scoring all played cards", effect.name)
                return ScoringScope.ALL_PLAYED
        return ScoringScope.BEST_HAND

    def _preferred_scope(self, ctx: JokerContext, scope: ScoringScope) -> ScoringScope:
        for joker in ctx.jokers:
            effect = effect_for(joker.kind)
            if effect.preferred_scoring_scope is None:
                continue
            preferred = effect.preferred_scoring_scope(ctx)
            if preferred is not None:
                self._step("%s: scope %s", effect.name, preferred.value)
                return preferred
        return scope

    @staticmethod
    def _scoring_cards(scope: ScoringScope, resolved: Sequence[Card],
                       hand_cards: Sequence[Card], played: Sequence[Card]) -> list[Card]:
        if scope is ScoringScope.ALL_PLAYED:
            return list(played)
        ids = {id(c) for c in hand_cards}
        return [c for c in resolved if id(c) in ids]

    # ---- phases ----

    def _score_card(self, card: Card, ctx: JokerContext):
        """Score one card; repeat once if a retriggering joker fired on it."""
        effects = physical_effects(ctx.jokers, Activation.ON_SCORED)
        for attempt in range(2):
            score_card_face(self.tally, card)
            retrigger = False
            for effect in effects:
                if effect.apply(self.tally, card, ctx) and effect.supports_retrigger:
                    retrigger = True
            self._step("scored %s -> %r", card.display(), self.tally)
            if not retrigger:
                break
            if attempt == 0:
                self._step("retrigger %s", card.display())

    def _held_steel(self, held: Sequence[Card]):
        for card in held:
            if card.enhancement is Enhancement.STEEL:
                apply_enhancement(self.tally, card, held=True)
                self._step("held steel %s -> %r", card.display(), self.tally)

    def _held_card(self, card: Card, ctx: JokerContext):
        effects = distinct_effects(ctx.jokers, Activation.ON_HELD)
        for effect in effects:
            if effect.kind is not JokerKind.MIME:
                effect.apply(self.tally, card, ctx)
        for effect in effects:
            if effect.kind is JokerKind.MIME:
                effect.apply(self.tally, card, ctx)
        for effect in effects:
            if effect.supports_retrigger:
                effect.apply(self.tally, card, ctx)

    def _independent(self, ctx: JokerContext):
        for joker in ctx.jokers:
            if joker.edition in (Edition.FOIL, Edition.HOLOGRAPHIC):
                apply_edition(self.tally, joker.edition)
                self._step("%s edition -> %r", joker.display(), self.tally)
        for effect in distinct_effects(ctx.jokers, Activation.INDEPENDENT):
            if effect.apply(self.tally, None, ctx):
                self._step("%s -> %r", effect.name, self.tally)
        for joker in ctx.jokers:
            if joker.edition is Edition.POLYCHROME:
                apply_edition(self.tally, joker.edition)
                self._step("%s edition -> %r", joker.display(), self.tally)

    # ---- entry ----

    def score(self) -> ScoreResult:
        rnd = self.round
        resolved = resolve_played_cards(rnd.cards_played, rnd.jokers)
        ctx = JokerContext(
            cards_played=rnd.cards_played,
            cards_held=rnd.cards_held_in_hand,
            jokers=rnd.jokers,
            resolved_cards=tuple(resolved),
        )

        scope = self._scoring_scope(ctx)
        best = find_best_hand(resolved, rnd.jokers)
        if best is None:
            self.tally = ScoreTally(0, 1 if scope is ScoringScope.ALL_PLAYED else 0)
            self._step(NO_HAND)
            return self._result(None, scope, [])

        hand_type, hand_cards = best
        self._step("best hand %s: %s", hand_type.value, format_cards(hand_cards))
        ctx = ctx.with_best_hand(hand_type)
        scope = self._preferred_scope(ctx, scope)
        if scope is ScoringScope.CUSTOM:
            raise UnsupportedScopeError(scope)

        self.tally = ScoreTally(*hand_type.base)
        self._step("base %r", self.tally)

        scoring_cards = self._scoring_cards(scope, resolved, hand_cards, rnd.cards_played)
        for card in scoring_cards:
            self._score_card(card, ctx)

        self._held_steel(rnd.cards_held_in_hand)
        for card in rnd.cards_held_in_hand:
            self._held_card(card, ctx)

        self._independent(ctx)
        return self._result(hand_type, scope, scoring_cards)


def score_round(round: Round) -> ScoreResult:
    """Score one round from scratch."""
    return RoundScorer(round).score()


def explain(result: ScoreResult) -> str:
    return result.explain()
