from __future__ import annotations

import pytest

from balatro_score.cards import JokerCard
from balatro_score.enums import Activation, HandType, JokerKind, ScoringScope
from balatro_score.jokers import (
    JOKER_EFFECTS,
    JokerContext,
    copy_effect,
    distinct_kinds,
    effect_for,
)
from balatro_score.modifiers import ScoreTally
from balatro_score.round_io import parse_card

K = JokerKind


def cards(*specs):
    return tuple(parse_card(s) for s in specs)


def context(played=(), held=(), jokers=(), best_hand=None):
    played = cards(*played)
    return JokerContext(
        cards_played=played,
        cards_held=cards(*held),
        jokers=tuple(JokerCard(k) for k in jokers),
        resolved_cards=played,
        best_hand=best_hand,
    )


def fire(kind, ctx, card=None, chips=0, mult=1):
    tally = ScoreTally(chips, mult)
    triggered = effect_for(kind).apply(tally, card, ctx)
    return triggered, tally.chips, tally.mult


# ---- registry ----

def test_every_kind_registered():
    assert set(JOKER_EFFECTS) == set(JokerKind)
    for kind in JokerKind:
        assert effect_for(kind).kind is kind
        assert effect_for(kind).name == kind.value


def test_no_joker_retriggers():
    assert not any(e.supports_retrigger for e in JOKER_EFFECTS.values())


@pytest.mark.parametrize("kind", [K.FOUR_FINGERS, K.SHORTCUT, K.PAREIDOLIA, K.SPLASH, K.SMEARED_JOKER])
def test_rule_changers_cannot_be_copied(kind):
    assert not effect_for(kind).is_copyable


def test_distinct_kinds_keeps_first_seen_order():
    jokers = [JokerCard(k) for k in (K.BARON, K.JOKER, K.BARON, K.MIME)]
    assert distinct_kinds(jokers) == [K.BARON, K.JOKER, K.MIME]


# ---- independent ----

def test_plain_joker_adds_mult_without_reporting():
    assert fire(K.JOKER, context()) == (False, 0, 5)


@pytest.mark.parametrize(
    "kind, played, chips, mult",
    [
        (K.JOLLY_JOKER, ["K♠", "K♥"], 0, 9),
        (K.ZANY_JOKER, ["K♠", "K♥", "K♦"], 0, 13),
        (K.MAD_JOKER, ["K♠", "K♥", "2♦", "2♣"], 0, 11),
        (K.CRAZY_JOKER, ["2♠", "3♥", "4♦", "5♣", "6♠"], 0, 13),
        (K.DROLL_JOKER, ["2♥", "7♥", "9♥", "J♥", "K♥"], 0, 11),
        (K.SLY_JOKER, ["K♠", "K♥"], 50, 1),
        (K.WILY_JOKER, ["K♠", "K♥", "K♦"], 100, 1),
        (K.CLEVER_JOKER, ["K♠", "K♥", "2♦", "2♣"], 80, 1),
        (K.DEVIOUS_JOKER, ["2♠", "3♥", "4♦", "5♣", "6♠"], 100, 1),
        (K.CRAFTY_JOKER, ["2♥", "7♥", "9♥", "J♥", "K♥"], 80, 1),
    ],
)
def test_hand_pattern_jokers(kind, played, chips, mult):
    assert fire(kind, context(played=played, jokers=[kind])) == (True, chips, mult)
    assert fire(kind, context(played=["A♠", "9♦"], jokers=[kind])) == (False, 0, 1)


def test_clever_joker_counts_full_house():
    ctx = context(played=["K♠", "K♥", "K♦", "2♦", "2♣"], jokers=[K.CLEVER_JOKER])
    assert fire(K.CLEVER_JOKER, ctx) == (True, 80, 1)


@pytest.mark.parametrize(
    "kind, played, enabler",
    [
        (K.DROLL_JOKER, ["2♥", "7♥", "9♥", "J♥", "K♠"], K.FOUR_FINGERS),
        (K.CRAFTY_JOKER, ["2♥", "7♥", "9♥", "J♥"], K.FOUR_FINGERS),
        (K.CRAZY_JOKER, ["5♠", "6♥", "7♦", "8♣", "K♠"], K.FOUR_FINGERS),
        (K.CRAZY_JOKER, ["2♠", "4♥", "6♦", "8♣", "10♠"], K.SHORTCUT),
        (K.DEVIOUS_JOKER, ["2♠", "4♥", "6♦", "8♣", "10♠"], K.SHORTCUT),
    ],
)
def test_pattern_jokers_need_five_card_runs(kind, played, enabler):
    ctx = context(played=played, jokers=[kind, enabler])
    assert fire(kind, ctx) == (False, 0, 1)


def test_crazy_joker_accepts_wheel():
    ctx = context(played=["A♠", "2♥", "3♦", "4♣", "5♠"], jokers=[K.CRAZY_JOKER])
    assert fire(K.CRAZY_JOKER, ctx) == (True, 0, 13)


def test_abstract_joker_counts_jokers():
    ctx = context(jokers=[K.ABSTRACT_JOKER, K.JOKER, K.JOKER])
    assert fire(K.ABSTRACT_JOKER, ctx) == (True, 0, 10)


@pytest.mark.parametrize(
    "held, expected",
    [
        ([], True),
        (["2♠", "3♣", "4♥ Wild"], True),
        (["2♠", "3♥"], False),
    ],
)
def test_blackboard(held, expected):
    triggered, _, mult = fire(K.BLACKBOARD, context(held=held))
    assert triggered is expected
    assert mult == (3 if expected else 1)


@pytest.mark.parametrize(
    "played, smeared, expected",
    [
        (["2♥", "3♦", "4♠", "5♣"], False, True),
        (["2♥", "3♦", "4♠", "5♠"], False, False),
        (["2♥", "3♦", "4♠"], False, False),
        (["2♥", "3♠", "4♥", "5♥"], True, True),
        (["2♥", "3♦", "4♦", "5♥"], True, False),
    ],
)
def test_flower_pot(played, smeared, expected):
    jokers = [K.FLOWER_POT, K.SMEARED_JOKER] if smeared else [K.FLOWER_POT]
    triggered, _, mult = fire(K.FLOWER_POT, context(played=played, jokers=jokers))
    assert triggered is expected
    assert mult == (3 if expected else 1)


# ---- per scored card ----

@pytest.mark.parametrize(
    "kind, card, chips, mult",
    [
        (K.GREEDY_JOKER, "2♦", 0, 4),
        (K.GREEDY_JOKER, "2♥ Wild", 0, 4),
        (K.LUSTY_JOKER, "2♥", 0, 4),
        (K.WRATHFUL_JOKER, "2♠", 0, 4),
        (K.GLUTTONOUS_JOKER, "2♣", 0, 4),
        (K.FIBONACCI, "8♣", 0, 9),
        (K.FIBONACCI, "A♣", 0, 9),
        (K.EVEN_STEVEN, "10♣", 0, 5),
        (K.ODD_TODD, "A♣", 31, 1),
        (K.SCARY_FACE, "J♣", 30, 1),
        (K.SMILEY_FACE, "Q♣", 0, 6),
    ],
)
def test_per_card_jokers_trigger(kind, card, chips, mult):
    assert fire(kind, context(jokers=[kind]), parse_card(card)) == (True, chips, mult)


@pytest.mark.parametrize(
    "kind, card",
    [
        (K.GREEDY_JOKER, "2♣"),
        (K.FIBONACCI, "4♣"),
        (K.EVEN_STEVEN, "9♣"),
        (K.ODD_TODD, "K♣"),
        (K.SCARY_FACE, "10♣"),
        (K.SMILEY_FACE, "A♣"),
    ],
)
def test_per_card_jokers_miss(kind, card):
    assert fire(kind, context(jokers=[kind]), parse_card(card)) == (False, 0, 1)


def test_pareidolia_makes_every_card_a_face():
    ctx = context(jokers=[K.SCARY_FACE, K.PAREIDOLIA])
    assert fire(K.SCARY_FACE, ctx, parse_card("2♠")) == (True, 30, 1)


def test_photograph_only_first_face():
    ctx = context(played=["5♠", "Q♠", "K♠"], jokers=[K.PHOTOGRAPH])
    assert fire(K.PHOTOGRAPH, ctx, ctx.cards_played[1]) == (True, 0, 2)
    assert fire(K.PHOTOGRAPH, ctx, ctx.cards_played[2]) == (False, 0, 1)
    assert fire(K.PHOTOGRAPH, ctx, ctx.cards_played[0]) == (False, 0, 1)


def test_photograph_matches_by_identity():
    ctx = context(played=["K♠", "K♠"], jokers=[K.PHOTOGRAPH])
    assert ctx.cards_played[0] == ctx.cards_played[1]
    assert fire(K.PHOTOGRAPH, ctx, ctx.cards_played[1])[0] is False
    assert fire(K.PHOTOGRAPH, ctx, parse_card("K♠"))[0] is False


def test_photograph_with_pareidolia():
    ctx = context(played=["2♠", "K♠"], jokers=[K.PHOTOGRAPH, K.PAREIDOLIA])
    assert fire(K.PHOTOGRAPH, ctx, ctx.cards_played[0])[0] is True
    assert fire(K.PHOTOGRAPH, ctx, ctx.cards_played[1])[0] is False


def test_sock_and_buskin_rescores_face_card():
    ctx = context(jokers=[K.SOCK_AND_BUSKIN, K.SMILEY_FACE])
    card = parse_card("K♠ Foil")
    assert fire(K.SOCK_AND_BUSKIN, ctx, card) == (True, 60, 6)
    assert fire(K.SOCK_AND_BUSKIN, ctx, parse_card("9♠")) == (False, 0, 1)


# ---- held cards ----

def test_raised_fist_picks_last_lowest():
    ctx = context(held=["5♠", "3♥", "9♦", "3♣"])
    assert fire(K.RAISED_FIST, ctx, ctx.cards_held[1]) == (False, 0, 1)
    assert fire(K.RAISED_FIST, ctx, ctx.cards_held[3]) == (True, 0, 7)


@pytest.mark.parametrize("held, mult", [("K♠", 21), ("A♠", 23)])
def test_raised_fist_face_and_ace(held, mult):
    ctx = context(held=[held])
    assert fire(K.RAISED_FIST, ctx, ctx.cards_held[0]) == (True, 0, mult)


def test_baron():
    ctx = context()
    assert fire(K.BARON, ctx, parse_card("K♥")) == (True, 0, 1.5)
    assert fire(K.BARON, ctx, parse_card("Q♥")) == (False, 0, 1)


def test_mime_repeats_each_held_joker_kind_once():
    ctx = context(held=["K♠"], jokers=[K.MIME, K.BARON, K.BARON])
    assert fire(K.MIME, ctx, ctx.cards_held[0]) == (True, 0, 1.5)


# ---- scopes ----

def test_four_fingers_scope():
    royal = ["A♠", "K♠", "Q♠", "J♠", "10♥"]
    assert effect_for(K.FOUR_FINGERS).preferred_scoring_scope(context(played=royal)) is None

    ctx = context(played=royal, best_hand=HandType.STRAIGHT_FLUSH)
    assert effect_for(K.FOUR_FINGERS).preferred_scoring_scope(ctx) is ScoringScope.ALL_PLAYED

    ctx = context(played=["2♠", "3♠"], jokers=[K.SHORTCUT], best_hand=HandType.HIGH_CARD)
    assert effect_for(K.FOUR_FINGERS).preferred_scoring_scope(ctx) is ScoringScope.ALL_PLAYED

    ctx = context(played=["2♠", "3♠"], best_hand=HandType.HIGH_CARD)
    assert effect_for(K.FOUR_FINGERS).preferred_scoring_scope(ctx) is None


def test_splash_scope():
    scope = effect_for(K.SPLASH).scoring_scope
    assert scope(context(played=["2♠"])) is ScoringScope.ALL_PLAYED
    assert scope(context()) is None


# ---- Blueprint ----

def _copy(ctx):
    tally = ScoreTally(0, 1)
    triggered = copy_effect(tally, ctx)
    return triggered, tally.chips, tally.mult


def test_blueprint_copies_next_joker():
    ctx = context(played=["K♠", "K♥"], jokers=[K.BLUEPRINT, K.JOLLY_JOKER])
    assert _copy(ctx) == (True, 0, 9)


def test_blueprint_skips_other_blueprints():
    ctx = context(played=["K♠", "K♥"], jokers=[K.BLUEPRINT, K.BLUEPRINT, K.JOLLY_JOKER])
    assert _copy(ctx) == (True, 0, 9)


def test_blueprint_commits_nothing_for_plain_joker():
    ctx = context(played=["K♠"], jokers=[K.BLUEPRINT, K.JOKER])
    assert _copy(ctx) == (False, 0, 1)


def test_blueprint_ignores_rule_changers():
    ctx = context(played=["K♠"], jokers=[K.BLUEPRINT, K.SPLASH, K.JOLLY_JOKER])
    assert _copy(ctx) == (False, 0, 1)


def test_blueprint_replays_per_card_joker_over_played():
    ctx = context(played=["2♦", "3♦", "4♣"], jokers=[K.BLUEPRINT, K.GREEDY_JOKER])
    assert _copy(ctx) == (True, 0, 7)


def test_blueprint_replays_held_joker_over_held():
    ctx = context(played=["2♣"], held=["K♠", "K♥"], jokers=[K.BLUEPRINT, K.BARON])
    assert _copy(ctx) == (True, 0, 2.25)


def test_blueprint_needs_played_cards():
    ctx = context(jokers=[K.BLUEPRINT, K.ABSTRACT_JOKER])
    assert _copy(ctx) == (False, 0, 1)


def test_blueprint_without_target():
    ctx = context(played=["K♠"], jokers=[K.JOKER, K.BLUEPRINT])
    assert _copy(ctx) == (False, 0, 1)


def test_blueprint_activation_is_independent():
    assert effect_for(K.BLUEPRINT).activation is Activation.INDEPENDENT
