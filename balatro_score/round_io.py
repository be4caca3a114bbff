"""Reading rounds from YAML or JSON documents.

A round document looks like:

    cards_played: ["K♠", "K♥", "K♦", "2♣", "3♣ Glass Foil"]
    cards_held_in_hand: ["Q♠ Steel"]
    jokers: ["Joker", "Blueprint Polychrome"]

Cards may also be written as mappings ({rank, suit, enhancement, edition})
and jokers as {joker, edition}. Suits take a symbol, a letter or a name.
"""

from __future__ import annotations

import re
import sys
from typing import Any, Optional

import yaml

from .enums import Suit, Rank, Edition, Enhancement, JokerKind
from .cards import Card, JokerCard, Round
from .errors import RoundParseError

_SECTIONS = ("cards_played", "cards_held_in_hand", "jokers")


def _key(text: str) -> str:
    """Lookup key: lowercase with everything but letters and digits removed."""
    return re.sub(r"[^0-9a-z]", "", str(text).lower())


_RANKS: dict[str, Rank] = {}
for _r in Rank:
    _RANKS[_key(_r.display)] = _r
    _RANKS[_key(_r.name)] = _r
    _RANKS[str(_r.value)] = _r

_SUITS: dict[str, Suit] = {}
for _s in Suit:
    _SUITS[_s.symbol] = _s
    _SUITS[_key(_s.value[0])] = _s
    _SUITS[_key(_s.value)] = _s

_ENHANCEMENTS = {_key(e.value): e for e in Enhancement}
_EDITIONS = {_key(e.value): e for e in Edition}
_EDITIONS["holo"] = Edition.HOLOGRAPHIC
_JOKERS = {_key(k.value): k for k in JokerKind}


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------

def _lookup(table: dict, text: Any, what: str, entry: Any):
    found = table.get(str(text))
    if found is None:
        found = table.get(_key(text))
    if found is None:
        raise RoundParseError(f"unknown {what} {text!r}", entry)
    return found


def _apply_modifiers(words: list[str], entry: Any) -> tuple[Optional[Enhancement], Optional[Edition]]:
    enhancement = edition = None
    for word in words:
        k = _key(word)
        if k in _ENHANCEMENTS and enhancement is None:
            enhancement = _ENHANCEMENTS[k]
        elif k in _EDITIONS and edition is None:
            edition = _EDITIONS[k]
        else:
            raise RoundParseError(f"unexpected card modifier {word!r}", entry)
    return enhancement, edition


def parse_card(entry: Any) -> Card:
    """Parse "K♠", "10H Glass Foil" or a {rank, suit, ...} mapping."""
    if isinstance(entry, dict):
        if "rank" not in entry or "suit" not in entry:
            raise RoundParseError("card needs a rank and a suit", entry)
        extra = [entry[k] for k in ("enhancement", "edition") if entry.get(k) is not None]
        enhancement, edition = _apply_modifiers([str(w) for w in extra], entry)
        return Card(
            rank=_lookup(_RANKS, entry["rank"], "rank", entry),
            suit=_lookup(_SUITS, entry["suit"], "suit", entry),
            enhancement=enhancement,
            edition=edition,
        )

    if not isinstance(entry, str) or not entry.strip():
        raise RoundParseError("card must be a string or a mapping", entry)

    head, *rest = entry.split()
    if len(head) < 2:
        raise RoundParseError("card needs a rank and a suit", entry)
    rank = _lookup(_RANKS, head[:-1], "rank", entry)
    suit = _lookup(_SUITS, head[-1], "suit", entry)
    enhancement, edition = _apply_modifiers(rest, entry)
    return Card(rank, suit, enhancement, edition)


# ---------------------------------------------------------------------------
# Jokers
# ---------------------------------------------------------------------------

def parse_joker(entry: Any) -> JokerCard:
    """Parse "Blueprint", "Joker Foil" or a {joker, edition} mapping."""
    if isinstance(entry, dict):
        name = entry.get("joker", entry.get("name"))
        if name is None:
            raise RoundParseError("joker needs a name", entry)
        edition = entry.get("edition")
        return JokerCard(
            kind=_lookup(_JOKERS, name, "joker", entry),
            edition=_lookup(_EDITIONS, edition, "edition", entry) if edition is not None else None,
        )

    if not isinstance(entry, str) or not entry.strip():
        raise RoundParseError("joker must be a string or a mapping", entry)

    kind = _JOKERS.get(_key(entry))
    if kind is not None:
        return JokerCard(kind)

    name, _, last = entry.strip().rpartition(" ")
    kind = _JOKERS.get(_key(name))
    edition = _EDITIONS.get(_key(last))
    if kind is None or edition is None:
        raise RoundParseError("unknown joker", entry)
    return JokerCard(kind, edition)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def _section(doc: dict, name: str) -> list:
    value = doc.get(name)
    if value is None:
        return []
    if not isinstance(value, list):
        raise RoundParseError(f"{name} must be a list", value)
    return value


def load_round(source: str) -> Round:
    """Decode a round from YAML (or JSON) text."""
    try:
        doc = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise RoundParseError(f"invalid round document: {e}") from e

    if doc is None:
        return Round()
    if not isinstance(doc, dict):
        raise RoundParseError("round document must be a mapping", doc)
    unknown = [k for k in doc if k not in _SECTIONS]
    if unknown:
        raise RoundParseError("unknown round field", unknown[0])

    return Round(
        cards_played=[parse_card(c) for c in _section(doc, "cards_played")],
        cards_held_in_hand=[parse_card(c) for c in _section(doc, "cards_held_in_hand")],
        jokers=[parse_joker(j) for j in _section(doc, "jokers")],
    )


def read_round(path: str) -> Round:
    """Read a round from a file path, or from stdin when path is '-'."""
    try:
        if path == "-":
            text = sys.stdin.read()
        else:
            with open(path, encoding="utf-8") as f:
                text = f.read()
    except OSError as e:
        raise RoundParseError(f"cannot read {path}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise RoundParseError(f"{path} is not valid UTF-8: {e.reason}") from e
    return load_round(text)
