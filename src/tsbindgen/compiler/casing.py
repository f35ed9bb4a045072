# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier casing: classification and conversion between naming styles.

Each style has a pattern that recognises it, a splitter that breaks an
identifier written in that style into words, and a joiner that assembles words
into that style. Conversion splits with the *source* style and joins with the
*target* style.
"""

from __future__ import annotations

import enum
import re
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class Case(enum.Enum):
    """Supported naming styles, in classification priority order."""

    KEBAB = "kebab-case"
    SNAKE = "snake_case"
    CAMEL = "camelCase"
    PASCAL = "PascalCase"


def case_of(identifier: str) -> Case:
    """Classify an identifier: first style (in priority order) whose pattern matches.

    Identifiers matching no pattern are treated as camelCase.
    """
    for case in Case:
        if _STYLES[case].pattern.match(identifier):
            return case
    return Case.CAMEL


def matches_case(identifier: str, case: Case) -> bool:
    """Return True if *identifier* matches the pattern of *case*."""
    return _STYLES[case].pattern.match(identifier) is not None


def split_words(identifier: str, source: Case | None = None) -> list[str]:
    """Split an identifier into words using the splitter of *source*.

    When *source* is omitted the identifier's own classification is used. Any
    run of characters that cannot appear in an identifier also separates words.
    """
    style = _STYLES[source if source is not None else case_of(identifier)]
    return [word for part in style.splitter.split(identifier) for word in _SEPARATORS.split(part) if word]


def to_case(identifier: str, target: Case, source: Case | None = None) -> str:
    """Convert *identifier* to the *target* style.

    Args:
        identifier: The identifier to convert.
        target: Style to produce.
        source: Style used to split the identifier. Defaults to the
            identifier's own classification; pass the dominant style of a
            sibling set to split all siblings consistently.
    """
    words = split_words(identifier, source)
    if not words:
        return ""
    return _STYLES[target].join(words)


def dominant_case(identifiers: Iterable[str]) -> Case | None:
    """Return the most frequent classification among *identifiers*.

    Ties go to the style encountered first. Returns None for an empty input.
    """
    counts = Counter(case_of(identifier) for identifier in identifiers)
    if not counts:
        return None
    # Counter preserves insertion order and max() keeps the first maximum.
    return max(counts, key=lambda case: counts[case])


# ################
# Implementation
# ################

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


@dataclass(frozen=True)
class _Style:
    pattern: re.Pattern[str]
    splitter: re.Pattern[str]
    join: Callable[[list[str]], str]


def _capitalize(word: str) -> str:
    return word[0].upper() + word[1:]


def _glued(join: Callable[[list[str]], str]) -> Callable[[list[str]], str]:
    """Wrap *join* so a word starting with a digit is appended to the word before it (``item_1`` joins as ``item1``)."""

    def joiner(words: list[str]) -> str:
        merged: list[str] = []
        for word in words:
            if merged and word[0].isdigit():
                merged[-1] += word
            else:
                merged.append(word)
        return join(merged)

    return joiner


_STYLES: dict[Case, _Style] = {
    Case.KEBAB: _Style(
        pattern=re.compile(r"^[a-z][a-z0-9]*(-[a-z][a-z0-9]*)*$"),
        splitter=re.compile(r"(?<=[a-z])-(?=[a-z])"),
        join=_glued(lambda words: "-".join(w.lower() for w in words)),
    ),
    Case.SNAKE: _Style(
        pattern=re.compile(r"^[a-z][a-z0-9]*(_[a-z][a-z0-9]*)*$"),
        splitter=re.compile(r"(?<=[a-z])_(?=[a-z])"),
        join=_glued(lambda words: "_".join(w.lower() for w in words)),
    ),
    Case.CAMEL: _Style(
        pattern=re.compile(r"^[a-z][a-z0-9]*([A-Z][a-z0-9]*)*$"),
        splitter=re.compile(r"(?<=[a-z0-9])(?=[A-Z])"),
        join=_glued(lambda words: "".join([words[0].lower(), *(_capitalize(w) for w in words[1:])])),
    ),
    Case.PASCAL: _Style(
        pattern=re.compile(r"^([A-Z][a-zA-Z0-9]*)+$"),
        splitter=re.compile(r"(?<=[a-z0-9])(?=[A-Z])"),
        join=_glued(lambda words: "".join(_capitalize(w) for w in words)),
    ),
}
