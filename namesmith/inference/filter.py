"""Post-generation cleanup: title-casing, dedup, and novelty against the corpus."""

from __future__ import annotations

import re
from typing import Iterable

_TOKEN_START = re.compile(r"(^|\s)(\S)")


def _upper_first(char: str) -> str:
    # "ß" has no single-character uppercase form
    upper = char.upper()
    return upper if len(upper) == 1 else char


def title_case(text: str) -> str:
    """Lowercase everything, then uppercase the first letter of each whitespace-separated token.

    Unlike ``str.title`` this leaves letters after '-' and '.' alone
    ("jean-luc" -> "Jean-luc").
    """
    return _TOKEN_START.sub(lambda m: m.group(1) + _upper_first(m.group(2)), text.lower())


def deduplicate(names: Iterable[str]) -> list[str]:
    """Drop exact duplicates, keeping first occurrence order."""
    seen: set[str] = set()
    unique = []
    for n in names:
        if n not in seen:
            seen.add(n)
            unique.append(n)
    return unique


def known_keys(corpus: Iterable[str]) -> set[str]:
    """Case-folded, title-cased corpus entries used for novelty checks."""
    return {title_case(entry).casefold() for entry in corpus}


def remove_known(names: Iterable[str], corpus: Iterable[str]) -> list[str]:
    """Drop names that match a corpus entry, ignoring case."""
    known = known_keys(corpus)
    return [n for n in names if n.casefold() not in known]


def filter_new_names(names: Iterable[str], corpus: Iterable[str]) -> list[str]:
    """Dedupe, remove corpus matches, and sort ascending."""
    return sorted(remove_known(deduplicate(names), corpus))
