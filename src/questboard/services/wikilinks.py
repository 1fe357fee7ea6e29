"""Helpers for free-text fields that may hold ``[[wikilinks]]``."""

import re

_WIKILINK = re.compile(r"\[\[(?:[^\]|]+\|)?([^\]]+)\]\]")


def display_name(text: str) -> str:
    """Strip wikilink syntax, keeping the display text or the last path segment.

    >>> display_name("[[Locations/The Docks]]")
    'The Docks'
    >>> display_name("[[NPCs/Bess|Innkeeper Bess]]")
    'Innkeeper Bess'
    """
    match = _WIKILINK.search(text)
    if not match:
        return text
    return match.group(1).split("/")[-1]


def normalize(text: str) -> str:
    """Display name folded for case-insensitive comparison."""
    return display_name(text).strip().casefold()
