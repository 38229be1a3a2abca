"""Rebuild a message from its matches."""

from __future__ import annotations
from typing import Sequence

from .types import Match


def create_message(message: str, matches: Sequence[Match], codes: Sequence[str]) -> str:
    """Replace each matched span with ``codes[match.code_index]``.

    Matches must not overlap (as returned by ``find_patterns``).  Splices
    run right-to-left so earlier offsets stay valid.
    """
    result = message
    for match in sorted(matches, key=lambda m: m.position, reverse=True):
        result = result[:match.position] + codes[match.code_index] + result[match.end:]
    return result
