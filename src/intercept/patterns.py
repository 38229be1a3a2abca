"""Literal multi-pattern search with longest-match overlap resolution.

Every token is searched for as a literal string (escaped before it is
compiled), so tokens such as ``+`` or ``*`` never act as regex operators.
"""

from __future__ import annotations
import logging
import re
from typing import Sequence

from .types import Match

logger = logging.getLogger(__name__)


def find_patterns(message: str, patterns: Sequence[str]) -> list[Match]:
    """Find all tokens in *message*.  Returns sorted, non-overlapping matches.

    ``code_index`` on each match is the token's index in *patterns*.
    """
    found: list[Match] = []
    if not message:
        return found

    for i, pattern in enumerate(patterns):
        if not pattern:
            continue
        for m in re.finditer(re.escape(pattern), message):
            found.append(Match(position=m.start(), code_index=i, pattern=pattern))

    # Stable: ties keep token-list order
    found.sort(key=lambda m: m.position)
    return _resolve_overlaps(found)


def _resolve_overlaps(matches: list[Match]) -> list[Match]:
    """Drop the shorter of each overlapping neighbour pair, in place.

    Equal lengths keep the earlier match.  The same index is checked again
    after a removal since the new neighbour may overlap too.
    """
    dropped = 0
    i = 0
    while i < len(matches) - 1:
        current, nxt = matches[i], matches[i + 1]
        if current.end > nxt.position:
            if len(current.pattern) >= len(nxt.pattern):
                del matches[i + 1]
            else:
                del matches[i]
            dropped += 1
            continue
        i += 1

    if dropped:
        logger.debug("dropped %d overlapping matches, %d kept", dropped, len(matches))
    return matches


def split_patterns(patterns: Sequence[str], size: int) -> list[list[str]]:
    """Split *patterns* into consecutive chunks of *size* (last may be short)."""
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(patterns[i:i + size]) for i in range(0, len(patterns), size)]
