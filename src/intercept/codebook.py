"""Codebook: the ordered word and code lists a message is coded with.

Token lists are built from free text: anything outside ``[a-zA-Z0-9]``
separates tokens, duplicates keep their first position.  Order matters,
since a token's index is what pairs it with its counterpart.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Collection, Iterable, Iterator

logger = logging.getLogger(__name__)

_SEPARATOR = re.compile(r"[^a-zA-Z0-9]")


def iter_tokens(text: str) -> Iterator[str]:
    """Yield the non-empty alphanumeric runs of *text*."""
    for piece in _SEPARATOR.split(text):
        if piece:
            yield piece


def _collect(
    pieces: Iterable[str],
    *,
    lowercase: bool = False,
    min_length: int = 0,
) -> list[str]:
    tokens: dict[str, None] = {}   # ordered set
    for token in pieces:
        if lowercase:
            token = token.lower()
        if len(token) >= min_length:
            tokens.setdefault(token, None)
    return list(tokens)


def tokens_from_string(text: str, *, lowercase: bool = False, min_length: int = 0) -> list[str]:
    """Unique tokens of *text* in first-seen order."""
    return _collect(iter_tokens(text), lowercase=lowercase, min_length=min_length)


def tokens_from_file(
    path: str | Path,
    *,
    lowercase: bool = False,
    min_length: int = 0,
) -> list[str]:
    """Unique tokens of a text file, read line by line."""
    def pieces() -> Iterator[str]:
        with open(Path(path).expanduser(), encoding="utf-8", errors="replace") as f:
            for line in f:
                yield from iter_tokens(line)

    tokens = _collect(pieces(), lowercase=lowercase, min_length=min_length)
    logger.debug("read %d tokens from %s", len(tokens), path)
    return tokens


def load_common_words(path: str | Path | None = None) -> set[str]:
    """Load a common-word list; the bundled English list when *path* is None."""
    if path is not None:
        return set(tokens_from_file(path))
    text = resources.files("intercept").joinpath("data/common-words.txt").read_text(encoding="utf-8")
    return set(tokens_from_string(text))


@dataclass(frozen=True, slots=True)
class Codebook:
    """A word list and the code list it is paired with."""
    words: list[str]
    codes: list[str]

    def limit(self, multiple: int | None) -> Codebook:
        """Keep at most ``len(words) * multiple`` codes.  0/None = no limit."""
        if not multiple:
            return self
        return Codebook(self.words, self.codes[: len(self.words) * multiple])

    def without_common(self, common: Collection[str]) -> Codebook:
        """Drop codes that appear in *common*."""
        kept = [c for c in self.codes if c not in common]
        if len(kept) != len(self.codes):
            logger.debug("dropped %d common codes", len(self.codes) - len(kept))
        return Codebook(self.words, kept)
