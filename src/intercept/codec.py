"""Codec, the main API.  Encode plain words to codes and back.

Usage:
    from intercept import encode, decode, create_message

    matches = encode("123", ["1", "2", "3"], ["a", "b", "c"], 3)
    [m.code for m in matches]            # ["b", "c", "a"]

    found = decode("b c a", ["a", "b", "c"], ["1", "2", "3"], 3)
    [m.code for m in found]              # ["1", "2", "3"]

When there are more codes than words ("multi mode") the code list is cut
into word-list-sized chunks, so every word has several codes and every
code decodes back to exactly one word.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .codebook import Codebook, load_common_words, tokens_from_file, tokens_from_string
from .keys import DEFAULT_HASH, resolve_key
from .patterns import find_patterns, split_patterns
from .permutation import get_nth_permutation
from .types import CodecResult, Match

logger = logging.getLogger(__name__)


def is_multi_mode(words: Sequence[str], codes: Sequence[str]) -> bool:
    """True when there are more codes than words."""
    return len(words) < len(codes)


def _permute(codes: Sequence[str], permutation: int) -> list[str]:
    if permutation == 0:
        return list(codes)
    return get_nth_permutation(codes, permutation)


def encode(
    message: str,
    words: Sequence[str],
    codes: Sequence[str],
    permutation: int = 0,
) -> list[Match]:
    """Find *words* in *message* and pair each with a code.

    In multi mode the same span is reported once per code chunk.  A word
    without a code in its chunk gets ``code=None``.
    """
    effective = _permute(codes, permutation)

    if not is_multi_mode(words, effective):
        found = find_patterns(message, words)
        for match in found:
            match.code = effective[match.code_index] if match.code_index < len(effective) else None
        return found

    if not words:
        return []

    result: list[Match] = []
    chunks = split_patterns(effective, len(words))
    logger.debug("encode: multi mode, %d codes in %d chunks", len(effective), len(chunks))
    for chunk in chunks:
        # Already permuted above
        result.extend(encode(message, words, chunk))
    result.sort(key=lambda m: m.position)
    return result


def decode(
    message: str,
    codes: Sequence[str],
    words: Sequence[str],
    permutation: int = 0,
) -> list[Match]:
    """Find *codes* in *message* and map each back to its word."""
    effective = _permute(codes, permutation)

    result = find_patterns(message, effective)
    for match in result:
        match.code = words[match.code_index] if match.code_index < len(words) else None

    if is_multi_mode(words, effective) and words:
        for match in result:
            match.code_index %= len(words)
            if match.code is None:
                match.code = words[match.code_index]

    return result


@dataclass
class CodecConfig:
    """Configuration for the Codec."""
    lowercase: bool = False           # "Sail" and "sail" are the same token
    min_code_length: int = 3          # shorter codes are discarded
    limit: int | None = 3             # max codes as a multiple of the word count
    ignore_common: bool = False       # drop common words from the code list
    common_words: set[str] | None = None  # None = bundled list
    password_hash: str = DEFAULT_HASH


class Codec:
    """Keyed word/code substitution.

    Wraps the module-level :func:`encode` and :func:`decode` with token list
    preparation: tokenizing, common-word filtering and the code limit.
    Holds no per-message state.
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self.config = config or CodecConfig()

    # ------------------------------------------------------------------
    # Token lists
    # ------------------------------------------------------------------

    def load_codebook(
        self,
        *,
        words: str | None = None,
        word_file: str | Path | None = None,
        codes: str | None = None,
        code_file: str | Path | None = None,
    ) -> Codebook:
        """Tokenize words and codes from inline text or files.

        Inline text wins over a file.  Only codes are held to
        ``min_code_length``.
        """
        lowercase = self.config.lowercase
        min_length = self.config.min_code_length

        if codes is not None:
            code_list = tokens_from_string(codes, lowercase=lowercase, min_length=min_length)
        elif code_file is not None:
            code_list = tokens_from_file(code_file, lowercase=lowercase, min_length=min_length)
        else:
            raise ValueError("No codes provided")

        if words is not None:
            word_list = tokens_from_string(words, lowercase=lowercase)
        elif word_file is not None:
            word_list = tokens_from_file(word_file, lowercase=lowercase)
        else:
            raise ValueError("No words provided")

        return self.prepare(word_list, code_list)

    def prepare(self, words: Sequence[str], codes: Sequence[str]) -> Codebook:
        """Apply common-word filtering, then the code limit."""
        book = Codebook(list(words), list(codes))
        if self.config.ignore_common:
            common = self.config.common_words
            book = book.without_common(common if common is not None else load_common_words())
        if self.config.limit:
            book = book.limit(self.config.limit)
        logger.info("codebook: %d words, %d codes", len(book.words), len(book.codes))
        return book

    def key_for(self, permutation: int | str | None = None, password: str | None = None) -> int:
        return resolve_key(permutation, password, algorithm=self.config.password_hash)

    # ------------------------------------------------------------------
    # Encode / decode
    # ------------------------------------------------------------------

    def encode(self, message: str, book: Codebook, key: int = 0) -> CodecResult:
        codes = _permute(book.codes, key)
        multi = is_multi_mode(book.words, codes)
        logger.debug("encode: %d words, %d codes, multi=%s", len(book.words), len(codes), multi)
        matches = encode(message, book.words, codes)
        return CodecResult(matches=matches, words=list(book.words), codes=codes, multi=multi)

    def decode(self, message: str, book: Codebook, key: int = 0) -> CodecResult:
        codes = _permute(book.codes, key)
        multi = is_multi_mode(book.words, codes)
        logger.debug("decode: %d words, %d codes, multi=%s", len(book.words), len(codes), multi)
        matches = decode(message, codes, book.words)
        return CodecResult(matches=matches, words=list(book.words), codes=codes, multi=multi)
