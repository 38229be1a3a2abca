"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(slots=True)
class Match:
    """A single located token in a message."""
    position: int          # offset into the message
    code_index: int        # index into the searched list
    pattern: str           # literal text that matched
    code: str | None = None  # paired token from the other list, if any

    @property
    def end(self) -> int:
        return self.position + len(self.pattern)

    def to_dict(self) -> dict:
        return {
            "pos": self.position,
            "codeIndex": self.code_index,
            "pattern": self.pattern,
            "code": self.code,
        }


@dataclass(slots=True)
class CodecResult:
    """Result of encoding or decoding a message."""
    matches: list[Match] = field(default_factory=list)
    words: list[str] = field(default_factory=list)
    codes: list[str] = field(default_factory=list)   # effective (permuted) codes
    multi: bool = False
