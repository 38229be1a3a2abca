"""Intercept: keyed word-substitution codec for hiding messages in plain text."""

from .codec import Codec, CodecConfig, decode, encode, is_multi_mode
from .codebook import Codebook, tokens_from_file, tokens_from_string
from .config import create_codec, load_config, load_from_yaml
from .keys import hash_as_int, resolve_key
from .message import create_message
from .patterns import find_patterns, split_patterns
from .permutation import get_nth_permutation
from .types import CodecResult, Match

__all__ = [
    "encode", "decode", "is_multi_mode",
    "Codec", "CodecConfig", "CodecResult", "Match",
    "find_patterns", "split_patterns",
    "get_nth_permutation",
    "create_message",
    "Codebook", "tokens_from_string", "tokens_from_file",
    "hash_as_int", "resolve_key",
    "create_codec", "load_config", "load_from_yaml",
]
__version__ = "0.1.0"
