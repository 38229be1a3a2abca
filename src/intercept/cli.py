"""CLI interface for intercept.

Usage:
    # Encode: which codes can stand in for each word of the message
    intercept encode -m "meet at noon" -w "meet at noon dawn" \
        --code-file book.txt --password "open sesame" --format json

    # Decode: find codes in a message and map them back to words
    intercept decode -m "the falcon sails east" -w "meet at noon dawn" \
        --code-file book.txt --password "open sesame" --format message

    # Show the code order a key selects
    intercept permute --permutation 3 a b c

Options may also come from a YAML file (``--config``); flags win.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from .codebook import Codebook
from .codec import Codec
from .config import codec_config_from, load_config, load_from_yaml
from .formats import FORMATS, format_matches
from .keys import DEFAULT_HASH, available_algorithms, resolve_key
from .message import create_message
from .permutation import get_nth_permutation
from .types import CodecResult

logger = logging.getLogger("intercept")

OUTPUT_FORMATS = (*FORMATS, "message")


def _settings(args: argparse.Namespace) -> dict[str, Any]:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    overrides = {
        "lowercase": args.lowercase or None,
        "ignore_common": args.ignore_common or None,
        "limit": args.limit,
        "min_code_length": args.min_code_length,
        "common_words": args.common_words,
        "password_hash": args.password_hash,
        "format": args.format,
    }
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    return cfg


def _read_message(args: argparse.Namespace, parser: argparse.ArgumentParser) -> str:
    if args.message is not None:
        return args.message
    if args.message_file is not None:
        return Path(args.message_file).expanduser().read_text(encoding="utf-8")
    parser.error("No message provided (use --message or --message-file)")


def _prepare(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> tuple[Codec, Codebook, int, str, str]:
    if args.codes is None and args.code_file is None:
        parser.error("No codes provided (use --codes or --code-file)")
    if args.words is None and args.word_file is None:
        parser.error("No words provided (use --words or --word-file)")

    cfg = _settings(args)
    if cfg["format"] not in OUTPUT_FORMATS:
        parser.error(f"--format must be one of {list(OUTPUT_FORMATS)}")

    codec = Codec(codec_config_from(cfg))
    book = codec.load_codebook(
        words=args.words,
        word_file=args.word_file,
        codes=args.codes,
        code_file=args.code_file,
    )
    logger.info("Codes %s", book.codes)
    logger.info("Words %s", book.words)

    key = codec.key_for(args.permutation, args.password)
    return codec, book, key, _read_message(args, parser), cfg["format"]


def _emit(result: CodecResult, message: str, fmt: str, substitutes: list[str]) -> None:
    if fmt == "message":
        usable = [m for m in result.matches if m.code is not None]
        sys.stdout.write(create_message(message, usable, substitutes))
    else:
        sys.stdout.write(format_matches(result.matches, fmt))
    sys.stdout.write("\n")


def cmd_encode(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Encode a message using the code list."""
    codec, book, key, message, fmt = _prepare(args, parser)
    result = codec.encode(message, book, key)
    if fmt == "message" and result.multi:
        parser.error("--format message needs one code per word; lower --limit or add words")
    _emit(result, message, fmt, result.codes)


def cmd_decode(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Decode a message back to the word list."""
    codec, book, key, message, fmt = _prepare(args, parser)
    result = codec.decode(message, book, key)
    _emit(result, message, fmt, result.words)


def cmd_permute(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Print the ordering a key selects."""
    key = resolve_key(args.permutation, args.password, algorithm=args.password_hash or DEFAULT_HASH)
    sys.stdout.write(" ".join(get_nth_permutation(args.tokens, key)))
    sys.stdout.write("\n")


def _add_key_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--permutation", default=None,
                   help="Direct permutation of the codes (overrides --password)")
    p.add_argument("-p", "--password", default=None,
                   help="Password hashed into the permutation of the codes")
    p.add_argument("--password-hash", default=None,
                   help="Hash algorithm for --password (default sha512; one of %s)"
                        % ", ".join(available_algorithms()))


def _add_codec_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-c", "--codes", default=None, help="The code words to use")
    p.add_argument("--code-file", default=None, help="File containing the code words")
    p.add_argument("-w", "--words", default=None, help="The plain text words to use")
    p.add_argument("--word-file", default=None, help="File containing the plain text words")
    p.add_argument("-m", "--message", default=None, help="The message to encode or decode")
    p.add_argument("--message-file", default=None, help="File containing the message")
    _add_key_args(p)
    p.add_argument("-l", "--lowercase", action="store_true",
                   help='Treat all tokens as lowercase ("Sail" and "sail" are one code)')
    p.add_argument("--limit", type=int, default=None,
                   help="Max codes as a multiple of the word count (default 3, 0 = no limit)")
    p.add_argument("--min-code-length", type=int, default=None,
                   help="Minimum length of a code (default 3)")
    p.add_argument("--ignore-common", action="store_true", help="Drop common words from the codes")
    p.add_argument("--common-words", default=None, help="Common-word list (default: bundled)")
    p.add_argument("--format", default=None, choices=OUTPUT_FORMATS, help="Output format (default text)")
    p.add_argument("--config", default=None, help="YAML config file")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="intercept",
        description="Encode and decode messages using a coded word list",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")

    sub = parser.add_subparsers(dest="command", required=True)
    _add_codec_args(sub.add_parser("encode", help="Encode a message using the code words"))
    _add_codec_args(sub.add_parser("decode", help="Decode a message using the code words"))
    permute = sub.add_parser("permute", help="Show the nth permutation of tokens")
    permute.add_argument("tokens", nargs="*", help="Tokens to reorder")
    _add_key_args(permute)

    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    cmds = {
        "encode": cmd_encode,
        "decode": cmd_decode,
        "permute": cmd_permute,
    }
    try:
        cmds[args.command](args, parser)
    except (ValueError, OSError) as e:
        sys.stderr.write(f"error: {e}\n")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
