"""Tests for the caller side: keys, formats, config and the CLI."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import json

import pytest

from intercept import (
    Match, create_codec, get_nth_permutation, hash_as_int, load_config, load_from_yaml, resolve_key,
)
from intercept.cli import main
from intercept.codebook import iter_tokens, load_common_words, tokens_from_string
from intercept.formats import format_matches

SHA256_ABC = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
SHA512_ABC = (
    "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
    "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"
)


# ── Keys ─────────────────────────────────────────────────────────────

def test_hash_as_int_default_sha512():
    assert hash_as_int("abc") == int(SHA512_ABC, 16)


def test_hash_as_int_named_algorithm():
    assert hash_as_int("abc", "sha256") == int(SHA256_ABC, 16)
    assert hash_as_int("abc", "SHA-256") == int(SHA256_ABC, 16)


def test_hash_as_int_hyphenated_aliases():
    for alias, name in [("SHA-1", "sha1"), ("sha-384", "sha384"), ("SHA-512", "sha512"),
                        ("sha3-256", "sha3_256"), ("SHA512-256", "sha512_256")]:
        assert hash_as_int("abc", alias) == hash_as_int("abc", name)


def test_hash_as_int_unknown_algorithm():
    with pytest.raises(ValueError, match="Unknown hash"):
        hash_as_int("abc", "rot13")


def test_resolve_key():
    assert resolve_key(12, "abc") == 12
    assert resolve_key("12") == 12
    assert resolve_key(0, "abc") == 0
    assert resolve_key(None, "abc", algorithm="sha256") == int(SHA256_ABC, 16)
    assert resolve_key() == 0
    with pytest.raises(ValueError) as exc:
        resolve_key("twelve")
    assert exc.value.__suppress_context__
    assert exc.value.__cause__ is None


# ── Token lists ──────────────────────────────────────────────────────

def test_iter_tokens_splits_on_non_alphanumerics():
    assert list(iter_tokens("Hello, world! it's 2024")) == ["Hello", "world", "it", "s", "2024"]


def test_tokens_from_string_first_seen_order():
    assert tokens_from_string("b a b c a") == ["b", "a", "c"]
    assert tokens_from_string("ox bee cat", min_length=3) == ["bee", "cat"]


def test_bundled_common_words():
    common = load_common_words()
    assert {"the", "and", "of"} <= common


# ── Formats ──────────────────────────────────────────────────────────

MATCHES = [Match(0, 0, "1", "a"), Match(2, 2, "3", None)]


def test_format_json():
    assert json.loads(format_matches(MATCHES, "json")) == [
        {"pos": 0, "codeIndex": 0, "pattern": "1", "code": "a"},
        {"pos": 2, "codeIndex": 2, "pattern": "3", "code": None},
    ]


def test_format_csv():
    assert format_matches(MATCHES, "csv").splitlines() == [
        "pos,codeIndex,pattern,code",
        "0,0,1,a",
        "2,2,3,",
    ]


def test_format_text():
    assert format_matches(MATCHES, "text") == "0\t0\t1\ta\n2\t2\t3\t-"


def test_format_unknown():
    with pytest.raises(ValueError):
        format_matches(MATCHES, "xml")


# ── Config ───────────────────────────────────────────────────────────

def test_load_config_defaults():
    cfg = load_config({})
    assert cfg["min_code_length"] == 3
    assert cfg["limit"] == 3
    assert cfg["password_hash"] == "sha512"
    assert cfg["format"] == "text"
    assert cfg["lowercase"] is False


def test_load_config_nested_and_limit_off():
    cfg = load_config({"intercept": {"lowercase": True, "limit": 0, "format": "json"}})
    assert cfg["lowercase"] is True
    assert cfg["limit"] == 0
    assert cfg["format"] == "json"


def test_load_from_yaml(tmp_path):
    path = tmp_path / "intercept.yaml"
    path.write_text("intercept:\n  min_code_length: 1\n  password_hash: sha256\n")
    cfg = load_from_yaml(path)
    assert cfg["min_code_length"] == 1
    assert cfg["password_hash"] == "sha256"


def test_create_codec():
    codec = create_codec({"intercept": {"limit": 0, "min_code_length": 0}})
    assert codec.config.limit is None
    assert codec.config.min_code_length == 0
    assert codec.load_codebook(words="1", codes="a b c d").codes == ["a", "b", "c", "d"]


# ── CLI ──────────────────────────────────────────────────────────────

def test_cli_encode_json(capsys):
    main(["encode", "-m", "123", "-w", "1 2 3", "-c", "a b c",
          "--min-code-length", "0", "--permutation", "3", "--format", "json"])
    out = json.loads(capsys.readouterr().out)
    assert [r["code"] for r in out] == ["b", "c", "a"]
    assert [r["pos"] for r in out] == [0, 1, 2]


def test_cli_encode_message(capsys):
    main(["encode", "-m", "meet at noon", "-w", "meet noon", "-c", "falcon harbor",
          "--permutation", "1", "--format", "message"])
    assert capsys.readouterr().out == "harbor at falcon\n"


def test_cli_encode_message_needs_single_mode():
    with pytest.raises(SystemExit) as exc:
        main(["encode", "-m", "meet", "-w", "meet", "-c", "falcon harbor", "--format", "message"])
    assert exc.value.code == 2


def test_cli_decode_message(capsys):
    main(["decode", "-m", "harbor at falcon", "-w", "meet noon", "-c", "falcon harbor",
          "--permutation", "1", "--format", "message"])
    assert capsys.readouterr().out == "meet at noon\n"


def test_cli_decode_with_password_text(capsys):
    effective = get_nth_permutation(["falcon", "harbor"], hash_as_int("open sesame"))

    main(["decode", "-m", effective[0], "-w", "meet noon", "-c", "falcon harbor", "-p", "open sesame"])
    assert capsys.readouterr().out == f"0\t0\t{effective[0]}\tmeet\n"


def test_cli_files_and_config(tmp_path, capsys):
    (tmp_path / "words.txt").write_text("1 2 3\n")
    (tmp_path / "codes.txt").write_text("a b\nc\n")
    (tmp_path / "message.txt").write_text("321")
    (tmp_path / "cfg.yaml").write_text("intercept:\n  min_code_length: 1\n  format: csv\n")

    main(["encode",
          "--word-file", str(tmp_path / "words.txt"),
          "--code-file", str(tmp_path / "codes.txt"),
          "--message-file", str(tmp_path / "message.txt"),
          "--config", str(tmp_path / "cfg.yaml")])
    assert capsys.readouterr().out.splitlines() == [
        "pos,codeIndex,pattern,code",
        "0,2,3,c",
        "1,1,2,b",
        "2,0,1,a",
    ]


def test_cli_missing_codes():
    with pytest.raises(SystemExit) as exc:
        main(["encode", "-m", "123", "-w", "1 2 3"])
    assert exc.value.code == 2


def test_cli_missing_message():
    with pytest.raises(SystemExit) as exc:
        main(["decode", "-w", "1 2 3", "-c", "aaa bbb"])
    assert exc.value.code == 2


def test_cli_bad_permutation(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["encode", "-m", "1", "-w", "1", "-c", "aaa", "--permutation", "abc"])
    assert exc.value.code == 1
    assert "permutation must be an integer" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["encode", "-m", "1", "-w", "1", "--code-file", str(tmp_path / "nope.txt")])
    assert exc.value.code == 1


def test_cli_permute(capsys):
    main(["permute", "--permutation", "3", "a", "b", "c"])
    assert capsys.readouterr().out == "b c a\n"


def test_cli_permute_password_hash_alias(capsys):
    main(["permute", "-p", "x", "--password-hash", "SHA-256", "a", "b"])
    expected = " ".join(get_nth_permutation(["a", "b"], hash_as_int("x", "sha256")))
    assert capsys.readouterr().out == expected + "\n"


def test_cli_unknown_password_hash(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["permute", "-p", "x", "--password-hash", "rot13", "a", "b"])
    assert exc.value.code == 1
    assert "Unknown hash algorithm" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
