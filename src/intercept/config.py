"""YAML/dict config loader for intercept.

Supports loading from a YAML file or a plain dict (for embedding in a
larger config file).  Command line flags override these values.

Example YAML:

    intercept:
      lowercase: true
      min_code_length: 3
      limit: 3                  # codes kept, as a multiple of the word count
      ignore_common: true
      common_words: ~/lists/common.txt   # omit for the bundled list
      password_hash: sha512
      format: json              # json | csv | text | message
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .codebook import load_common_words
from .codec import Codec, CodecConfig
from .keys import DEFAULT_HASH

DEFAULTS: dict[str, Any] = {
    "lowercase": False,
    "min_code_length": 3,
    "limit": 3,
    "ignore_common": False,
    "common_words": None,
    "password_hash": DEFAULT_HASH,
    "format": "text",
}


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "intercept" key or flat
    if "intercept" in data:
        data = data["intercept"] or {}

    return {
        "lowercase": bool(data.get("lowercase", DEFAULTS["lowercase"])),
        "min_code_length": int(data.get("min_code_length", DEFAULTS["min_code_length"])),
        "limit": int(data.get("limit", DEFAULTS["limit"]) or 0),   # 0 = no limit
        "ignore_common": bool(data.get("ignore_common", DEFAULTS["ignore_common"])),
        "common_words": data.get("common_words", DEFAULTS["common_words"]),
        "password_hash": data.get("password_hash", DEFAULTS["password_hash"]),
        "format": data.get("format", DEFAULTS["format"]),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(Path(path).expanduser()) as f:
        return load_config(yaml.safe_load(f))


def codec_config_from(cfg: dict[str, Any]) -> CodecConfig:
    """Build a CodecConfig from a normalized config dict."""
    common = cfg.get("common_words")
    return CodecConfig(
        lowercase=cfg["lowercase"],
        min_code_length=cfg["min_code_length"],
        limit=cfg["limit"] or None,
        ignore_common=cfg["ignore_common"],
        common_words=load_common_words(common) if common and cfg["ignore_common"] else None,
        password_hash=cfg["password_hash"],
    )


def create_codec(config: dict[str, Any]) -> Codec:
    """Create a configured Codec from a raw or normalized config dict.

    Normalizing is idempotent, so either form is accepted.
    """
    return Codec(codec_config_from(load_config(config)))
