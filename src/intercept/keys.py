"""Permutation keys from passwords.

A password is hashed and the digest read as one big-endian integer, which
then selects a code list ordering (see :mod:`intercept.permutation`).
This only spreads passwords over the key space; it is not a KDF and the
codec gives no confidentiality.
"""

from __future__ import annotations
import logging
from typing import Callable

from cryptography.hazmat.primitives import hashes

logger = logging.getLogger(__name__)

DEFAULT_HASH = "sha512"

_ALGORITHMS: dict[str, Callable[[], hashes.HashAlgorithm]] = {
    "md5": hashes.MD5,
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha512_224": hashes.SHA512_224,
    "sha512_256": hashes.SHA512_256,
    "sha3_224": hashes.SHA3_224,
    "sha3_256": hashes.SHA3_256,
    "sha3_384": hashes.SHA3_384,
    "sha3_512": hashes.SHA3_512,
    "blake2b": lambda: hashes.BLAKE2b(64),
    "blake2s": lambda: hashes.BLAKE2s(32),
}


def available_algorithms() -> list[str]:
    return sorted(_ALGORITHMS)


def _algorithm(name: str) -> hashes.HashAlgorithm:
    key = name.strip().lower().replace("-", "_")
    # "SHA-256" -> "sha256", while "sha3-256" keeps its separator
    factory = _ALGORITHMS.get(key) or _ALGORITHMS.get(key.replace("_", ""))
    if factory is None:
        raise ValueError(
            f"Unknown hash algorithm: {name!r} (expected one of {available_algorithms()})"
        )
    return factory()


def hash_as_int(text: str, algorithm: str = DEFAULT_HASH) -> int:
    """Hash *text* (UTF-8) and return the digest as an unsigned integer."""
    digest = hashes.Hash(_algorithm(algorithm))
    digest.update(text.encode("utf-8"))
    return int.from_bytes(digest.finalize(), "big")


def resolve_key(
    permutation: int | str | None = None,
    password: str | None = None,
    *,
    algorithm: str = DEFAULT_HASH,
) -> int:
    """Pick the permutation key: explicit integer, else hashed password, else 0."""
    if permutation is not None and permutation != "":
        try:
            return int(permutation)
        except ValueError:
            raise ValueError(f"permutation must be an integer, got {permutation!r}") from None
    if password:
        logger.debug("deriving permutation key with %s", algorithm)
        return hash_as_int(password, algorithm)
    return 0
