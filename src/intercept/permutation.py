"""Keyed reordering of token lists via the factorial number system.

Every ordering of an n-element list has a rank in ``[0, n!)``.  Writing the
rank in factoradic, ``k = d1*(n-1)! + d2*(n-2)! + ... + dn*0!``, each digit
picks the next element out of a shrinking pool:

    ["a", "b", "c"], k=3  ->  digits [1, 1, 0]  ->  ["b", "c", "a"]

Keys are arbitrary Python ints, reduced modulo ``n!`` first, so a 512-bit
password hash selects one ordering of a list of any length.
"""

from __future__ import annotations
from typing import Sequence, TypeVar

T = TypeVar("T")


def factorials(n: int) -> list[int]:
    """Return ``[0!, 1!, ..., n!]``."""
    out = [1]
    for i in range(1, n + 1):
        out.append(out[-1] * i)
    return out


def get_nth_permutation(elements: Sequence[T], n: int) -> list[T]:
    """Return the *n*-th permutation of *elements* (rank taken modulo len!).

    *elements* is copied, never mutated.  An empty sequence yields ``[]``.
    """
    pool = list(elements)
    if not pool:
        return []

    fact = factorials(len(pool))
    n %= fact[len(pool)]

    result: list[T] = []
    for i in range(len(pool), 0, -1):
        idx, n = divmod(n, fact[i - 1])
        result.append(pool.pop(idx))
    return result
