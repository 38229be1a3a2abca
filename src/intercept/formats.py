"""Serialize match lists for output."""

from __future__ import annotations
import csv
import io
import json
from typing import Sequence

from .types import Match

FORMATS = ("json", "csv", "text")

_FIELDS = ["pos", "codeIndex", "pattern", "code"]


def format_matches(matches: Sequence[Match], fmt: str = "text") -> str:
    """Render *matches* as ``json``, ``csv`` or tab-separated ``text``."""
    if fmt == "json":
        return json.dumps([m.to_dict() for m in matches], ensure_ascii=False, indent=2)

    if fmt == "csv":
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=_FIELDS, lineterminator="\n")
        writer.writeheader()
        for m in matches:
            row = m.to_dict()
            if row["code"] is None:
                row["code"] = ""
            writer.writerow(row)
        return buf.getvalue().rstrip("\n")

    if fmt == "text":
        return "\n".join(
            f"{m.position}\t{m.code_index}\t{m.pattern}\t{m.code if m.code is not None else '-'}"
            for m in matches
        )

    raise ValueError(f"Unknown format: {fmt!r} (expected one of {list(FORMATS)})")
