from __future__ import annotations

import re
from typing import Collection

MAX_SHEET_NAME_LENGTH = 31
INVALID_SHEET_CHARS = re.compile(r"[\\/*?:\[\]]")
FALLBACK_SHEET_NAME = "Sheet"


def sanitize_sheet_name(name: str) -> str:
    """
    Remove characters Excel forbids in sheet names and cut to 31 characters.

    The result may be empty; uniqueness is handled by ``unique_sheet_name``.
    """

    return INVALID_SHEET_CHARS.sub("", name)[:MAX_SHEET_NAME_LENGTH]


def unique_sheet_name(name: str, taken: Collection[str]) -> str:
    """
    Pick a sheet name not already in ``taken`` (case-insensitive, as Excel compares).

    Collisions get a `` (2)``, `` (3)``... suffix, shortening the base so the
    result stays within 31 characters. An empty name becomes ``Sheet``.
    """

    # Excel also rejects names that begin or end with an apostrophe.
    base = name.strip("'") or FALLBACK_SHEET_NAME
    used = {existing.lower() for existing in taken}
    if base.lower() not in used:
        return base

    counter = 2
    while True:
        suffix = f" ({counter})"
        candidate = base[: MAX_SHEET_NAME_LENGTH - len(suffix)] + suffix
        if candidate.lower() not in used:
            return candidate
        counter += 1
