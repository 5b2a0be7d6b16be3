from __future__ import annotations

import os
from typing import Tuple

from .constants import NAME_MAX_BYTES
from .errors import EntryNameError


def encode_entry_name(name: str) -> Tuple[bytes, bool]:
    """Encode a file name for the table; returns ``(stored, truncated)``.

    Names longer than the field are cut to ``NAME_MAX_BYTES`` bytes.
    """
    raw = os.fsencode(name)
    if len(raw) <= NAME_MAX_BYTES:
        return raw, False
    return raw[:NAME_MAX_BYTES], True


def check_entry_name(name: str) -> str:
    """Reject table names that would not land directly inside the output folder.

    Rules:
    - Must not be empty, '.' or '..'
    - Must not contain '/' or '\\'
    """
    if name in ("", ".", ".."):
        raise EntryNameError(f"Invalid entry name: {name!r}")
    if "/" in name or "\\" in name:
        raise EntryNameError(f"Entry name may not contain a path separator: {name!r}")
    return name
