from __future__ import annotations

from typing import Tuple

from Cryptodome.Util.strxor import strxor_c

from .constants import CIPHER_EXEMPT_SUFFIXES, U32_MASK
from .records import FileTableEntry


def resolve_offsets(entry: FileTableEntry) -> Tuple[int, int]:
    """Return ``(true_position, true_size)`` for a table entry.

    Both stored fields carry ``offset_bias`` added on top of the real value; the
    subtraction wraps like the on-disk u32 does.
    """
    bias = entry.offset_bias
    return (entry.stored_position - bias) & U32_MASK, (entry.stored_size - bias) & U32_MASK


def obfuscate_offsets(true_position: int, true_size: int, bias: int) -> Tuple[int, int]:
    return (true_position + bias) & U32_MASK, (true_size + bias) & U32_MASK


def is_cipher_exempt(filename: str) -> bool:
    return filename.endswith(CIPHER_EXEMPT_SUFFIXES)


def apply_cipher(data: bytes, key: int, filename: str) -> bytes:
    """XOR every byte of ``data`` with ``key`` unless the file type is exempt.

    The transform is its own inverse, so it serves both directions.
    """
    if not 0 <= key <= 0xFF:
        raise ValueError("key must be in range(256)")
    if key == 0 or not data or is_cipher_exempt(filename):
        return bytes(data)
    return strxor_c(bytes(data), key)
