from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO, Iterable, List

from .constants import ENTRY_SIZE, ENTRY_STRUCT
from .errors import TruncatedInputError


# File table entry (fixed 0x30 bytes)
#  - name[0x27], zero padded
#  - offset_bias u8 (subtracted from both fields below)
#  - stored_position u32
#  - stored_size u32
@dataclass
class FileTableEntry:
    name: bytes
    offset_bias: int
    stored_position: int
    stored_size: int

    @property
    def filename(self) -> str:
        return os.fsdecode(self.name.split(b"\x00", 1)[0])

    def pack(self) -> bytes:
        return ENTRY_STRUCT.pack(self.name, self.offset_bias, self.stored_position, self.stored_size)


def encode_entries(entries: Iterable[FileTableEntry]) -> bytes:
    return b"".join(e.pack() for e in entries)


def decode_entries(data: bytes, count: int) -> List[FileTableEntry]:
    """Decode ``count`` table entries from the start of ``data``.

    Exactly ``count * ENTRY_SIZE`` bytes are consumed; anything after that is ignored.
    """
    need = count * ENTRY_SIZE
    if len(data) < need:
        raise TruncatedInputError(
            f"File table truncated: {count} entries need {need} bytes, got {len(data)}"
        )
    return [FileTableEntry(*fields) for fields in ENTRY_STRUCT.iter_unpack(data[:need])]


def _remaining(f: BinaryIO) -> int:
    pos = f.tell()
    end = f.seek(0, os.SEEK_END)
    f.seek(pos)
    return max(0, end - pos)


def read_exact(f: BinaryIO, n: int) -> bytes:
    # Sizes come from the archive itself; never ask for more than the stream holds
    avail = _remaining(f)
    if avail < n:
        raise TruncatedInputError(f"Unexpected EOF: wanted {n} bytes, {avail} available")
    return f.read(n)


def read_entries(f: BinaryIO, offset: int, count: int) -> List[FileTableEntry]:
    f.seek(offset)
    return decode_entries(f.read(min(count * ENTRY_SIZE, _remaining(f))), count)
