from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from .constants import DEFAULT_MAGIC, HEADER_SIZE, HEADER_STRUCT, MAGIC_SIZE
from .errors import BadMagicError, TruncatedInputError


@dataclass
class Header:
    magic: bytes
    key: int
    file_count: int
    table_offset: int

    @classmethod
    def placeholder(cls, magic: bytes = DEFAULT_MAGIC) -> "Header":
        """Header written before the payload; rewritten once counts are known."""
        return cls(magic=magic, key=0, file_count=0, table_offset=0)

    def pack(self) -> bytes:
        return encode_header(self)


def encode_header(header: Header) -> bytes:
    if len(header.magic) > MAGIC_SIZE:
        raise ValueError(f"magic longer than {MAGIC_SIZE} bytes")
    # struct pads the magic with zero bytes
    return HEADER_STRUCT.pack(header.magic, header.key, header.file_count, header.table_offset)


def decode_header(data: bytes) -> Header:
    if len(data) < HEADER_SIZE:
        raise TruncatedInputError(f"Header too short ({len(data)} of {HEADER_SIZE} bytes)")
    magic, key, file_count, table_offset = HEADER_STRUCT.unpack(data[:HEADER_SIZE])
    return Header(magic=magic, key=key, file_count=file_count, table_offset=table_offset)


def magic_matches(magic: bytes, expected: bytes = DEFAULT_MAGIC) -> bool:
    return magic.startswith(expected) and not magic[len(expected):].strip(b"\x00")


def read_header(f: BinaryIO, *, strict: bool = False) -> Header:
    f.seek(0)
    header = decode_header(f.read(HEADER_SIZE))
    if strict and not magic_matches(header.magic):
        raise BadMagicError(f"Bad archive magic: {header.magic.rstrip(bytes(1))!r}")
    return header
