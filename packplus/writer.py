from __future__ import annotations

import os
from typing import BinaryIO, Callable, List, Optional, Tuple

from .constants import DEFAULT_MAGIC, U32_MASK
from .errors import ArchiveOpenError, DirectoryError, FileOpenError
from .header import Header
from .pathutil import encode_entry_name
from .records import FileTableEntry, encode_entries


class ArchiveWriter:
    """Writer for plain PackPlus archives.

    Content is appended verbatim after a placeholder header, the file table
    follows the content, and the header is rewritten in place by ``finalize``.
    Output never uses obfuscation (every bias is 0) or encryption (key 0).
    """

    def __init__(self, out_path: str, *, magic: bytes = DEFAULT_MAGIC):
        self.out_path = out_path
        self.magic = magic
        self.f: Optional[BinaryIO] = None
        self.entries: List[FileTableEntry] = []
        # (original name, stored name) for names cut to fit the table field
        self.truncated: List[Tuple[str, str]] = []
        self.header: Optional[Header] = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        if self.f is not None:
            return
        try:
            self.f = open(self.out_path, "wb")
        except OSError as exc:
            raise ArchiveOpenError(f"Could not open archive '{self.out_path}': {exc.strerror}") from exc
        self.f.write(Header.placeholder(self.magic).pack())

    def close(self):
        if self.f is not None:
            self.f.close()
            self.f = None

    def add_bytes(self, name: str, data: bytes) -> FileTableEntry:
        """Append ``data`` under ``name`` and record its table entry."""
        if self.f is None:
            raise RuntimeError("Archive not open")
        stored, cut = encode_entry_name(name)
        if cut:
            self.truncated.append((name, os.fsdecode(stored)))
        position = self.f.tell()
        if position + len(data) > U32_MASK:
            raise ValueError(f"Archive exceeds 4 GiB while adding '{name}'")
        entry = FileTableEntry(name=stored, offset_bias=0, stored_position=position, stored_size=len(data))
        self.f.write(data)
        self.entries.append(entry)
        return entry

    def add_file(self, fs_path: str, name: Optional[str] = None) -> FileTableEntry:
        try:
            rf = open(fs_path, "rb")
        except OSError as exc:
            raise FileOpenError(f"Could not open file '{fs_path}': {exc.strerror}") from exc
        with rf:
            data = rf.read()
        return self.add_bytes(name if name is not None else os.path.basename(fs_path), data)

    def finalize(self) -> Header:
        """
        Completes the archive.

        1.  Appends the file table at the current cursor.
        2.  Seeks back to offset 0 and rewrites the header with key 0, the
            real file count and the table position.
        """
        if self.f is None:
            raise RuntimeError("Archive not open")
        table_offset = self.f.tell()
        if table_offset > U32_MASK:
            raise ValueError("File table position does not fit in 32 bits")
        self.f.write(encode_entries(self.entries))
        self.header = Header(magic=self.magic, key=0, file_count=len(self.entries), table_offset=table_offset)
        self.f.seek(0)
        self.f.write(self.header.pack())
        self.f.flush()
        return self.header


def pack_directory(
    folder: str,
    archive: str,
    *,
    magic: bytes = DEFAULT_MAGIC,
    on_entry: Optional[Callable[[int, str], None]] = None,
) -> ArchiveWriter:
    """Build ``archive`` from the regular files directly inside ``folder``.

    Files are added in directory enumeration order; subdirectories and other
    non-regular entries are skipped. The archive is opened before the folder
    is read, so a folder that cannot be read leaves a partial archive behind.
    Returns the (closed) writer so callers can inspect ``entries``, ``header`` and ``truncated``.
    """
    out_abs = os.path.abspath(archive)
    with ArchiveWriter(archive, magic=magic) as w:
        try:
            listing = list(os.scandir(folder))
        except OSError as exc:
            raise DirectoryError(f"Could not read directory '{folder}': {exc.strerror or exc}") from exc
        for de in listing:
            if not de.is_file() or os.path.abspath(de.path) == out_abs:
                continue
            if on_entry is not None:
                on_entry(len(w.entries) + 1, de.name)
            w.add_file(de.path, de.name)
        w.finalize()
    return w
