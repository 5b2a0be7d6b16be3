from __future__ import annotations

import os
from typing import BinaryIO, Callable, List, Optional

from .errors import ArchiveOpenError, DirectoryError, FileOpenError, PackPlusError
from .header import Header, read_header
from .pathutil import check_entry_name
from .records import FileTableEntry, read_entries, read_exact
from .transform import apply_cipher, resolve_offsets


class ArchiveReader:
    def __init__(self, path: str, *, strict: bool = False):
        self.path = path
        self.strict = strict
        self.f: Optional[BinaryIO] = None
        self.header: Optional[Header] = None
        self.entries: List[FileTableEntry] = []

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        if self.f is not None:
            return
        try:
            self.f = open(self.path, "rb")
        except OSError as exc:
            raise ArchiveOpenError(f"Could not open archive '{self.path}': {exc.strerror}") from exc
        try:
            self.header = read_header(self.f, strict=self.strict)
            self.entries = read_entries(self.f, self.header.table_offset, self.header.file_count)
        except (PackPlusError, OSError) as exc:
            # Ensure file handle is closed on failure to avoid leaks
            self.close()
            raise

    def close(self):
        if self.f is not None:
            self.f.close()
            self.f = None

    def list(self) -> List[FileTableEntry]:
        return self.entries

    def read(self, entry: FileTableEntry) -> bytes:
        """Return the deciphered content of ``entry``."""
        if self.f is None or self.header is None:
            raise RuntimeError("Archive not open")
        position, size = resolve_offsets(entry)
        self.f.seek(position)
        data = read_exact(self.f, size)
        return apply_cipher(data, self.header.key, entry.filename)

    def extract(self, entry: FileTableEntry, out_dir: str) -> str:
        name = check_entry_name(entry.filename)
        data = self.read(entry)
        out_path = os.path.join(out_dir, name)
        try:
            wf = open(out_path, "wb")
        except OSError as exc:
            raise FileOpenError(f"Could not open file '{out_path}': {exc.strerror}") from exc
        with wf:
            wf.write(data)
        return out_path


def _ensure_dir(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as exc:
        raise DirectoryError(f"Could not create directory '{path}': {exc.strerror or exc}") from exc
    if not os.access(path, os.W_OK | os.X_OK):
        raise DirectoryError(f"Could not enter directory '{path}': permission denied")


def dump_archive(
    archive: str,
    folder: str,
    *,
    strict: bool = False,
    on_entry: Optional[Callable[[int, int, FileTableEntry], None]] = None,
) -> List[str]:
    """
    Extracts every entry of ``archive`` into ``folder``.

    The header and file table are decoded first; the folder is created only
    once they are known to be readable. Entries are then written in table
    order, each one overwriting a file of the same name. The first failure
    aborts the remaining entries and files already written are left in place.

    Returns:
        The paths written, in table order.
    """
    written: List[str] = []
    with ArchiveReader(archive, strict=strict) as r:
        _ensure_dir(folder)
        total = len(r.entries)
        for i, entry in enumerate(r.entries, 1):
            if on_entry is not None:
                on_entry(i, total, entry)
            written.append(r.extract(entry, folder))
    return written
