"""
PackPlus — tooling for the "PackPlus" game-asset archive.

Features:

- Fixed 0x34-byte header (magic, XOR key, file count, file table position).
- Flat file table of 0x30-byte entries whose position/size fields may be
  obfuscated with a per-entry bias.
- Single-byte XOR cipher over file contents (``.ogg`` and ``.png`` are stored as is).
- ``dump`` extracts every entry into a folder; ``pack`` builds an archive from a
  folder's regular files, always without obfuscation or encryption.

The layout uses the host's native byte order. See packplus/constants.py.
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "header",
    "records",
    "transform",
    "reader",
    "writer",
]

# Importable programmatic API is available via packplus.reader/packplus.writer
# (dump_archive/pack_directory) and the CLI functions in packplus.cli.
