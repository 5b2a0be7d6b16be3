from __future__ import annotations

import argparse
import sys
import time
from typing import List

from packplus import __version__
from packplus.constants import HEADER_SIZE, ENTRY_SIZE
from packplus.errors import PackPlusError
from packplus.reader import ArchiveReader, dump_archive
from packplus.records import FileTableEntry
from packplus.transform import is_cipher_exempt, resolve_offsets
from packplus.writer import pack_directory


COMMANDS = {"dump": 3, "pack": 3, "list": 2, "info": 2}


class _Parser(argparse.ArgumentParser):
    # The tool reports problems but always exits with status 0
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(0, f"Error: {message}\n")


def cmd_dump(archive: str, folder: str, *, strict: bool = False, quiet: bool = False) -> bool:
    """Extract every entry of an archive into a folder.

    Args:
        archive: Path to the archive.
        folder: Output directory; created if missing.
        strict: Reject archives whose magic is not "PackPlus".
        quiet: Only print the summary line.
    """

    def _progress(i: int, total: int, entry: FileTableEntry) -> None:
        if not quiet:
            print(f"   dumping: {i:>4}/{total:<4} {entry.filename}")

    t0 = time.time()
    try:
        written = dump_archive(archive, folder, strict=strict, on_entry=_progress)
    except (PackPlusError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return False
    dt = max(0.000001, time.time() - t0)
    print(f"Done: dumped {len(written)} files to {folder} in {dt:.1f}s")
    return True


def cmd_pack(folder: str, archive: str, *, quiet: bool = False) -> bool:
    """Create an archive from the regular files directly inside a folder."""

    def _progress(i: int, name: str) -> None:
        if not quiet:
            print(f"   packing: {i:>4} {name}")

    t0 = time.time()
    try:
        w = pack_directory(folder, archive, on_entry=_progress)
    except (PackPlusError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return False
    for original, stored in w.truncated:
        print(f"Warning: name '{original}' truncated to '{stored}'", file=sys.stderr)
    dt = max(0.000001, time.time() - t0)
    size = sum(e.stored_size for e in w.entries)
    mib = size / (1024.0 * 1024.0)
    print(f"Done: packed {len(w.entries)} files ({mib:.2f} MiB) into {archive} in {dt:.1f}s")
    return True


def cmd_list(archive: str, *, strict: bool = False) -> bool:
    """List archive entries as ``size<TAB>position<TAB>name``."""
    try:
        with ArchiveReader(archive, strict=strict) as r:
            entries = r.list()
    except (PackPlusError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return False
    for e in entries:
        position, size = resolve_offsets(e)
        print(f"{size}\t{position}\t{e.filename}")
    return True


def cmd_info(archive: str, *, strict: bool = False) -> bool:
    try:
        with ArchiveReader(archive, strict=strict) as r:
            h = r.header
            entries = r.list()
    except (PackPlusError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return False
    print(f"Archive: {archive}")
    print(f"  Magic: {h.magic.rstrip(bytes(1))!r}")
    print(f"  Key: 0x{h.key:02X}")
    print(f"  Files: {h.file_count}")
    print(f"  Table offset: 0x{h.table_offset:X} ({h.file_count * ENTRY_SIZE} bytes)")
    print(f"  Header size: 0x{HEADER_SIZE:X}")
    print(f"    Obfuscated entries: {len([e for e in entries if e.offset_bias])}")
    print(f"    Cipher-exempt entries: {len([e for e in entries if is_cipher_exempt(e.filename)])}")
    return True


def _build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog="packplus",
        description=f"PackPlus archive tool {__version__}",
        epilog="Archives created by 'pack' are never obfuscated or encrypted.",
    )
    sub = ap.add_subparsers(dest="cmd")

    ap_dump = sub.add_parser("dump", help="Dump archive to folder")
    ap_dump.add_argument("archive", help="Archive path")
    ap_dump.add_argument("folder", help="Output folder (created if missing)")
    ap_dump.add_argument("--strict", action="store_true", help="Reject archives without the PackPlus magic")
    ap_dump.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    ap_pack = sub.add_parser("pack", help="Create archive from folder")
    ap_pack.add_argument("folder", help="Input folder (regular files only, non-recursive)")
    ap_pack.add_argument("archive", help="Output archive path")
    ap_pack.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    ap_list = sub.add_parser("list", help="List archive contents")
    ap_list.add_argument("archive", help="Archive path")
    ap_list.add_argument("--strict", action="store_true", help="Reject archives without the PackPlus magic")

    ap_info = sub.add_parser("info", help="Show archive header")
    ap_info.add_argument("archive", help="Archive path")
    ap_info.add_argument("--strict", action="store_true", help="Reject archives without the PackPlus magic")
    return ap


def main(argv: List[str] | None = None):
    if argv is None:
        argv = sys.argv[1:]
    ap = _build_parser()
    if not argv or argv[0] in ("-h", "--help"):
        ap.print_help()
        return
    # Too few arguments shows usage before the mode is even looked at
    if len(argv) < COMMANDS.get(argv[0], 3):
        ap.print_help()
        return
    if argv[0] not in COMMANDS:
        print(f"Error: invalid mode '{argv[0]}'", file=sys.stderr)
        return

    args = ap.parse_args(argv)
    if args.cmd == "dump":
        cmd_dump(args.archive, args.folder, strict=args.strict, quiet=args.quiet)
    elif args.cmd == "pack":
        cmd_pack(args.folder, args.archive, quiet=args.quiet)
    elif args.cmd == "list":
        cmd_list(args.archive, strict=args.strict)
    elif args.cmd == "info":
        cmd_info(args.archive, strict=args.strict)


if __name__ == "__main__":
    main()
