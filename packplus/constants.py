import struct


# Magic written by the packer ("PackPlus" zero-padded to the field width)
DEFAULT_MAGIC = b"PackPlus"

MAGIC_SIZE = 0x2B
NAME_SIZE = 0x27
# One byte of the name field is kept for the terminator
NAME_MAX_BYTES = NAME_SIZE - 1

# Native byte order, standard sizes, no alignment padding.
#  header: magic[0x2B] key u8 file_count u32 table_offset u32
#  entry:  name[0x27] offset_bias u8 stored_position u32 stored_size u32
HEADER_STRUCT = struct.Struct("=43sBII")
ENTRY_STRUCT = struct.Struct("=39sBII")

HEADER_SIZE = HEADER_STRUCT.size  # 0x34
ENTRY_SIZE = ENTRY_STRUCT.size  # 0x30

U32_MASK = 0xFFFFFFFF

# Content stored without the XOR cipher (case-sensitive suffix match)
CIPHER_EXEMPT_SUFFIXES = (".ogg", ".png")
