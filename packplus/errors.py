class PackPlusError(Exception):
    """Base class for PackPlus-specific errors."""


# Opening things
class ArchiveOpenError(PackPlusError):
    pass


class DirectoryError(PackPlusError):
    pass


class FileOpenError(PackPlusError):
    pass


# Bounds/consistency
class TruncatedInputError(PackPlusError):
    pass


class EntryNameError(PackPlusError):
    pass


class BadMagicError(PackPlusError):
    pass
