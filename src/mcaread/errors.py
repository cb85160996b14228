"""Exceptions raised while decoding region files.

Every structural problem found while walking a region buffer or a chunk's
tag tree is reported with one of these types. Legitimately missing data
(an ungenerated chunk, an empty section) is never an exception.
"""


class AnvilError(Exception):
    """Base class for all decode errors."""


class FormatError(AnvilError, ValueError):
    """The data does not follow the region/chunk layout."""


class OutOfBoundsError(FormatError):
    """A header entry was read past the end of the region buffer."""


class TruncatedBufferError(FormatError):
    """A chunk payload or packed array ends before the data it describes."""


class DecompressionError(FormatError):
    """The compressed chunk payload could not be inflated."""


class MalformedTagTreeError(FormatError):
    """The inflated chunk payload is not a valid tag tree."""


class WrongTagError(FormatError):
    """A tag was missing or had a different type than the layout requires."""

    def __init__(self, path: str, expected: str, actual=None):
        self.path = path
        self.expected = expected
        self.actual = actual
        if actual is None:
            message = f"{path}: expected {expected}, tag is missing"
        else:
            message = f"{path}: expected {expected}, got {type(actual).__name__}"
        super().__init__(message)


class UnsupportedCompressionError(AnvilError):
    """The chunk uses a compression scheme this reader does not decode."""

    def __init__(self, compression: int):
        self.compression = compression
        super().__init__(f"Unsupported compression type: {compression}")


class OutOfRangeError(AnvilError, IndexError):
    """A coordinate or index falls outside the range the format allows."""


class PaletteIndexError(OutOfRangeError):
    """A decoded palette index does not address an entry of the palette."""

    def __init__(self, index: int, palette_len: int):
        self.index = index
        self.palette_len = palette_len
        super().__init__(f"Palette index {index} out of range for palette of {palette_len}")


class BlockNameError(AnvilError, ValueError):
    """A block name is not of the form ``namespace:id``."""
