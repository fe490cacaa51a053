class FormatError(ValueError):
    """Base class for malformed QOI input."""


class BadMagic(FormatError):
    pass


class InvalidDimensions(FormatError):
    pass


class InvalidChannels(FormatError):
    pass


class Truncated(FormatError):
    """The stream ended before a header or chunk payload was complete."""


class PixelCountMismatch(FormatError):
    """The chunk stream ran out before width * height pixels were decoded."""
