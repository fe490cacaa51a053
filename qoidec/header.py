import logging
import struct

from .errors import BadMagic, InvalidChannels, InvalidDimensions, Truncated

logger = logging.getLogger(__name__)

QOI_MAGIC = b"qoif"
QOI_HEADER_SIZE = 14
QOI_PIXELS_MAX = 400000000  # Safety limit (400MP)
QOI_SRGB = 0
QOI_LINEAR = 1

# > : Big Endian
# 4s: 4-byte string (magic)
# I : unsigned int (4 bytes)
# B : unsigned char (1 byte)
_HEADER_FORMAT = ">4sIIBB"


class QOIHeader:
    """
    The fixed 14-byte header at the start of every QOI file.
    """

    __slots__ = ("width", "height", "channels", "colorspace")

    magic = QOI_MAGIC

    def __init__(self, width: int, height: int, channels: int, colorspace: int):
        self.width = width
        self.height = height
        self.channels = channels
        self.colorspace = colorspace

    @classmethod
    def parse(cls, data: bytes, offset: int = 0) -> "QOIHeader":
        """
        Parse and validate the header found at ``offset`` in ``data``.

        :param data: Bytes containing (at least) the QOI header.
        :param offset: Position of the magic bytes in ``data``.
        :return: A validated QOIHeader.
        :raises Truncated: fewer than 14 bytes are available.
        :raises BadMagic: the signature is not "qoif".
        :raises InvalidDimensions: width or height is zero, or the pixel
            count exceeds QOI_PIXELS_MAX.
        :raises InvalidChannels: channels is neither 3 nor 4.
        """
        if len(data) - offset < QOI_HEADER_SIZE:
            raise Truncated("QOI.decode: File too short for header")

        magic, width, height, channels, colorspace = struct.unpack_from(
            _HEADER_FORMAT, data, offset
        )

        if magic != QOI_MAGIC:
            raise BadMagic("QOI.decode: The signature of the QOI file is invalid")

        if width == 0 or height == 0:
            raise InvalidDimensions(
                f"QOI.decode: Invalid dimensions {width}x{height}"
            )

        if width * height > QOI_PIXELS_MAX:
            raise InvalidDimensions(
                f"QOI.decode: {width}x{height} exceeds the limit of "
                f"{QOI_PIXELS_MAX} pixels"
            )

        if channels not in (3, 4):
            raise InvalidChannels(
                "QOI.decode: The number of channels declared in the file is invalid"
            )

        header = cls(width, height, channels, colorspace)
        if not header.is_standard_colorspace:
            # Pass-through metadata; decoding is unaffected.
            logger.warning(
                "Non-standard colorspace %d in QOI header (expected 0 or 1)",
                colorspace,
            )

        logger.debug("Parsed QOI header %r", header)
        return header

    def pack(self) -> bytes:
        return struct.pack(
            _HEADER_FORMAT,
            self.magic,
            self.width,
            self.height,
            self.channels,
            self.colorspace,
        )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def is_standard_colorspace(self) -> bool:
        return self.colorspace in (QOI_SRGB, QOI_LINEAR)

    def as_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "channels": self.channels,
            "colorspace": self.colorspace,
        }

    def __repr__(self):
        return (
            f"QOIHeader(width={self.width}, height={self.height}, "
            f"channels={self.channels}, colorspace={self.colorspace})"
        )
