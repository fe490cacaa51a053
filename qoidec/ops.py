from enum import IntEnum

# QOI Constants
QOI_OP_INDEX = 0x00  # 00xxxxxx
QOI_OP_DIFF = 0x40  # 01xxxxxx
QOI_OP_LUMA = 0x80  # 10xxxxxx
QOI_OP_RUN = 0xC0  # 11xxxxxx
QOI_OP_RGB = 0xFE  # 11111110
QOI_OP_RGBA = 0xFF  # 11111111

QOI_MASK_2 = 0xC0  # 11000000
QOI_END_MARKER = b"\x00\x00\x00\x00\x00\x00\x00\x01"


class Op(IntEnum):
    """The six chunk kinds, valued by their tag byte (or tag prefix)."""

    INDEX = QOI_OP_INDEX
    DIFF = QOI_OP_DIFF
    LUMA = QOI_OP_LUMA
    RUN = QOI_OP_RUN
    RGB = QOI_OP_RGB
    RGBA = QOI_OP_RGBA

    @classmethod
    def from_tag(cls, tag: int) -> "Op":
        """Classify a tag byte. Every value 0-255 maps to exactly one op."""
        return _TAG_TABLE[tag]

    @property
    def payload_size(self) -> int:
        """Number of bytes following the tag byte."""
        return _PAYLOAD_SIZES[self]


def _classify(tag: int) -> Op:
    # Exact 8-bit tags take precedence over the 11xxxxxx run prefix
    if tag == QOI_OP_RGBA:
        return Op.RGBA
    if tag == QOI_OP_RGB:
        return Op.RGB
    return Op(tag & QOI_MASK_2)


_TAG_TABLE = tuple(_classify(tag) for tag in range(256))

_PAYLOAD_SIZES = {
    Op.INDEX: 0,
    Op.DIFF: 0,
    Op.LUMA: 1,
    Op.RUN: 0,
    Op.RGB: 3,
    Op.RGBA: 4,
}


def qoi_hash(r: int, g: int, b: int, a: int) -> int:
    """Calculates the index position for the color array."""
    return (r * 3 + g * 5 + b * 7 + a * 11) % 64
