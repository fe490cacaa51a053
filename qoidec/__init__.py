from .decoder import DecodeContext, QOIDecoder
from .errors import (
    BadMagic,
    FormatError,
    InvalidChannels,
    InvalidDimensions,
    PixelCountMismatch,
    Truncated,
)
from .header import QOIHeader
from .ops import Op, qoi_hash
from .utils import qoi_to_png, read_qoi, read_qoi_bytes, save_image, to_array

__all__ = [
    "QOIDecoder",
    "QOIHeader",
    "DecodeContext",
    "Op",
    "qoi_hash",
    "FormatError",
    "BadMagic",
    "InvalidDimensions",
    "InvalidChannels",
    "Truncated",
    "PixelCountMismatch",
    "read_qoi",
    "read_qoi_bytes",
    "to_array",
    "save_image",
    "qoi_to_png",
]
