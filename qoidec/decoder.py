import logging

from .errors import PixelCountMismatch, Truncated
from .header import QOI_HEADER_SIZE, QOIHeader
from .ops import QOI_END_MARKER, Op, qoi_hash

logger = logging.getLogger(__name__)


class DecodeContext:
    """
    State owned by a single decode: read cursor, previous pixel, the 64-slot
    color index and the number of pixels produced so far.

    A context is consumed once; create a new one for every image.
    """

    __slots__ = ("data", "pos", "end", "prev", "index", "emitted", "total")

    def __init__(self, data, pos: int, total: int, end: int = None):
        self.data = data
        self.pos = pos
        self.end = len(data) if end is None else end
        self.total = total
        self.emitted = 0

        # Initial pixel state (R, G, B, A)
        self.prev = (0, 0, 0, 255)
        # Index array: 64 pixels, initialized to (0, 0, 0, 0)
        self.index = [(0, 0, 0, 0)] * 64

    @property
    def done(self) -> bool:
        return self.emitted >= self.total

    def _read(self, op: Op):
        start = self.pos
        count = op.payload_size
        if start + count > self.end:
            raise Truncated(
                f"QOI.decode: Unexpected end of file in QOI_OP_{op.name} "
                f"payload at byte {start}"
            )
        self.pos = start + count
        return self.data[start : start + count]

    def next_chunk(self) -> tuple:
        """
        Read one chunk and apply it.

        :return: (op, pixel, count) where count is how many times pixel
                 must be written. Runs are clipped to the remaining budget.
        """
        if self.done:
            raise RuntimeError("QOI.decode: All pixels have already been decoded")
        if self.pos >= self.end:
            raise PixelCountMismatch(
                f"QOI.decode: Incomplete image, decoded {self.emitted} of "
                f"{self.total} pixels"
            )

        tag = self.data[self.pos]
        self.pos += 1
        op = Op.from_tag(tag)
        r, g, b, a = self.prev

        if op is Op.RUN:
            # 6 low bits hold run length - 1
            count = min((tag & 0x3F) + 1, self.total - self.emitted)
            self.emitted += count
            return op, self.prev, count

        if op is Op.RGBA:
            r, g, b, a = self._read(op)

        elif op is Op.RGB:
            r, g, b = self._read(op)

        elif op is Op.INDEX:
            r, g, b, a = self.index[tag]

        elif op is Op.DIFF:
            # 2-bit differences with a bias of 2
            r = (r + ((tag >> 4) & 0x03) - 2) & 0xFF
            g = (g + ((tag >> 2) & 0x03) - 2) & 0xFF
            b = (b + (tag & 0x03) - 2) & 0xFF

        else:  # Op.LUMA
            (b2,) = self._read(op)
            dg = (tag & 0x3F) - 32
            r = (r + dg + ((b2 >> 4) & 0x0F) - 8) & 0xFF
            g = (g + dg) & 0xFF
            b = (b + dg + (b2 & 0x0F) - 8) & 0xFF

        pixel = (r, g, b, a)
        self.prev = pixel
        self.index[qoi_hash(r, g, b, a)] = pixel
        self.emitted += 1
        return op, pixel, 1

    def chunks(self):
        """Yield (op, pixel, count) until width * height pixels exist."""
        while not self.done:
            yield self.next_chunk()


class QOIDecoder:
    """
    A class to decode QOI (Quite OK Image) files into raw pixel data.
    """

    @staticmethod
    def decode(
        file_data: bytes,
        byte_offset: int = 0,
        byte_length: int = None,
        output_channels: int = None,
    ) -> dict:
        """
        Decode a QOI file given as a bytes/bytearray object.

        :param file_data: Bytes containing the QOI file.
        :param byte_offset: Offset to the start of the QOI file in file_data.
        :param byte_length: Length of the QOI file in bytes.
        :param output_channels: Number of channels to include in the decoded array (3 or 4).
                                If None, uses the channels defined in the file header.
        :return: Dictionary containing width, height, colorspace, channels, and data (bytes).
        :raises FormatError: the header is invalid or the chunk stream is short.
        """

        # --- Handle Slicing ---
        if byte_length is None:
            byte_length = len(file_data) - byte_offset

        # memoryview keeps large inputs from being copied
        data = memoryview(file_data)[byte_offset : byte_offset + byte_length]

        # --- Header Parsing ---
        header = QOIHeader.parse(data)

        if output_channels is None:
            output_channels = header.channels

        if output_channels not in (3, 4):
            raise ValueError(
                "QOI.decode: The number of channels for the output is invalid"
            )

        # --- Decoding Loop ---
        total_pixels = header.pixel_count
        result = bytearray(total_pixels * output_channels)
        # The end marker is never part of the chunk stream
        chunks_end = len(data)
        if QOIDecoder.has_end_marker(data):
            chunks_end = max(chunks_end - len(QOI_END_MARKER), QOI_HEADER_SIZE)
        context = DecodeContext(data, QOI_HEADER_SIZE, total_pixels, end=chunks_end)

        write_pos = 0
        for _, pixel, count in context.chunks():
            chunk = bytes(pixel[:output_channels]) * count
            result[write_pos : write_pos + len(chunk)] = chunk
            write_pos += len(chunk)

        logger.debug(
            "Decoded %d pixels from %d of %d bytes",
            context.emitted,
            context.pos,
            len(data),
        )

        return {
            "width": header.width,
            "height": header.height,
            "colorspace": header.colorspace,
            "channels": output_channels,
            "data": bytes(result),
        }

    @staticmethod
    def has_end_marker(file_data: bytes) -> bool:
        """Check whether the buffer ends with the 8-byte QOI end marker."""
        return bytes(file_data[-len(QOI_END_MARKER) :]) == QOI_END_MARKER
