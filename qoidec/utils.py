import logging

import numpy as np
from PIL import Image

from .decoder import QOIDecoder

logger = logging.getLogger(__name__)


def read_qoi_bytes(filepath: str) -> bytes:
    """Read a .qoi file from disk, warning when the end marker is missing."""
    with open(filepath, "rb") as f:
        content = f.read()

    if not QOIDecoder.has_end_marker(content):
        logger.warning("%s does not end with the QOI end marker", filepath)

    return content


def read_qoi(filepath: str, output_channels: int = None) -> dict:
    """Read a .qoi file from disk and decode it."""
    return QOIDecoder.decode(
        read_qoi_bytes(filepath), output_channels=output_channels
    )


def to_array(decoded: dict) -> np.ndarray:
    """View a decoded image as a (height, width, channels) uint8 array."""
    return np.frombuffer(decoded["data"], dtype=np.uint8).reshape(
        decoded["height"], decoded["width"], decoded["channels"]
    )


def save_image(decoded: dict, filepath: str) -> None:
    """Write a decoded image in whatever format the extension names."""
    mode = "RGBA" if decoded["channels"] == 4 else "RGB"

    img = Image.frombytes(
        mode, (decoded["width"], decoded["height"]), bytes(decoded["data"])
    )
    img.save(filepath)
    logger.debug("Saved %s image %dx%d to %s", mode, *img.size, filepath)


def qoi_to_png(qoi_path: str, png_path: str) -> dict:
    decoded = read_qoi(qoi_path)
    save_image(decoded, png_path)
    return decoded
