import numpy as np
import pytest

import qoi as OfficialQOI
from qoidec import QOIDecoder, to_array


def make_image(height, width, channels, seed=0):
    """Smooth gradients, flat areas and noise so every chunk type shows up."""
    rng = np.random.default_rng(seed)
    y, x = np.mgrid[0:height, 0:width]
    image = np.empty((height, width, channels), dtype=np.uint8)
    image[..., 0] = (x * 3) % 256
    image[..., 1] = (y * 2 + x) % 256
    image[..., 2] = (x * y) % 256
    if channels == 4:
        image[..., 3] = 255
        image[height // 2 :, :, 3] = (x[height // 2 :] * 7) % 256

    image[: height // 4] = image[0, 0].copy()
    noise = rng.integers(0, 256, size=(height // 4, width, channels), dtype=np.uint8)
    image[-(height // 4) :] = noise
    palette = rng.integers(0, 256, size=(5, channels), dtype=np.uint8)
    picks = rng.integers(0, 5, size=(height // 4, width))
    image[height // 4 : height // 2] = palette[picks]
    return np.ascontiguousarray(image)


@pytest.mark.parametrize("channels", [3, 4])
def test_qoi(channels):
    """Verify that our QOI implementation is correct by round-tripping."""
    pixel_data = make_image(48, 80, channels)

    encoded = OfficialQOI.encode(pixel_data)
    our_decoded = QOIDecoder.decode(encoded)

    assert our_decoded["width"] == 80
    assert our_decoded["height"] == 48
    assert our_decoded["channels"] == channels
    assert our_decoded["data"] == pixel_data.tobytes(), "Decoded data mismatch!"
    assert np.array_equal(OfficialQOI.decode(encoded), to_array(our_decoded))


def test_long_runs():
    pixel_data = np.full((3, 100, 4), 42, dtype=np.uint8)
    encoded = OfficialQOI.encode(pixel_data)
    assert QOIDecoder.decode(encoded)["data"] == pixel_data.tobytes()


def test_single_pixel_images():
    for channels in (3, 4):
        pixel_data = np.array([[[10, 20, 30, 255][:channels]]], dtype=np.uint8)
        encoded = OfficialQOI.encode(pixel_data)
        assert QOIDecoder.decode(encoded)["data"] == pixel_data.tobytes()
