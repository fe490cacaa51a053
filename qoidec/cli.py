import argparse
import logging
import sys

from .decoder import QOIDecoder
from .errors import FormatError
from .header import QOI_HEADER_SIZE, QOIHeader
from .utils import read_qoi_bytes, save_image

OUTPUT_PNG = "output.png"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qoidec", description="Decode a QOI image and save it as PNG"
    )
    parser.add_argument("input", type=str, help="Path to the .qoi image")
    parser.add_argument(
        "-o", "--output", type=str, default=OUTPUT_PNG, help="Output image path"
    )
    parser.add_argument(
        "--channels",
        type=int,
        choices=(3, 4),
        default=None,
        help="Channels in the output image (defaults to the file's)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def decode_file(path: str, output_path: str, channels: int = None) -> dict:
    content = read_qoi_bytes(path)
    header = QOIHeader.parse(content)
    print(
        f"name: {path}, magic: {header.magic!r}, width: {header.width}, "
        f"height: {header.height}, channels: {header.channels}, "
        f"colorspace: {header.colorspace}, data: {len(content) - QOI_HEADER_SIZE}"
    )

    decoded = QOIDecoder.decode(content, output_channels=channels)
    save_image(decoded, output_path)
    print(f"Saved image as {output_path}")
    return decoded


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        decode_file(args.input, args.output, args.channels)
    except (FormatError, OSError) as e:
        print(f"Error processing {args.input}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
