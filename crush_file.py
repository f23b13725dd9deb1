"""Crush a raw byte stream read from a file or stdin.

    head -c 2M /dev/urandom | python crush_file.py
    python crush_file.py random.bin --workers 4
"""
import argparse
import logging
import sys

from streamcrush.core.errors import CrushError
from streamcrush.services.crusher import crush, stream_bytes_required
from streamcrush.services.source import ByteStreamSource


def read_input(path: str, needed: int) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read(needed)
    with open(path, "rb") as f:
        return f.read(needed)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Rate a stream of big-endian 64-bit values.")
    parser.add_argument("path", nargs="?", default="-", help="input file, '-' for stdin")
    parser.add_argument("--workers", type=int, default=1, help="evaluate transforms in parallel")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    needed = stream_bytes_required()
    try:
        data = read_input(args.path, needed)
        result = crush(ByteStreamSource(data), workers=args.workers)
    except (CrushError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        for evaluation in result["evaluations"]:
            print(f"{evaluation['name']:.<30} {evaluation['total']}")
    print(f"score: {result['total']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
