from argparse import ArgumentParser
from typing import List, Optional
import logging
import sys

from codecbox import CodecError, convert
from codecbox.server import DEFAULT_HOST, DEFAULT_PORT, run


METHODS = ("ascii85", "base85", "z85", "bencode", "protobuf")


def create_parser() -> ArgumentParser:
    parser = ArgumentParser()
    parser.add_argument("method", nargs="?", choices=METHODS)
    parser.add_argument("input", nargs="?", help="text to convert, read from stdin when omitted")
    parser.add_argument("-d", "--decode", action="store_true", default=False)
    parser.add_argument("--variant", choices=("ascii85", "z85"), default="ascii85")
    parser.add_argument("--serve", action="store_true", default=False)
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("-v", "--verbose", action="store_true", default=False)
    parser.add_argument("--debug", action="store_true", default=False)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_intermixed_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.serve:
        run(args.host, args.port)
        return 0

    if not args.method:
        parser.error("a method is required unless --serve is given")

    text = args.input if args.input is not None else sys.stdin.read().rstrip("\n")
    config = {"subMode": "decode" if args.decode else "encode", "variant": args.variant}

    try:
        print(convert(text, args.method, config))
    except CodecError as e:
        logging.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
