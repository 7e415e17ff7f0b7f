import argparse
import os
import sys

from rich.console import Console

from bencoding import DEFAULT_MAX_DEPTH, DUPLICATE_POLICIES, REJECT, Decoder
from errors import BencodeError, UnsupportedTag
from formatting import format_values
from torrent import Torrent, inspect
from ui import BencodeUI, ui
from utils import logger, set_verbose

USAGE = "Usage: bencode <command> <args>"
COMMANDS = ("decode", "info")

# Upper bound on how much of a metainfo file is read
DEFAULT_MAX_SIZE = 10 * 1024 * 1024


def build_parser():
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    common.add_argument("--duplicate-keys", choices=DUPLICATE_POLICIES, default=REJECT,
                        help="what to do with a key repeated inside one dictionary")
    common.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help="maximum list/dictionary nesting")
    common.add_argument("--strict", action="store_true",
                        help="reject non-canonical integers and string lengths")

    parser = argparse.ArgumentParser(prog="bencode", description="Decode bencoded data and inspect torrent files.")
    commands = parser.add_subparsers(dest="command", required=True)

    decode = commands.add_parser("decode", parents=[common], help="print a bencoded value as JSON")
    decode.add_argument("value", help="bencoded text, e.g. l5:grapei935ee")

    info = commands.add_parser("info", parents=[common], help="print tracker, length and info hash")
    info.add_argument("path", help="path to .torrent")
    info.add_argument("--max-size", type=int, default=DEFAULT_MAX_SIZE,
                      help="read at most this many bytes of the file")
    info.add_argument("--details", action="store_true", help="also show name, pieces, files and magnet link")
    return parser


def _decoder_options(args):
    return {
        "duplicate_keys": args.duplicate_keys,
        "max_depth": args.max_depth,
        "strict": args.strict,
    }


def run_decode(args, out):
    values, consumed = Decoder(os.fsencode(args.value), **_decoder_options(args)).decode()
    logger.debug(f"Decoded {len(values)} value(s) from {consumed} bytes")
    format_values(values, out)
    out.write("\n")


def run_info(args, out):
    with open(args.path, 'rb') as f:
        data = f.read(args.max_size)
    logger.debug(f"Read {len(data)} bytes from {args.path}")

    values, _ = Decoder(data, **_decoder_options(args)).decode()
    report = inspect(values)
    out.write(f"Tracker URL: {report.tracker_url}\n")
    out.write(f"Length: {report.length}\n")
    out.write(f"Info Hash: {report.info_hash_hex}")

    if args.details:
        out.write("\n")
        details = BencodeUI(Console(file=out))
        details.show_torrent(Torrent.from_bytes(data, **_decoder_options(args)))


def main(argv=None, out=None):
    if argv is None:
        argv = sys.argv[1:]
    if out is None:
        out = sys.stdout

    if len(argv) < 2 or argv[0] not in COMMANDS:
        out.write(USAGE + "\n")
        return 1

    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        # --help exits 0, keep that
        if e.code == 0:
            raise
        out.write(USAGE + "\n")
        return 1

    set_verbose(args.verbose)
    logger.debug(f"Running command: {args.command}")

    try:
        if args.command == "decode":
            run_decode(args, out)
        else:
            run_info(args, out)
    except UnsupportedTag as e:
        logger.debug(str(e))
        out.write("Not Supported data type.\n")
        return 1
    except (BencodeError, OSError) as e:
        ui.print_log(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
