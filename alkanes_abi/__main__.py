import argparse
import logging
import os
import sys

from .config import CONFIG_FILE, load_config
from .errors import AbiError
from .run import build_abis, emit, extract_file, find_contract_files


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser():
    ap = _ArgumentParser(
        prog="alkanes-abi",
        description="Extract the opcode ABI of an Alkanes contract from its Rust source.",
    )
    ap.add_argument("contract_file", metavar="contract-file", help="Rust contract file or a directory of them")
    ap.add_argument("-o", "--output", help="Write the ABI JSON here instead of stdout (file argument only)")
    ap.add_argument("--out-dir", help="Output directory when extracting a directory")
    ap.add_argument("--config", default=CONFIG_FILE, help=f"Project config file (default: {CONFIG_FILE})")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Log progress to stderr (-vv for debug)")
    return ap


def _configure_logging(verbosity):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(stream=sys.stderr, level=level, format="%(levelname)s %(name)s: %(message)s")


def _build_directory(source_dir, out_dir):
    files = find_contract_files([source_dir])
    if not files:
        print(f"Error: No contract files found in '{source_dir}'", file=sys.stderr)
        return 1
    build_abis(files, out_dir)
    return 0


def main(argv=None):
    ap = _build_parser()
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    is_dir = os.path.isdir(args.contract_file)
    if is_dir and args.output:
        ap.error("-o/--output applies to a single contract file; use --out-dir for a directory")

    try:
        if is_dir:
            settings = load_config(args.config)
            return _build_directory(args.contract_file, args.out_dir or settings.output_dir)

        abi = extract_file(args.contract_file)
        emit(abi.to_json(), args.output)
    except AbiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
