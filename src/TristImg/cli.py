# -*- coding: utf-8 -*-
"""
TristImg.cli
============

Command line of TristImg.

Display the data files which make up a collection::

    tristimg debug datasets /data/run.nxs --data-file-padding 6

Read datasets from explicit data files instead::

    tristimg debug datasets /data/run.nxs \\
        --files /data/run_000001.h5 /data/run_000002.h5 \\
        --keys event_id event_time_offset
"""
import argparse
import logging
import sys

from . import __version__
from .collection import Collection
from .config import LOG_LEVELS, load_settings
from .datasets import read_datasets_many
from .dtypes import TRISTAN_DTYPE_MAP as DTYPE_MAP
from .errors import TristImgError
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def render_tree(node):
    """
    Render a TreeNode as indented text.

    >>> from TristImg.collection import TreeNode
    >>> print(render_tree(TreeNode("a", (TreeNode("b"), TreeNode("c")))))
    a
    ├─ b
    └─ c
    """
    lines = [node.label]

    def _walk(children, indent):
        for i, child in enumerate(children):
            last = i == len(children) - 1
            lines.append(f"{indent}{'└─ ' if last else '├─ '}{child.label}")
            _walk(child.children, indent + ("   " if last else "│  "))

    _walk(node.children, "")
    return "\n".join(lines)


def _padding(value):
    padding = int(value)
    if padding < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {padding}")
    return padding


def build_parser():
    parser = argparse.ArgumentParser(
        prog="tristimg",
        description="Tristimg inspects Tristan event mode data "
                    "collections")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=None,
        help="The minimum log level which should be produced "
             "(env LOG_LEVEL, default INFO)")
    parser.add_argument(
        "--config", type=str, default=None,
        help="TOML settings file (env TRISTIMG_CONFIG)")

    commands = parser.add_subparsers(dest="command", required=True)

    debug = commands.add_parser(
        "debug",
        help="Run one of the debugging tools, producing intermediate "
             "information")
    debug_commands = debug.add_subparsers(dest="debug_command",
                                          required=True)

    datasets = debug_commands.add_parser(
        "datasets",
        help="Display information about the datasets which make up the "
             "data collection")
    datasets.add_argument(
        "nexus_path",
        help="The path to the NeXus file which describes the data "
             "collection")
    datasets.add_argument(
        "--data-file-padding", type=_padding, default=None,
        help="The width to which the count field in data file names should "
             "be padded (env DATA_FILE_PADDING, default 6)")
    datasets.add_argument(
        "--files", nargs="+", default=None, metavar="PATH",
        help="Read datasets from these data files instead of resolving the "
             "collection")
    datasets.add_argument(
        "--keys", nargs="+", default=None, metavar="KEY",
        help="Dataset names to read, requires --files "
             "(default: all datasets)")
    datasets.add_argument(
        "--dtype", choices=sorted(DTYPE_MAP), default=None,
        help="Element type to decode datasets as, requires --files "
             "(default: stored type)")
    datasets.set_defaults(func=debug_datasets)

    return parser


def debug_datasets(args, settings):
    """Run ``tristimg debug datasets``. Returns the exit code."""
    if args.files:
        return _print_file_datasets(args.files, args.keys, args.dtype)

    padding = args.data_file_padding
    if padding is None:
        padding = settings.data_file_padding

    try:
        collection = Collection.from_nexus(
            args.nexus_path, padding, settings.extension)
    except TristImgError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    with collection:
        print(render_tree(collection.as_tree()))
    return 0


def _print_file_datasets(paths, keys, dtype):
    results = read_datasets_many(paths, keys, dtype=dtype,
                                 progress=sys.stderr.isatty())
    failed = 0
    for res in results:
        if not res.ok:
            failed += 1
            print(f"[ERROR] {res.path}: {res.error}", file=sys.stderr)
            continue
        print(res.path)
        for key, arr in zip(res.keys, res.arrays):
            print(f"  {key}: shape={arr.shape}, dtype={arr.dtype}")

    if failed:
        logger.warning(f"{failed} of {len(results)} files failed")
        return 1
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.func is debug_datasets and not args.files:
        if args.keys is not None or args.dtype is not None:
            parser.error("--keys and --dtype require --files")

    try:
        settings = load_settings(args.config)
    except TristImgError as e:
        parser.error(str(e))

    setup_logging(args.log_level or settings.log_level, settings.log_file)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
