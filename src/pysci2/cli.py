"""
pysci2's command line interface utilities.
"""

import argparse
import logging
import os
import sys

import pysci2
import pysci2.logging
from pysci2.hit import build_hit


def pysci2_cli():
    """pysci2's command line interface.

    Defines the command line interface (CLI) of the package, which exposes some
    of the most used functions to the console.  This function is added to the
    ``entry_points.console_scripts`` list and defines the ``pysci2`` executable
    (see ``setuptools``' documentation). To learn more about the CLI, have a
    look at the help section:

    .. code-block:: console

      $ pysci2 --help
      $ pysci2 build-hit --help  # help section for a specific sub-command
    """

    parser = argparse.ArgumentParser(
        prog="pysci2", description="pysci2's command-line interface"
    )

    # global options
    parser.add_argument(
        "--version", action="store_true", help="""Print pysci2 version and exit"""
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="""Increase the program verbosity""",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="""Increase the program verbosity to maximum""",
    )

    subparsers = parser.add_subparsers()

    add_build_hit_parser(subparsers)

    if len(sys.argv) < 2:
        parser.print_usage(sys.stderr)
        sys.exit(1)

    args = parser.parse_args()

    if args.verbose:
        pysci2.logging.setup(logging.DEBUG)
    elif args.debug:
        pysci2.logging.setup(logging.DEBUG, logging.root)
    else:
        pysci2.logging.setup()

    if args.version:
        print(pysci2.__version__)  # noqa: T201
        sys.exit()

    if not hasattr(args, "func"):
        parser.print_usage(sys.stderr)
        sys.exit(1)

    args.func(args)


def add_build_hit_parser(subparsers):
    """Configure :func:`.hit.build_hit.build_hit` command line interface"""

    parser_t2h = subparsers.add_parser(
        "build-hit",
        description="""Process Sci2 tcal LH5 files and produce hit files using
                       a JSON/YAML parameter file""",
    )
    parser_t2h.add_argument(
        "tcal_lh5_file",
        nargs="+",
        help="""Input tcal LH5 file. Can be a single file or a list of them""",
    )
    parser_t2h.add_argument(
        "--config",
        "-c",
        required=True,
        help="""JSON/YAML file holding the position calibration parameters""",
    )
    parser_t2h.add_argument(
        "--in-table",
        default="sci2/tcal",
        help="""Name of the tcal table in the input files. Default is
                sci2/tcal""",
    )
    parser_t2h.add_argument(
        "--out-table",
        default="sci2/hit",
        help="""Name of the hit table in the output files. Default is
                sci2/hit""",
    )
    parser_t2h.add_argument(
        "--output",
        "-o",
        default=None,
        help="""Name of output file, if only one is supplied. By default,
                output to <input-filename>_hit.lh5""",
    )
    parser_t2h.add_argument(
        "--max-rows",
        "-n",
        default=None,
        type=int,
        help="""Number of events to process. By default do the whole file""",
    )
    parser_t2h.add_argument(
        "--chunk",
        "-k",
        default=3200,
        type=int,
        help="""Number of events to read from disk at a time. Default is
                3200""",
    )

    group = parser_t2h.add_mutually_exclusive_group()
    group.add_argument(
        "--overwrite",
        "-w",
        action="store_const",
        const="of",
        dest="writemode",
        default="w",
        help="""Overwrite file if it already exists. Default option""",
    )
    group.add_argument(
        "--append",
        "-a",
        action="store_const",
        const="a",
        dest="writemode",
        help="""Append values to existing file""",
    )

    parser_t2h.set_defaults(func=build_hit_cli)


def build_hit_cli(args):
    """Passes command line arguments to :func:`.hit.build_hit.build_hit`."""

    if len(args.tcal_lh5_file) > 1 and args.output is not None:
        raise NotImplementedError("not possible to set multiple output file names yet")

    out_files = []
    if len(args.tcal_lh5_file) == 1 and args.output is not None:
        out_files.append(args.output)
    else:
        for file in args.tcal_lh5_file:
            basename = os.path.splitext(os.path.basename(file))[0]
            basename = basename.removesuffix("_tcal")
            out_files.append(f"{basename}_hit.lh5")

    for infile, outfile in zip(args.tcal_lh5_file, out_files):
        build_hit(
            infile,
            outfile=outfile,
            hit_config=args.config,
            in_table=args.in_table,
            out_table=args.out_table,
            n_max=args.max_rows if args.max_rows is not None else float("inf"),
            wo_mode=args.writemode,
            buffer_len=args.chunk,
        )
