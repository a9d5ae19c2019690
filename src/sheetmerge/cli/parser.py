"""Argument parser of the ``sheetmerge`` command."""

import argparse
import sys
from typing import NoReturn

from rich_argparse import ArgumentDefaultsRichHelpFormatter, RawTextRichHelpFormatter

from sheetmerge.io.fs.spec import EnumFilterCombineMode
from sheetmerge.io.xlsx.spec import EnumSheetNamerStrategy

N_EXIT_USAGE = 1

_C_EPILOG = """examples:
  sheetmerge ./data ./output/merged.xlsx
  sheetmerge ./data merged.xlsx --namer full-path --joiner -
  sheetmerge ./data merged.xlsx --prefix report --pattern "*_2024*"
"""


class SmartFormatter(ArgumentDefaultsRichHelpFormatter, RawTextRichHelpFormatter):
    """
    Keep manual newlines/indentation AND show (default: ...) in help.
    """

    pass


class MergeArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stdout)
        self.exit(N_EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser(prog: str = "sheetmerge") -> MergeArgumentParser:
    parser = MergeArgumentParser(
        prog=prog,
        description=(
            "Merge every sheet of every workbook under SOURCE_DIR into one "
            "workbook,\none output sheet per source sheet."
        ),
        epilog=_C_EPILOG,
        formatter_class=SmartFormatter,
    )
    parser.add_argument("source_dir", help="Directory searched recursively.")
    parser.add_argument("output_file", help="Merged .xlsx file to write.")

    group_naming = parser.add_argument_group("Sheet naming")
    group_naming.add_argument(
        "--namer",
        choices=[s.value for s in EnumSheetNamerStrategy],
        default=EnumSheetNamerStrategy.FIRST_DIR.value,
        help=(
            "first-dir: first directory below SOURCE_DIR (file stem at top level)\n"
            "file-name: file stem\n"
            "full-path: relative path without extension, joined by --joiner"
        ),
    )
    group_naming.add_argument(
        "--joiner", default="_", help="Separator used by --namer full-path."
    )

    group_filter = parser.add_argument_group("File selection")
    group_filter.add_argument(
        "--ext",
        action="append",
        default=None,
        metavar="EXT",
        help="Allowed extension, repeatable (e.g. --ext .xlsx --ext .xlsm).",
    )
    group_filter.add_argument(
        "--prefix", default=None, help="Only files whose name starts with PREFIX."
    )
    group_filter.add_argument(
        "--pattern", default=None, help="Only files whose name matches a glob."
    )
    group_filter.add_argument(
        "--combine",
        choices=[s.value for s in EnumFilterCombineMode],
        default=EnumFilterCombineMode.AND.value,
        help="How --ext/--prefix/--pattern combine.",
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level.",
    )
    return parser
