import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from sheetmerge.errors import DiscoveryError, PersistError
from sheetmerge.io.fs import (
    CompositeFilter,
    DefaultFilter,
    ExtensionFilter,
    FileFilter,
    PatternFilter,
    PrefixFilter,
)
from sheetmerge.io.xlsx import SheetMerger, create_sheet_namer

from .console import CliHeadings
from .parser import N_EXIT_USAGE, build_parser

_C_LOG_FORMAT = "<level>{level: <8}</level> | {message}"


def build_file_filter(
    *,
    extensions: Sequence[str] | None,
    prefix: str | None,
    pattern: str | None,
    combine: str,
) -> FileFilter:
    l_filters: list[FileFilter] = []
    if extensions:
        l_filters.append(ExtensionFilter(tuple(extensions)))
    if prefix:
        l_filters.append(PrefixFilter(prefix))
    if pattern:
        l_filters.append(PatternFilter(pattern))

    if not l_filters:
        return DefaultFilter()
    if len(l_filters) == 1:
        return l_filters[0]
    return CompositeFilter(filters=tuple(l_filters), mode=combine)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)

    logger.remove()
    n_handler = logger.add(sys.stdout, level=ns.log_level, format=_C_LOG_FORMAT)
    try:
        path_dir_src = Path(ns.source_dir)
        path_file_out = Path(ns.output_file)

        if not path_dir_src.is_dir():
            parser.print_usage(sys.stdout)
            logger.error(f"Source directory does not exist: {path_dir_src}")
            return N_EXIT_USAGE

        try:
            path_file_out.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            parser.print_usage(sys.stdout)
            logger.error(f"Cannot create output directory {path_file_out.parent}: {e}")
            return N_EXIT_USAGE

        headings = CliHeadings()
        headings.h1(f"Merging {path_dir_src} -> {path_file_out}")

        merger = SheetMerger(
            path_dir_src,
            path_file_out,
            file_filter=build_file_filter(
                extensions=ns.ext,
                prefix=ns.prefix,
                pattern=ns.pattern,
                combine=ns.combine,
            ),
            sheet_namer=create_sheet_namer(ns.namer, joiner=ns.joiner),
        )
        try:
            report = merger.merge()
        except (DiscoveryError, PersistError) as e:
            logger.error(str(e))
            return 1

        headings.h2("Summary")
        headings.print_report(report)
        logger.info("Merge complete.")
        return 0
    finally:
        logger.remove(n_handler)
