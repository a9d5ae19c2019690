import os
from contextlib import closing
from pathlib import Path

import openpyxl
from loguru import logger

from sheetmerge.io.fs import DefaultFilter, FileFilter, find_workbook_files

from .copier import TypeStyleCache, copy_sheet
from .naming import (
    FirstLevelDirNamer,
    SheetNameRegistry,
    SheetNamer,
    sanitize_sheet_name,
    uniquify_sheet_name,
)
from .report import ReportMerge, ReportMergeBuilder
from .spec import SpecMergeOptions
from .writer import XlsxMergeWriter


class SheetMerger:
    """
    Merge every sheet of every workbook under a directory into one workbook.

    Each source sheet becomes one destination sheet. Its name comes from
    ``sheet_namer`` (by default the first directory below ``dir_source``),
    made unique across the run. A file that cannot be opened or copied is
    logged, recorded in the report and skipped; the remaining files are still
    merged::

        report = SheetMerger("./data", "./out/merged.xlsx").merge()
        print(report)

    Parameters
    ----------
    dir_source:
        Directory searched recursively for workbooks.
    file_out:
        Destination ``.xlsx`` path. It is never treated as an input.
    file_filter:
        Decides which files qualify; ``DefaultFilter`` if None.
    sheet_namer:
        Derives the base sheet name per file; ``FirstLevelDirNamer`` if None.
    options:
        Run-level knobs, see :class:`SpecMergeOptions`.
    """

    def __init__(
        self,
        dir_source: os.PathLike[str] | str,
        file_out: os.PathLike[str] | str,
        *,
        file_filter: FileFilter | None = None,
        sheet_namer: SheetNamer | None = None,
        options: SpecMergeOptions | None = None,
    ):
        self.dir_source = Path(dir_source)
        self.file_out = Path(file_out)
        self.file_filter = DefaultFilter() if file_filter is None else file_filter
        self.sheet_namer = FirstLevelDirNamer() if sheet_namer is None else sheet_namer
        self.options = SpecMergeOptions() if options is None else options

    def merge(self) -> ReportMerge:
        """Run the merge and write ``file_out``.

        Raises:
            DiscoveryError: If the source tree cannot be walked or holds no
                qualifying workbook. Nothing is written.
            PersistError: If no sheet could be merged or the output cannot be
                written.
        """
        l_files = find_workbook_files(
            self.dir_source, self.file_filter, paths_exclude=(self.file_out,)
        )
        logger.info(f"Found {len(l_files)} workbook(s) under {self.dir_source}")

        builder_report = ReportMergeBuilder(
            file_out=self.file_out, cnt_discovered=len(l_files)
        )
        registry_names = SheetNameRegistry()
        dict_style_cache: TypeStyleCache = {}

        with XlsxMergeWriter(self.file_out) as writer:
            for _path_file in l_files:
                try:
                    self._merge_file(
                        writer,
                        _path_file,
                        registry_names=registry_names,
                        style_cache=dict_style_cache,
                        builder_report=builder_report,
                    )
                except Exception as e:
                    logger.warning(f"Failed to merge {_path_file}, skipped: {e}")
                    builder_report.add_error(_path_file, e)
                    continue
                builder_report.add_file_merged()

        report = builder_report.build()
        logger.success(report.format())
        return report

    def _merge_file(
        self,
        writer: XlsxMergeWriter,
        path_file: Path,
        *,
        registry_names: SheetNameRegistry,
        style_cache: TypeStyleCache,
        builder_report: ReportMergeBuilder,
    ) -> None:
        c_key_workbook = str(path_file.resolve())
        with closing(
            openpyxl.load_workbook(path_file, data_only=self.options.if_data_only)
        ) as wb_src:
            for _ws in wb_src.worksheets:
                c_name_base = self.sheet_namer.get_sheet_name(
                    path_file, self.dir_source
                )
                if self.options.if_sanitize_sheet_names:
                    c_name_base = sanitize_sheet_name(c_name_base)
                c_name_dst = uniquify_sheet_name(c_name_base, _ws.title, registry_names)

                result = copy_sheet(
                    writer,
                    wb_src,
                    _ws.title,
                    c_name_dst,
                    style_cache,
                    key_workbook=c_key_workbook,
                    n_cols_width_max=self.options.n_cols_width_max,
                    if_copy_freeze_panes=self.options.if_copy_freeze_panes,
                )
                builder_report.add_sheet(path_file, result)
                logger.info(
                    f"  - Copied: {_ws.title} -> {c_name_dst} (from {path_file})"
                )
