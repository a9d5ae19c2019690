"""Format-preserving copy of one openpyxl worksheet into the destination."""

from collections.abc import MutableMapping, Sequence

import xlsxwriter.exceptions
import xlsxwriter.format
import xlsxwriter.worksheet
from loguru import logger
from openpyxl.cell.cell import Cell, MergedCell
from openpyxl.utils import column_index_from_string
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .conf import N_NCOLS_WIDTH_COPY_MAX, N_PX_PER_CHAR_WIDTH
from .spec import SpecMergeRegion, SpecSheetCopyResult
from .style import convert_cell_style
from .writer import XlsxMergeWriter

# (source workbook identity, source style id) -> destination format
TypeStyleCache = MutableMapping[tuple[str, int], xlsxwriter.format.Format | None]


def resolve_cell_format(
    writer: XlsxMergeWriter,
    cell: Cell | MergedCell,
    style_cache: TypeStyleCache,
    *,
    key_workbook: str,
) -> xlsxwriter.format.Format | None:
    """Map a source cell's style onto a format owned by the destination.

    Each source style is converted once per run; a failure leaves the cell
    unstyled.
    """
    if not cell.has_style:
        return None
    try:
        tup_key = (key_workbook, cell.style_id)
        if tup_key not in style_cache:
            style_cache[tup_key] = writer.create_format_cached(convert_cell_style(cell))
        return style_cache[tup_key]
    except Exception as e:
        logger.debug(f"Unresolvable style at {cell.coordinate}: {e}")
        return None


def collect_merge_regions(ws_src: Worksheet) -> list[SpecMergeRegion]:
    return [
        SpecMergeRegion(
            row_start=_rng.min_row,
            col_start=_rng.min_col,
            row_end=_rng.max_row,
            col_end=_rng.max_col,
        )
        for _rng in ws_src.merged_cells.ranges
    ]


def _apply_merge_regions(
    writer: XlsxMergeWriter,
    ws_dst: xlsxwriter.worksheet.Worksheet,
    regions: Sequence[SpecMergeRegion],
    l_rows: Sequence[Sequence[Cell | MergedCell]],
    style_cache: TypeStyleCache,
    *,
    key_workbook: str,
) -> int:
    n_merged = 0
    for _region in regions:
        if _region.is_single_cell:
            continue
        # The anchor value is written later with the other cells; the range
        # itself only needs the anchor's format.
        cfg_fmt_anchor = None
        if _region.row_start <= len(l_rows) and _region.col_start <= len(
            l_rows[_region.row_start - 1]
        ):
            cfg_fmt_anchor = resolve_cell_format(
                writer,
                l_rows[_region.row_start - 1][_region.col_start - 1],
                style_cache,
                key_workbook=key_workbook,
            )
        try:
            ws_dst.merge_range(
                _region.row_start - 1,
                _region.col_start - 1,
                _region.row_end - 1,
                _region.col_end - 1,
                "",
                cfg_fmt_anchor,
            )
        except xlsxwriter.exceptions.OverlappingRange as e:
            logger.debug(f"Skipped overlapping merge region: {e}")
            continue
        n_merged += 1
    return n_merged


def _apply_column_widths(
    ws_src: Worksheet,
    ws_dst: xlsxwriter.worksheet.Worksheet,
    *,
    n_cols_width_max: int,
) -> None:
    for _letter, _dim in ws_src.column_dimensions.items():
        if not _dim.width or _dim.width <= 0:
            continue
        n_col_first = _dim.min or column_index_from_string(_letter)
        if n_col_first > n_cols_width_max:
            continue
        n_col_last = min(_dim.max or n_col_first, n_cols_width_max)
        # Stored widths already include the cell padding that `set_column`
        # would add again; pixels round-trip exactly.
        ws_dst.set_column_pixels(
            n_col_first - 1,
            n_col_last - 1,
            round(_dim.width * N_PX_PER_CHAR_WIDTH),
            None,
            {"hidden": True} if _dim.hidden else None,
        )


def _apply_row_layout(
    ws_src: Worksheet,
    ws_dst: xlsxwriter.worksheet.Worksheet,
    *,
    n_rows: int,
) -> None:
    for _row_idx in range(1, n_rows + 1):
        # `.get` avoids materializing default dimensions on the source sheet
        dim = ws_src.row_dimensions.get(_row_idx)
        if dim is None:
            continue
        n_height = dim.height if dim.height and dim.height > 0 else None
        if n_height is None and not dim.hidden:
            continue
        ws_dst.set_row(
            _row_idx - 1, n_height, None, {"hidden": True} if dim.hidden else None
        )


def copy_sheet(
    writer: XlsxMergeWriter,
    wb_src: Workbook,
    sheet_name_src: str,
    sheet_name_dst: str,
    style_cache: TypeStyleCache,
    *,
    key_workbook: str,
    n_cols_width_max: int = N_NCOLS_WIDTH_COPY_MAX,
    if_copy_freeze_panes: bool = True,
) -> SpecSheetCopyResult:
    """Copy one source sheet into a new destination sheet.

    Cell values, cell styles, merge regions, column widths (first
    ``n_cols_width_max`` columns), row heights, hidden rows and the freeze
    pane are carried over. Styles are converted once per
    ``(key_workbook, style id)`` and memoized in ``style_cache``, which the
    caller owns for the whole run.

    Args:
        writer: Destination workbook.
        wb_src: Source workbook, opened by the caller.
        sheet_name_src: Sheet to copy.
        sheet_name_dst: Name of the sheet to create; must be free.
        style_cache: Per-run style memo.
        key_workbook: Identity of ``wb_src`` within the run.
        n_cols_width_max: Column width copy cap.
        if_copy_freeze_panes: Carry the freeze pane anchor.

    Returns:
        SpecSheetCopyResult: Counts of rows, non-empty cells and merges copied.

    Raises:
        SheetCreateError: If the destination sheet cannot be created.
        KeyError: If ``sheet_name_src`` does not exist.
    """
    ws_src = wb_src[sheet_name_src]
    ws_dst = writer.add_sheet(sheet_name_dst)

    n_rows = ws_src.max_row
    n_cols = ws_src.max_column
    l_rows = list(
        ws_src.iter_rows(min_row=1, min_col=1, max_row=n_rows, max_col=n_cols)
    )

    n_merges = _apply_merge_regions(
        writer,
        ws_dst,
        collect_merge_regions(ws_src),
        l_rows,
        style_cache,
        key_workbook=key_workbook,
    )

    n_cells = 0
    for _row in l_rows:
        for _cell in _row:
            cfg_fmt_cell_ = resolve_cell_format(
                writer, _cell, style_cache, key_workbook=key_workbook
            )
            v_cell_ = None if isinstance(_cell, MergedCell) else _cell.value
            try:
                writer.write_cell(
                    ws_dst, _cell.row - 1, _cell.column - 1, v_cell_, cfg_fmt_cell_
                )
            except (TypeError, ValueError) as e:
                logger.debug(f"Skipped cell {_cell.coordinate} of {sheet_name_src}: {e}")
                continue
            if v_cell_ is not None and v_cell_ != "":
                n_cells += 1

    _apply_column_widths(ws_src, ws_dst, n_cols_width_max=n_cols_width_max)
    _apply_row_layout(ws_src, ws_dst, n_rows=len(l_rows))

    if if_copy_freeze_panes and ws_src.freeze_panes:
        ws_dst.freeze_panes(ws_src.freeze_panes)

    return SpecSheetCopyResult(
        sheet_name_src=sheet_name_src,
        sheet_name_dst=sheet_name_dst,
        cnt_rows=len(l_rows),
        cnt_cells=n_cells,
        cnt_merges=n_merges,
    )
