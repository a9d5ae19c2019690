# Facts/plans exchanged between the merge orchestrator and the sheet copier.

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from .conf import N_NCOLS_WIDTH_COPY_MAX


################################################################################
# #region CellFormatSpecification
@dataclass(frozen=True, slots=True)
class SpecCellFormat:
    # Field names match XlsxWriter format property keys.
    font_name: str | None = None
    font_size: float | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: int | None = None
    font_strikeout: bool | None = None
    font_script: int | None = None
    font_color: str | None = None

    align: str | None = None
    valign: str | None = None
    text_wrap: bool | None = None
    rotation: int | None = None
    indent: int | None = None
    shrink: bool | None = None

    top: int | None = None
    bottom: int | None = None
    left: int | None = None
    right: int | None = None
    top_color: str | None = None
    bottom_color: str | None = None
    left_color: str | None = None
    right_color: str | None = None

    num_format: str | None = None
    pattern: int | None = None
    bg_color: str | None = None
    fg_color: str | None = None

    locked: bool | None = None
    hidden: bool | None = None

    def with_(self, **kwargs: Any) -> "SpecCellFormat":
        return replace(self, **kwargs)

    @property
    def is_empty(self) -> bool:
        return not self.to_xlsxwriter()

    def to_xlsxwriter(self) -> dict[str, Any]:
        return {
            k: getattr(self, k)
            for k in self.__dataclass_fields__
            if getattr(self, k) is not None
        }


# #endregion
################################################################################
# #region SheetSpecification


class EnumSheetNamerStrategy(StrEnum):
    FIRST_DIR = "first-dir"
    FILE_NAME = "file-name"
    FULL_PATH = "full-path"


@dataclass(frozen=True, slots=True)
class SpecMergeRegion:
    # 1-based, inclusive corners
    row_start: int
    col_start: int
    row_end: int
    col_end: int

    @property
    def is_single_cell(self) -> bool:
        return self.row_start == self.row_end and self.col_start == self.col_end


@dataclass(frozen=True, slots=True)
class SpecSheetCopyResult:
    sheet_name_src: str
    sheet_name_dst: str
    cnt_rows: int = 0
    cnt_cells: int = 0
    cnt_merges: int = 0


# #endregion
################################################################################
# #region MergeOptions


@dataclass(frozen=True, slots=True)
class SpecMergeOptions:
    """Run-level knobs of a merge.

    Attributes:
        n_cols_width_max: Column widths are copied for columns
            ``1..n_cols_width_max`` only.
        if_sanitize_sheet_names: Replace characters Excel forbids in sheet
            names before uniquifying.
        if_copy_freeze_panes: Carry the source freeze pane anchor over.
        if_data_only: Read cached formula results instead of formula text.
    """

    n_cols_width_max: int = N_NCOLS_WIDTH_COPY_MAX
    if_sanitize_sheet_names: bool = True
    if_copy_freeze_panes: bool = True
    if_data_only: bool = True


# #endregion
################################################################################
