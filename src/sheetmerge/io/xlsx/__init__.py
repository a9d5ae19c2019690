from .copier import copy_sheet
from .merger import SheetMerger
from .naming import (
    CustomNamer,
    FileNameNamer,
    FirstLevelDirNamer,
    FullPathNamer,
    SheetNameRegistry,
    SheetNamer,
    create_sheet_namer,
    sanitize_sheet_name,
    uniquify_sheet_name,
)
from .report import ReportMerge
from .spec import (
    EnumSheetNamerStrategy,
    SpecCellFormat,
    SpecMergeOptions,
    SpecSheetCopyResult,
)
from .writer import XlsxMergeWriter

__all__ = [
    "SheetMerger",
    "XlsxMergeWriter",
    "copy_sheet",
    "SheetNamer",
    "FirstLevelDirNamer",
    "FileNameNamer",
    "FullPathNamer",
    "CustomNamer",
    "create_sheet_namer",
    "SheetNameRegistry",
    "sanitize_sheet_name",
    "uniquify_sheet_name",
    "ReportMerge",
    "EnumSheetNamerStrategy",
    "SpecCellFormat",
    "SpecMergeOptions",
    "SpecSheetCopyResult",
]
