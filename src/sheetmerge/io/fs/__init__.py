from .discover import find_workbook_files
from .filter import (
    CompositeFilter,
    DefaultFilter,
    ExtensionFilter,
    FileFilter,
    PatternFilter,
    PrefixFilter,
)
from .spec import TUP_EXCEL_EXTENSIONS, EnumFilterCombineMode

__all__ = [
    "find_workbook_files",
    "FileFilter",
    "DefaultFilter",
    "ExtensionFilter",
    "PrefixFilter",
    "PatternFilter",
    "CompositeFilter",
    "EnumFilterCombineMode",
    "TUP_EXCEL_EXTENSIONS",
]
