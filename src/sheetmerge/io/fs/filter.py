"""File filters deciding which discovered files take part in a merge.

Every filter is a pure predicate over ``(path, stat)``. The built-in variants
are frozen dataclasses, so they can be compared, hashed and nested freely in a
:class:`CompositeFilter`::

    >>> from pathlib import Path
    >>> f = CompositeFilter(
    ...     filters=(ExtensionFilter((".xlsx",)), PrefixFilter("data")),
    ...     mode="and",
    ... )
    >>> f.should_include(Path("data_2024.xlsx"), None)
    True
"""

import os
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Protocol, runtime_checkable

from .spec import (
    TUP_EXCEL_EXTENSIONS,
    EnumFilterCombineMode,
    validate_filter_combine_mode,
)


@runtime_checkable
class FileFilter(Protocol):
    def should_include(self, path: Path, stat: os.stat_result | None) -> bool: ...


def _normalize_extension(ext: str) -> str:
    c_ext = ext.strip().lower()
    if c_ext and not c_ext.startswith("."):
        c_ext = f".{c_ext}"
    return c_ext


def is_spreadsheet_file(path: Path) -> bool:
    return path.suffix.lower() in TUP_EXCEL_EXTENSIONS


################################################################################
# #region Filters


@dataclass(frozen=True, slots=True)
class DefaultFilter:
    """Accept every file with a spreadsheet extension."""

    def should_include(self, path: Path, stat: os.stat_result | None) -> bool:
        return is_spreadsheet_file(path)


@dataclass(frozen=True, slots=True)
class ExtensionFilter:
    extensions: Sequence[str] = TUP_EXCEL_EXTENSIONS

    def should_include(self, path: Path, stat: os.stat_result | None) -> bool:
        c_ext = path.suffix.lower()
        return any(c_ext == _normalize_extension(_ext) for _ext in self.extensions)


@dataclass(frozen=True, slots=True)
class PrefixFilter:
    prefix: str

    def should_include(self, path: Path, stat: os.stat_result | None) -> bool:
        return is_spreadsheet_file(path) and path.name.startswith(self.prefix)


@dataclass(frozen=True, slots=True)
class PatternFilter:
    """Spreadsheet files whose base name matches a shell-style glob.

    Matching is case-sensitive. A pattern that cannot be compiled matches
    nothing.
    """

    pattern: str

    def should_include(self, path: Path, stat: os.stat_result | None) -> bool:
        if not is_spreadsheet_file(path):
            return False
        try:
            return fnmatchcase(path.name, self.pattern)
        except re.error:
            return False


@dataclass(frozen=True, slots=True)
class CompositeFilter:
    filters: Sequence[FileFilter] = field(default_factory=tuple)
    mode: EnumFilterCombineMode | str = EnumFilterCombineMode.AND

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))
        object.__setattr__(self, "mode", validate_filter_combine_mode(self.mode))

    def should_include(self, path: Path, stat: os.stat_result | None) -> bool:
        if not self.filters:
            return True
        if self.mode is EnumFilterCombineMode.AND:
            return all(_f.should_include(path, stat) for _f in self.filters)
        return any(_f.should_include(path, stat) for _f in self.filters)


# #endregion
################################################################################
