"""Sheet naming: candidate names from file paths, and collision resolution.

A namer turns ``(path_file, path_base)`` into a *base name*. The orchestrator
then resolves every base name through one :class:`SheetNameRegistry` per run,
so the destination workbook never sees two sheets with the same name::

    >>> reg = SheetNameRegistry()
    >>> [uniquify_sheet_name("report", "Sheet1", reg) for _ in range(3)]
    ['report', 'report_1', 'report_2']
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from .conf import C_SHEET_NAME_FALLBACK, N_LEN_EXCEL_SHEET_NAME_MAX, TUP_EXCEL_ILLEGAL
from .spec import EnumSheetNamerStrategy

TypeNameFunc = Callable[[Path, Path], str]


################################################################################
# #region Namers


@runtime_checkable
class SheetNamer(Protocol):
    def get_sheet_name(self, path_file: Path, path_base: Path) -> str: ...


def _derive_relative_path(path_file: Path, path_base: Path) -> Path | None:
    try:
        return Path(path_file).relative_to(path_base)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class FirstLevelDirNamer:
    """Name after the first directory below the base; stem for top-level files."""

    def get_sheet_name(self, path_file: Path, path_base: Path) -> str:
        path_rel = _derive_relative_path(path_file, path_base)
        if path_rel is None or len(path_rel.parts) <= 1:
            return Path(path_file).stem
        return path_rel.parts[0]


@dataclass(frozen=True, slots=True)
class FileNameNamer:
    def get_sheet_name(self, path_file: Path, path_base: Path) -> str:
        return Path(path_file).stem


@dataclass(frozen=True, slots=True)
class FullPathNamer:
    joiner: str = "_"

    def get_sheet_name(self, path_file: Path, path_base: Path) -> str:
        path_rel = _derive_relative_path(path_file, path_base)
        if path_rel is None:
            return Path(path_file).stem
        l_parts = list(path_rel.parts)
        l_parts[-1] = Path(l_parts[-1]).stem
        return (self.joiner or "_").join(l_parts)


@dataclass(frozen=True, slots=True)
class CustomNamer:
    func: TypeNameFunc | None = None

    def get_sheet_name(self, path_file: Path, path_base: Path) -> str:
        if self.func is None:
            return Path(path_file).stem
        return self.func(Path(path_file), Path(path_base))


def create_sheet_namer(
    strategy: EnumSheetNamerStrategy | str, *, joiner: str = "_"
) -> SheetNamer:
    """Build a built-in namer from its strategy name.

    Raises:
        ValueError: If ``strategy`` is not a known strategy.
    """
    try:
        enum_strategy = EnumSheetNamerStrategy(strategy)
    except ValueError as e:
        raise ValueError(
            f"Invalid sheet namer strategy: `{strategy}`. "
            f"Expected one of: {[s.value for s in EnumSheetNamerStrategy]}"
        ) from e

    match enum_strategy:
        case EnumSheetNamerStrategy.FIRST_DIR:
            return FirstLevelDirNamer()
        case EnumSheetNamerStrategy.FILE_NAME:
            return FileNameNamer()
        case EnumSheetNamerStrategy.FULL_PATH:
            return FullPathNamer(joiner=joiner)


# #endregion
################################################################################
# #region Uniquifier


@dataclass(slots=True)
class SheetNameRegistry:
    """Per-run table of base-name counters and issued sheet names.

    Issued names are compared case-insensitively, as Excel does.
    """

    counts: dict[str, int] = field(default_factory=lambda: {})
    _issued: set[str] = field(default_factory=lambda: set())

    def is_issued(self, name: str) -> bool:
        return name.casefold() in self._issued

    def mark_issued(self, name: str) -> None:
        self._issued.add(name.casefold())

    def __len__(self) -> int:
        return len(self._issued)


def sanitize_sheet_name(name: str, *, replace_to: str = "_") -> str:
    for ch in TUP_EXCEL_ILLEGAL:
        name = name.replace(ch, replace_to)
    name = name.strip().strip("'").strip()
    # Excel reserves "History" for its change-tracking sheet.
    if name.casefold() == "history":
        name = f"{name}{replace_to}"
    return name


def _truncate_sheet_name(name: str, n_len_max: int) -> str:
    # Excel rejects a sheet name ending with an apostrophe.
    return name[:n_len_max].rstrip("'") or C_SHEET_NAME_FALLBACK[:n_len_max]


def uniquify_sheet_name(
    base_name: str,
    fallback_name: str,
    registry: SheetNameRegistry,
    *,
    n_len_max: int = N_LEN_EXCEL_SHEET_NAME_MAX,
) -> str:
    """Resolve a base name into a sheet name not yet issued in this run.

    The first use of a base name returns it unchanged (truncated to
    ``n_len_max``). The n-th reuse returns ``base[:k] + f"_{n}"``, where ``k``
    leaves room for the suffix but is never below 1. If a candidate was
    already issued (e.g. a file literally named ``report_1``), the counter
    keeps growing until a free name is found.

    Issued names are compared case-insensitively: Excel (and XlsxWriter)
    treat ``Data`` and ``data`` as the same sheet, so ``data`` after ``Data``
    becomes ``data_1``. Apostrophes left at the end of a truncated name are
    dropped, since Excel rejects them there.

    Args:
        base_name: Namer output; empty means "use ``fallback_name``".
        fallback_name: Usually the source sheet's own name.
        registry: The run's name table, updated in place.
        n_len_max: Maximum sheet name length.

    Returns:
        A sheet name of at most ``n_len_max`` characters.
    """
    c_name = base_name or fallback_name or C_SHEET_NAME_FALLBACK
    c_name = _truncate_sheet_name(c_name, n_len_max)

    if c_name not in registry.counts and not registry.is_issued(c_name):
        registry.counts[c_name] = 0
        registry.mark_issued(c_name)
        return c_name

    n_count = registry.counts.get(c_name, 0)
    while True:
        n_count += 1
        c_suffix = f"_{n_count}"
        n_len_base = max(1, n_len_max - len(c_suffix))
        c_candidate = f"{_truncate_sheet_name(c_name, n_len_base)}{c_suffix}"
        if not registry.is_issued(c_candidate):
            break

    registry.counts[c_name] = n_count
    registry.mark_issued(c_candidate)
    return c_candidate


# #endregion
################################################################################