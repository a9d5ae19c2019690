from dataclasses import dataclass, field
from pathlib import Path

from .spec import SpecSheetCopyResult


@dataclass(frozen=True, slots=True)
class SpecMergeError:
    path: Path
    exception: Exception


@dataclass(frozen=True, slots=True)
class SpecMergedSheet:
    path_file_src: Path
    result: SpecSheetCopyResult


@dataclass(frozen=True, slots=True)
class ReportMerge:
    """
    Summary of a merge run.

    Attributes:
        file_out:
            Destination workbook path.
        cnt_discovered:
            Number of files accepted by the filter.
        cnt_files_merged:
            Number of files whose sheets were all copied.
        sheets:
            One entry per copied sheet, in destination order.
        errors:
            Per-file failures; each failed file was skipped.
    """

    file_out: Path
    cnt_discovered: int
    cnt_files_merged: int = 0
    sheets: tuple[SpecMergedSheet, ...] = ()
    errors: tuple[SpecMergeError, ...] = ()

    @property
    def cnt_sheets(self) -> int:
        return len(self.sheets)

    @property
    def calculate_error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict[str, int]:
        return {
            "cnt_discovered": self.cnt_discovered,
            "cnt_files_merged": self.cnt_files_merged,
            "cnt_sheets": self.cnt_sheets,
            "cnt_errors": self.calculate_error_count,
        }

    def format(self, *, prefix: str = "[MERGE]") -> str:
        s = self.to_dict()
        return (
            f"{prefix} merged {s['cnt_files_merged']}/{s['cnt_discovered']} file(s) "
            f"into {self.file_out} sheets={s['cnt_sheets']} errors={s['cnt_errors']}"
        )

    def __str__(self) -> str:
        return self.format()


@dataclass(slots=True)
class ReportMergeBuilder:
    """Mutable accumulator for merge statistics."""

    file_out: Path
    cnt_discovered: int = 0
    cnt_files_merged: int = 0
    sheets: list[SpecMergedSheet] = field(default_factory=lambda: [])
    errors: list[SpecMergeError] = field(default_factory=lambda: [])

    def add_file_merged(self) -> None:
        self.cnt_files_merged += 1

    def add_sheet(self, path_file_src: Path, result: SpecSheetCopyResult) -> None:
        self.sheets.append(SpecMergedSheet(path_file_src, result))

    def add_error(self, path: Path, error: Exception) -> None:
        self.errors.append(SpecMergeError(path, error))

    def build(self) -> ReportMerge:
        return ReportMerge(
            file_out=self.file_out,
            cnt_discovered=self.cnt_discovered,
            cnt_files_merged=self.cnt_files_merged,
            sheets=tuple(self.sheets),
            errors=tuple(self.errors),
        )
