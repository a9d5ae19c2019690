from dataclasses import dataclass

from rich.console import Console
from rich.style import Style
from rich.table import Table

from sheetmerge.io.xlsx.report import ReportMerge


@dataclass(frozen=True, slots=True)
class SpecCliTheme:
    h1: str = "#7C3AED"
    h2: str = "#00FFFF"
    warn: str = "#F59E0B"


class CliHeadings:
    def __init__(
        self, *, console: Console | None = None, theme: SpecCliTheme | None = None
    ):
        self.console = console or Console()
        self.theme = theme or SpecCliTheme()

    def h1(self, text: str) -> None:
        self.console.rule(
            f"[bold]{text}[/bold]",
            style=Style(color=self.theme.h1, bold=True),
            characters="=",
        )

    def h2(self, text: str) -> None:
        self.console.rule(text, style=Style(color=self.theme.h2), characters="─")

    def print_report(self, report: ReportMerge) -> None:
        """Render the copied sheets and the skipped files of a merge run."""
        if report.sheets:
            table = Table(title="Merged sheets", title_justify="left")
            table.add_column("Source file")
            table.add_column("Source sheet")
            table.add_column("Output sheet")
            table.add_column("Cells", justify="right")
            for _sheet in report.sheets:
                table.add_row(
                    str(_sheet.path_file_src),
                    _sheet.result.sheet_name_src,
                    _sheet.result.sheet_name_dst,
                    str(_sheet.result.cnt_cells),
                )
            self.console.print(table)

        for _error in report.errors:
            self.console.print(
                f"skipped {_error.path}: {_error.exception}",
                style=Style(color=self.theme.warn),
                markup=False,
            )
