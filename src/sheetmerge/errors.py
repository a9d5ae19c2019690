from pathlib import Path


class MergeError(Exception):
    """Base class for errors raised by a merge run."""


class DiscoveryError(MergeError):
    """The source tree could not be walked, or no file qualified."""

    def __init__(self, message: str, *, dir_source: Path | None = None):
        super().__init__(message)
        self.dir_source = dir_source


class SheetCreateError(MergeError):
    """The destination workbook rejected a new sheet name."""

    def __init__(self, sheet_name: str, reason: str):
        super().__init__(f"Cannot create sheet {sheet_name!r}: {reason}")
        self.sheet_name = sheet_name


class PersistError(MergeError):
    """The destination workbook could not be written."""

    def __init__(self, message: str, *, file_out: Path | None = None):
        super().__init__(message)
        self.file_out = file_out
