import datetime
import io
import math
import os
from decimal import Decimal
from pathlib import Path
from types import TracebackType
from typing import Any

import xlsxwriter
import xlsxwriter.exceptions
import xlsxwriter.format
import xlsxwriter.worksheet
from loguru import logger

from sheetmerge.errors import PersistError, SheetCreateError

from .spec import SpecCellFormat


class XlsxMergeWriter:
    """
    Destination workbook of a merge run, built with ``xlsxwriter``.

    The workbook is assembled in memory and only written to ``file_out`` by
    :meth:`close`, so a failed run never leaves a partial output file behind.
    Formats are owned by this workbook: every ``SpecCellFormat`` is
    materialized once via :meth:`create_format_cached` and reused for all
    cells that share it::

        with XlsxMergeWriter("merged.xlsx") as writer:
            ws = writer.add_sheet("report")
            fmt = writer.create_format_cached(SpecCellFormat(bold=True))
            writer.write_cell(ws, 0, 0, "total", fmt)

    Leaving the ``with`` block normally saves the workbook; leaving it with an
    exception discards it.

    Parameters
    ----------
    file_out:
        Path of the ``.xlsx`` file to write on :meth:`close`.
    """

    def __init__(self, file_out: os.PathLike[str] | str):
        self.file_out = Path(file_out)
        self._buffer = io.BytesIO()
        self.wb = xlsxwriter.Workbook(
            self._buffer,
            {
                "in_memory": True,
                "nan_inf_to_errors": False,
                "remove_timezone": True,
            },
        )
        self._format_cache: dict[SpecCellFormat, xlsxwriter.format.Format] = {}
        self._sheet_names: list[str] = []
        self._is_closed = False

    def __enter__(self) -> "XlsxMergeWriter":
        return self

    def __exit__(
        self, exc_type: type | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()

    @property
    def sheet_names(self) -> tuple[str, ...]:
        return tuple(self._sheet_names)

    @property
    def cnt_formats(self) -> int:
        return len(self._format_cache)

    def add_sheet(self, sheet_name: str) -> xlsxwriter.worksheet.Worksheet:
        """Create a worksheet and make it the active one.

        Raises:
            SheetCreateError: If the name is invalid or already taken.
        """
        try:
            ws = self.wb.add_worksheet(sheet_name)
        except xlsxwriter.exceptions.XlsxInputError as e:
            raise SheetCreateError(sheet_name, str(e)) from e
        ws.activate()
        self._sheet_names.append(sheet_name)
        return ws

    def create_format_cached(
        self, spec: SpecCellFormat
    ) -> xlsxwriter.format.Format | None:
        if spec.is_empty:
            return None
        fmt = self._format_cache.get(spec)
        if fmt is None:
            fmt = self.wb.add_format(spec.to_xlsxwriter())
            self._format_cache[spec] = fmt
        return fmt

    @staticmethod
    def write_cell(
        ws: xlsxwriter.worksheet.Worksheet,
        row_idx: int,
        col_idx: int,
        value: Any,
        cell_format: xlsxwriter.format.Format | None = None,
    ) -> bool:
        """Write one value with the writer matching its Python type.

        Strings are always written as strings (a leading ``=`` is not turned
        into a formula). Row/column indices are 0-based.

        Returns:
            True if something was written.
        """
        match value:
            case None:
                if cell_format is None:
                    return False
                ws.write_blank(row_idx, col_idx, None, cell_format)
            case bool():
                ws.write_boolean(row_idx, col_idx, value, cell_format)
            case int() | float() | Decimal():
                n_value = float(value)
                if math.isfinite(n_value):
                    ws.write_number(row_idx, col_idx, n_value, cell_format)
                else:
                    ws.write_string(row_idx, col_idx, str(value), cell_format)
            case str():
                if value == "":
                    if cell_format is None:
                        return False
                    ws.write_blank(row_idx, col_idx, None, cell_format)
                else:
                    ws.write_string(row_idx, col_idx, value, cell_format)
            case (
                datetime.datetime()
                | datetime.date()
                | datetime.time()
                | datetime.timedelta()
            ):
                ws.write_datetime(row_idx, col_idx, value, cell_format)
            case _:
                ws.write_string(row_idx, col_idx, str(value), cell_format)
        return True

    def close(self) -> None:
        """Finalize the workbook and write it to ``file_out``.

        Raises:
            PersistError: If no sheet was added, or the workbook cannot be
                assembled or written.
        """
        if self._is_closed:
            return
        if not self._sheet_names:
            self.abort()
            raise PersistError(
                f"No sheets were merged; nothing written to {self.file_out}",
                file_out=self.file_out,
            )

        self._is_closed = True
        try:
            self.wb.close()
        except xlsxwriter.exceptions.XlsxWriterException as e:
            raise PersistError(
                f"Failed to assemble workbook for {self.file_out}: {e}",
                file_out=self.file_out,
            ) from e

        try:
            self.file_out.write_bytes(self._buffer.getvalue())
        except OSError as e:
            raise PersistError(
                f"Failed to write output file {self.file_out}: {e}",
                file_out=self.file_out,
            ) from e
        finally:
            self._buffer = io.BytesIO()

    def abort(self) -> None:
        """Discard the workbook without touching ``file_out``."""
        if self._is_closed:
            return
        self._is_closed = True
        try:
            # xlsxwriter insists on being closed; the bytes go to the buffer only.
            self.wb.close()
        except xlsxwriter.exceptions.XlsxWriterException as e:
            logger.debug(f"Ignored error while discarding workbook: {e}")
        self._buffer = io.BytesIO()
