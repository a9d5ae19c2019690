from __future__ import annotations

import sys
from pathlib import Path

import openpyxl
import pytest

# Ensure src-layout imports work when running tests from repo checkout.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from sheetmerge.cli.app import build_file_filter, main  # noqa: E402
from sheetmerge.cli.parser import build_parser  # noqa: E402
from sheetmerge.io.fs import (  # noqa: E402
    CompositeFilter,
    DefaultFilter,
    EnumFilterCombineMode,
    PrefixFilter,
)


def _write_workbook(path: Path, value: object = 1) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    wb = openpyxl.Workbook()
    wb.active["A1"] = value
    wb.save(path)
    return path


def test_parser_defaults() -> None:
    ns = build_parser().parse_args(["./data", "out.xlsx"])

    assert ns.source_dir == "./data"
    assert ns.output_file == "out.xlsx"
    assert ns.namer == "first-dir"
    assert ns.joiner == "_"
    assert ns.ext is None
    assert ns.combine == "and"
    assert ns.log_level == "INFO"


def test_missing_arguments_exit_with_usage_status(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 1
    assert "usage:" in capsys.readouterr().out.lower()


def test_missing_source_directory_returns_one(tmp_path: Path, capsys) -> None:
    n_exit = main([str(tmp_path / "missing"), str(tmp_path / "out.xlsx")])

    assert n_exit == 1
    assert "Source directory does not exist" in capsys.readouterr().out
    assert not (tmp_path / "out.xlsx").exists()


def test_successful_merge_returns_zero(tmp_path: Path, capsys) -> None:
    dir_src = tmp_path / "data"
    _write_workbook(dir_src / "2024" / "a.xlsx", "first")
    _write_workbook(dir_src / "2024" / "b.xlsx", "second")
    path_out = tmp_path / "out" / "merged.xlsx"

    n_exit = main([str(dir_src), str(path_out)])

    assert n_exit == 0
    assert openpyxl.load_workbook(path_out).sheetnames == ["2024", "2024_1"]
    c_out = capsys.readouterr().out
    assert "Copied: Sheet -> 2024_1" in c_out
    assert "Merge complete." in c_out


def test_cli_filters_and_namer(tmp_path: Path) -> None:
    dir_src = tmp_path / "data"
    _write_workbook(dir_src / "q1" / "report_2024.xlsx")
    _write_workbook(dir_src / "q1" / "report_2023.xlsx")
    path_out = tmp_path / "merged.xlsx"

    n_exit = main(
        [
            str(dir_src),
            str(path_out),
            "--namer",
            "full-path",
            "--joiner",
            "-",
            "--prefix",
            "report",
            "--pattern",
            "*_2024*",
        ]
    )

    assert n_exit == 0
    assert openpyxl.load_workbook(path_out).sheetnames == ["q1-report_2024"]


def test_no_qualifying_workbook_returns_one(tmp_path: Path, capsys) -> None:
    dir_src = tmp_path / "data"
    dir_src.mkdir()
    (dir_src / "notes.txt").write_text("hello")

    n_exit = main([str(dir_src), str(tmp_path / "merged.xlsx")])

    assert n_exit == 1
    assert "No qualifying workbook" in capsys.readouterr().out
    assert not (tmp_path / "merged.xlsx").exists()


def test_build_file_filter_shapes() -> None:
    assert build_file_filter(
        extensions=None, prefix=None, pattern=None, combine="and"
    ) == DefaultFilter()
    assert build_file_filter(
        extensions=None, prefix="data", pattern=None, combine="and"
    ) == PrefixFilter("data")

    f = build_file_filter(extensions=[".xlsx"], prefix="data", pattern=None, combine="or")
    assert isinstance(f, CompositeFilter)
    assert f.mode is EnumFilterCombineMode.OR
    assert len(f.filters) == 2
