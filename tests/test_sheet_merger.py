from __future__ import annotations

import sys
from pathlib import Path

import openpyxl
import pytest
from openpyxl.styles import Font

# Ensure src-layout imports work when running tests from repo checkout.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from sheetmerge.errors import DiscoveryError, PersistError  # noqa: E402
from sheetmerge.io.fs import PrefixFilter  # noqa: E402
from sheetmerge.io.xlsx import (  # noqa: E402
    FileNameNamer,
    FullPathNamer,
    SheetMerger,
    SpecMergeOptions,
)


def _write_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for _title, _rows in sheets.items():
        ws = wb.create_sheet(_title)
        for _row in _rows:
            ws.append(_row)
    wb.save(path)
    return path


def _read_values(ws) -> dict[str, object]:
    return {
        _cell.coordinate: _cell.value
        for _row in ws.iter_rows()
        for _cell in _row
        if _cell.value is not None
    }


def test_each_file_becomes_one_sheet_named_by_stem(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    _write_workbook(dir_src / "alpha.xlsx", {"Sheet1": [["a", 1]]})
    _write_workbook(dir_src / "beta.xlsx", {"Sheet1": [["b", 2]]})
    path_out = tmp_path / "merged.xlsx"

    report = SheetMerger(dir_src, path_out, sheet_namer=FileNameNamer()).merge()

    wb = openpyxl.load_workbook(path_out)
    assert wb.sheetnames == ["alpha", "beta"]
    assert wb["alpha"]["A1"].value == "a"
    assert wb["beta"]["B1"].value == 2
    assert report.cnt_discovered == 2
    assert report.cnt_files_merged == 2
    assert report.cnt_sheets == 2
    assert report.errors == ()


def test_every_non_empty_cell_survives(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    l_rows = [
        ["id", "name", "score", None],
        [1, "ann", 9.5, True],
        [2, None, 7.25, False],
        [None, "eve", None, "note"],
    ]
    path_src = _write_workbook(dir_src / "scores.xlsx", {"Sheet1": l_rows})
    path_out = tmp_path / "merged.xlsx"

    report = SheetMerger(dir_src, path_out).merge()

    dict_src = _read_values(openpyxl.load_workbook(path_src)["Sheet1"])
    dict_out = _read_values(openpyxl.load_workbook(path_out)["scores"])
    assert dict_out == dict_src
    assert report.sheets[0].result.cnt_cells == len(dict_src)


def test_first_dir_names_collide_into_suffixes(tmp_path: Path) -> None:
    dir_src = tmp_path / "data"
    _write_workbook(dir_src / "top.xlsx", {"Sheet1": [[0]]})
    _write_workbook(dir_src / "2024" / "a.xlsx", {"Sheet1": [[1]]})
    _write_workbook(dir_src / "2024" / "b.xlsx", {"Data": [[2]], "Notes": [[3]]})
    path_out = tmp_path / "merged.xlsx"

    report = SheetMerger(dir_src, path_out).merge()

    wb = openpyxl.load_workbook(path_out)
    assert wb.sheetnames == ["top", "2024", "2024_1", "2024_2"]
    assert wb["2024_2"]["A1"].value == 3
    assert [_s.result.sheet_name_src for _s in report.sheets] == [
        "Sheet1",
        "Sheet1",
        "Data",
        "Notes",
    ]


def test_full_path_names_are_sanitized(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    _write_workbook(dir_src / "q1" / "r[1].xlsx", {"Sheet1": [[1]]})
    path_out = tmp_path / "merged.xlsx"

    SheetMerger(dir_src, path_out, sheet_namer=FullPathNamer(joiner="-")).merge()

    assert openpyxl.load_workbook(path_out).sheetnames == ["q1-r_1_"]


def test_styles_stay_bound_to_their_source_workbook(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    for _name, _font in (("a", Font(bold=True)), ("b", Font(italic=True))):
        wb = openpyxl.Workbook()
        wb.active["A1"] = _name
        wb.active["A1"].font = _font
        dir_src.mkdir(exist_ok=True)
        wb.save(dir_src / f"{_name}.xlsx")
    path_out = tmp_path / "merged.xlsx"

    SheetMerger(dir_src, path_out).merge()

    wb_out = openpyxl.load_workbook(path_out)
    assert wb_out["a"]["A1"].font.b
    assert not wb_out["a"]["A1"].font.i
    assert wb_out["b"]["A1"].font.i
    assert not wb_out["b"]["A1"].font.b


def test_broken_file_is_skipped_and_reported(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    _write_workbook(dir_src / "good.xlsx", {"Sheet1": [["ok"]]})
    (dir_src / "bad.xlsx").write_bytes(b"not a workbook")
    path_out = tmp_path / "merged.xlsx"

    report = SheetMerger(dir_src, path_out).merge()

    assert openpyxl.load_workbook(path_out).sheetnames == ["good"]
    assert report.cnt_discovered == 2
    assert report.cnt_files_merged == 1
    assert [_e.path.name for _e in report.errors] == ["bad.xlsx"]
    assert "errors=1" in str(report)


def test_no_qualifying_file_writes_nothing(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    dir_src.mkdir()
    (dir_src / "notes.txt").write_text("hello")
    path_out = tmp_path / "merged.xlsx"

    with pytest.raises(DiscoveryError):
        SheetMerger(dir_src, path_out).merge()

    assert not path_out.exists()


def test_only_broken_files_writes_nothing(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    dir_src.mkdir()
    (dir_src / "bad.xlsx").write_bytes(b"not a workbook")
    path_out = tmp_path / "merged.xlsx"

    with pytest.raises(PersistError):
        SheetMerger(dir_src, path_out).merge()

    assert not path_out.exists()


def test_output_inside_source_tree_is_not_an_input(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    _write_workbook(dir_src / "a.xlsx", {"Sheet1": [[1]]})
    path_out = _write_workbook(dir_src / "merged.xlsx", {"old": [["stale"]]})

    report = SheetMerger(dir_src, path_out).merge()

    assert report.cnt_discovered == 1
    assert openpyxl.load_workbook(path_out).sheetnames == ["a"]


def test_filter_and_options_are_applied(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    _write_workbook(dir_src / "data_1.xlsx", {"Sheet1": [[1]]})
    _write_workbook(dir_src / "other.xlsx", {"Sheet1": [[2]]})
    path_out = tmp_path / "merged.xlsx"

    report = SheetMerger(
        dir_src,
        path_out,
        file_filter=PrefixFilter("data"),
        options=SpecMergeOptions(if_sanitize_sheet_names=False),
    ).merge()

    assert report.cnt_discovered == 1
    assert openpyxl.load_workbook(path_out).sheetnames == ["data_1"]


def test_long_name_cut_before_an_apostrophe_is_still_merged(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    _write_workbook(dir_src / ("a" * 30 + "'b.xlsx"), {"Sheet1": [[1]]})
    path_out = tmp_path / "merged.xlsx"

    report = SheetMerger(dir_src, path_out, sheet_namer=FileNameNamer()).merge()

    assert report.errors == ()
    assert openpyxl.load_workbook(path_out).sheetnames == ["a" * 30]


def test_column_widths_round_trip_exactly(tmp_path: Path) -> None:
    dir_src = tmp_path / "src"
    dir_src.mkdir()
    wb = openpyxl.Workbook()
    wb.active["A1"] = "x"
    wb.active.column_dimensions["B"].width = 20.7109375
    wb.active.column_dimensions["D"].width = 9.140625
    wb.save(dir_src / "widths.xlsx")
    path_out = tmp_path / "merged.xlsx"

    SheetMerger(dir_src, path_out).merge()

    ws_out = openpyxl.load_workbook(path_out)["widths"]
    assert ws_out.column_dimensions["B"].width == 20.7109375
    assert ws_out.column_dimensions["D"].width == 9.140625
