"""Translate openpyxl cell styles into XlsxWriter format specifications.

Only explicit RGB and indexed colours survive the trip; theme colours depend on
the source workbook's theme part, which XlsxWriter cannot reference, and are
dropped (the destination falls back to Excel's defaults for them).
"""

from typing import Any

from openpyxl.cell.cell import Cell, MergedCell
from openpyxl.styles.colors import COLOR_INDEX, Color

from .conf import (
    DICT_ALIGN_HORIZONTAL,
    DICT_ALIGN_VERTICAL,
    DICT_BORDER_STYLE_INDEX,
    DICT_FILL_PATTERN_INDEX,
    DICT_FONT_SCRIPT_INDEX,
    DICT_UNDERLINE_INDEX,
)
from .spec import SpecCellFormat

_C_NUM_FORMAT_GENERAL = "General"


def convert_color(color: Color | None) -> str | None:
    """Return ``#RRGGBB`` for RGB/indexed colours, None otherwise."""
    if color is None:
        return None
    match color.type:
        case "rgb":
            c_argb = color.rgb
            if not isinstance(c_argb, str) or len(c_argb) < 6:
                return None
            return f"#{c_argb[-6:].upper()}"
        case "indexed":
            n_idx = color.indexed
            if not isinstance(n_idx, int) or not 0 <= n_idx < len(COLOR_INDEX):
                return None
            return f"#{COLOR_INDEX[n_idx][-6:].upper()}"
        case _:
            return None


def _convert_font(font: Any) -> dict[str, Any]:
    dict_props: dict[str, Any] = {}
    if font is None:
        return dict_props
    if font.name:
        dict_props["font_name"] = font.name
    if font.sz:
        n_size = float(font.sz)
        dict_props["font_size"] = int(n_size) if n_size.is_integer() else n_size
    if font.b:
        dict_props["bold"] = True
    if font.i:
        dict_props["italic"] = True
    if font.strike:
        dict_props["font_strikeout"] = True
    if (n_underline := DICT_UNDERLINE_INDEX.get(font.u or "")) is not None:
        dict_props["underline"] = n_underline
    if (n_script := DICT_FONT_SCRIPT_INDEX.get(font.vertAlign or "")) is not None:
        dict_props["font_script"] = n_script
    if (c_color := convert_color(font.color)) is not None:
        dict_props["font_color"] = c_color
    return dict_props


def _convert_fill(fill: Any) -> dict[str, Any]:
    dict_props: dict[str, Any] = {}
    c_pattern = getattr(fill, "fill_type", None)
    if not c_pattern or (n_pattern := DICT_FILL_PATTERN_INDEX.get(c_pattern)) is None:
        return dict_props

    dict_props["pattern"] = n_pattern
    c_fg = convert_color(fill.fgColor)
    c_bg = convert_color(fill.bgColor)
    if n_pattern == 1:
        # XlsxWriter writes a solid fill's colour from `bg_color`.
        if c_fg is not None:
            dict_props["bg_color"] = c_fg
        return dict_props
    if c_fg is not None:
        dict_props["fg_color"] = c_fg
    if c_bg is not None:
        dict_props["bg_color"] = c_bg
    return dict_props


def _convert_border(border: Any) -> dict[str, Any]:
    dict_props: dict[str, Any] = {}
    if border is None:
        return dict_props
    for _side_name in ("top", "bottom", "left", "right"):
        side = getattr(border, _side_name, None)
        if side is None or not side.style:
            continue
        if (n_style := DICT_BORDER_STYLE_INDEX.get(side.style)) is None:
            continue
        dict_props[_side_name] = n_style
        if (c_color := convert_color(side.color)) is not None:
            dict_props[f"{_side_name}_color"] = c_color
    return dict_props


def _convert_alignment(alignment: Any) -> dict[str, Any]:
    dict_props: dict[str, Any] = {}
    if alignment is None:
        return dict_props
    if (c_align := DICT_ALIGN_HORIZONTAL.get(alignment.horizontal or "")) is not None:
        dict_props["align"] = c_align
    if (c_valign := DICT_ALIGN_VERTICAL.get(alignment.vertical or "")) is not None:
        dict_props["valign"] = c_valign
    if alignment.wrap_text:
        dict_props["text_wrap"] = True
    if alignment.shrink_to_fit:
        dict_props["shrink"] = True
    if alignment.indent:
        dict_props["indent"] = int(alignment.indent)
    n_rotation = int(alignment.text_rotation or 0)
    if n_rotation == 255:
        dict_props["rotation"] = 270
    elif 90 < n_rotation <= 180:
        # OOXML stores downward angles as 91..180.
        dict_props["rotation"] = 90 - n_rotation
    elif n_rotation:
        dict_props["rotation"] = n_rotation
    return dict_props


def _convert_protection(protection: Any) -> dict[str, Any]:
    dict_props: dict[str, Any] = {}
    if protection is None:
        return dict_props
    if protection.locked is False:
        dict_props["locked"] = False
    if protection.hidden:
        dict_props["hidden"] = True
    return dict_props


def convert_cell_style(cell: Cell | MergedCell) -> SpecCellFormat:
    """Describe a source cell's formatting as a hashable ``SpecCellFormat``."""
    dict_props: dict[str, Any] = {}
    dict_props |= _convert_font(cell.font)
    dict_props |= _convert_fill(cell.fill)
    dict_props |= _convert_border(cell.border)
    dict_props |= _convert_alignment(cell.alignment)
    dict_props |= _convert_protection(cell.protection)

    c_num_format = cell.number_format
    if c_num_format and c_num_format != _C_NUM_FORMAT_GENERAL:
        dict_props["num_format"] = c_num_format

    return SpecCellFormat(**dict_props)
