from collections.abc import Mapping
from types import MappingProxyType

N_LEN_EXCEL_SHEET_NAME_MAX = 31
N_NCOLS_WIDTH_COPY_MAX = 100
# Maximum digit width of the default font, in pixels.
N_PX_PER_CHAR_WIDTH = 7
TUP_EXCEL_ILLEGAL = ("*", ":", "?", "/", "\\", "[", "]")
C_SHEET_NAME_FALLBACK = "Sheet"

# Lookup tables translating openpyxl style attribute values into XlsxWriter
# format properties.

DICT_BORDER_STYLE_INDEX: Mapping[str, int] = MappingProxyType(
    {
        "thin": 1,
        "medium": 2,
        "dashed": 3,
        "dotted": 4,
        "thick": 5,
        "double": 6,
        "hair": 7,
        "mediumDashed": 8,
        "dashDot": 9,
        "mediumDashDot": 10,
        "dashDotDot": 11,
        "mediumDashDotDot": 12,
        "slantDashDot": 13,
    }
)

DICT_FILL_PATTERN_INDEX: Mapping[str, int] = MappingProxyType(
    {
        "solid": 1,
        "mediumGray": 2,
        "darkGray": 3,
        "lightGray": 4,
        "darkHorizontal": 5,
        "darkVertical": 6,
        "darkDown": 7,
        "darkUp": 8,
        "darkGrid": 9,
        "darkTrellis": 10,
        "lightHorizontal": 11,
        "lightVertical": 12,
        "lightDown": 13,
        "lightUp": 14,
        "lightGrid": 15,
        "lightTrellis": 16,
        "gray125": 17,
        "gray0625": 18,
    }
)

DICT_UNDERLINE_INDEX: Mapping[str, int] = MappingProxyType(
    {
        "single": 1,
        "double": 2,
        "singleAccounting": 33,
        "doubleAccounting": 34,
    }
)

DICT_FONT_SCRIPT_INDEX: Mapping[str, int] = MappingProxyType(
    {"superscript": 1, "subscript": 2}
)

# "general" is XlsxWriter's default and is left unset.
DICT_ALIGN_HORIZONTAL: Mapping[str, str] = MappingProxyType(
    {
        "left": "left",
        "center": "center",
        "right": "right",
        "fill": "fill",
        "justify": "justify",
        "centerContinuous": "center_across",
        "distributed": "distributed",
    }
)

DICT_ALIGN_VERTICAL: Mapping[str, str] = MappingProxyType(
    {
        "top": "top",
        "center": "vcenter",
        "bottom": "bottom",
        "justify": "vjustify",
        "distributed": "vdistributed",
    }
)
