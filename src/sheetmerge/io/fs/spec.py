from enum import StrEnum

TUP_EXCEL_EXTENSIONS = (".xlsx", ".xlsm", ".xltx", ".xltm")


class EnumFilterCombineMode(StrEnum):
    AND = "and"
    OR = "or"


def validate_filter_combine_mode(
    value: EnumFilterCombineMode | str,
) -> EnumFilterCombineMode:
    """Validate and normalize a filter combination mode.

    Args:
        value: Enum value or its string representation.

    Returns:
        Normalized EnumFilterCombineMode.

    Raises:
        ValueError: If ``value`` is invalid.
    """
    if isinstance(value, EnumFilterCombineMode):
        return value
    try:
        return EnumFilterCombineMode(str(value).lower())
    except ValueError as e:
        raise ValueError(
            f"Invalid filter combine mode: `{value}`. "
            f"Expected one of: {[s.value for s in EnumFilterCombineMode]}"
        ) from e
