"""
Turns raw form text into the records the placement engine expects.
"""
import math
from typing import Iterable, Sequence

from models.errors import ValidationError
from models.part import Component, LayoutState, Sheet


def parse_number(text, field: str, allow_zero: bool = False) -> float:
    """
    Parse one numeric form field.

    Empty, non-numeric and non-finite values are rejected, as are values
    below zero (or equal to zero unless ``allow_zero`` is set).
    """
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        text = (text or "").strip()
        if not text:
            raise ValidationError(f"{field} is required", field=field)
        if "," in text:
            whole, _, fraction = text.partition(",")
            # A comma is only a decimal separator: "2,5" but not "1,000" or "1,234.5".
            if "." in text or "," in fraction or not fraction.isdigit() or len(fraction) > 2:
                raise ValidationError(f"{field} must be a number, got {text!r}", field=field)
            text = f"{whole}.{fraction}"
        try:
            value = float(text)
        except ValueError:
            raise ValidationError(f"{field} must be a number, got {text!r}", field=field) from None
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number", field=field)
    if value < 0 or (value == 0 and not allow_zero):
        raise ValidationError(f"{field} must be greater than zero", field=field)
    return value


def collect_sheet(length, width, thickness, index: int) -> Sheet:
    label = f"Sheet {index + 1}"
    return Sheet(
        length=parse_number(length, f"{label} length"),
        width=parse_number(width, f"{label} width"),
        thickness=parse_number(thickness, f"{label} thickness", allow_zero=True)
    )


def collect_component(length, width, index: int) -> Component:
    label = f"Component {index + 1}"
    return Component(
        length=parse_number(length, f"{label} length"),
        width=parse_number(width, f"{label} width")
    )


def collect_tolerance(text) -> float:
    return parse_number(text, "Tolerance", allow_zero=True)


def collect_layout(sheet_rows: Iterable[Sequence], component_rows: Iterable[Sequence], tolerance_text) -> LayoutState:
    """
    Build a LayoutState from form rows.

    ``sheet_rows`` holds ``(length, width, thickness)`` text triples and
    ``component_rows`` holds ``(length, width)`` pairs, both in the order
    they appear on screen. The first invalid field raises ValidationError.
    """
    sheets = tuple(collect_sheet(*row, index=i) for i, row in enumerate(sheet_rows))
    components = tuple(collect_component(*row, index=i) for i, row in enumerate(component_rows))
    return LayoutState(sheets=sheets, components=components, tolerance=collect_tolerance(tolerance_text))
