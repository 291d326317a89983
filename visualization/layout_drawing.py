"""
Drawing primitives and text summaries for a computed layout.

Nothing here touches tkinter; the visualizer paints what these return.
"""
from typing import Any, Dict, List, Optional, Sequence

from config import COLORS, LABEL_FONT, TOLERANCE_STIPPLE
from models.part import Component, PlacementResult, Sheet
from packing.engine import calculate_sheet_efficiency, find_overlaps


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def component_label(component: Component) -> str:
    return f"{_fmt(component.width)}mm x {_fmt(component.length)}mm"


def build_sheet_drawing(sheet: Sheet, sheet_index: int, components: Sequence[Component],
                        result: PlacementResult, scale: float = 1.0) -> List[Dict[str, Any]]:
    """
    Drawing primitives for one sheet, in paint order.

    The canvas is ``sheet.width`` wide and ``sheet.length`` tall. Each
    placement becomes a filled rectangle with a centred dimension label,
    and a translucent overlay marking the tolerance area goes on top.
    """
    sheet_w = sheet.width * scale
    sheet_h = sheet.length * scale
    items: List[Dict[str, Any]] = [{
        'kind': 'rect', 'coords': (0, 0, sheet_w, sheet_h),
        'fill': COLORS['SHEET'], 'outline': COLORS['OUTLINE']
    }]
    for placement in result.placements_on(sheet_index):
        component = components[placement.component_index]
        x = placement.x * scale
        y = placement.y * scale
        w = component.width * scale
        h = component.length * scale
        items.append({
            'kind': 'rect', 'coords': (x, y, x + w, y + h),
            'fill': COLORS['COMPONENT'], 'outline': COLORS['OUTLINE'],
            'component_index': placement.component_index
        })
        items.append({
            'kind': 'text', 'coords': (x + w / 2, y + h / 2),
            'text': component_label(component),
            'fill': COLORS['LABEL'], 'font': LABEL_FONT,
            'component_index': placement.component_index
        })
    items.append({
        'kind': 'rect', 'coords': (0, 0, sheet_w, sheet_h),
        'fill': COLORS['TOLERANCE'], 'outline': '', 'stipple': TOLERANCE_STIPPLE
    })
    return items


def unplaced_message(result: PlacementResult) -> Optional[str]:
    if result.is_complete:
        return None
    numbers = ", ".join(str(i + 1) for i in result.unplaced)
    return f"Not enough sheet space for all components. Not placed: {numbers}"


def describe_placements(result: PlacementResult, components: Sequence[Component]) -> List[str]:
    lines = []
    for placement in result.placements:
        component = components[placement.component_index]
        lines.append(
            f"Component {placement.component_index + 1}: "
            f"Length: {_fmt(component.length)} mm, Width: {_fmt(component.width)} mm, "
            f"Position: ({_fmt(placement.x)}, {_fmt(placement.y)}) on Sheet {placement.sheet_index + 1}"
        )
    message = unplaced_message(result)
    if message:
        lines.append(message)
    return lines


def sheet_status(sheet: Sheet, sheet_index: int, components: Sequence[Component],
                 result: PlacementResult) -> str:
    placements = result.placements_on(sheet_index)
    eff = calculate_sheet_efficiency(sheet, components, placements)
    on_sheet = {p.component_index for p in placements}
    overlaps = [pair for pair in find_overlaps(result, components) if pair[0] in on_sheet]
    overlap_status = ("WARNING: overlapping components " +
                      "; ".join(f"{a + 1} <-> {b + 1}" for a, b in overlaps)) if overlaps else "No overlaps"
    return (f"Sheet {sheet_index + 1}: {_fmt(sheet.width)} x {_fmt(sheet.length)} mm | "
            f"Parts: {eff['parts']} | "
            f"Usage: {eff['efficiency']:.1f}% | "
            f"Waste: {eff['waste_percent'] * 100:.1f}% | "
            f"{overlap_status}")
