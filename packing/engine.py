"""
Placement engine for the sheet layout planner.

Shelf packing in input order: components fill a row left to right, a
component that does not fit the row opens a new row below the tallest
component of the current one, and a component that does not fit below
moves on to the next sheet. Nothing is rotated or reordered, so the same
input always produces the same layout.
"""
import logging
from typing import Dict, List, Sequence, Tuple

from models.errors import ConfigurationError
from models.part import Component, Placement, PlacementResult, Sheet

log = logging.getLogger(__name__)


def _check_dimensions(kind: str, index: int, length: float, width: float) -> None:
    for name, value in (('length', length), ('width', width)):
        # NaN fails every comparison, so test for the positive case.
        if not value > 0:
            raise ConfigurationError(
                f"{kind} {index + 1} has non-positive {name}: {value}",
                field=f"{kind.lower()}s[{index}].{name}"
            )


def validate_inputs(sheets: Sequence[Sheet], components: Sequence[Component], tolerance: float) -> None:
    """Raise ConfigurationError for the first invalid engine input."""
    if not tolerance >= 0:
        raise ConfigurationError(f"Tolerance must be non-negative, got {tolerance}", field="tolerance")
    for i, sheet in enumerate(sheets):
        _check_dimensions("Sheet", i, sheet.length, sheet.width)
    for i, component in enumerate(components):
        _check_dimensions("Component", i, component.length, component.width)
    if components and not sheets:
        raise ConfigurationError("No sheets given for %d component(s)" % len(components), field="sheets")


def place(sheets: Sequence[Sheet], components: Sequence[Component], tolerance: float) -> PlacementResult:
    """Assign every component a sheet and a top-left corner.

    Raises ConfigurationError before placing anything if the input is
    invalid. Components that do not fit are returned in ``unplaced``; once
    the sheets run out, every later component is unplaced as well.
    """
    validate_inputs(sheets, components, tolerance)

    placements: List[Placement] = []
    unplaced: List[int] = []
    sheet_index = 0
    x = y = row_height = 0.0
    exhausted = False

    for index, component in enumerate(components):
        if exhausted:
            unplaced.append(index)
            continue
        footprint_w = component.width + tolerance
        footprint_l = component.length + tolerance
        while True:
            sheet = sheets[sheet_index]
            if x + footprint_w > sheet.width:
                x = 0.0
                y += row_height
                row_height = 0.0
            if x + footprint_w <= sheet.width and y + footprint_l <= sheet.length:
                break
            sheet_index += 1
            if sheet_index >= len(sheets):
                exhausted = True
                break
            x = y = row_height = 0.0
        if exhausted:
            unplaced.append(index)
            continue
        placements.append(Placement(component_index=index, sheet_index=sheet_index, x=x, y=y))
        x += footprint_w
        row_height = max(row_height, footprint_l)

    log.debug("Placed %d of %d component(s) on %d sheet(s), tolerance %s",
              len(placements), len(components), len(sheets), tolerance)
    return PlacementResult(placements=tuple(placements), unplaced=tuple(unplaced))


def calculate_sheet_efficiency(sheet: Sheet, components: Sequence[Component],
                               placements: Sequence[Placement]) -> Dict[str, float]:
    """Area statistics for the placements that landed on ``sheet``."""
    sheet_area = sheet.area
    used_area = sum(components[p.component_index].area for p in placements)
    waste_area = sheet_area - used_area
    coverage = used_area / sheet_area if sheet_area > 0 else 0.0
    return {
        'used_area': used_area,
        'waste_area': waste_area,
        'waste_percent': 1.0 - coverage,
        'coverage': coverage,
        'efficiency': coverage * 100,
        'parts': len(placements)
    }


def rect_overlap(r1: Tuple[float, float, float, float], r2: Tuple[float, float, float, float]) -> bool:
    """True when two (x1, y1, x2, y2) rectangles share interior area."""
    return not (r1[2] <= r2[0] or
                r1[0] >= r2[2] or
                r1[3] <= r2[1] or
                r1[1] >= r2[3])


def find_overlaps(result: PlacementResult, components: Sequence[Component]) -> List[Tuple[int, int]]:
    """Pairs of component indices whose rectangles intersect on the same sheet."""
    by_sheet: Dict[int, List[Tuple[int, Tuple[float, float, float, float]]]] = {}
    for p in result.placements:
        c = components[p.component_index]
        by_sheet.setdefault(p.sheet_index, []).append(
            (p.component_index, (p.x, p.y, p.x + c.width, p.y + c.length)))
    overlaps = []
    for rects in by_sheet.values():
        for i in range(len(rects)):
            for j in range(i + 1, len(rects)):
                if rect_overlap(rects[i][1], rects[j][1]):
                    overlaps.append((rects[i][0], rects[j][0]))
    return overlaps
