"""
Data models for the sheet layout planner.
"""

from dataclasses import dataclass
from typing import List, Dict, Any, Optional, Tuple

from models.errors import StorageError


def _number(data: Dict[str, Any], key: str, default: Optional[float] = None) -> float:
    if not isinstance(data, dict):
        raise StorageError(f"Expected a mapping, got {type(data).__name__}")
    value = data.get(key, default)
    if value is None or value == "":
        if default is not None:
            return default
        raise StorageError(f"Missing value for '{key}'")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise StorageError(f"Invalid number for '{key}': {value!r}") from None


def _is_blank(row: Any) -> bool:
    return isinstance(row, dict) and all(v is None or v == "" for v in row.values())


@dataclass(frozen=True)
class Sheet:
    length: float
    width: float
    thickness: float = 0.0

    @property
    def area(self) -> float:
        return self.length * self.width

    def to_dict(self) -> Dict[str, Any]:
        return {
            'length': self.length,
            'width': self.width,
            'thickness': self.thickness
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sheet":
        return cls(
            length=_number(data, 'length'),
            width=_number(data, 'width'),
            thickness=_number(data, 'thickness', 0.0)
        )


@dataclass(frozen=True)
class Component:
    length: float
    width: float

    @property
    def area(self) -> float:
        return self.length * self.width

    def to_dict(self) -> Dict[str, Any]:
        return {
            'length': self.length,
            'width': self.width
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Component":
        return cls(length=_number(data, 'length'), width=_number(data, 'width'))


@dataclass(frozen=True)
class Placement:
    """Top-left corner of one component on one sheet."""

    component_index: int
    sheet_index: int
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'componentIndex': self.component_index,
            'sheetIndex': self.sheet_index,
            'x': self.x,
            'y': self.y
        }


@dataclass(frozen=True)
class PlacementResult:
    """Engine output: placements in input order plus the indices that did not fit."""

    placements: Tuple[Placement, ...] = ()
    unplaced: Tuple[int, ...] = ()

    @property
    def is_complete(self) -> bool:
        return not self.unplaced

    @property
    def sheets_used(self) -> int:
        return len({p.sheet_index for p in self.placements})

    def placements_on(self, sheet_index: int) -> List[Placement]:
        return [p for p in self.placements if p.sheet_index == sheet_index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'placements': [p.to_dict() for p in self.placements],
            'unplaced': list(self.unplaced)
        }


@dataclass(frozen=True)
class LayoutState:
    """Everything the user entered: the engine input and the persisted record."""

    sheets: Tuple[Sheet, ...] = ()
    components: Tuple[Component, ...] = ()
    tolerance: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sheets': [s.to_dict() for s in self.sheets],
            'components': [c.to_dict() for c in self.components],
            'tolerance': self.tolerance
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutState":
        if not isinstance(data, dict):
            raise StorageError(f"Expected a mapping, got {type(data).__name__}")
        sheets = data.get('sheets') or []
        components = data.get('components') or []
        if not isinstance(sheets, list) or not isinstance(components, list):
            raise StorageError("'sheets' and 'components' must be lists")
        return cls(
            sheets=tuple(Sheet.from_dict(s) for s in sheets if not _is_blank(s)),
            components=tuple(Component.from_dict(c) for c in components if not _is_blank(c)),
            tolerance=_number(data, 'tolerance', 0.0)
        )
