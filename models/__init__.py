from models.errors import ConfigurationError, ValidationError, StorageError, ExportError
from models.part import Sheet, Component, Placement, PlacementResult, LayoutState

__all__ = [
    "ConfigurationError", "ValidationError", "StorageError", "ExportError",
    "Sheet", "Component", "Placement", "PlacementResult", "LayoutState",
]
