"""
Error hierarchy for the explorer.

Catalog and index lookups raise these; the navigation controller treats each
one as a recoverable failure of a single transition step.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ExplorerError(Exception):
    """Base exception for data loading and geometry operations."""
    pass


class NotFoundError(ExplorerError):
    """Source file missing for a given level and key."""
    def __init__(self, path: Path, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"Data file not found: {path}")


class ParseError(ExplorerError):
    """Malformed JSON, GeoJSON or CSV content."""
    def __init__(self, path: Optional[Path], message: str):
        self.path = path
        location = f" in {path}" if path else ""
        super().__init__(f"Parse error{location}: {message}")


class GeometryError(ExplorerError):
    """Geometry object that cannot be converted to a shape."""
    pass
