"""
Character-grid canvas for outline maps and the GDP chart.

World coordinates are projected onto a fixed grid of cells; lines are
rasterized with Bresenham's algorithm. Kept free of curses so the
projection can be exercised without a terminal.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from shapely.geometry import MultiPolygon

EMPTY, NORMAL, HIGHLIGHT = 0, 1, 2
GLYPHS = {EMPTY: " ", NORMAL: "·", HIGHLIGHT: "█"}

Bounds = Tuple[float, float]


class Canvas:
    """Grid of cells with a world -> cell projection."""

    def __init__(self, width: int, height: int, x_bounds: Bounds, y_bounds: Bounds):
        self.width = max(0, width)
        self.height = max(0, height)
        self.x_bounds = x_bounds
        self.y_bounds = y_bounds
        self.cells: List[List[int]] = [[EMPTY] * self.width for _ in range(self.height)]

    @property
    def drawable(self) -> bool:
        """False for a zero-size grid or the empty-bounds sentinel."""
        if self.width == 0 or self.height == 0:
            return False
        (xmin, xmax), (ymin, ymax) = self.x_bounds, self.y_bounds
        if not all(math.isfinite(v) for v in (xmin, xmax, ymin, ymax)):
            return False
        return xmin <= xmax and ymin <= ymax

    def project(self, x: float, y: float) -> Tuple[int, int]:
        """(column, row) for a world point; row 0 is the top edge."""
        (xmin, xmax), (ymin, ymax) = self.x_bounds, self.y_bounds
        if xmax > xmin:
            col = round((x - xmin) / (xmax - xmin) * (self.width - 1))
        else:
            col = (self.width - 1) // 2
        if ymax > ymin:
            row = round((ymax - y) / (ymax - ymin) * (self.height - 1))
        else:
            row = (self.height - 1) // 2
        return col, row

    def plot(self, col: int, row: int, value: int = NORMAL) -> None:
        if 0 <= col < self.width and 0 <= row < self.height:
            self.cells[row][col] = max(self.cells[row][col], value)

    def line(self, x1: float, y1: float, x2: float, y2: float, value: int = NORMAL) -> None:
        if not self.drawable:
            return
        c1, r1 = self.project(x1, y1)
        c2, r2 = self.project(x2, y2)

        dc, dr = abs(c2 - c1), -abs(r2 - r1)
        sc = 1 if c1 < c2 else -1
        sr = 1 if r1 < r2 else -1
        err = dc + dr
        while True:
            self.plot(c1, r1, value)
            if c1 == c2 and r1 == r2:
                break
            e2 = 2 * err
            if e2 >= dr:
                err += dr
                c1 += sc
            if e2 <= dc:
                err += dc
                r1 += sr

    def outline(self, multipolygon: MultiPolygon, value: int = NORMAL) -> None:
        """Draw every exterior ring, closing last vertex back to the first."""
        for part in multipolygon.geoms:
            coords = list(part.exterior.coords)
            if not coords:
                continue
            for (ax, ay), (bx, by) in zip(coords, coords[1:] + coords[:1]):
                self.line(ax, ay, bx, by, value)

    def rows(self) -> List[str]:
        return ["".join(GLYPHS[cell] for cell in row) for row in self.cells]


def chart_layout(series: Dict[int, float]) -> Optional[dict]:
    """
    Axis bounds and labels for a year -> value bar chart.

    Returns None for an empty series.
    """
    if not series:
        return None

    years = sorted(series)
    min_year, max_year = years[0], years[-1]
    y_max = math.ceil(max(max(series.values()), 0.0) * 1.1) or 1.0

    step = max(1, math.ceil((max_year - min_year) / 6))
    x_labels = [str(year) for year in range(min_year, max_year + 1, step)]
    y_labels = [f"{y_max * fraction / 1e9:.1f}B" for fraction in (0.0, 0.25, 0.5, 0.75, 1.0)]

    return {
        "points": [(float(year), series[year]) for year in years],
        "x_bounds": (float(min_year), float(max_year)),
        "y_bounds": (0.0, float(y_max)),
        "x_labels": x_labels,
        "y_labels": y_labels,
    }
