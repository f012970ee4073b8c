"""
Curses drawing for the explorer screen.

Layout: selection list (20%), map (60%), right column split into info (40%),
GDP (30%) and fun fact (30%). The GDP chart takes the whole screen while
active. Reads controller state only.
"""

from __future__ import annotations

import curses
import textwrap

from ..economy import EconomicIndex
from ..navigation import NavigationController
from .canvas import HIGHLIGHT, NORMAL, Canvas, chart_layout

C_NORMAL = 1
C_HIGHLIGHT = 2
C_BORDER = 3
C_CHART = 4


def init_colors() -> None:
    curses.start_color()
    curses.use_default_colors()
    for pair, fg in [
        (C_NORMAL, curses.COLOR_WHITE),
        (C_HIGHLIGHT, curses.COLOR_RED),
        (C_BORDER, curses.COLOR_BLUE),
        (C_CHART, curses.COLOR_GREEN),
    ]:
        try:
            curses.init_pair(pair, fg, -1)
        except curses.error:
            pass


def cp(pair: int, bold: bool = False) -> int:
    attr = curses.color_pair(pair)
    if bold:
        attr |= curses.A_BOLD
    return attr


# ──────────────────────────────────────────────────────────────────────────────
# Low-level drawing helpers
# ──────────────────────────────────────────────────────────────────────────────
def safe_addstr(win, y: int, x: int, text: str, attr: int = 0) -> None:
    h, w = win.getmaxyx()
    if y < 0 or y >= h or x >= w:
        return
    if x < 0:
        text = text[-x:]
        x = 0
    avail = w - x
    if avail <= 0:
        return
    try:
        win.addstr(y, x, text[:avail], attr)
    except curses.error:
        pass


def draw_box(win, y: int, x: int, h: int, w: int, title: str = "") -> None:
    if h < 2 or w < 2:
        return
    attr = cp(C_BORDER)
    safe_addstr(win, y, x, "┌" + "─" * (w - 2) + "┐", attr)
    safe_addstr(win, y + h - 1, x, "└" + "─" * (w - 2) + "┘", attr)
    for row in range(1, h - 1):
        safe_addstr(win, y + row, x, "│", attr)
        safe_addstr(win, y + row, x + w - 1, "│", attr)
    if title:
        safe_addstr(win, y, x + 2, f" {title} "[: max(0, w - 4)], attr | curses.A_BOLD)


def draw_paragraph(win, y: int, x: int, h: int, w: int, title: str, text: str) -> None:
    draw_box(win, y, x, h, w, title)
    inner = max(1, w - 2)
    lines = []
    for paragraph in text.split("\n"):
        lines.extend(textwrap.wrap(paragraph, inner) or [""])
    for offset, line in enumerate(lines[: max(0, h - 2)]):
        safe_addstr(win, y + 1 + offset, x + 1, line, cp(C_NORMAL))


# ──────────────────────────────────────────────────────────────────────────────
# Panels
# ──────────────────────────────────────────────────────────────────────────────
def draw_list(win, y: int, x: int, h: int, w: int, controller: NavigationController) -> None:
    draw_box(win, y, x, h, w, "Selection")
    visible = max(0, h - 2)
    top = max(0, controller.selected - visible + 1)
    for row, item in enumerate(controller.items[top: top + visible]):
        index = top + row
        if index == controller.selected:
            safe_addstr(win, y + 1 + row, x + 1, f">> {item}"[: w - 2], cp(C_HIGHLIGHT, bold=True))
        else:
            safe_addstr(win, y + 1 + row, x + 1, f"   {item}"[: w - 2], cp(C_NORMAL))


def draw_map(win, y: int, x: int, h: int, w: int, controller: NavigationController) -> None:
    view = controller.map
    selector = controller.highlight_key()
    if view is None:
        draw_paragraph(win, y, x, h, w, "Map", "Select an item to view the map")
        return
    if view.is_empty():
        draw_paragraph(win, y, x, h, w, selector or "Map", "No map data to display")
        return

    draw_box(win, y, x, h, w, selector or "Map")
    canvas = Canvas(w - 2, h - 2, view.x_bounds, view.y_bounds)
    for _, multipolygon in view:
        canvas.outline(multipolygon, NORMAL)
    for _, multipolygon in view.highlighted(selector):
        canvas.outline(multipolygon, HIGHLIGHT)

    for row, cells in enumerate(canvas.cells):
        for col, cell in enumerate(cells):
            if cell == HIGHLIGHT:
                safe_addstr(win, y + 1 + row, x + 1 + col, "█", cp(C_HIGHLIGHT))
            elif cell == NORMAL:
                safe_addstr(win, y + 1 + row, x + 1 + col, "·", cp(C_NORMAL))


def gdp_text(controller: NavigationController) -> str:
    if controller.current_gdp is None:
        return "Select a country to view GDP data"
    year, value = controller.current_gdp
    return f"GDP ({year}):\n{EconomicIndex.format_magnitude(value)}\nPress Tab to view chart!"


def draw_chart(win, controller: NavigationController) -> None:
    h, w = win.getmaxyx()
    country = controller.current_item() or ""
    layout = chart_layout(controller.gdp_series or {})
    draw_box(win, 0, 0, h, w, f"{country} GDP History (Press Tab to return to map view)")
    if layout is None:
        safe_addstr(win, 1, 1, "No GDP series available", cp(C_NORMAL))
        return

    label_w = max(len(label) for label in layout["y_labels"]) + 1
    plot_h, plot_w = h - 4, w - label_w - 3
    canvas = Canvas(plot_w, plot_h, layout["x_bounds"], layout["y_bounds"])
    for year, value in layout["points"]:
        canvas.line(year, 0.0, year, value, HIGHLIGHT)

    for row, line in enumerate(canvas.rows()):
        safe_addstr(win, 1 + row, 1 + label_w, line, cp(C_CHART))

    labels = layout["y_labels"]
    for i, label in enumerate(labels):
        row = 1 + round((plot_h - 1) * (1 - i / (len(labels) - 1)))
        safe_addstr(win, row, 1, label.rjust(label_w - 1), cp(C_NORMAL))

    axis = "  ".join(layout["x_labels"])
    safe_addstr(win, h - 2, 1 + label_w, axis[:plot_w], cp(C_NORMAL))


def draw(win, controller: NavigationController) -> None:
    """Draw one frame."""
    win.erase()
    if controller.chart_active and controller.gdp_series is not None:
        draw_chart(win, controller)
        win.refresh()
        return

    h, w = win.getmaxyx()
    left_w = w * 20 // 100
    map_w = w * 60 // 100
    right_w = w - left_w - map_w

    draw_list(win, 0, 0, h, left_w, controller)
    draw_map(win, 0, left_w, h, map_w, controller)

    right_x = left_w + map_w
    info_h = h * 40 // 100
    gdp_h = h * 30 // 100
    fact_h = h - info_h - gdp_h

    info = controller.country_info.summary() if controller.country_info else controller.info
    draw_paragraph(win, 0, right_x, info_h, right_w, "Info", info)
    draw_paragraph(win, info_h, right_x, gdp_h, right_w, "GDP", gdp_text(controller))
    draw_paragraph(
        win, info_h + gdp_h, right_x, fact_h, right_w, "Did you know?",
        controller.fun_fact or "Select a country to view a fun fact"
    )
    win.refresh()
