"""
Navigation controller.

Owns the explorer state (level, item list, selection, history, map and the
country panels) and applies one transition per input action. Every
transition is a sequence of independent steps; a failed step keeps the
previous value of its own slice of state and the others still apply.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .catalog import WORLD_KEY, GeoCatalog
from .domain.enums import Action, GeoLevel
from .domain.models import CountryInfo, HistoryFrame
from .economy import EconomicIndex
from .errors import ExplorerError
from .geometry import GeometryModel

logger = logging.getLogger(__name__)

WORLD_TITLE = "World"

HELP_TEXT = (
    "Up/Down: move in list\n"
    "Enter: drill down (world > continent > country)\n"
    "Esc / Backspace: back\n"
    "Tab: GDP chart (country view)\n"
    "q: quit"
)


def status_text(title: str, feature_count: int) -> str:
    return f"{title} - {feature_count} objects\n\n{HELP_TEXT}"


class NavigationController:
    """
    Finite-state traversal over world -> continent -> country.

    Public attributes are read by the rendering layer once per frame.
    """

    def __init__(self, catalog: GeoCatalog, economy: Optional[EconomicIndex] = None):
        """
        Seed the controller at the world level.

        Raises:
            ExplorerError: If the world list or world geometry cannot be loaded
        """
        self.catalog = catalog
        self.economy = economy

        self.level = GeoLevel.WORLD
        self.current_key = WORLD_KEY
        self.items: List[str] = catalog.load_list(GeoLevel.WORLD, WORLD_KEY)
        self.selected = 0
        self.history: List[HistoryFrame] = []

        self.map: Optional[GeometryModel] = self._build_map(GeoLevel.WORLD, WORLD_KEY)
        self.info = status_text(WORLD_TITLE, self.map.feature_count())

        self.country_info: Optional[CountryInfo] = None
        self.fun_fact: Optional[str] = None
        self.current_gdp: Optional[Tuple[int, float]] = None
        self.gdp_series: Optional[Dict[int, float]] = None
        self.chart_active = False

        logger.info(f"Explorer started with {len(self.items)} continents")

    # -------------------------------------------------------------------------
    # Read-only helpers for the renderer
    # -------------------------------------------------------------------------

    def current_item(self) -> Optional[str]:
        if not self.items:
            return None
        return self.items[self.selected]

    def highlight_key(self) -> Optional[str]:
        """Selector for map highlighting: the selected item name."""
        return self.current_item()

    # -------------------------------------------------------------------------
    # Input handling
    # -------------------------------------------------------------------------

    def handle(self, action: Action) -> bool:
        """
        Apply one input action.

        Returns:
            True when the session should end
        """
        if action == Action.QUIT:
            return True

        if action == Action.TOGGLE_CHART:
            self._toggle_chart()
            return False

        if self.chart_active:
            # Only the toggle leaves chart mode
            return False

        if action == Action.MOVE_UP:
            self._move(-1)
        elif action == Action.MOVE_DOWN:
            self._move(1)
        elif action == Action.CONFIRM:
            self._confirm()
        elif action == Action.BACK:
            self._back()
        return False

    def _move(self, delta: int) -> None:
        if not self.items:
            self.selected = 0
            return
        self.selected = max(0, min(len(self.items) - 1, self.selected + delta))

    def _confirm(self) -> None:
        choice = self.current_item()
        if choice is None:
            return

        if self.level == GeoLevel.WORLD:
            self._enter_continent(choice)
        elif self.level == GeoLevel.CONTINENT:
            self._enter_country(choice)

    def _enter_continent(self, continent: str) -> None:
        try:
            countries = self.catalog.load_list(GeoLevel.CONTINENT, continent)
        except ExplorerError as e:
            logger.warning(f"Cannot open continent {continent}: {e}")
            return

        self.history.append(HistoryFrame(GeoLevel.WORLD, continent, continent))
        self.level = GeoLevel.CONTINENT
        self.current_key = continent
        self.items = countries
        self.selected = 0
        self._clear_country()

        self._refresh_map(GeoLevel.CONTINENT, continent, continent)

    def _enter_country(self, country: str) -> None:
        self.history.append(HistoryFrame(GeoLevel.CONTINENT, self.current_key, country))
        self.level = GeoLevel.COUNTRY
        self.current_key = country
        self.items = [country]
        self.selected = 0
        self._clear_country()

        self._refresh_map(GeoLevel.COUNTRY, country, country)
        self.country_info = self.catalog.load_country_info(country)
        self.fun_fact = self.catalog.random_fact(country)
        if self.economy is not None:
            self.current_gdp = self.economy.latest(country)

    def _back(self) -> None:
        if not self.history:
            return

        frame = self.history.pop()
        self._clear_country()

        if frame.level == GeoLevel.WORLD:
            list_key, title = WORLD_KEY, WORLD_TITLE
        else:
            list_key, title = frame.key, frame.key

        self.level = frame.level
        self.current_key = list_key
        self.items = self._reload_list(frame.level, list_key)
        self.selected = self.items.index(frame.chosen) if frame.chosen in self.items else 0

        self._refresh_map(frame.level, list_key, title)

    def _toggle_chart(self) -> None:
        if self.level != GeoLevel.COUNTRY or self.current_gdp is None:
            self.chart_active = False
            return

        self.chart_active = not self.chart_active
        if self.chart_active:
            name = self.current_item()
            if self.economy is not None and name is not None:
                self.gdp_series = self.economy.full_series(name)
        else:
            self.gdp_series = None

    # -------------------------------------------------------------------------
    # Individually fallible steps
    # -------------------------------------------------------------------------

    def _build_map(self, level: GeoLevel, key: str) -> GeometryModel:
        document = self.catalog.load_geometry_source(level, key)
        return GeometryModel.from_geojson(document, self.catalog.build_continent_membership())

    def _refresh_map(self, level: GeoLevel, key: str, title: str) -> None:
        """Replace map and status text; on failure keep the previous ones."""
        try:
            view = self._build_map(level, key)
        except ExplorerError as e:
            logger.warning(f"Keeping previous map, cannot load geometry for {key}: {e}")
            return
        self.map = view
        self.info = status_text(title, view.feature_count())

    def _reload_list(self, level: GeoLevel, key: str) -> List[str]:
        try:
            return self.catalog.load_list(level, key)
        except ExplorerError as e:
            cached = self.catalog.cached_list(level, key)
            logger.warning(f"Cannot reload list for {key}: {e}; using cached copy: {cached is not None}")
            return cached or []

    def _clear_country(self) -> None:
        self.country_info = None
        self.fun_fact = None
        self.current_gdp = None
        self.gdp_series = None
        self.chart_active = False
