"""
Hierarchical reference data catalog.

Resolves (level, symbolic key) pairs to list, geometry and metadata files
under a base directory, with an append-only cache of loaded lists.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

from pydantic import ValidationError

from .domain.enums import GeoLevel
from .domain.models import CountryInfo
from .errors import ExplorerError, ParseError
from .utils import load_json_file

logger = logging.getLogger(__name__)

WORLD_KEY = "world"
COUNTRY_INFO_FILE = "country_info.json"
FUN_FACTS_FILE = "funfacts.json"

# World lists are "continent_*", every deeper level reads "country_*"
LEVEL_PREFIXES = {
    GeoLevel.WORLD: "continent",
    GeoLevel.CONTINENT: "country",
    GeoLevel.COUNTRY: "country",
}


def canonical_key(name: str) -> str:
    """Symbolic key for a display name: lowercase, spaces to underscores, no parentheses."""
    return name.lower().replace(" ", "_").replace("(", "").replace(")", "")


class GeoCatalog:
    """
    Loader for the on-disk world/continent/country hierarchy.

    Country metadata and fun facts are read once at construction. Lists are
    read on demand and memoized by (level, canonical key); entries are only
    ever added or overwritten, never evicted.
    """

    def __init__(self, base_dir: Path, rng: Optional[random.Random] = None):
        """
        Initialize catalog.

        Args:
            base_dir: Directory holding the data files
            rng: Random source for fun-fact draws (seed it for reproducibility)
        """
        self.base_dir = Path(base_dir)
        self.rng = rng or random.Random()
        self._lists: Dict[Tuple[GeoLevel, str], List[str]] = {}

        self._country_info = self._load_country_info_table()
        self._fun_facts = self._load_fun_facts_table()

        logger.info(
            f"GeoCatalog initialized: {self.base_dir} "
            f"({len(self._country_info)} countries, {len(self._fun_facts)} fact lists)"
        )

    # -------------------------------------------------------------------------
    # Filename resolution
    # -------------------------------------------------------------------------

    def list_filename(self, level: GeoLevel, key: str) -> Path:
        return self.base_dir / f"{LEVEL_PREFIXES[level]}_{canonical_key(key)}.json"

    def geometry_filename(self, level: GeoLevel, key: str) -> Path:
        return self.base_dir / f"{LEVEL_PREFIXES[level]}_{canonical_key(key)}.geojson"

    # -------------------------------------------------------------------------
    # Lists and geometry
    # -------------------------------------------------------------------------

    def load_list(self, level: GeoLevel, key: str) -> List[str]:
        """
        Read the child-name list for a level and key.

        Returns:
            Ordered list of display names

        Raises:
            NotFoundError: If the list file is missing
            ParseError: If the file is not a JSON array of strings
        """
        path = self.list_filename(level, key)
        content = load_json_file(path)

        if not isinstance(content, list) or not all(isinstance(item, str) for item in content):
            raise ParseError(path, "expected a JSON array of strings")

        self._lists[(level, canonical_key(key))] = list(content)
        logger.debug(f"Loaded list {path.name} ({len(content)} items)")
        return list(content)

    def cached_list(self, level: GeoLevel, key: str) -> Optional[List[str]]:
        """Previously loaded list for a level and key, without touching disk."""
        cached = self._lists.get((level, canonical_key(key)))
        return list(cached) if cached is not None else None

    def load_geometry_source(self, level: GeoLevel, key: str) -> Dict[str, Any]:
        """
        Read the GeoJSON feature collection for a level and key.

        Raises:
            NotFoundError: If the geometry file is missing
            ParseError: If the file is not a GeoJSON FeatureCollection
        """
        path = self.geometry_filename(level, key)
        document = load_json_file(path)

        if not isinstance(document, dict) or document.get("type") != "FeatureCollection":
            raise ParseError(path, "expected a GeoJSON FeatureCollection")
        if not isinstance(document.get("features", []), list):
            raise ParseError(path, "'features' must be an array")

        return document

    # -------------------------------------------------------------------------
    # Country metadata and facts
    # -------------------------------------------------------------------------

    def load_country_info(self, key: str) -> Optional[CountryInfo]:
        return self._country_info.get(canonical_key(key))

    def random_fact(self, key: str) -> Optional[str]:
        """Uniformly drawn fact for a country, or None when it has none."""
        facts = self._fun_facts.get(canonical_key(key))
        if not facts:
            return None
        return self.rng.choice(facts)

    def build_continent_membership(self) -> Dict[str, Set[str]]:
        """
        Map each continent name to the set of its country names.

        Continents whose country list cannot be loaded are left out.
        """
        try:
            continents = self.load_list(GeoLevel.WORLD, WORLD_KEY)
        except ExplorerError as e:
            logger.warning(f"Continent membership unavailable: {e}")
            return {}

        membership: Dict[str, Set[str]] = {}
        for continent in continents:
            try:
                membership[continent] = set(self.load_list(GeoLevel.CONTINENT, continent))
            except ExplorerError as e:
                logger.debug(f"Skipping continent {continent}: {e}")

        return membership

    def _load_country_info_table(self) -> Dict[str, CountryInfo]:
        """Parse country_info.json; an unreadable table is treated as empty."""
        path = self.base_dir / COUNTRY_INFO_FILE
        try:
            raw = load_json_file(path)
        except ExplorerError as e:
            logger.warning(f"Country metadata unavailable: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.warning(f"Country metadata unavailable: {path} is not a JSON object")
            return {}

        table: Dict[str, CountryInfo] = {}
        for key, record in raw.items():
            try:
                table[canonical_key(key)] = CountryInfo.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping invalid country record '{key}': {e.error_count()} error(s)")
        return table

    def _load_fun_facts_table(self) -> Dict[str, List[str]]:
        """Parse funfacts.json; an unreadable table is treated as empty."""
        path = self.base_dir / FUN_FACTS_FILE
        try:
            raw = load_json_file(path)
        except ExplorerError as e:
            logger.warning(f"Fun facts unavailable: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.warning(f"Fun facts unavailable: {path} is not a JSON object")
            return {}

        return {
            canonical_key(key): [fact for fact in facts if isinstance(fact, str)]
            for key, facts in raw.items()
            if isinstance(facts, list)
        }
