"""
tests/test_catalog.py — GeoCatalog file resolution, caching and lookups.
"""

from __future__ import annotations

import json
import random

import pytest

from geoexplorer.catalog import GeoCatalog, canonical_key
from geoexplorer.domain.enums import GeoLevel
from geoexplorer.errors import NotFoundError, ParseError

from .conftest import FUN_FACTS, write_json


# ---------------------------------------------------------------------------
# Symbolic keys
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("name, expected", [
    ("Poland", "poland"),
    ("North America", "north_america"),
    ("Congo (Kinshasa)", "congo_kinshasa"),
    ("bosnia_and_herzegovina", "bosnia_and_herzegovina"),
    ("", ""),
])
def test_canonical_key(name, expected):
    assert canonical_key(name) == expected


@pytest.mark.parametrize("name", ["Côte d'Ivoire", "Saint Kitts (and) Nevis", "  Two  Spaces ", "((x))"])
def test_canonical_key_is_idempotent(name):
    once = canonical_key(name)
    assert canonical_key(once) == once


def test_filename_prefix_depends_on_level(catalog):
    assert catalog.list_filename(GeoLevel.WORLD, "world").name == "continent_world.json"
    assert catalog.list_filename(GeoLevel.CONTINENT, "North America").name == "country_north_america.json"
    assert catalog.list_filename(GeoLevel.COUNTRY, "Poland").name == "country_poland.json"
    assert catalog.geometry_filename(GeoLevel.WORLD, "world").name == "continent_world.geojson"
    assert catalog.geometry_filename(GeoLevel.COUNTRY, "Poland").name == "country_poland.geojson"


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def test_load_list_reads_and_caches(catalog):
    assert catalog.cached_list(GeoLevel.CONTINENT, "Europe") is None

    assert catalog.load_list(GeoLevel.CONTINENT, "Europe") == ["France", "Poland"]
    assert catalog.cached_list(GeoLevel.CONTINENT, "europe") == ["France", "Poland"]


def test_cache_keeps_entries_after_file_disappears(catalog, data_dir):
    catalog.load_list(GeoLevel.CONTINENT, "Asia")
    (data_dir / "country_asia.json").unlink()

    with pytest.raises(NotFoundError):
        catalog.load_list(GeoLevel.CONTINENT, "Asia")
    assert catalog.cached_list(GeoLevel.CONTINENT, "Asia") == ["China", "Japan"]


def test_load_list_missing_file(catalog):
    with pytest.raises(NotFoundError) as exc:
        catalog.load_list(GeoLevel.CONTINENT, "Antarctica")
    assert exc.value.path.name == "country_antarctica.json"


def test_load_list_malformed_json(catalog, data_dir):
    (data_dir / "country_oceania.json").write_text("[\"Fiji\",", encoding="utf-8")
    with pytest.raises(ParseError):
        catalog.load_list(GeoLevel.CONTINENT, "Oceania")


@pytest.mark.parametrize("content", [{"a": 1}, ["ok", 3], "text"])
def test_load_list_rejects_non_string_arrays(catalog, data_dir, content):
    write_json(data_dir / "country_oceania.json", content)
    with pytest.raises(ParseError):
        catalog.load_list(GeoLevel.CONTINENT, "Oceania")


# ---------------------------------------------------------------------------
# Geometry documents
# ---------------------------------------------------------------------------

def test_load_geometry_source(catalog):
    document = catalog.load_geometry_source(GeoLevel.CONTINENT, "Europe")
    assert document["type"] == "FeatureCollection"
    assert len(document["features"]) == 2


def test_load_geometry_source_missing(catalog):
    with pytest.raises(NotFoundError):
        catalog.load_geometry_source(GeoLevel.CONTINENT, "Africa")


def test_load_geometry_source_rejects_other_documents(catalog, data_dir):
    write_json(data_dir / "country_japan.geojson", {"type": "Feature", "geometry": None})
    with pytest.raises(ParseError):
        catalog.load_geometry_source(GeoLevel.COUNTRY, "Japan")


# ---------------------------------------------------------------------------
# Country metadata and facts
# ---------------------------------------------------------------------------

def test_country_info_lookup_uses_canonical_key(catalog):
    info = catalog.load_country_info("Poland")
    assert info is not None
    assert info.capital == "Warsaw"
    assert info.population == 36753736
    assert catalog.load_country_info("poland") == info


def test_country_info_absent_and_invalid_entries(catalog):
    assert catalog.load_country_info("Atlantis") is None
    # negative population fails validation and is skipped
    assert catalog.load_country_info("Broken") is None


def test_random_fact_uses_injected_rng(data_dir):
    first = GeoCatalog(data_dir, rng=random.Random(11))
    second = GeoCatalog(data_dir, rng=random.Random(11))

    draws = [first.random_fact("Poland") for _ in range(5)]
    assert draws == [second.random_fact("Poland") for _ in range(5)]
    assert set(draws) <= set(FUN_FACTS["poland"])


def test_random_fact_absent_or_empty(catalog):
    assert catalog.random_fact("France") is None
    assert catalog.random_fact("Atlantis") is None


def test_missing_tables_are_not_errors(tmp_path):
    catalog = GeoCatalog(tmp_path)
    assert catalog.load_country_info("Poland") is None
    assert catalog.random_fact("Poland") is None


def test_malformed_tables_are_treated_as_empty(tmp_path):
    (tmp_path / "country_info.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "funfacts.json").write_text(json.dumps(["not", "a", "mapping"]), encoding="utf-8")

    catalog = GeoCatalog(tmp_path)
    assert catalog.load_country_info("Poland") is None
    assert catalog.random_fact("Poland") is None


# ---------------------------------------------------------------------------
# Continent membership
# ---------------------------------------------------------------------------

def test_build_continent_membership_omits_failed_continents(catalog):
    membership = catalog.build_continent_membership()

    assert membership == {
        "Africa": {"Egypt"},
        "Asia": {"China", "Japan"},
        "Europe": {"France", "Poland"},
    }
    assert "Antarctica" not in membership


def test_build_continent_membership_without_world_list(tmp_path):
    assert GeoCatalog(tmp_path).build_continent_membership() == {}
