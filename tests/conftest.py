"""
Shared fixtures: a small on-disk dataset laid out like the real data directory.
"""

from __future__ import annotations

import json
import random
from pathlib import Path

import pytest

from geoexplorer.catalog import GeoCatalog
from geoexplorer.economy import FIRST_YEAR, LAST_YEAR, EconomicIndex

WORLD = ["Africa", "Antarctica", "Asia", "Europe"]
CONTINENTS = {
    "africa": ["Egypt"],
    "asia": ["China", "Japan"],
    "europe": ["France", "Poland"],
}

COUNTRY_INFO = {
    "poland": {
        "name": "Poland",
        "capital": "Warsaw",
        "area": 312696.0,
        "population": 36753736,
        "currency": "PLN",
    },
    "egypt": {
        "name": "Egypt",
        "capital": "Cairo",
        "area": 1002450.0,
        "population": 111247248,
        "currency": "EGP",
    },
    "broken": {"name": "Broken", "capital": "Nowhere", "area": 1.0, "population": -5, "currency": "XXX"},
}

FUN_FACTS = {
    "poland": ["Poland has a desert.", "Poland has sixteen provinces."],
    "france": [],
}

GDP = {
    ("Poland", "POL"): {2000: 1.7e11, 2010: 4.8e11, 2022: 6.9e11},
    ("United States of America", "USA"): {2021: 2.3e13, 2023: 2.7e13},
    ("Korea, Rep.", "KOR"): {2023: 1.7e12},
}


def square(x: float, y: float, size: float) -> list:
    return [[x, y], [x + size, y], [x + size, y + size], [x, y + size], [x, y]]


def polygon_feature(name, *rings):
    return {
        "type": "Feature",
        "properties": {"ADMIN": name},
        "geometry": {"type": "Polygon", "coordinates": list(rings)},
    }


def multipolygon_feature(name, *polygons):
    return {
        "type": "Feature",
        "properties": {"ADMIN": name},
        "geometry": {"type": "MultiPolygon", "coordinates": [list(p) for p in polygons]},
    }


def feature_collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


SHAPES = {
    "Egypt": polygon_feature("Egypt", square(25, 22, 10)),
    "China": polygon_feature("China", square(75, 20, 40)),
    "Japan": polygon_feature("Japan", square(130, 30, 10)),
    "France": polygon_feature("France", square(-5, 42, 10)),
    "Poland": multipolygon_feature("Poland", [square(14, 49, 10)], [[[20, 40], [20.1, 40], [20.1, 40.1], [20, 40]]]),
}


def gdp_line(name: str, code: str, values: dict) -> str:
    cells = [name, code, "GDP (current US$)", "NY.GDP.MKTP.CD"]
    for year in range(FIRST_YEAR, LAST_YEAR + 1):
        cells.append(repr(values[year]) if year in values else "")
    return ",".join(f'"{cell}"' for cell in cells) + ","


def names(model) -> list:
    return [name for name, _ in model]


def write_json(path: Path, content) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content), encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Dataset with world, three continents, two country maps and a GDP table."""
    root = tmp_path / "data"
    write_json(root / "continent_world.json", WORLD)
    for key, countries in CONTINENTS.items():
        write_json(root / f"country_{key}.json", countries)

    write_json(root / "continent_world.geojson", feature_collection(
        *SHAPES.values(),
        {"type": "Feature", "properties": {"ADMIN": "Null Island"}, "geometry": {"type": "Point", "coordinates": [0, 0]}},
    ))
    write_json(root / "country_asia.geojson", feature_collection(SHAPES["China"], SHAPES["Japan"]))
    write_json(root / "country_europe.geojson", feature_collection(SHAPES["France"], SHAPES["Poland"]))
    write_json(root / "country_poland.geojson", feature_collection(SHAPES["Poland"]))
    write_json(root / "country_china.geojson", feature_collection(SHAPES["China"]))

    write_json(root / "country_info.json", COUNTRY_INFO)
    write_json(root / "funfacts.json", FUN_FACTS)

    gdp_path = root / "dataPKB" / "pkb.csv"
    gdp_path.parent.mkdir(parents=True)
    header = [
        '"Data Source","World Development Indicators",',
        "",
        '"Last Updated Date","2025-01-28",',
        "",
        '"Country Name","Country Code","Indicator Name","Indicator Code",'
        + ",".join(f'"{year}"' for year in range(FIRST_YEAR, LAST_YEAR + 1)) + ",",
    ]
    rows = [gdp_line(name, code, values) for (name, code), values in GDP.items()]
    gdp_path.write_text("\n".join(header + rows) + "\n", encoding="utf-8")

    return root


@pytest.fixture
def catalog(data_dir: Path) -> GeoCatalog:
    return GeoCatalog(data_dir, rng=random.Random(7))


@pytest.fixture
def economy(data_dir: Path) -> EconomicIndex:
    return EconomicIndex.from_csv(data_dir / "dataPKB" / "pkb.csv")
