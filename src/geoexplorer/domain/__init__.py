"""
Domain Models and Types

Models:
- CountryInfo: Country reference record (capital, area, population, currency)
- HistoryFrame: Back-navigation snapshot

Enums:
- GeoLevel: Hierarchy levels (world, continent, country)
- Action: Controller input actions
"""

from .enums import Action, GeoLevel
from .models import CountryInfo, HistoryFrame

__all__ = ["CountryInfo", "HistoryFrame", "GeoLevel", "Action"]
