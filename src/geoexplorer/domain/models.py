"""
Explorer Domain Models

Pydantic models for reference records loaded from the data directory, and
the immutable history frame used by the navigation controller.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from .enums import GeoLevel


class CountryInfo(BaseModel):
    """Country metadata as stored in country_info.json."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name")
    capital: str = Field(..., description="Capital city")
    area: float = Field(..., ge=0, description="Area in square kilometres")
    population: int = Field(..., ge=0, description="Population count")
    currency: str = Field(..., description="Currency code")

    def summary(self) -> str:
        """Multi-line text block for the info panel."""
        return (
            f"{self.name}\n"
            f"Capital: {self.capital}\n"
            f"Area: {self.area:,.0f} km²\n"
            f"Population: {self.population:,}\n"
            f"Currency: {self.currency}"
        )


@dataclass(frozen=True)
class HistoryFrame:
    """Where the user came from before a drill-down.

    ``level``/``key`` identify the list to reload on back; ``chosen`` is the
    item that was selected when the drill-down happened.
    """
    level: GeoLevel
    key: str
    chosen: str
