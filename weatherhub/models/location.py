"""Location models: coordinates and geocoding payload contracts."""

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def label(self) -> str:
        """Raw "lat,lon" text, used when no place name is known."""
        return f"{self.latitude},{self.longitude}"


class GeoResult(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}

    latitude: float
    longitude: float
    name: str | None = None
    country: str | None = None
    timezone: str | None = None

    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


class GeoResponse(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}

    results: tuple[GeoResult, ...] | None = None


class ReverseAddress(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}

    city: str | None = None
    town: str | None = None
    village: str | None = None
    state: str | None = None
    country: str | None = None


class ReverseGeoResponse(BaseModel):
    model_config = {"extra": "ignore", "frozen": True}

    address: ReverseAddress | None = None

    def display_name(self) -> str | None:
        """Most specific place name available: city, town, village, then state."""
        if self.address is None:
            return None
        for candidate in (
            self.address.city,
            self.address.town,
            self.address.village,
            self.address.state,
        ):
            if candidate:
                return candidate
        return None
