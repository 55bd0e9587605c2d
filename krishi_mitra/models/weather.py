from typing import List, Optional

from pydantic import BaseModel, Field

# Subset of the OpenWeatherMap payloads the weather provider reads.


class GeocodingResponse(BaseModel):
    """One match from the direct geocoding API."""

    name: str
    lat: float
    lon: float
    country: Optional[str] = None
    state: Optional[str] = None


class WeatherCondition(BaseModel):
    """Describes the weather condition (e.g., 'Clouds', 'Rain')."""

    main: str
    description: str


class MainWeatherData(BaseModel):
    temp: float
    humidity: float


class Rain(BaseModel):
    """Rain volume in mm."""

    one_hour: Optional[float] = Field(None, alias="1h")
    three_hours: Optional[float] = Field(None, alias="3h")


class CurrentWeatherResponse(BaseModel):
    weather: List[WeatherCondition]
    main: MainWeatherData
    rain: Optional[Rain] = None
    name: str = ""
