import logging
from typing import Optional, Protocol

import httpx

from krishi_mitra.models.advisory import WeatherSnapshot
from krishi_mitra.models.weather import CurrentWeatherResponse, GeocodingResponse

logger = logging.getLogger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5"
GEO_BASE_URL = "http://api.openweathermap.org/geo/1.0"

RAINY_CONDITIONS = {"Rain", "Drizzle", "Thunderstorm"}


class WeatherProvider(Protocol):
    async def current_conditions(
        self, location: Optional[str]
    ) -> Optional[WeatherSnapshot]: ...


class StaticWeatherProvider:
    """Same conditions everywhere; used when no weather API is configured."""

    def __init__(self, snapshot: Optional[WeatherSnapshot] = None) -> None:
        self.snapshot = snapshot or WeatherSnapshot(
            condition="partly cloudy",
            temperature=28,
            humidity=75,
            rainfall="moderate",
        )

    async def current_conditions(
        self, location: Optional[str]
    ) -> Optional[WeatherSnapshot]:
        return self.snapshot


def rainfall_label(rain_mm: Optional[float]) -> str:
    """Buckets hourly rain volume using IMD intensity bands."""
    if not rain_mm:
        return "none"
    if rain_mm < 2.5:
        return "light"
    if rain_mm < 7.6:
        return "moderate"
    return "heavy"


def to_snapshot(current: CurrentWeatherResponse) -> WeatherSnapshot:
    condition = current.weather[0] if current.weather else None
    if condition is None:
        label = "unknown"
    elif condition.main in RAINY_CONDITIONS:
        label = "rainy"
    else:
        label = condition.description.lower()

    rain_mm = None
    if current.rain is not None:
        rain_mm = current.rain.one_hour
        if rain_mm is None and current.rain.three_hours is not None:
            rain_mm = current.rain.three_hours / 3
    return WeatherSnapshot(
        condition=label,
        temperature=current.main.temp,
        humidity=current.main.humidity,
        rainfall=rainfall_label(rain_mm),
    )


class OpenWeatherMapProvider:
    """Looks the location up by name, then fetches its current weather."""

    def __init__(
        self,
        api_key: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.transport = transport

    async def _geocode(
        self, client: httpx.AsyncClient, location: str
    ) -> Optional[GeocodingResponse]:
        params = {"q": location, "limit": 1, "appid": self.api_key}
        response = await client.get(f"{GEO_BASE_URL}/direct", params=params)
        if response.status_code != 200:
            logger.warning(
                "Geocoding '%s' failed with status %s", location, response.status_code
            )
            return None
        matches = response.json()
        if not matches:
            return None
        return GeocodingResponse(**matches[0])

    async def current_conditions(
        self, location: Optional[str]
    ) -> Optional[WeatherSnapshot]:
        if not location:
            return None
        async with httpx.AsyncClient(transport=self.transport) as client:
            place = await self._geocode(client, location)
            if place is None:
                return None
            params = {
                "lat": place.lat,
                "lon": place.lon,
                "appid": self.api_key,
                "units": "metric",
            }
            response = await client.get(f"{BASE_URL}/weather", params=params)
            if response.status_code != 200:
                logger.warning(
                    "Current weather for '%s' failed with status %s",
                    location,
                    response.status_code,
                )
                return None
            return to_snapshot(CurrentWeatherResponse(**response.json()))
