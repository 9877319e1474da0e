# solardevis/services/solar_potential.py

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from solardevis.core.config import settings

logger = logging.getLogger(__name__)

ESTIMATE_PANEL_WATTS = 400  # panel rating assumed for max array kWp

# Average HSP by region when the API has nothing for the site
REGION_DEFAULT_HSP: Dict[str, float] = {
    "Port-au-Prince": 5.4,
    "Cap-Haïtien": 5.2,
    "Les Cayes": 5.5,
    "Jacmel": 5.3,
    "Gonaïves": 5.6,
}
COUNTRY_DEFAULT_HSP = 5.2


class SolarData(BaseModel):
    hsp: float
    max_panels: Optional[int] = None
    max_array_area_m2: Optional[float] = None
    max_array_kwp: Optional[float] = None


class ResolvedHSP(BaseModel):
    hsp: float
    source: str  # "solar_api" | "region_default"
    region: Optional[str] = None
    solar: Optional[SolarData] = None


def default_hsp(region: Optional[str] = None) -> float:
    if not region:
        return COUNTRY_DEFAULT_HSP
    return REGION_DEFAULT_HSP.get(region, COUNTRY_DEFAULT_HSP)


def solar_data_from_payload(data: Dict[str, Any]) -> Optional[SolarData]:
    potential = (data or {}).get("solarPotential")
    if not potential:
        return None

    hours = potential.get("maxSunshineHoursPerYear")
    if hours is None:
        return None

    panels = potential.get("maxArrayPanels")
    return SolarData(
        hsp=round(float(hours) / 365, 2),
        max_panels=panels,
        max_array_area_m2=potential.get("maxArrayAreaMeters2"),
        max_array_kwp=(panels * ESTIMATE_PANEL_WATTS) / 1000 if panels is not None else None,
    )


class SolarPotentialService:
    """
    Google Solar API lookup (buildingInsights:findClosest).
    Disabled without an API key; every failure is logged and returns None.
    """

    def __init__(self, api_key: Optional[str] = None,
                 base_url: Optional[str] = None,
                 timeout: float = 15.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = (api_key or "").strip()
        self.base_url = (base_url or "https://solar.googleapis.com/v1").rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self.enabled = bool(self.api_key)
        if not self.enabled:
            logger.warning("GOOGLE_SOLAR_API_KEY is missing – solar lookup disabled")

    async def fetch(self, lat: float, lng: float) -> Optional[SolarData]:
        if not self.enabled:
            return None

        url = f"{self.base_url}/buildingInsights:findClosest"
        params = {
            "location.latitude": lat,
            "location.longitude": lng,
            "key": self.api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Solar API request failed: {e}")
            return None

        if response.status_code != 200:
            logger.error(f"Solar API error {response.status_code}: {response.text[:200]}")
            return None

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Solar API returned invalid JSON: {e}")
            return None

        return solar_data_from_payload(payload)

    async def resolve_hsp(self, lat: Optional[float] = None,
                          lng: Optional[float] = None,
                          region: Optional[str] = None) -> ResolvedHSP:
        solar = None
        if lat is not None and lng is not None:
            solar = await self.fetch(lat, lng)
        if solar is not None:
            return ResolvedHSP(hsp=solar.hsp, source="solar_api", region=region, solar=solar)
        return ResolvedHSP(hsp=default_hsp(region), source="region_default", region=region)


_solar_singleton: Optional[SolarPotentialService] = None


def get_solar_service() -> SolarPotentialService:
    global _solar_singleton
    if _solar_singleton is None:
        _solar_singleton = SolarPotentialService(
            api_key=settings.GOOGLE_SOLAR_API_KEY,
            base_url=settings.SOLAR_API_URL,
            timeout=settings.SOLAR_API_TIMEOUT,
        )
    return _solar_singleton
