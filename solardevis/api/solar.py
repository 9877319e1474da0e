# solardevis/api/solar.py

from typing import Optional

from fastapi import APIRouter, Depends, Query

from solardevis.services.solar_potential import ResolvedHSP, SolarPotentialService, get_solar_service

router = APIRouter(prefix="/api/solar", tags=["solar"])


@router.get("/potential", response_model=ResolvedHSP)
async def solar_potential(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    region: Optional[str] = None,
    service: SolarPotentialService = Depends(get_solar_service),
):
    return await service.resolve_hsp(lat=lat, lng=lng, region=region)
