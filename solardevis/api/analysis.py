# solardevis/api/analysis.py
# Narrative analysis endpoints (uses QuoteAnalysisService from services/gemini_analysis.py)

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from solardevis.models.quote import AnalysisResult, ClientProfile, QuoteConfig
from solardevis.services.gemini_analysis import QuoteAnalysisService, get_analysis_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/analysis", tags=["analysis"])


class AnalysisRequest(BaseModel):
    profile: ClientProfile
    config: Optional[QuoteConfig] = None
    grand_total: Optional[float] = None


@router.post("", response_model=AnalysisResult)
async def analyze_profile(req: AnalysisRequest, service: QuoteAnalysisService = Depends(get_analysis_service)):
    """Always 200: a failed or disabled analysis comes back as fallback text."""
    return await service.analyze(req.profile, config=req.config, grand_total=req.grand_total)


@router.get("/status")
async def analysis_status(service: QuoteAnalysisService = Depends(get_analysis_service)):
    return {
        "service": "Gemini AI",
        "enabled": service.enabled,
        "model": service.model_name if service.enabled else None,
        "api_key_configured": bool(service.api_key),
    }
