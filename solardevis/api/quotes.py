# solardevis/api/quotes.py

import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from solardevis.models.quote import (
    ClientProfile,
    LineItem,
    QuoteBreakdown,
    QuoteConfig,
    QuoteDocument,
    SizingResult,
)
from solardevis.services.quote import calculate_quote
from solardevis.services.quote_document import build_quote_document
from solardevis.services.quote_editor import commit_profile, default_quote_config, new_manual_item
from solardevis.services.sizing import sizing_for_config

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/quotes", tags=["quotes"])


class CommitRequest(BaseModel):
    profile: ClientProfile
    items: List[LineItem]
    sizing_only: bool = False


class ComputeRequest(BaseModel):
    profile: ClientProfile
    config: Optional[QuoteConfig] = None
    peak_sun_hours: Optional[float] = None
    sizing_only: bool = False


class ComputeResponse(BaseModel):
    sizing: SizingResult
    breakdown: QuoteBreakdown
    document: QuoteDocument


@router.get("/config/defaults", response_model=QuoteConfig)
async def config_defaults():
    return default_quote_config()


@router.post("/editor/new-item", response_model=LineItem)
async def editor_new_item(profile: ClientProfile):
    return new_manual_item(profile)


@router.post("/editor/commit", response_model=ClientProfile)
async def editor_commit(req: CommitRequest):
    return commit_profile(req.profile, req.items, sizing_only=req.sizing_only)


@router.post("/compute", response_model=ComputeResponse)
async def compute_quote(req: ComputeRequest):
    config = req.config or default_quote_config()
    # totals sent by the client are not trusted; rebuild them from the items
    profile = commit_profile(req.profile, req.profile.items, sizing_only=req.sizing_only)
    sizing = sizing_for_config(profile.total_daily_kwh, config, peak_sun_hours=req.peak_sun_hours)
    breakdown = calculate_quote(profile.items, config)
    document = build_quote_document(profile, config, sizing=sizing)

    logger.info(
        f"Quote computed for {profile.name!r}: {len(profile.items)} items, "
        f"{sizing.needed_kwp} kWp, total={breakdown.grand_total:.2f}"
    )
    return ComputeResponse(sizing=sizing, breakdown=breakdown, document=document)
