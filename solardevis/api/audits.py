# solardevis/api/audits.py
#
# Audit CSV import:
#   POST /api/audits/import   (multipart upload)
#   POST /api/audits/parse    (raw text in JSON)

import logging
from typing import List

from fastapi import APIRouter, File, UploadFile, HTTPException
from pydantic import BaseModel

from solardevis.models.quote import ClientProfile
from solardevis.services.csv_ingest import decode_upload, parse_csv
from solardevis.services.profiles import group_by_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/audits", tags=["audits"])

NO_DATA_MESSAGE = "Le fichier semble vide ou mal formaté."
ALLOWED_EXTENSIONS = {".csv", ".txt"}


class ParseRequest(BaseModel):
    text: str
    sizing_only: bool = False


class ImportResponse(BaseModel):
    items_count: int
    profiles: List[ClientProfile] = []
    message: str = ""


def allowed_file(filename: str) -> bool:
    return any((filename or "").lower().endswith(ext) for ext in ALLOWED_EXTENSIONS)


def _import_text(text: str, sizing_only: bool = False) -> ImportResponse:
    items = parse_csv(text)
    if not items:
        logger.info("Audit import produced no line items")
        return ImportResponse(items_count=0, profiles=[], message=NO_DATA_MESSAGE)

    profiles = group_by_client(items, sizing_only=sizing_only)
    return ImportResponse(
        items_count=len(items),
        profiles=profiles,
        message=f"{len(profiles)} projet(s) détecté(s)",
    )


@router.post("/import", response_model=ImportResponse)
async def import_audit(file: UploadFile = File(...)):
    if file.filename and not allowed_file(file.filename):
        raise HTTPException(status_code=400, detail=f"Unsupported file type: {file.filename}")

    raw = await file.read()
    logger.info(f"Importing audit file {file.filename!r} ({len(raw)} bytes)")
    return _import_text(decode_upload(raw))


@router.post("/parse", response_model=ImportResponse)
async def parse_audit(req: ParseRequest):
    return _import_text(req.text, sizing_only=req.sizing_only)
