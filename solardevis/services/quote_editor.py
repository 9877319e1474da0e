# solardevis/services/quote_editor.py
#
# Editing session helpers: items are replaced whole, never mutated in place,
# and a committed profile is a new value with recomputed totals.

import logging
import time
from typing import Any, List

from solardevis.core.config import settings
from solardevis.models.quote import ClientProfile, LineItem, QuoteConfig
from solardevis.services.csv_ingest import parse_fr_float, parse_quantity
from solardevis.services.profiles import calculate_totals

logger = logging.getLogger(__name__)

MANUAL_AGENT = "Manuel"
MANUAL_DEVICE = "Nouvel Appareil"

_FLOAT_FIELDS = {"hourly_kwh", "peak_w", "duration_h", "unit_price"}
_EDITABLE_FIELDS = set(LineItem.model_fields) - {"id"}
_TRUE_STRINGS = {"1", "true", "yes", "oui", "vrai"}


def default_quote_config() -> QuoteConfig:
    return QuoteConfig(panel_wattage=settings.DEFAULT_PANEL_WATTAGE)


def new_manual_item(profile: ClientProfile) -> LineItem:
    return LineItem(
        id=f"manual-{int(time.time() * 1000)}",
        client=profile.name,
        site=profile.site_name,
        address=profile.address,
        date=profile.visit_date,
        agent=MANUAL_AGENT,
        device=MANUAL_DEVICE,
        quantity=1,
    )


def _coerce(field: str, value: Any) -> Any:
    if field in _FLOAT_FIELDS:
        return parse_fr_float(value)
    if field == "quantity":
        return parse_quantity(value)
    if field == "include_in_sizing":
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)
    return "" if value is None else str(value)


def update_item(items: List[LineItem], item_id: str, **changes) -> List[LineItem]:
    """
    Return a new list where the item with item_id carries the given changes.
    Unknown fields are ignored; numeric edits are coerced like CSV values.
    """
    clean = {k: _coerce(k, v) for k, v in changes.items() if k in _EDITABLE_FIELDS}
    ignored = set(changes) - set(clean)
    if ignored:
        logger.debug(f"Ignoring non-editable fields: {sorted(ignored)}")
    return [i.model_copy(update=clean) if i.id == item_id else i for i in items]


def remove_item(items: List[LineItem], item_id: str) -> List[LineItem]:
    return [i for i in items if i.id != item_id]


def commit_profile(profile: ClientProfile, items: List[LineItem], sizing_only: bool = False) -> ClientProfile:
    """Replace the profile's items and recompute its totals."""
    totals = calculate_totals(items, sizing_only=sizing_only)
    return profile.model_copy(update={
        "items": list(items),
        "total_daily_kwh": totals.total_daily_kwh,
        "total_max_w": totals.total_max_w,
    })
