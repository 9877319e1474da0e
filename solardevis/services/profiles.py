# solardevis/services/profiles.py

import logging
from typing import Dict, List, Iterable, Tuple

from solardevis.models.quote import LineItem, ClientProfile, ProfileTotals

logger = logging.getLogger(__name__)


def _group_key(item: LineItem) -> Tuple[str, str]:
    return (item.client, item.address)


def calculate_totals(items: Iterable[LineItem], sizing_only: bool = False) -> ProfileTotals:
    """
    Daily energy and peak power for a list of line items.

    total_daily_kwh always covers every item. total_max_w covers every item
    unless sizing_only is set, in which case items flagged out of sizing
    (include_in_sizing=False) are billed but not counted.
    """
    items = list(items)
    daily_kwh = sum(i.hourly_kwh * i.duration_h * i.quantity for i in items)
    max_w = sum(
        i.peak_w * i.quantity
        for i in items
        if i.include_in_sizing or not sizing_only
    )
    return ProfileTotals(total_daily_kwh=daily_kwh, total_max_w=max_w)


def build_profile(items: List[LineItem], sizing_only: bool = False) -> ClientProfile:
    first = items[0]
    totals = calculate_totals(items, sizing_only=sizing_only)
    return ClientProfile(
        name=first.client,
        address=first.address,
        site_name=first.site,
        visit_date=first.date,
        items=list(items),
        total_daily_kwh=totals.total_daily_kwh,
        total_max_w=totals.total_max_w,
    )


def group_by_client(items: Iterable[LineItem], sizing_only: bool = False) -> List[ClientProfile]:
    """
    One profile per distinct (client, address), in first-seen order.
    Site name and visit date come from the first item of each group.
    """
    groups: Dict[Tuple[str, str], List[LineItem]] = {}
    for item in items:
        groups.setdefault(_group_key(item), []).append(item)

    profiles = [build_profile(group, sizing_only=sizing_only) for group in groups.values()]
    logger.info(f"Grouped line items into {len(profiles)} client profiles")
    return profiles
