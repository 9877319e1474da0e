# solardevis/services/sizing.py

import math
from typing import Optional

from solardevis.core.config import settings
from solardevis.models.quote import QuoteConfig, SizingResult

DEFAULT_DIVISOR = 3.5        # peak sun hours when nothing else is configured
DEFAULT_PANEL_WATTAGE = 425.0


def sizing_divisor(peak_sun_hours: Optional[float] = None, efficiency_percent: float = 100.0) -> float:
    """Effective sun-hours divisor: HSP derated by system efficiency."""
    hsp = peak_sun_hours if peak_sun_hours else DEFAULT_DIVISOR
    return hsp * (efficiency_percent / 100.0)


def calculate_sizing(daily_kwh: float,
                     divisor: float = DEFAULT_DIVISOR,
                     panel_wattage: float = DEFAULT_PANEL_WATTAGE) -> SizingResult:
    """
    kWp needed to cover daily_kwh and the panel count to reach it.

    The panel count is taken from the unrounded kWp and always rounds up;
    needed_kwp is rounded to 2 decimals for display only.
    """
    needed_kwp = daily_kwh / divisor
    panel_count = math.ceil((needed_kwp * 1000) / panel_wattage)
    return SizingResult(
        needed_kwp=round(needed_kwp, 2),
        panel_count=panel_count,
        divisor=divisor,
        panel_wattage=panel_wattage,
    )


def sizing_for_config(daily_kwh: float, config: QuoteConfig,
                      peak_sun_hours: Optional[float] = None) -> SizingResult:
    # an explicit HSP on the config wins over a looked-up one
    hsp = config.peak_sun_hours or peak_sun_hours or settings.DEFAULT_PEAK_SUN_HOURS
    divisor = sizing_divisor(hsp, config.system_efficiency_percent)
    return calculate_sizing(daily_kwh, divisor=divisor, panel_wattage=config.panel_wattage)
