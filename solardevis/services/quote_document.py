# solardevis/services/quote_document.py

import random
from datetime import date
from typing import Optional

from solardevis.models.quote import (
    ClientProfile,
    QuoteConfig,
    QuoteDocument,
    QuoteLine,
    SizingResult,
)
from solardevis.services.quote import calculate_quote, effective_unit_price, money
from solardevis.services.sizing import sizing_for_config

INSTALL_LINE_LABEL = "Forfait Installation & Mise en service"


def format_eur(value: float) -> str:
    """French currency display: 1909.2 -> '1 909,20 €'."""
    text = f"{value:,.2f}".replace(",", " ").replace(".", ",")
    return f"{text} €"


def format_date_fr(day: date) -> str:
    return day.strftime("%d/%m/%Y")


def new_quote_number() -> str:
    return str(random.randint(0, 99999)).zfill(6)


def build_quote_document(profile: ClientProfile,
                         config: QuoteConfig,
                         sizing: Optional[SizingResult] = None,
                         issued_on: Optional[date] = None,
                         number: Optional[str] = None) -> QuoteDocument:
    """
    Everything the printable quote shows, already computed and formatted.
    The install line only appears when an install cost is set.
    """
    sizing = sizing or sizing_for_config(profile.total_daily_kwh, config)
    breakdown = calculate_quote(profile.items, config)

    lines = []
    for item in profile.items:
        unit = effective_unit_price(item, config)
        total = money(unit * item.quantity)
        lines.append(QuoteLine(
            designation=item.device,
            peak_w=item.peak_w,
            quantity=item.quantity,
            unit_price=money(unit),
            total=total,
            unit_price_display=format_eur(unit),
            total_display=format_eur(total),
        ))

    lines_total = money(sum(line.total for line in lines))

    if config.install_cost > 0:
        lines.append(QuoteLine(
            designation=INSTALL_LINE_LABEL,
            peak_w=None,
            quantity=1,
            unit_price=config.install_cost,
            total=config.install_cost,
            unit_price_display=format_eur(config.install_cost),
            total_display=format_eur(config.install_cost),
        ))

    amounts = breakdown.model_dump()
    return QuoteDocument(
        number=number or new_quote_number(),
        issued_on=format_date_fr(issued_on or date.today()),
        client_name=profile.name,
        client_address=profile.address,
        site_name=profile.site_name,
        sizing=sizing,
        total_daily_kwh=round(profile.total_daily_kwh, 2),
        total_max_w=profile.total_max_w,
        lines=lines,
        lines_total=lines_total,
        rounding_adjustment=money(breakdown.material_subtotal - lines_total),
        breakdown=breakdown,
        show_discount=config.discount_percent > 0,
        discount_percent=config.discount_percent,
        material_tax_percent=config.material_tax_percent,
        install_tax_percent=config.install_tax_percent,
        amounts_display={k: format_eur(v) for k, v in amounts.items()},
    )
