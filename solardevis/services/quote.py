# solardevis/services/quote.py — material margin, discount, taxes, install

from typing import Iterable

from solardevis.models.quote import LineItem, QuoteConfig, QuoteBreakdown


def money(value: float) -> float:
    # every intermediate currency amount goes through here
    return round(value, 2)


def margin_multiplier(config: QuoteConfig) -> float:
    return 1.0 + (config.margin_percent / 100.0)


def effective_unit_price(item: LineItem, config: QuoteConfig) -> float:
    """Unit price as shown on the quote: purchase price marked up by the margin."""
    return (item.unit_price or 0.0) * margin_multiplier(config)


def calculate_quote(items: Iterable[LineItem], config: QuoteConfig) -> QuoteBreakdown:
    """
    Financial breakdown of a quote.

    Subtotal, discount and each tax are rounded to 2 decimals as soon as they
    are computed; the grand total is the plain sum of those rounded parts.
    """
    material_subtotal = money(sum(effective_unit_price(i, config) * i.quantity for i in items))
    discount_amount = money(material_subtotal * (config.discount_percent / 100.0))
    material_after_discount = money(material_subtotal - discount_amount)
    material_tax = money(material_after_discount * (config.material_tax_percent / 100.0))

    install_cost = float(config.install_cost)
    install_tax = money(install_cost * (config.install_tax_percent / 100.0))

    grand_total = material_after_discount + material_tax + install_cost + install_tax

    return QuoteBreakdown(
        material_subtotal=material_subtotal,
        discount_amount=discount_amount,
        material_after_discount=material_after_discount,
        material_tax=material_tax,
        install_cost=install_cost,
        install_tax=install_tax,
        grand_total=grand_total,
    )
