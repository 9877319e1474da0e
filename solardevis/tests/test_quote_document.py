from datetime import date

import pytest

from solardevis.models.quote import ClientProfile, LineItem, QuoteConfig
from solardevis.services.quote_document import (
    INSTALL_LINE_LABEL,
    build_quote_document,
    format_eur,
    new_quote_number,
)


@pytest.fixture
def profile():
    return ClientProfile(
        name="Jean Dupont",
        address="12 rue des Palmiers",
        site_name="Maison",
        visit_date="2024-05-02",
        items=[LineItem(id="1", device="Panneau 425W", peak_w=425, unit_price=100, quantity=2)],
        total_daily_kwh=17.5,
        total_max_w=850,
    )


def test_format_eur():
    assert format_eur(1909.2) == "1 909,20 €"
    assert format_eur(0) == "0,00 €"
    assert format_eur(1234567.891) == "1 234 567,89 €"


def test_quote_number_is_six_digits():
    number = new_quote_number()
    assert len(number) == 6
    assert number.isdigit()


def test_document_lines_and_totals(profile):
    config = QuoteConfig(margin_percent=20, discount_percent=10, material_tax_percent=20,
                         install_cost=1500, install_tax_percent=10)
    doc = build_quote_document(profile, config, issued_on=date(2024, 5, 10), number="000042")

    assert doc.number == "000042"
    assert doc.issued_on == "10/05/2024"
    assert doc.sizing.needed_kwp == 5.0
    assert doc.sizing.panel_count == 12

    item_line, install_line = doc.lines
    assert item_line.unit_price == 120
    assert item_line.total == 240
    assert item_line.unit_price_display == "120,00 €"
    assert install_line.designation == INSTALL_LINE_LABEL
    assert install_line.quantity == 1
    assert install_line.peak_w is None

    assert doc.show_discount is True
    assert doc.breakdown.grand_total == pytest.approx(1909.2)
    assert doc.amounts_display["grand_total"] == "1 909,20 €"


def test_no_install_line_when_cost_is_zero(profile):
    doc = build_quote_document(profile, QuoteConfig(install_cost=0, discount_percent=0))
    assert [line.designation for line in doc.lines] == ["Panneau 425W"]
    assert doc.breakdown.install_tax == 0
    assert doc.show_discount is False


def test_rounding_gap_between_lines_and_subtotal_is_reported():
    items = [LineItem(id=str(n), device="Connecteur", unit_price=0.125, quantity=1) for n in range(8)]
    profile = ClientProfile(name="C", address="A", items=items)
    doc = build_quote_document(profile, QuoteConfig(margin_percent=0, install_cost=0))

    assert [line.total for line in doc.lines] == [0.12] * 8
    assert doc.lines_total == pytest.approx(0.96)
    assert doc.breakdown.material_subtotal == pytest.approx(1.0)
    assert doc.rounding_adjustment == pytest.approx(0.04)


def test_no_rounding_gap_on_round_prices(profile):
    doc = build_quote_document(profile, QuoteConfig())
    assert doc.lines_total == doc.breakdown.material_subtotal
    assert doc.rounding_adjustment == 0
