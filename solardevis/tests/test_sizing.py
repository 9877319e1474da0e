import pytest

from solardevis.models.quote import QuoteConfig
from solardevis.services.sizing import calculate_sizing, sizing_divisor, sizing_for_config


def test_reference_sizing():
    result = calculate_sizing(17.5, divisor=3.5, panel_wattage=425)
    assert result.needed_kwp == 5.0
    assert result.panel_count == 12


def test_defaults_match_reference():
    assert calculate_sizing(17.5) == calculate_sizing(17.5, divisor=3.5, panel_wattage=425)


def test_panel_count_rounds_up():
    # 4.6795 kWp -> 4679.5 / 425 = 11.01 panels
    result = calculate_sizing(4.6795 * 3.5, divisor=3.5, panel_wattage=425)
    assert result.panel_count == 12


def test_display_rounding_does_not_feed_panel_count():
    # 4.2504 kWp displays as 4.25 (exactly 10 panels) but needs an 11th
    result = calculate_sizing(4.2504, divisor=1, panel_wattage=425)
    assert result.needed_kwp == 4.25
    assert result.panel_count == 11


def test_zero_and_negative_energy_not_special_cased():
    assert calculate_sizing(0).panel_count == 0
    negative = calculate_sizing(-7)
    assert negative.needed_kwp == -2.0
    assert negative.panel_count < 0


def test_divisor_from_hsp_and_efficiency():
    assert sizing_divisor() == 3.5
    assert sizing_divisor(5.0, 80) == pytest.approx(4.0)


def test_sizing_for_config():
    config = QuoteConfig(panel_wattage=500, system_efficiency_percent=80, peak_sun_hours=5.0)
    result = sizing_for_config(20.0, config)
    assert result.divisor == pytest.approx(4.0)
    assert result.needed_kwp == 5.0
    assert result.panel_count == 10


def test_config_hsp_wins_over_lookup():
    config = QuoteConfig(peak_sun_hours=4.0)
    assert sizing_for_config(8.0, config, peak_sun_hours=5.4).divisor == 4.0
    assert sizing_for_config(8.0, QuoteConfig(), peak_sun_hours=5.4).divisor == 5.4
