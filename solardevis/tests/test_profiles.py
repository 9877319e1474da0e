import pytest

from solardevis.models.quote import LineItem
from solardevis.services.csv_ingest import parse_csv
from solardevis.services.profiles import calculate_totals, group_by_client


def _item(id, client="C", address="A", **kw):
    return LineItem(id=id, client=client, address=address, **kw)


def test_grouping_is_a_partition(audit_csv):
    items = parse_csv(audit_csv)
    profiles = group_by_client(items)

    assert [p.name for p in profiles] == ["Jean Dupont", "Société Soleil"]
    grouped_ids = [i.id for p in profiles for i in p.items]
    assert sorted(grouped_ids) == sorted(i.id for i in items)
    assert len(grouped_ids) == len(set(grouped_ids))


def test_metadata_from_first_item(audit_csv):
    jean = group_by_client(parse_csv(audit_csv))[0]
    # the pump row has a different site and date; the first row wins
    assert jean.site_name == "Maison"
    assert jean.visit_date == "2024-05-02"
    assert len(jean.items) == 3


def test_totals(audit_csv):
    jean = group_by_client(parse_csv(audit_csv))[0]
    # 0.15*24*1 + 0.01*6*8 + 0.75*2*1
    assert jean.total_daily_kwh == pytest.approx(3.6 + 0.48 + 1.5)
    assert jean.total_max_w == pytest.approx(150 + 80 + 750)


def test_same_client_different_address_is_separate():
    items = [_item("1", address="A"), _item("2", address="B"), _item("3", address="A")]
    profiles = group_by_client(items)
    assert [len(p.items) for p in profiles] == [2, 1]
    assert [p.address for p in profiles] == ["A", "B"]


def test_totals_order_independent_and_idempotent():
    items = [
        _item("1", hourly_kwh=0.5, duration_h=4, quantity=2, peak_w=500),
        _item("2", hourly_kwh=0.1, duration_h=10, quantity=3, peak_w=60),
        _item("3", hourly_kwh=1.2, duration_h=1.5, quantity=1, peak_w=1200),
    ]
    first = calculate_totals(items)
    again = calculate_totals(items)
    reversed_ = calculate_totals(list(reversed(items)))

    assert first == again
    assert reversed_.total_daily_kwh == pytest.approx(first.total_daily_kwh)
    assert reversed_.total_max_w == pytest.approx(first.total_max_w)


def test_sizing_excluded_items():
    items = [
        _item("1", peak_w=1000, quantity=1, hourly_kwh=1, duration_h=1),
        _item("2", peak_w=300, quantity=2, hourly_kwh=0.3, duration_h=2, include_in_sizing=False),
    ]
    # default: every item counts toward peak power
    assert calculate_totals(items).total_max_w == 1600
    # sizing_only: excluded accessories are billed but not sized
    sized = calculate_totals(items, sizing_only=True)
    assert sized.total_max_w == 1000
    assert sized.total_daily_kwh == pytest.approx(1 + 1.2)


def test_empty_items():
    totals = calculate_totals([])
    assert totals.total_daily_kwh == 0
    assert totals.total_max_w == 0
    assert group_by_client([]) == []
