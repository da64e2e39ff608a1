from __future__ import annotations

import pytest

from fills.models import StatisticsSnapshot
from fills.services.statistics_service import StatisticsCalculator, compute_statistics


def test_empty_input_returns_zeroed_snapshot() -> None:
    stats = compute_statistics([])

    assert stats == StatisticsSnapshot.empty()
    assert stats.total_fills == 0
    assert stats.total_liters == 0
    assert stats.total_cost == 0
    assert stats.avg_price_per_liter == 0
    assert stats.avg_consumption == 0
    assert stats.last_fill_date is None
    assert stats.last_odometer is None
    assert stats.monthly_chart == []


def test_totals_skip_absent_values(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", liters=40, amount=70),
        make_fill(date="2024-01-15", liters=None, amount=50),
        make_fill(date="2024-02-01", liters=30.5, amount=None),
    ]

    stats = compute_statistics(fills)

    assert stats.total_fills == 3
    assert stats.total_liters == pytest.approx(70.5)
    assert stats.total_cost == pytest.approx(120.0)
    assert stats.avg_price_per_liter == pytest.approx(120.0 / 70.5)


def test_avg_price_is_zero_without_liters(make_fill) -> None:
    stats = compute_statistics(
        [make_fill(amount=60), make_fill(date="2024-01-02", amount=40)]
    )

    assert stats.total_cost == pytest.approx(100.0)
    assert stats.total_liters == 0
    assert stats.avg_price_per_liter == 0


@pytest.mark.parametrize("size", [0, 1, 2, 5, 20])
def test_total_fills_matches_input_length(make_fill, size: int) -> None:
    fills = [make_fill(date=f"2024-01-{day + 1:02d}", liters=10) for day in range(size)]
    assert compute_statistics(fills).total_fills == size


def test_odometer_deltas_give_consumption(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", odometer=10000, liters=None),
        make_fill(date="2024-02-01", odometer=10500, liters=40),
    ]

    assert compute_statistics(fills).avg_consumption == pytest.approx(8.0)


def test_odometer_deltas_use_date_order_not_input_order(make_fill) -> None:
    fills = [
        make_fill(date="2024-02-01", odometer=10500, liters=40),
        make_fill(date="2024-01-01", odometer=10000, liters=25),
    ]

    assert compute_statistics(fills).avg_consumption == pytest.approx(8.0)


def test_odometer_deltas_skip_non_increasing_readings(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", odometer=10000, liters=20),
        make_fill(date="2024-01-10", odometer=9900, liters=30),
        make_fill(date="2024-01-20", odometer=10400, liters=40),
    ]

    # Only 9900 -> 10400 counts: 40 L over 500 km
    assert StatisticsCalculator.consumption_from_odometer(fills) == pytest.approx(8.0)


def test_odometer_pairs_need_liters_on_later_fill(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", odometer=10000, liters=40),
        make_fill(date="2024-01-20", odometer=10500, liters=None),
    ]

    assert StatisticsCalculator.consumption_from_odometer(fills) == 0.0


def test_interval_estimate_assumes_daily_distance(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", liters=40),
        make_fill(date="2024-01-31", liters=40),
    ]

    # 30 days * 35 km = 1050 km
    stats = compute_statistics(fills)
    assert stats.avg_consumption == pytest.approx(40 / 1050 * 100)
    assert stats.avg_consumption == pytest.approx(3.81, abs=0.01)


def test_interval_estimate_ignores_long_gaps(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", liters=40),
        make_fill(date="2024-06-01", liters=40),
        make_fill(date="2024-07-01", liters=40),
    ]

    estimate = StatisticsCalculator.consumption_from_intervals(fills)
    assert estimate == pytest.approx(40 / 1050 * 100)


def test_interval_of_exactly_ninety_days_is_discarded(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", liters=40),
        make_fill(date="2024-03-31", liters=40),
    ]

    assert StatisticsCalculator.consumption_from_intervals(fills) == 0.0


def test_implausible_interval_estimate_falls_back_to_fill_volume(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", liters=40),
        make_fill(date="2024-01-02", liters=40),
    ]

    # 40 L over 35 km is far above the plausible band
    assert StatisticsCalculator.consumption_from_intervals(fills) == 0.0
    assert compute_statistics(fills).avg_consumption == pytest.approx(8.0)


def test_fill_volume_fallback_within_clamp(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", liters=3.0),
        make_fill(date="2024-03-30", liters=3.5),
    ]

    assert compute_statistics(fills).avg_consumption == pytest.approx(6.5)


def test_fill_volume_fallback_clamps_low_values(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", liters=2),
        make_fill(date="2024-01-01", liters=2),
    ]

    assert compute_statistics(fills).avg_consumption == pytest.approx(6.0)


def test_fill_volume_fallback_needs_two_fills(make_fill) -> None:
    assert compute_statistics([make_fill(liters=40)]).avg_consumption == 0.0


def test_zero_liters_on_odometer_pair_yields_no_estimate(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-01", odometer=10000, liters=0),
        make_fill(date="2024-01-20", odometer=10500, liters=0),
    ]

    assert compute_statistics(fills).avg_consumption == 0.0


def test_last_fill_fields_come_from_latest_date(make_fill) -> None:
    fills = [
        make_fill(date="2024-03-01", odometer=12000),
        make_fill(date="2024-05-01", odometer=None),
        make_fill(date="2024-04-01", odometer=13000),
    ]

    stats = compute_statistics(fills)
    assert stats.last_fill_date == "2024-05-01"
    assert stats.last_odometer is None


def test_monthly_chart_keeps_input_order_odometer(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-10", amount=50.123, odometer=1000),
        make_fill(date="2024-01-05", amount=20.001, odometer=900),
        make_fill(date="2024-02-01", amount=30, odometer=None),
    ]

    chart = compute_statistics(fills).monthly_chart

    assert [bucket.month for bucket in chart] == ["2024-01", "2024-02"]
    january, february = chart
    assert january.amount == pytest.approx(70.12)
    assert january.count == 2
    # Last record visited for the month wins, even though it is older
    assert january.odometer == 900
    assert february.amount == pytest.approx(30.0)
    assert february.count == 1
    assert february.odometer is None


def test_monthly_chart_counts_fills_without_amount(make_fill) -> None:
    chart = compute_statistics(
        [make_fill(date="2024-01-10", amount=None), make_fill(date="2024-01-11")]
    ).monthly_chart

    assert len(chart) == 1
    assert chart[0].amount == 0
    assert chart[0].count == 2


def test_monthly_chart_keeps_latest_twelve_months(make_fill) -> None:
    months = [f"2023-{m:02d}-15" for m in range(1, 13)] + ["2024-01-15", "2024-02-15"]
    fills = [make_fill(date=d, amount=10) for d in reversed(months)]

    chart = compute_statistics(fills).monthly_chart

    assert len(chart) == 12
    assert chart[0].month == "2023-03"
    assert chart[-1].month == "2024-02"
    assert [b.month for b in chart] == sorted(b.month for b in chart)


def test_compute_statistics_is_pure(make_fill) -> None:
    fills = [
        make_fill(date="2024-01-10", odometer=1000, liters=30, amount=55),
        make_fill(date="2024-01-01", odometer=600, liters=35, amount=60),
    ]
    before = [f.model_copy() for f in fills]

    first = compute_statistics(fills)
    second = compute_statistics(fills)

    assert first == second
    assert first is not second
    assert fills == before


def test_timestamps_are_bucketed_by_calendar_day(make_fill) -> None:
    fill = make_fill(date="2024-01-31T18:00:00Z", amount=10)

    assert fill.date == "2024-01-31"
    assert compute_statistics([fill]).monthly_chart[0].month == "2024-01"
