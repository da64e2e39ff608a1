"""Fill statistics: totals, price and estimated fuel consumption.

Odometer readings are often missing, so average consumption is estimated
with successive fallbacks. The first estimate that yields a non-zero value
wins:

1. odometer deltas between consecutive fills (exact);
2. days between consecutive fills at an assumed daily distance, kept only
   when the result lands in a plausible L/100km band;
3. average liters per fill, scaled and clamped to a typical range.

Everything here is pure and total. Absent or malformed values degrade to
0 or None; nothing raises.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from core.constants import (
    ASSUMED_DAILY_DISTANCE_KM,
    CRUDE_CONSUMPTION_MAX,
    CRUDE_CONSUMPTION_MIN,
    CRUDE_LITERS_MULTIPLIER,
    MAX_FILL_INTERVAL_DAYS,
    MONTHLY_CHART_LIMIT,
    PLAUSIBLE_CONSUMPTION_MAX,
    PLAUSIBLE_CONSUMPTION_MIN,
)
from date_utils import days_between, month_key, parse_calendar_date
from fills.models import FuelFillRecord, MonthlyBucket, StatisticsSnapshot

logger = logging.getLogger(__name__)


def _date_sort_key(record: FuelFillRecord) -> date:
    # Unreadable dates sort first; sorted() is stable so ties keep input order.
    return parse_calendar_date(record.date) or date.min


def sort_by_date(records: Iterable[FuelFillRecord]) -> list[FuelFillRecord]:
    """Return records in ascending date order."""
    return sorted(records, key=_date_sort_key)


class StatisticsCalculator:
    """Turns a collection of fills into a StatisticsSnapshot."""

    @staticmethod
    def compute(records: Sequence[FuelFillRecord]) -> StatisticsSnapshot:
        """Compute the full statistics snapshot.

        Args:
            records: Fills in any order. The order matters only for the
                per-month odometer in the monthly chart.

        Returns:
            Snapshot with zeroed numbers and None dates for empty input
        """
        if not records:
            return StatisticsSnapshot.empty()

        total_liters = sum(r.liters for r in records if r.liters is not None)
        total_cost = sum(r.amount for r in records if r.amount is not None)
        avg_price = total_cost / total_liters if total_liters > 0 else 0.0

        chronological = sort_by_date(records)
        last_fill = chronological[-1]

        return StatisticsSnapshot(
            total_fills=len(records),
            total_liters=total_liters,
            total_cost=total_cost,
            avg_price_per_liter=avg_price,
            avg_consumption=StatisticsCalculator.estimate_consumption(
                chronological
            ),
            last_fill_date=last_fill.date,
            last_odometer=last_fill.odometer,
            monthly_chart=StatisticsCalculator.build_monthly_chart(records),
        )

    @staticmethod
    def estimate_consumption(records: Sequence[FuelFillRecord]) -> float:
        """Estimated L/100km using the first estimator that yields a value."""
        estimators = (
            StatisticsCalculator.consumption_from_odometer,
            StatisticsCalculator.consumption_from_intervals,
            StatisticsCalculator.consumption_from_fill_volume,
        )
        for estimator in estimators:
            estimate = estimator(records)
            if estimate > 0:
                logger.debug(
                    "Consumption %.3f L/100km from %s", estimate, estimator.__name__
                )
                return estimate
        return 0.0

    @staticmethod
    def consumption_from_odometer(records: Sequence[FuelFillRecord]) -> float:
        """Liters over distance between consecutive odometer readings.

        A pair counts when both fills have an odometer, the later one has
        liters, and the odometer moved forward.
        """
        distance_sum = 0
        liters_sum = 0.0

        chronological = sort_by_date(records)
        for prev, curr in zip(chronological, chronological[1:]):
            if prev.odometer is None or curr.odometer is None:
                continue
            if curr.liters is None:
                continue
            distance = curr.odometer - prev.odometer
            if distance > 0:
                distance_sum += distance
                liters_sum += curr.liters

        if distance_sum <= 0:
            return 0.0
        return liters_sum / distance_sum * 100

    @staticmethod
    def consumption_from_intervals(records: Sequence[FuelFillRecord]) -> float:
        """Liters over an assumed daily distance for plausible fill intervals.

        Intervals of 90 days or more are treated as missing history and
        skipped. Estimates outside the plausible band are discarded.
        """
        dated: list[tuple[date, float]] = []
        for record in records:
            if record.liters is None or record.liters <= 0:
                continue
            fill_date = parse_calendar_date(record.date)
            if fill_date is None:
                continue
            dated.append((fill_date, record.liters))
        dated.sort(key=lambda item: item[0])

        total_liters = 0.0
        total_days = 0
        intervals = 0
        for (prev_date, _), (curr_date, curr_liters) in zip(dated, dated[1:]):
            gap = days_between(prev_date, curr_date)
            if 0 < gap < MAX_FILL_INTERVAL_DAYS:
                total_liters += curr_liters
                total_days += gap
                intervals += 1

        if not intervals or total_days <= 0:
            return 0.0

        total_distance = ASSUMED_DAILY_DISTANCE_KM * total_days
        estimate = total_liters / total_distance * 100
        if PLAUSIBLE_CONSUMPTION_MIN <= estimate <= PLAUSIBLE_CONSUMPTION_MAX:
            return estimate

        logger.debug("Discarding implausible interval estimate %.2f", estimate)
        return 0.0

    @staticmethod
    def consumption_from_fill_volume(records: Sequence[FuelFillRecord]) -> float:
        """Last resort: scaled mean fill volume, clamped to a typical range."""
        volumes = [r.liters for r in records if r.liters is not None and r.liters > 0]
        if len(volumes) < 2:
            return 0.0

        avg_liters_per_fill = sum(volumes) / len(volumes)
        estimate = avg_liters_per_fill * CRUDE_LITERS_MULTIPLIER
        return min(max(estimate, CRUDE_CONSUMPTION_MIN), CRUDE_CONSUMPTION_MAX)

    @staticmethod
    def build_monthly_chart(records: Sequence[FuelFillRecord]) -> list[MonthlyBucket]:
        """Group fills by month, oldest first, keeping the latest 12 months.

        Records are visited in the order given. A bucket's odometer is the
        one from the last record visited for that month that had one.
        """
        buckets: dict[str, MonthlyBucket] = {}

        for record in records:
            key = month_key(record.date)
            if key is None:
                continue

            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = MonthlyBucket(month=key)

            if record.amount is not None:
                bucket.amount += record.amount
            bucket.count += 1
            if record.odometer is not None:
                bucket.odometer = record.odometer

        recent = sorted(buckets.values(), key=lambda b: b.month)[-MONTHLY_CHART_LIMIT:]
        for bucket in recent:
            bucket.amount = round(bucket.amount, 2)
        return recent


def compute_statistics(records: Sequence[FuelFillRecord]) -> StatisticsSnapshot:
    return StatisticsCalculator.compute(records)
