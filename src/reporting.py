"""
Report service: the only thing the HTTP layer talks to.

Resolves the day / month parameters, picks the cache key and vendor query
for the configured payload format, fetches (cache-first), maps the raw
payload to ReservationData and runs the aggregator.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from src.adapters.ports import VendorQuery
from src.domain.bookings import PAYLOAD_MAPPERS, ReservationData
from src.domain.daily_stats import BookingTotals, DailyStats, compute_booking_totals, compute_daily_stats
from src.domain.monthly_calendar import MonthlyCalendar, compute_monthly_calendar
from src.domain.periods import DEFAULT_TIMEZONE, month_bounds, resolve_day, resolve_month
from src.fetcher import Fetcher

log = logging.getLogger(__name__)

# The Bookings feed is not windowed, so one cache slot serves every request
BOOKINGS_CACHE_KEY = "bookings"


@dataclass
class ReportConfig:
    fetcher: Fetcher
    payload_format: str
    timezone: str = DEFAULT_TIMEZONE
    # BookingList is queried by arrival date; a stay is only seen if it
    # arrived at most this many days before the reported period
    stay_lookback_days: int = 30


class ReportService:

    def __init__(self, config: ReportConfig):
        if config.payload_format not in PAYLOAD_MAPPERS:
            raise ValueError(f"Unknown payload format: {config.payload_format!r}")
        self._cfg = config
        self._map = PAYLOAD_MAPPERS[config.payload_format]

    def _arrival_window(self, first: str, last: str) -> VendorQuery:
        start = date.fromisoformat(first)
        lookback = min(max(self._cfg.stay_lookback_days, 0), (start - date.min).days)
        return VendorQuery((start - timedelta(days=lookback)).isoformat(), last)

    def _load(self, key: str, first: str, last: str) -> ReservationData:
        if self._cfg.payload_format == "bookings":
            key = BOOKINGS_CACHE_KEY
        raw = self._cfg.fetcher.fetch_data(key, self._arrival_window(first, last))
        return self._map(raw)

    def _load_day(self, day: str) -> ReservationData:
        return self._load(day, day, day)

    def _load_month(self, month: str) -> ReservationData:
        first, last = month_bounds(month)
        return self._load(month, first, last)

    def daily_stats(self, day_param: str | None = None) -> DailyStats:
        day = resolve_day(day_param, self._cfg.timezone)
        stats = compute_daily_stats(self._load_day(day), day)
        log.info(
            "[stats] %s → R:%d N:%d $:%.2f",
            day, stats.all.reservations, stats.all.nights, stats.all.revenue,
        )
        return stats

    def monthly_calendar(self, month_param: str | None = None) -> MonthlyCalendar:
        month = resolve_month(month_param, self._cfg.timezone)
        result = compute_monthly_calendar(self._load_month(month), month)
        log.info(
            "[calendar] %s → rooms:%d N:%d $:%.2f",
            month, len(result.rooms), result.total_nights, result.total_revenue,
        )
        return result

    def report(self, day_param: str | None = None, month_param: str | None = None) -> DailyStats | MonthlyCalendar:
        """Monthly calendar when a month parameter is given, daily stats otherwise."""
        if month_param:
            return self.monthly_calendar(month_param)
        return self.daily_stats(day_param)

    def booking_totals(self) -> BookingTotals:
        """Totals over everything the vendor returns for today's window."""
        day = resolve_day(None, self._cfg.timezone)
        return compute_booking_totals(self._load_day(day))
