#!/usr/bin/env python3
"""
Terminal report — daily stats or a monthly room calendar.

Usage (from project root):
    python scripts/report.py                 # today's stats
    python scripts/report.py day 2025-08-10  # stats for a day
    python scripts/report.py month 2025-08   # room-type calendar for a month
"""

import os
import sys

# Allow running as `python scripts/report.py` from project root.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.adapters.factory import create_report_service
from src.config import Settings
from src.domain.daily_stats import DailyStats, GroupStats
from src.domain.errors import UpstreamError
from src.domain.monthly_calendar import MonthlyCalendar


def _group_table(title: str, groups: dict[str, GroupStats]) -> None:
    print(f"\n{title}")
    print(f"  {'Key':<24}  {'Res':>4}  {'Nights':>6}  {'Revenue':>10}  {'ADR':>8}")
    print("  " + "-" * 60)
    for key, g in sorted(groups.items(), key=lambda kv: -kv[1].revenue):
        print(f"  {key[:24]:<24}  {g.reservation_count:>4}  {g.nights:>6}  {g.revenue:>10.2f}  {g.adr:>8.2f}")


def print_daily(stats: DailyStats) -> None:
    a = stats.all
    print(f"\n{'=' * 60}")
    print(f"  {a.day}  |  reservations {a.reservations}  |  cancellations {a.cancellations}")
    print(f"  nights {a.nights}  |  revenue {a.revenue:.2f}  |  ADR {a.adr:.2f}")
    print(f"{'=' * 60}")
    _group_table("By source", stats.sources)
    _group_table("By nationality", stats.nationalities)
    print()


def print_monthly(cal: MonthlyCalendar) -> None:
    header = "".join(f"{d % 10}" for d in range(1, cal.days_in_month + 1))
    print(f"\n{cal.month}: {len(cal.rooms)} room type(s), "
          f"{cal.total_nights} nights, revenue {cal.total_revenue:.2f}\n")
    print(f"  {'Room type':<20}  {header}  {'Nights':>6}  {'Revenue':>10}")
    for room in cal.rooms.values():
        row = "".join("#" if c.booked else "." for c in room.days)
        print(f"  {room.name[:20]:<20}  {row}  {room.nights:>6}  {room.revenue:>10.2f}")
    print()


def main(argv: list[str]) -> int:
    service = create_report_service(Settings.from_env())
    command = argv[0] if argv else "day"
    value = argv[1] if len(argv) > 1 else None
    try:
        if command == "day":
            print_daily(service.daily_stats(value))
        elif command == "month":
            print_monthly(service.monthly_calendar(value))
        else:
            print(__doc__)
            return 2
    except UpstreamError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
