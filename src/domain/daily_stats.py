"""
Daily occupancy / revenue statistics.

A night is one rental row whose effective date is the target day. Revenue,
nights and ADR are reported for the whole hotel and grouped by booking
source and by guest nationality.
"""

from dataclasses import dataclass, field

from src.domain.bookings import ReservationData, normalize_key


def _adr(revenue: float, nights: int) -> float:
    return revenue / nights if nights > 0 else 0.0


@dataclass
class GroupStats:
    reservation_count: int = 0
    revenue: float = 0.0
    nights: int = 0
    adr: float = 0.0

    def to_dict(self) -> dict:
        return {
            "reservationCount": self.reservation_count,
            "revenue": self.revenue,
            "nights": self.nights,
            "ADR": self.adr,
        }


@dataclass
class DayTotals:
    day: str
    reservations: int = 0
    revenue: float = 0.0
    nights: int = 0
    adr: float = 0.0
    cancellations: int = 0

    def to_dict(self) -> dict:
        return {
            "Day": self.day,
            "Reservations": self.reservations,
            "Revenue": self.revenue,
            "Nights": self.nights,
            "ADR": self.adr,
            "Cancellations": self.cancellations,
        }


@dataclass
class DailyStats:
    all: DayTotals
    sources: dict[str, GroupStats] = field(default_factory=dict)
    nationalities: dict[str, GroupStats] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "stats": {
                "all": self.all.to_dict(),
                "sources": {k: g.to_dict() for k, g in self.sources.items()},
                "nationalities": {k: g.to_dict() for k, g in self.nationalities.items()},
            }
        }


def compute_daily_stats(data: ReservationData, day: str) -> DailyStats:
    """Reduce ReservationData to the statistics of one YYYY-MM-DD day."""
    totals = DayTotals(day=day)
    sources: dict[str, GroupStats] = {}
    nationalities: dict[str, GroupStats] = {}

    for reservation in data.reservations:
        for tran in reservation.transactions:
            rents = [row.rent for row in tran.rental_rows if row.effective_date == day]
            if not rents:
                continue

            revenue = sum(rents)
            nights = len(rents)
            totals.reservations += 1
            totals.revenue += revenue
            totals.nights += nights

            for groups, key in (
                (sources, normalize_key(tran.source)),
                (nationalities, normalize_key(tran.nationality)),
            ):
                group = groups.setdefault(key, GroupStats())
                group.reservation_count += 1
                group.revenue += revenue
                group.nights += nights

    totals.adr = _adr(totals.revenue, totals.nights)
    for group in (*sources.values(), *nationalities.values()):
        group.adr = _adr(group.revenue, group.nights)

    totals.cancellations = sum(1 for c in data.cancellations if c.cancel_date == day)
    return DailyStats(all=totals, sources=sources, nationalities=nationalities)


@dataclass
class BookingTotals:
    """Whole-payload totals: one reservation per transaction, one night per rental row."""

    reservations: int = 0
    revenue: float = 0.0
    nights: int = 0
    adr: float = 0.0

    def to_dict(self) -> dict:
        return {
            "Reservations": self.reservations,
            "Revenue": self.revenue,
            "Nights": self.nights,
            "ADR": self.adr,
        }


def compute_booking_totals(data: ReservationData) -> BookingTotals:
    totals = BookingTotals()
    for reservation in data.reservations:
        for tran in reservation.transactions:
            totals.reservations += 1
            totals.revenue += tran.total_amount
            totals.nights += len(tran.rental_rows)
    totals.adr = _adr(totals.revenue, totals.nights)
    return totals
