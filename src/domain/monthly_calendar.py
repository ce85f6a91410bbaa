"""
Monthly occupancy calendar per room type.

Each rental row dated inside the month books one cell of its room type's
calendar. Rent is accumulated into the cell, into the room's totals and
into the hotel-wide totals of that day.
"""

import calendar
from dataclasses import dataclass, field

from src.domain.bookings import ReservationData

UNKNOWN_ROOM_CODE = "unknown"
UNKNOWN_ROOM_NAME = "Unknown Room Type"


@dataclass
class DayCell:
    booked: bool = False
    rent: float = 0.0


@dataclass
class RoomCalendar:
    code: str
    name: str
    days: list[DayCell]  # index 0 is day 1
    nights: int = 0
    revenue: float = 0.0

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "days": [{"booked": c.booked, "rent": c.rent} for c in self.days],
            "totals": {"nights": self.nights, "revenue": self.revenue},
        }


@dataclass
class DayTotal:
    day: int
    revenue: float = 0.0
    nights: int = 0


@dataclass
class MonthlyCalendar:
    month: str
    days_in_month: int
    rooms: dict[str, RoomCalendar] = field(default_factory=dict)
    totals_by_day: list[DayTotal] = field(default_factory=list)

    @property
    def total_nights(self) -> int:
        return sum(d.nights for d in self.totals_by_day)

    @property
    def total_revenue(self) -> float:
        return sum(d.revenue for d in self.totals_by_day)

    def summary(self) -> dict:
        return {
            "month": self.month,
            "daysInMonth": self.days_in_month,
            "totalRooms": len(self.rooms),
            "totalNights": self.total_nights,
            "totalRevenue": self.total_revenue,
        }

    def to_dict(self) -> dict:
        return {
            "summary": self.summary(),
            "calendar": {
                "rooms": {code: room.to_dict() for code, room in self.rooms.items()},
                "totalsByDay": [
                    {"day": d.day, "revenue": d.revenue, "nights": d.nights}
                    for d in self.totals_by_day
                ],
            },
        }


def days_in_month(month: str) -> int:
    """Number of days of a YYYY-MM month. Raises ValueError on a malformed key."""
    year, _, mon = month.partition("-")
    if len(year) != 4 or len(mon) != 2 or not (year + mon).isascii() or not (year + mon).isdigit():
        raise ValueError(f"Invalid month key: {month!r}")
    if not 1 <= int(mon) <= 12:
        raise ValueError(f"Invalid month key: {month!r}")
    return calendar.monthrange(int(year), int(mon))[1]


def _day_of_month(effective_date: str) -> int | None:
    part = effective_date[8:10]
    return int(part) if len(part) == 2 and part.isascii() and part.isdigit() else None


def compute_monthly_calendar(data: ReservationData, month: str) -> MonthlyCalendar:
    """Reduce ReservationData to the room-type calendar of one YYYY-MM month."""
    n_days = days_in_month(month)
    result = MonthlyCalendar(
        month=month,
        days_in_month=n_days,
        totals_by_day=[DayTotal(day=i + 1) for i in range(n_days)],
    )
    prefix = month + "-"

    for reservation in data.reservations:
        for tran in reservation.transactions:
            for row in tran.rental_rows:
                if not row.effective_date.startswith(prefix):
                    continue
                day = _day_of_month(row.effective_date)
                if day is None or not 1 <= day <= n_days:
                    continue

                code = row.room_type_code or tran.room_type_code or UNKNOWN_ROOM_CODE
                room = result.rooms.get(code)
                if room is None:
                    name = row.room_type_name or tran.room_type_name or UNKNOWN_ROOM_NAME
                    room = RoomCalendar(code=code, name=name, days=[DayCell() for _ in range(n_days)])
                    result.rooms[code] = room

                cell = room.days[day - 1]
                cell.booked = True
                cell.rent += row.rent
                room.nights += 1
                room.revenue += row.rent

                totals = result.totals_by_day[day - 1]
                totals.nights += 1
                totals.revenue += row.rent

    return result
