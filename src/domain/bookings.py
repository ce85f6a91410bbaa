"""
Typed view of the vendor reservation data.

The vendor ships two unrelated JSON shapes depending on the endpoint:

  - "Bookings" (POST):   Reservations.Reservation[].BookingTran[].RentalInfo[]
                         plus Reservations.CancelReservation[]
  - "BookingList" (GET): BookingList[] of flat booking rows

Both are mapped once, here, into ReservationData. Aggregators only ever see
ReservationData, so every missing or malformed field is defaulted in this
module and nowhere else.
"""

import math
from dataclasses import dataclass, field
from datetime import date, timedelta

UNKNOWN_KEY = "unknown"

# Longest stay a BookingList row may expand to; longer values are clamped
MAX_STAY_NIGHTS = 365


@dataclass
class RentalRow:
    """One night-level billing line of a booking transaction."""

    effective_date: str  # YYYY-MM-DD
    rent: float = 0.0
    room_type_code: str = ""
    room_type_name: str = ""


@dataclass
class BookingTransaction:
    room_type_code: str = ""
    room_type_name: str = ""
    source: str = ""
    nationality: str = ""
    total_amount: float = 0.0
    rental_rows: list[RentalRow] = field(default_factory=list)


@dataclass
class Reservation:
    reservation_id: str
    arrival: str = ""
    departure: str = ""
    transactions: list[BookingTransaction] = field(default_factory=list)


@dataclass
class Cancellation:
    reservation_id: str
    cancelled_at: str  # "YYYY-MM-DD" or "YYYY-MM-DD HH:MM[:SS]"

    @property
    def cancel_date(self) -> str:
        return self.cancelled_at.split(" ", 1)[0]


@dataclass
class ReservationData:
    reservations: list[Reservation] = field(default_factory=list)
    cancellations: list[Cancellation] = field(default_factory=list)


def normalize_key(value) -> str:
    """Grouping key for source / nationality: trimmed, lower-case, or 'unknown'."""
    if not isinstance(value, str):
        return UNKNOWN_KEY
    key = value.strip().lower()
    return key or UNKNOWN_KEY


def _number(value) -> float:
    """Finite float of value; anything else (including NaN and infinities) is 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return 0.0
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _items(value) -> list[dict]:
    # XML-to-JSON feeds collapse one-element lists into a bare object
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return [v for v in value if isinstance(v, dict)]
    return []


def _first(*values) -> str:
    for v in values:
        text = _text(v)
        if text:
            return text
    return ""


# ---------------------------------------------------------------------------
# "Bookings" tree
# ---------------------------------------------------------------------------


def from_bookings_response(raw) -> ReservationData:
    """Map a POST Request_Type=Bookings response to ReservationData."""
    root = raw.get("Reservations") if isinstance(raw, dict) else None
    if not isinstance(root, dict):
        return ReservationData()

    reservations = []
    for r in _items(root.get("Reservation")):
        transactions = []
        for b in _items(r.get("BookingTran")):
            rows = [
                RentalRow(
                    effective_date=_text(ri.get("EffectiveDate")),
                    rent=_number(ri.get("Rent")),
                    room_type_code=_text(ri.get("RoomTypeCode")),
                    room_type_name=_text(ri.get("RoomTypeName")),
                )
                for ri in _items(b.get("RentalInfo"))
            ]
            transactions.append(
                BookingTransaction(
                    room_type_code=_text(b.get("RoomTypeCode")),
                    room_type_name=_text(b.get("RoomTypeName")),
                    source=_first(b.get("Source"), r.get("Source")),
                    nationality=_first(
                        b.get("Nationality"), b.get("Country"),
                        r.get("Nationality"), r.get("Country"),
                    ),
                    total_amount=_number(b.get("TotalAmountBeforeTax")),
                    rental_rows=rows,
                )
            )
        reservations.append(
            Reservation(
                reservation_id=_first(r.get("ReservationNo"), r.get("ReservationId")),
                arrival=_first(r.get("ArrivalDate"), r.get("Start")),
                departure=_first(r.get("DepartureDate"), r.get("End")),
                transactions=transactions,
            )
        )

    cancellations = [
        Cancellation(
            reservation_id=_first(c.get("ReservationNo"), c.get("ReservationId")),
            cancelled_at=_text(c.get("Canceldatetime")),
        )
        for c in _items(root.get("CancelReservation"))
    ]
    return ReservationData(reservations=reservations, cancellations=cancellations)


# ---------------------------------------------------------------------------
# "BookingList" rows
# ---------------------------------------------------------------------------


def _parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _night_count(entry: dict, arrival: date | None) -> int:
    nights = int(_number(entry.get("NoOfNights")))
    if nights <= 0:
        departure = _parse_date(_text(entry.get("DepartureDate")))
        if arrival and departure and departure > arrival:
            nights = (departure - arrival).days
    return min(max(nights, 0), MAX_STAY_NIGHTS)


def _booking_list_entry(entry: dict) -> Reservation:
    arrival_text = _text(entry.get("ArrivalDate"))
    arrival = _parse_date(arrival_text)
    nights = _night_count(entry, arrival)
    if arrival:
        nights = min(nights, (date.max - arrival).days + 1)
    due = _number(entry.get("DueAmount"))

    rows = []
    if arrival and nights:
        nightly = due / nights
        rows = [
            RentalRow(effective_date=(arrival + timedelta(days=i)).isoformat(), rent=nightly)
            for i in range(nights)
        ]

    transaction = BookingTransaction(
        room_type_code=_first(entry.get("RoomTypeCode"), entry.get("RoomTypeId")),
        room_type_name=_first(entry.get("RoomTypeName"), entry.get("RoomType")),
        source=_text(entry.get("Source")),
        nationality=_first(entry.get("Country"), entry.get("Nationality")),
        total_amount=due,
        rental_rows=rows,
    )
    return Reservation(
        reservation_id=_first(entry.get("ReservationNo"), entry.get("BookingId")),
        arrival=arrival_text,
        departure=_text(entry.get("DepartureDate")),
        transactions=[transaction],
    )


def from_booking_list_response(raw) -> ReservationData:
    """
    Map a GET request_type=BookingList response to ReservationData.

    The list endpoint has no nightly rent, so each booking is expanded into
    one rental row per night from its arrival date, DueAmount split evenly.
    Cancelled bookings (non-empty CancelDate) become cancellations only.
    """
    entries = raw.get("BookingList") if isinstance(raw, dict) else None
    data = ReservationData()
    for entry in _items(entries):
        cancelled_at = _text(entry.get("CancelDate"))
        if cancelled_at:
            data.cancellations.append(
                Cancellation(
                    reservation_id=_first(entry.get("ReservationNo"), entry.get("BookingId")),
                    cancelled_at=cancelled_at,
                )
            )
            continue
        data.reservations.append(_booking_list_entry(entry))
    return data


PAYLOAD_MAPPERS = {
    "bookings": from_bookings_response,
    "booking_list": from_booking_list_response,
}
