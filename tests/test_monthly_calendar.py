"""
Monthly room-type calendar over ReservationData.
"""

import pytest

from src.domain.bookings import (
    BookingTransaction,
    RentalRow,
    Reservation,
    ReservationData,
    from_booking_list_response,
    from_bookings_response,
)
from src.domain.monthly_calendar import compute_monthly_calendar, days_in_month
from tests.payloads import booking_list_entry, bookings_payload, rental, tran

MONTH = "2025-08"


def _payload():
    return from_bookings_response(bookings_payload(
        [tran([rental("2025-08-01", 100), rental("2025-08-02", 100)], code="DBL", name="Double Room")],
        [tran([rental("2025-08-02", 80, code="SGL", name="Single Room"), rental("2025-08-31", 80)],
              code="DBL", name="Double Room")],
        [tran([rental("2025-07-31", 90), rental("2025-09-01", 90)], code="TRP", name="Triple")],
        [tran([rental("2025-08-15", 60)], code="", name="")],
    ))


@pytest.mark.parametrize(
    "month, expected",
    [("2025-02", 28), ("2024-02", 29), ("2000-02", 29), ("1900-02", 28),
     ("2025-04", 30), ("2025-08", 31), ("2025-12", 31)],
)
def test_days_in_month(month, expected):
    assert days_in_month(month) == expected


@pytest.mark.parametrize("month", ["2025-13", "2025-00", "2025-8", "August", "", "٢٠٢٥-٠٨"])
def test_malformed_month_key_raises(month):
    with pytest.raises(ValueError):
        days_in_month(month)


def test_february_non_leap_year_has_28_days():
    cal = compute_monthly_calendar(ReservationData(), "2025-02")

    assert cal.days_in_month == 28
    assert len(cal.totals_by_day) == 28
    assert cal.summary()["daysInMonth"] == 28


def test_rooms_keyed_by_row_code_then_transaction_code():
    cal = compute_monthly_calendar(_payload(), MONTH)

    assert set(cal.rooms) == {"DBL", "SGL", "unknown"}
    assert cal.rooms["SGL"].name == "Single Room"
    assert cal.rooms["unknown"].name == "Unknown Room Type"


def test_cells_marked_and_rent_accumulated():
    cal = compute_monthly_calendar(_payload(), MONTH)
    dbl = cal.rooms["DBL"]

    assert dbl.days[0].booked and dbl.days[0].rent == 100
    assert dbl.days[1].booked and dbl.days[1].rent == 100
    assert dbl.days[30].booked and dbl.days[30].rent == 80
    assert not dbl.days[2].booked and dbl.days[2].rent == 0
    assert (dbl.nights, dbl.revenue) == (3, 280)


def test_same_room_same_day_accumulates_in_one_cell():
    data = ReservationData(reservations=[
        Reservation("1", transactions=[BookingTransaction(room_type_code="DBL", rental_rows=[
            RentalRow("2025-08-05", 50), RentalRow("2025-08-05", 70),
        ])]),
    ])

    cal = compute_monthly_calendar(data, MONTH)

    assert cal.rooms["DBL"].days[4].rent == 120
    assert cal.rooms["DBL"].nights == 2
    assert cal.totals_by_day[4].nights == 2


def test_rows_outside_the_month_are_ignored():
    cal = compute_monthly_calendar(_payload(), MONTH)
    assert "TRP" not in cal.rooms


def test_out_of_range_or_unparseable_day_is_skipped():
    data = ReservationData(reservations=[
        Reservation("1", transactions=[BookingTransaction(room_type_code="DBL", rental_rows=[
            RentalRow("2025-02-30", 10), RentalRow("2025-02-00", 10), RentalRow("2025-02-x1", 10),
            RentalRow("2025-02-", 10), RentalRow("2025-02-28", 10),
        ])]),
    ])

    cal = compute_monthly_calendar(data, "2025-02")

    assert cal.total_nights == 1
    assert cal.rooms["DBL"].days[27].booked


def test_totals_by_day_and_summary():
    cal = compute_monthly_calendar(_payload(), MONTH)

    assert cal.totals_by_day[1].day == 2
    assert cal.totals_by_day[1].nights == 2
    assert cal.totals_by_day[1].revenue == 180
    assert cal.summary() == {
        "month": MONTH,
        "daysInMonth": 31,
        "totalRooms": 3,
        "totalNights": 5,
        "totalRevenue": 420,
    }


@pytest.mark.parametrize("month", ["2025-07", MONTH, "2025-09", "2026-01"])
def test_night_sums_agree(month):
    cal = compute_monthly_calendar(_payload(), month)

    by_day = sum(d.nights for d in cal.totals_by_day)
    by_room = sum(r.nights for r in cal.rooms.values())
    assert by_day == cal.summary()["totalNights"] == by_room
    assert sum(d.revenue for d in cal.totals_by_day) == pytest.approx(
        sum(r.revenue for r in cal.rooms.values())
    )


def test_same_input_gives_same_output():
    data = _payload()
    assert compute_monthly_calendar(data, MONTH).to_dict() == compute_monthly_calendar(data, MONTH).to_dict()


def test_wire_format():
    result = compute_monthly_calendar(_payload(), MONTH).to_dict()

    room = result["calendar"]["rooms"]["SGL"]
    assert room["code"] == "SGL"
    assert room["totals"] == {"nights": 1, "revenue": 80.0}
    assert len(room["days"]) == 31
    assert room["days"][1] == {"booked": True, "rent": 80.0}
    assert result["calendar"]["totalsByDay"][0] == {"day": 1, "revenue": 100.0, "nights": 1}
    assert result["summary"]["month"] == MONTH


def test_booking_list_stay_spanning_months():
    data = from_booking_list_response({"BookingList": [booking_list_entry("2025-08-30", 4, 400, room_type="Suite")]})

    aug = compute_monthly_calendar(data, "2025-08")
    sep = compute_monthly_calendar(data, "2025-09")

    assert aug.total_nights == 2
    assert sep.total_nights == 2
    assert aug.rooms["unknown"].name == "Suite"
