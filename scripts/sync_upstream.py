"""
Fetch a BookingList arrival window from the vendor and save it as JSON.

Bypasses the cache. Handy for capturing test fixtures or checking
credentials.

Usage:
    python scripts/sync_upstream.py 2025-08-01 2025-08-31 [output.json]
"""

import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.adapters.ipms_client import IpmsBookingListClient
from src.adapters.ports import VendorQuery
from src.config import Settings
from src.domain.bookings import from_booking_list_response
from src.domain.errors import UpstreamError, ValidationError
from src.domain.periods import parse_day

DEFAULT_OUTPUT = "tests/fixtures/booking_list.json"


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print(__doc__)
        return 2
    try:
        arrival_from, arrival_to = parse_day(argv[0]), parse_day(argv[1])
    except ValidationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    output_path = argv[2] if len(argv) > 2 else DEFAULT_OUTPUT

    settings = Settings.from_env()
    client = IpmsBookingListClient(
        hotel_code=settings.hotel_code,
        api_key=settings.api_key,
        base_url=settings.list_base,
    )
    try:
        data = client.fetch(VendorQuery(arrival_from, arrival_to))
    except UpstreamError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    parsed = from_booking_list_response(data)
    print(
        f"Found {len(parsed.reservations)} reservations and "
        f"{len(parsed.cancellations)} cancellations"
    )

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    print(f"Saved to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
