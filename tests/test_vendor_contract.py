"""
Adapter contract tests for VendorGateway — both simulator and real.

The same contract is verified against:
  - SimulatorVendorGateway  (always runs, no credentials needed)
  - IpmsBookingListClient   (skipped if HOTEL_CODE / API_KEY are not set)
"""

import os

import pytest

from src.adapters.ipms_client import IpmsBookingListClient
from src.adapters.ports import VendorQuery
from src.adapters.simulator_vendor import SimulatorVendorGateway
from src.domain.errors import UpstreamHTTPError
from tests.contracts.vendor_gateway_contract import VendorGatewayContract
from tests.payloads import booking_list_entry, example_payload

# ---------------------------------------------------------------------------
# Simulator — always runs
# ---------------------------------------------------------------------------


class TestSimulatorBookingsContract(VendorGatewayContract):

    def create_gateway(self):
        return SimulatorVendorGateway(example_payload(), payload_format="bookings")


class TestSimulatorBookingListContract(VendorGatewayContract):

    def create_gateway(self):
        return SimulatorVendorGateway(
            {"BookingList": [booking_list_entry("2025-08-10", 2, 300)]},
            payload_format="booking_list",
        )

    def test_records_queries(self):
        gw = self.create_gateway()
        gw.fetch(VendorQuery("2025-08-01", "2025-08-31"))
        assert gw.calls == 1
        assert gw.queries[0].arrival_to == "2025-08-31"

    def test_fail_with_raises_until_cleared(self):
        gw = self.create_gateway()
        gw.fail_with(UpstreamHTTPError(503, "down"))
        with pytest.raises(UpstreamHTTPError):
            gw.fetch(VendorQuery("2025-08-10", "2025-08-10"))
        gw.fail_with(None)
        assert "BookingList" in gw.fetch(VendorQuery("2025-08-10", "2025-08-10"))


# ---------------------------------------------------------------------------
# Real vendor API — skipped without credentials
# ---------------------------------------------------------------------------

HOTEL_CODE = os.environ.get("HOTEL_CODE", "")
API_KEY = os.environ.get("API_KEY", "") or os.environ.get("AUTH_CODE", "")

CREDS_AVAILABLE = bool(HOTEL_CODE) and bool(API_KEY)


@pytest.mark.skipif(
    not CREDS_AVAILABLE,
    reason="HOTEL_CODE or API_KEY not set",
)
class TestIpmsBookingListContract(VendorGatewayContract):

    def create_gateway(self):
        return IpmsBookingListClient(hotel_code=HOTEL_CODE, api_key=API_KEY)
