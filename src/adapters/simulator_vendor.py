from src.domain.errors import UpstreamError

from .ports import VendorGateway, VendorQuery


class SimulatorVendorGateway(VendorGateway):
    """
    In-memory fake for testing. No mocking framework needed.

    Test helpers:
        set_payload()   — the raw payload returned by fetch(); BookingList rows
                          are filtered to the query's arrival window
        fail_with()     — make the next fetch() calls raise this error
        queries         — list of VendorQuery received by fetch()
    """

    def __init__(self, payload: dict | None = None, payload_format: str = "bookings"):
        self.payload_format = payload_format
        self._payload = payload if payload is not None else {}
        self._error: UpstreamError | None = None
        self.queries: list[VendorQuery] = []

    def set_payload(self, payload: dict) -> None:
        self._payload = payload

    def fail_with(self, error: UpstreamError | None) -> None:
        """Test helper: raise error on every fetch() until cleared with None."""
        self._error = error

    @property
    def calls(self) -> int:
        return len(self.queries)

    def fetch(self, query: VendorQuery) -> dict:
        self.queries.append(query)
        if self._error is not None:
            raise self._error
        rows = self._payload.get("BookingList")
        if self.payload_format != "booking_list" or not isinstance(rows, list):
            return self._payload
        return {
            **self._payload,
            "BookingList": [
                r for r in rows if isinstance(r, dict)
                and query.arrival_from <= str(r.get("ArrivalDate", ""))[:10] <= query.arrival_to
            ],
        }
