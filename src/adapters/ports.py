from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class VendorQuery:
    """Arrival window passed to the vendor (YYYY-MM-DD, inclusive)."""

    arrival_from: str
    arrival_to: str


class VendorGateway(ABC):
    """
    Port: how we pull reservation data from the PMS vendor.

    The reporting logic depends ONLY on this interface.
    It doesn't know or care whether data comes from the real vendor
    API or an in-memory simulator.
    """

    # Which payload mapper in src.domain.bookings reads this gateway's output
    payload_format: str = ""

    @abstractmethod
    def fetch(self, query: VendorQuery) -> dict:
        """
        One request to the vendor, no retry.

        Returns the decoded JSON object. Raises UpstreamHTTPError on a non-2xx
        status, UpstreamParseError when the body is not a JSON object and
        UpstreamError on transport failure.
        """
        ...
