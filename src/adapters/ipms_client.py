import json
import logging
from urllib.parse import urljoin

import requests

from src.domain.errors import UpstreamError, UpstreamHTTPError, UpstreamParseError

from .ports import VendorGateway, VendorQuery

log = logging.getLogger(__name__)

LIST_BASE = "https://live.ipms247.com/"
LIST_PATH = "booking/reservation_api/listing.php"


class _IpmsClient(VendorGateway):
    """Shared request/response handling for the ipms247 endpoints."""

    def __init__(self):
        self.session = requests.Session()
        self.session.headers.update({"Cache-Control": "no-cache"})

    def _send(self, method: str, url: str, **kwargs) -> dict:
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            log.error("[fetch] transport error: %s", exc)
            raise UpstreamError(f"Upstream request failed: {exc}") from exc

        text = resp.text
        if not 200 <= resp.status_code < 300:
            log.error("[fetch] vendor error (%d): %s", resp.status_code, text[:200])
            raise UpstreamHTTPError(resp.status_code, body=text, reason=resp.reason or "")

        try:
            data = json.loads(text)
        except ValueError as exc:
            log.error("[fetch] invalid JSON from vendor")
            raise UpstreamParseError(body=text) from exc
        if not isinstance(data, dict):
            log.error("[fetch] vendor returned %s instead of an object", type(data).__name__)
            raise UpstreamParseError(body=text)
        return data


class IpmsBookingsClient(_IpmsClient):
    """Adapter: POST Request_Type=Bookings. Returns the full current bookings feed."""

    payload_format = "bookings"

    def __init__(self, endpoint_url: str, hotel_code: str, auth_code: str):
        super().__init__()
        self.endpoint_url = endpoint_url
        self.hotel_code = hotel_code
        self.auth_code = auth_code

    def fetch(self, query: VendorQuery) -> dict:
        log.info("[fetch] Bookings from %s", self.endpoint_url)
        return self._send(
            "POST",
            self.endpoint_url,
            json={
                "RES_Request": {
                    "Request_Type": "Bookings",
                    "Authentication": {
                        "HotelCode": self.hotel_code,
                        "AuthCode": self.auth_code,
                    },
                }
            },
        )


class IpmsBookingListClient(_IpmsClient):
    """Adapter: GET request_type=BookingList for an arrival window."""

    payload_format = "booking_list"

    def __init__(self, hotel_code: str, api_key: str, base_url: str = LIST_BASE):
        super().__init__()
        self.url = urljoin(base_url, LIST_PATH)
        self.hotel_code = hotel_code
        self.api_key = api_key

    def fetch(self, query: VendorQuery) -> dict:
        log.info("[fetch] BookingList %s → %s", query.arrival_from, query.arrival_to)
        return self._send(
            "GET",
            self.url,
            params={
                "request_type": "BookingList",
                "HotelCode": self.hotel_code,
                "APIKey": self.api_key,
                "arrival_from": query.arrival_from,
                "arrival_to": query.arrival_to,
                "EmailId": "",  # empty = all guests
            },
        )
