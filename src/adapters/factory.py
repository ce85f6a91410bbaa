from src.config import Settings
from src.domain.raw_cache import RawDataCache
from src.fetcher import Fetcher, FetcherConfig
from src.reporting import ReportConfig, ReportService

from .ports import VendorGateway


def create_vendor_gateway(settings: Settings) -> VendorGateway:
    """
    Factory: create the right vendor adapter based on config.

    UPSTREAM_FORMAT selects the endpoint. Defaults to "booking_list".
    """
    if settings.upstream_format == "booking_list":
        from .ipms_client import IpmsBookingListClient

        return IpmsBookingListClient(
            hotel_code=settings.hotel_code,
            api_key=settings.api_key,
            base_url=settings.list_base,
        )

    if settings.upstream_format == "bookings":
        from .ipms_client import IpmsBookingsClient

        return IpmsBookingsClient(
            endpoint_url=settings.endpoint_url,
            hotel_code=settings.hotel_code,
            auth_code=settings.auth_code,
        )

    raise ValueError(f"Unknown upstream format: {settings.upstream_format!r}")


def create_raw_cache(settings: Settings) -> RawDataCache:
    """The Bookings feed is one document; BookingList responses are cached per window."""
    from .json_file_cache import DayKeyedJsonFileCache, JsonFileCache

    if settings.upstream_format == "bookings":
        return JsonFileCache(settings.cache_path)
    return DayKeyedJsonFileCache(settings.cache_path)


def create_report_service(settings: Settings) -> ReportService:
    """Wire gateway, cache and fetcher into a ReportService."""
    gateway = create_vendor_gateway(settings)
    fetcher = Fetcher(FetcherConfig(
        gateway=gateway,
        cache=create_raw_cache(settings),
        timeout_ms=settings.cache_timeout_ms,
    ))
    return ReportService(ReportConfig(
        fetcher=fetcher,
        payload_format=gateway.payload_format,
        timezone=settings.timezone,
        stay_lookback_days=settings.stay_lookback_days,
    ))
