"""
Runtime configuration, read once from the environment.

Environment variables (all optional unless noted):
    UPSTREAM_FORMAT   - "booking_list" (default) or "bookings"
    HOTEL_CODE        - vendor hotel code
    AUTH_CODE         - vendor auth code (Bookings endpoint)
    API_KEY           - vendor API key (BookingList endpoint), defaults to AUTH_CODE
    END_POINT_URL     - Bookings endpoint URL (required when UPSTREAM_FORMAT=bookings)
    LIST_BASE         - BookingList base URL (default: https://live.ipms247.com/)
    CACHE_TIMEOUT     - seconds a cached payload stays fresh (default: 0 = no cache)
    CACHE_PATH        - cache file (default: cache.json)
    STAY_LOOKBACK_DAYS - days before a reported period whose BookingList arrivals
                        are fetched, so ongoing stays are counted (default: 30)
    TIMEZONE          - timezone used to resolve "today" (default: Africa/Cairo)
    PORT              - HTTP listen port (default: 5174)
    CORS_ORIGINS      - comma-separated allowed origins (default: *)
    STATIC_DIR        - dashboard directory served at /dashboard (default: client)
    LOG_LEVEL         - logging level (default: INFO)
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from src.adapters.ipms_client import LIST_BASE
from src.domain.periods import DEFAULT_TIMEZONE

log = logging.getLogger(__name__)

UPSTREAM_FORMATS = ("booking_list", "bookings")


def _int_env(env, name: str, default: int) -> int:
    raw = env.get(name, "")
    try:
        return int(float(raw)) if str(raw).strip() else default
    except (ValueError, OverflowError):
        log.warning("%s=%r is not a number, using %d", name, raw, default)
        return default


@dataclass
class Settings:
    upstream_format: str = "booking_list"
    hotel_code: str = ""
    auth_code: str = ""
    api_key: str = ""
    endpoint_url: str = ""
    list_base: str = LIST_BASE
    cache_timeout_s: int = 0
    cache_path: str = "cache.json"
    stay_lookback_days: int = 30
    timezone: str = DEFAULT_TIMEZONE
    port: int = 5174
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    static_dir: str = "client"
    log_level: str = "INFO"

    @property
    def cache_timeout_ms(self) -> int:
        return max(self.cache_timeout_s, 0) * 1000

    @classmethod
    def from_env(cls, env=None, dotenv: bool = True) -> "Settings":
        if env is None:
            if dotenv:
                load_dotenv()
            env = os.environ

        upstream_format = env.get("UPSTREAM_FORMAT", "booking_list").strip().lower()
        if upstream_format not in UPSTREAM_FORMATS:
            raise ValueError(
                f"UPSTREAM_FORMAT must be one of {', '.join(UPSTREAM_FORMATS)}, got {upstream_format!r}"
            )
        if upstream_format == "bookings" and not env.get("END_POINT_URL"):
            raise ValueError("END_POINT_URL is required when UPSTREAM_FORMAT=bookings")

        auth_code = env.get("AUTH_CODE", "")
        origins = [o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            upstream_format=upstream_format,
            hotel_code=env.get("HOTEL_CODE", ""),
            auth_code=auth_code,
            api_key=env.get("API_KEY") or auth_code,
            endpoint_url=env.get("END_POINT_URL", ""),
            list_base=env.get("LIST_BASE") or LIST_BASE,
            cache_timeout_s=max(_int_env(env, "CACHE_TIMEOUT", 0), 0),
            cache_path=env.get("CACHE_PATH") or "cache.json",
            stay_lookback_days=max(_int_env(env, "STAY_LOOKBACK_DAYS", 30), 0),
            timezone=env.get("TIMEZONE") or DEFAULT_TIMEZONE,
            port=_int_env(env, "PORT", 5174),
            cors_origins=origins or ["*"],
            static_dir=env.get("STATIC_DIR") or "client",
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
