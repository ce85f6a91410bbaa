"""
Local process runner for the reporting proxy.

Serves /api, /api/stats, /api/report and the /dashboard page.

Usage:
    python scripts/run.py

Configuration comes from the environment or a .env file in the working
directory; see src/config.py for the full list of variables.
"""

import logging
import os
import sys

# Make sure project root is on sys.path when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import uvicorn

from src.adapters.factory import create_report_service
from src.api import create_app
from src.config import Settings

log = logging.getLogger(__name__)


def main() -> None:
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-7s  %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    app = create_app(create_report_service(settings), settings)
    log.info(
        "Server running on http://localhost:%d  format=%s  cache=%ss",
        settings.port, settings.upstream_format, settings.cache_timeout_s,
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
