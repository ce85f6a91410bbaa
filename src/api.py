"""
HTTP surface of the reporting proxy.

Thin dispatch only: every route resolves to one ReportService call. Vendor
failures are answered with 502 and the upstream status; malformed day /
month parameters never fail, they fall back to today / this month.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from src.config import Settings
from src.domain.errors import UpstreamError
from src.reporting import ReportService

log = logging.getLogger(__name__)


def create_app(service: ReportService, settings: Settings) -> FastAPI:
    app = FastAPI(title="Hotel Reservation Reports")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/client", StaticFiles(directory=static_dir), name="client")

    @app.exception_handler(UpstreamError)
    async def upstream_error(request: Request, exc: UpstreamError):
        log.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=502,
            content={"error": str(exc), "upstreamStatus": exc.status_code},
        )

    @app.get("/")
    def index():
        return {"status": "Server is running."}

    @app.get("/dashboard")
    def dashboard():
        page = static_dir / "index.html"
        if not page.is_file():
            raise HTTPException(status_code=404, detail="Dashboard not installed")
        return FileResponse(page)

    @app.get("/api")
    def booking_totals():
        return service.booking_totals().to_dict()

    @app.get("/api/stats")
    def daily_stats(day: Optional[str] = Query(None)):
        return service.daily_stats(day).to_dict()

    @app.get("/api/report")
    def report(day: Optional[str] = Query(None), month: Optional[str] = Query(None)):
        return {"report": service.report(day, month).to_dict()}

    return app
