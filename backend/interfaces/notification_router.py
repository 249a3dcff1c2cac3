"""通知统计接口：为仪表盘提供发送量汇总与模板送达统计。"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from app.config import AppConfig
from application.errors import InvalidDateRange, RowSourceUnavailable
from application.report_service import (
    NotificationReportService,
    parse_date_param,
    parse_last_days,
    resolve_date_range,
)
from domain.report import payload_list
from interfaces import deps
from interfaces import fallback

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

DATA_SOURCE_HEADER = "X-Data-Source"

Payload = Union[Dict[str, Any], List[Dict[str, Any]]]


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def _serve(
    response: Response,
    settings: AppConfig,
    live: Optional[Callable[[], Payload]],
    mock: Callable[[], Payload],
    label: str,
) -> Union[Payload, JSONResponse]:
    """Run the live query, or the mock when no store is configured / it fails and fallback is on."""
    if live is None:
        logger.info("[notifications] Using mock %s data (no database connection).", label)
        response.headers[DATA_SOURCE_HEADER] = "mock"
        return mock()

    try:
        payload = live()
    except RowSourceUnavailable as exc:
        logger.error("[notifications] Error executing %s query: %s", label, exc)
        if settings.fallback_on_error:
            logger.warning("[notifications] Serving mock %s data after live query failed.", label)
            response.headers[DATA_SOURCE_HEADER] = "mock"
            return mock()
        return _error_response(500, "Internal Server Error", str(exc))

    response.headers[DATA_SOURCE_HEADER] = "live"
    return payload


@router.get("/summary")
def get_summary(
    response: Response,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    last_days: Optional[str] = Query(None, alias="lastDays"),
    service: Optional[NotificationReportService] = Depends(deps.get_report_service),
    settings: AppConfig = Depends(deps.get_app_settings),
    today: date = Depends(deps.get_today),
):
    """Per-trigger totals and push/whatsapp breakdown for ``[startDate, endDate]``."""
    try:
        start = parse_date_param(start_date, "startDate")
        end = parse_date_param(end_date, "endDate")
        days = parse_last_days(last_days)
    except InvalidDateRange as exc:
        return _error_response(400, "Bad Request", str(exc))

    start, end = resolve_date_range(start, end, today, days)
    live = (lambda: service.build_range_summary(start, end).to_payload()) if service else None
    return _serve(
        response,
        settings,
        live,
        lambda: fallback.mock_range_summary(start, end, settings.fallback_seed).to_payload(),
        "summary",
    )


@router.get("/template-stats")
def get_template_stats(
    response: Response,
    service: Optional[NotificationReportService] = Depends(deps.get_report_service),
    settings: AppConfig = Depends(deps.get_app_settings),
    today: date = Depends(deps.get_today),
):
    """Successful deliveries per day and template over the last 7 full days."""
    live = (lambda: payload_list(service.build_daily_template_stats())) if service else None
    return _serve(
        response,
        settings,
        live,
        lambda: payload_list(fallback.mock_daily_template_stats(today, settings.fallback_seed)),
        "template stats",
    )


@router.get("/template-stats-today")
def get_template_stats_today(
    response: Response,
    service: Optional[NotificationReportService] = Depends(deps.get_report_service),
    settings: AppConfig = Depends(deps.get_app_settings),
):
    live = (lambda: payload_list(service.build_today_template_stats())) if service else None
    return _serve(
        response,
        settings,
        live,
        lambda: payload_list(fallback.mock_today_template_stats(settings.fallback_seed)),
        "today template stats",
    )
