"""
/calendar endpoints
- Thông tin một ngày (DateInfo)
- Lưới lịch tháng
- Hôm nay (UTC+7)
- Bảng ngày lễ, câu ca dao
"""
from fastapi import APIRouter, HTTPException, Query
from datetime import datetime, timedelta, timezone
import logging

from lichviet.config import get_settings
from lichviet.models.schemas import MAX_YEAR, MIN_YEAR, DateInfo, ErrorResponse, MonthCalendar, Quote
from lichviet.services.annotator import FESTIVALS
from lichviet.services.date_info import (
    InvalidDateError,
    build_month_calendar,
    get_full_date_info,
    validate_solar_date,
)
from lichviet.services.quotes import get_quote

logger = logging.getLogger(__name__)
router = APIRouter()


def get_today() -> datetime:
    """Ngày hiện tại theo múi giờ cấu hình (mặc định Việt Nam)"""
    tz = timezone(timedelta(hours=get_settings().utc_offset_hours))
    return datetime.now(tz)


@router.get(
    "/calendar/date",
    response_model=DateInfo,
    responses={400: {"model": ErrorResponse}},
    summary="Thông tin âm lịch của một ngày"
)
async def get_date(
    day: int = Query(..., ge=1, le=31),
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR)
):
    try:
        validate_solar_date(day, month, year)
    except InvalidDateError as e:
        logger.warning(f"[CALENDAR] Invalid date: {e}")
        raise HTTPException(
            status_code=400,
            detail={
                "error_code": "INVALID_DATE",
                "message": "Ngày dương lịch không hợp lệ.",
                "detail": str(e)
            }
        )
    return get_full_date_info(day, month, year)


@router.get(
    "/calendar/month",
    response_model=MonthCalendar,
    summary="Lưới lịch tháng (Thứ Hai đầu tuần)"
)
async def get_month(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR)
):
    return build_month_calendar(month, year)


@router.get(
    "/calendar/today",
    response_model=DateInfo,
    summary="Thông tin ngày hôm nay"
)
async def get_today_info():
    today = get_today()
    return get_full_date_info(today.day, today.month, today.year)


@router.get("/calendar/festivals", summary="Các ngày lễ âm lịch")
async def get_festivals():
    return {
        "festivals": [
            {"lunar_month": month, "lunar_day": day, "name": name}
            for (month, day), name in sorted(FESTIVALS.items())
        ]
    }


@router.get("/quote", response_model=Quote, summary="Ca dao / tục ngữ ngẫu nhiên")
async def get_random_quote():
    return get_quote()
