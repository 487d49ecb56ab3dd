"""
/advice endpoint
Lỗi LLM không bao giờ trả về client: luôn 200 với lời khuyên hoặc fallback
"""
from fastapi import APIRouter, HTTPException
import logging

from lichviet.models.schemas import AdviceRequest, AiAdvice, ErrorResponse
from lichviet.services import get_advice_service
from lichviet.services.date_info import InvalidDateError, get_full_date_info, validate_solar_date

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/advice",
    response_model=AiAdvice,
    responses={400: {"model": ErrorResponse}},
    summary="Lời khuyên trong ngày theo chủ đề"
)
async def get_advice(payload: AdviceRequest):
    try:
        validate_solar_date(payload.day, payload.month, payload.year)
    except InvalidDateError as e:
        raise HTTPException(
            status_code=400,
            detail={"error_code": "INVALID_DATE", "message": "Ngày dương lịch không hợp lệ.", "detail": str(e)}
        )

    date_info = get_full_date_info(payload.day, payload.month, payload.year)
    logger.info(f"[ADVICE] {payload.day:02d}/{payload.month:02d}/{payload.year} | topic={payload.topic}")
    return await get_advice_service().get_daily_advice(date_info, payload.topic)


@router.get("/advice/topics", summary="Advice Topics")
async def get_topics():
    return {
        "topics": [
            {"value": "công việc", "category": "work"},
            {"value": "tình cảm", "category": "love"},
            {"value": "sức khỏe", "category": "health"},
            {"value": "tổng quát", "category": "general"}
        ]
    }
