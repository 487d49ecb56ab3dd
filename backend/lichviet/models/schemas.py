"""
Pydantic schemas
Mô hình dữ liệu lõi (ngày dương, ngày âm, DateInfo) và request/response của API
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Tuple
from enum import Enum

# Khoảng năm API nhận (ước lượng âm lịch chỉ có nghĩa quanh mốc 2024)
MIN_YEAR = 1900
MAX_YEAR = 2100


class AdviceCategory(str, Enum):
    WORK = "work"           # công việc
    LOVE = "love"           # tình cảm
    HEALTH = "health"       # sức khỏe
    GENERAL = "general"     # tổng quát / fallback


# ============ Lõi lịch ============

class SolarDate(BaseModel):
    """Ngày dương lịch"""
    model_config = ConfigDict(frozen=True)

    day: int
    month: int
    year: int


class LunarDate(BaseModel):
    """Ngày âm lịch (ước lượng)"""
    model_config = ConfigDict(frozen=True)

    day: int = Field(..., description="Ngày âm (1-30)")
    month: int = Field(..., description="Tháng âm (1-12)")
    year: int = Field(..., description="Năm âm")
    leap: int = Field(0, description="Tháng nhuận (luôn 0)")
    jd: int = Field(..., description="Số ngày Julius của ngày dương gốc")


class DateInfo(BaseModel):
    """Toàn bộ thông tin âm lịch / can chi / giờ tốt xấu của một ngày dương"""
    model_config = ConfigDict(frozen=True)

    solar: SolarDate
    lunar: LunarDate
    can_chi_day: str = Field(..., description="Ngày can chi (vd: Giáp Thìn)")
    can_chi_month: str = Field(..., description="Tháng can chi")
    can_chi_year: str = Field(..., description="Năm can chi")
    zodiac_day: str = Field(..., description="Chi của ngày (Tí, Sửu...)")
    is_good_day: bool = Field(..., description="Ngày Hoàng Đạo")
    good_hours: Tuple[str, ...] = Field(..., description="Giờ Hoàng Đạo (6)")
    bad_hours: Tuple[str, ...] = Field(..., description="Giờ Hắc Đạo (6)")
    stars: Tuple[str, ...] = Field(..., description="Sao tốt/xấu")
    festival: Optional[str] = Field(None, description="Ngày lễ âm lịch")


class MonthCalendar(BaseModel):
    """Lưới lịch một tháng (tuần bắt đầu từ Thứ Hai)"""
    model_config = ConfigDict(frozen=True)

    month: int
    year: int
    days_in_month: int
    leading_blanks: int = Field(..., description="Số ô trống trước ngày 1")
    weekday_labels: Tuple[str, ...]
    days: Tuple[DateInfo, ...]


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    author: str


class AiAdvice(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    category: AdviceCategory = AdviceCategory.GENERAL


# ============ /advice request ============

class AdviceRequest(BaseModel):
    """Yêu cầu lời khuyên cho một ngày"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "day": 10,
                "month": 2,
                "year": 2024,
                "topic": "công việc"
            }
        }
    )

    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR)
    topic: str = Field("tổng quát", min_length=1, max_length=100, description="Chủ đề")


# ============ Lỗi ============

class ErrorResponse(BaseModel):
    success: bool = False
    error_code: str
    message: str
    detail: Optional[str] = None
