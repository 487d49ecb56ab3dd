"""
Tổng hợp thông tin ngày
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
JDN -> ngày âm -> can chi (năm/tháng/ngày) -> chú giải -> DateInfo
Không cache: mỗi lần gọi tính lại từ đầu
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import calendar
import logging
from datetime import date

from lichviet.models.schemas import DateInfo, MonthCalendar, SolarDate
from lichviet.services.annotator import annotate
from lichviet.services.can_chi import can_chi_calc, format_can_chi
from lichviet.services.julian import WEEKDAYS_SHORT, to_julian_day, weekday_of
from lichviet.services.lunar import estimate_lunar_date

logger = logging.getLogger(__name__)


class InvalidDateError(ValueError):
    """Ngày dương lịch không tồn tại (vd: 30/02)"""


def validate_solar_date(day: int, month: int, year: int) -> None:
    try:
        date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(f"{day:02d}/{month:02d}/{year}: {e}") from e


def get_full_date_info(day: int, month: int, year: int) -> DateInfo:
    jd = to_julian_day(day, month, year)
    lunar = estimate_lunar_date(day, month, year)
    annotation = annotate(lunar, jd)

    return DateInfo(
        solar=SolarDate(day=day, month=month, year=year),
        lunar=lunar,
        can_chi_day=format_can_chi(can_chi_calc.day_can_chi(jd)),
        can_chi_month=format_can_chi(can_chi_calc.month_can_chi(lunar.month, lunar.year)),
        can_chi_year=format_can_chi(can_chi_calc.year_can_chi(lunar.year)),
        zodiac_day=annotation.zodiac_day,
        is_good_day=annotation.is_good_day,
        good_hours=annotation.good_hours,
        bad_hours=annotation.bad_hours,
        stars=annotation.stars,
        festival=annotation.festival,
    )


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]


def build_month_calendar(month: int, year: int) -> MonthCalendar:
    """
    Lưới lịch tháng, tuần bắt đầu từ Thứ Hai

    leading_blanks = số ô trống trước ngày 1 (0 nếu ngày 1 là Thứ Hai)
    """
    count = days_in_month(month, year)
    leading = weekday_of(to_julian_day(1, month, year))
    days = tuple(get_full_date_info(d, month, year) for d in range(1, count + 1))

    festivals = [d.festival for d in days if d.festival]
    logger.info(f"[CALENDAR] {month:02d}/{year} | days={count} | festivals={festivals}")

    return MonthCalendar(
        month=month,
        year=year,
        days_in_month=count,
        leading_blanks=leading,
        weekday_labels=tuple(WEEKDAYS_SHORT),
        days=days,
    )
