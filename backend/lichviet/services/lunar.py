"""
Ước lượng ngày âm lịch
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
Mốc: mùng 1 tháng Giêng năm 2024 (âm) = 10/02/2024 (dương)
Tháng lẻ 30 ngày, tháng chẵn 29 ngày (năm âm = 354 ngày)
Không xét tháng nhuận, không tính sóc thật
-> chỉ gần đúng quanh năm mốc
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
from lichviet.models.schemas import LunarDate
from lichviet.services.julian import to_julian_day

ANCHOR_SOLAR = (10, 2, 2024)
ANCHOR_LUNAR_YEAR = 2024
ANCHOR_JD = to_julian_day(*ANCHOR_SOLAR)


def lunar_month_length(month: int) -> int:
    """Độ dài tháng âm: lẻ 30, chẵn 29"""
    return 30 if month % 2 != 0 else 29


def estimate_lunar_date(day: int, month: int, year: int) -> LunarDate:
    """
    Đổi ngày dương sang ngày âm bằng cách đi từng tháng từ mốc

    - delta >= 0: đi tới, hết tháng 12 thì sang năm
    - delta < 0: đi lùi, qua tháng 1 thì về tháng 12 năm trước
    """
    target_jd = to_julian_day(day, month, year)
    delta = target_jd - ANCHOR_JD

    lunar_year = ANCHOR_LUNAR_YEAR
    lunar_month = 1
    lunar_day = 1

    if delta >= 0:
        remaining = delta
        while True:
            length = lunar_month_length(lunar_month)
            if remaining < length:
                lunar_day = 1 + remaining
                break
            remaining -= length
            lunar_month += 1
            if lunar_month > 12:
                lunar_month = 1
                lunar_year += 1
    else:
        remaining = -delta
        while remaining > 0:
            lunar_month -= 1
            if lunar_month < 1:
                lunar_month = 12
                lunar_year -= 1
            length = lunar_month_length(lunar_month)
            if remaining < length:
                lunar_day = length - remaining + 1
                break
            # vừa đủ một tháng -> mùng 1 của tháng này
            remaining -= length

    return LunarDate(day=lunar_day, month=lunar_month, year=lunar_year, leap=0, jd=target_jd)
