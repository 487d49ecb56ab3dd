"""
Số ngày Julius (JDN)
- Dương lịch (Gregorian) -> JDN, công thức đóng
- Thứ trong tuần từ JDN
"""

# Thứ Hai = 0 ... Chủ Nhật = 6 (JDN 0 rơi vào Thứ Hai)
WEEKDAYS = ["Thứ Hai", "Thứ Ba", "Thứ Tư", "Thứ Năm", "Thứ Sáu", "Thứ Bảy", "Chủ Nhật"]
WEEKDAYS_SHORT = ["T2", "T3", "T4", "T5", "T6", "T7", "CN"]


def to_julian_day(day: int, month: int, year: int) -> int:
    """Tính JDN cho một ngày dương lịch (không kiểm tra hợp lệ)"""
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return (
        day
        + (153 * m + 2) // 5
        + 365 * y
        + y // 4
        - y // 100
        + y // 400
        - 32045
    )


def weekday_of(jd: int) -> int:
    """0 = Thứ Hai, 6 = Chủ Nhật"""
    return jd % 7


def weekday_label(jd: int) -> str:
    return WEEKDAYS[weekday_of(jd)]
