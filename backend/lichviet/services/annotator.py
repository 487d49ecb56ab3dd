"""
Chú giải ngày: giờ Hoàng Đạo / Hắc Đạo, sao, ngày lễ, ngày tốt
(quy tắc đơn giản hoá, không phải lý thuyết Hoàng Đạo đầy đủ)
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from lichviet.models.schemas import LunarDate
from lichviet.services.can_chi import BRANCHES, CanChiCalculator

# 12 giờ (mỗi giờ 2 tiếng), theo thứ tự Địa Chi
HOUR_WINDOWS = [
    "Tí (23h-1h)",
    "Sửu (1h-3h)",
    "Dần (3h-5h)",
    "Mão (5h-7h)",
    "Thìn (7h-9h)",
    "Tỵ (9h-11h)",
    "Ngọ (11h-13h)",
    "Mùi (13h-15h)",
    "Thân (15h-17h)",
    "Dậu (17h-19h)",
    "Tuất (19h-21h)",
    "Hợi (21h-23h)",
]

# Hai tập bù nhau trên 12 vị trí
GOOD_HOUR_OFFSETS = (0, 1, 3, 6, 8, 9)
BAD_HOUR_OFFSETS = (2, 4, 5, 7, 10, 11)

# (tháng âm, ngày âm) -> tên lễ
FESTIVALS: Dict[Tuple[int, int], str] = {
    (1, 1): "Tết Nguyên Đán",
    (1, 15): "Tết Nguyên Tiêu",
    (3, 10): "Giỗ Tổ Hùng Vương",
    (4, 15): "Lễ Phật Đản",
    (5, 5): "Tết Đoan Ngọ",
    (7, 15): "Vu Lan",
    (8, 15): "Tết Trung Thu",
    (12, 23): "Ông Táo Chầu Trời",
}

GOOD_DAY_STARS = ("Thanh Long", "Minh Đường")
BAD_DAY_STARS = ("Thiên Hình", "Chu Tước")


@dataclass(frozen=True)
class Annotation:
    """Kết quả chú giải của một ngày"""
    zodiac_day: str
    good_hours: Tuple[str, ...]
    bad_hours: Tuple[str, ...]
    stars: Tuple[str, ...]
    festival: Optional[str]
    is_good_day: bool


def hours_for(jd: int, offsets: Tuple[int, ...]) -> Tuple[str, ...]:
    """Dịch các vị trí theo chi của ngày rồi sắp xếp theo nhãn"""
    zodiac_idx = CanChiCalculator.day_branch_index(jd)
    return tuple(sorted(HOUR_WINDOWS[(i + zodiac_idx) % 12] for i in offsets))


def festival_for(lunar: LunarDate) -> Optional[str]:
    return FESTIVALS.get((lunar.month, lunar.day))


def annotate(lunar: LunarDate, jd: int) -> Annotation:
    is_good_day = lunar.day % 2 == 0
    return Annotation(
        zodiac_day=BRANCHES[CanChiCalculator.day_branch_index(jd)],
        good_hours=hours_for(jd, GOOD_HOUR_OFFSETS),
        bad_hours=hours_for(jd, BAD_HOUR_OFFSETS),
        stars=GOOD_DAY_STARS if is_good_day else BAD_DAY_STARS,
        festival=festival_for(lunar),
        is_good_day=is_good_day,
    )
