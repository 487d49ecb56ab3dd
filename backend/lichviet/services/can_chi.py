"""
Can Chi (lục thập hoa giáp)
- 10 Thiên Can × 12 Địa Chi = 60 tổ hợp
- Can chi của năm, tháng (âm lịch) và ngày (theo JDN)
"""
from typing import List, Tuple

# Thiên Can (10)
STEMS = ["Giáp", "Ất", "Bính", "Đinh", "Mậu", "Kỷ", "Canh", "Tân", "Nhâm", "Quý"]

# Địa Chi (12)
BRANCHES = ["Tí", "Sửu", "Dần", "Mão", "Thìn", "Tỵ", "Ngọ", "Mùi", "Thân", "Dậu", "Tuất", "Hợi"]

CanChi = Tuple[str, str]


class CanChiCalculator:
    """Bộ tính can chi"""

    # ===== Năm =====
    @staticmethod
    def year_stem_index(year: int) -> int:
        return (year + 6) % 10

    @staticmethod
    def year_can_chi(year: int) -> CanChi:
        """
        Can chi của năm âm lịch

        Ví dụ: 2024 -> Giáp Thìn, 2025 -> Ất Tỵ
        """
        return STEMS[CanChiCalculator.year_stem_index(year)], BRANCHES[(year + 8) % 12]

    # ===== Tháng =====
    @staticmethod
    def month_can_chi(month: int, year: int) -> CanChi:
        """
        Can chi của tháng âm lịch

        Can tháng = (can năm × 2 + tháng) mod 10
        Chi tháng: tháng 1 = Dần, tháng 2 = Mão, ..., tháng 12 = Sửu
        """
        stem_idx = (CanChiCalculator.year_stem_index(year) * 2 + month) % 10
        return STEMS[stem_idx], BRANCHES[(month + 1) % 12]

    # ===== Ngày =====
    @staticmethod
    def day_can_chi(jd: int) -> CanChi:
        """Can chi của ngày theo số ngày Julius"""
        return STEMS[(jd + 9) % 10], BRANCHES[(jd + 1) % 12]

    @staticmethod
    def day_branch_index(jd: int) -> int:
        return (jd + 1) % 12


def format_can_chi(can_chi: CanChi) -> str:
    """('Giáp', 'Thìn') -> 'Giáp Thìn'"""
    stem, branch = can_chi
    return f"{stem} {branch}"


def get_sixty_can_chi_list() -> List[str]:
    """60 hoa giáp theo thứ tự chu kỳ (Giáp Tí, Ất Sửu, ...)"""
    return [f"{STEMS[i % 10]} {BRANCHES[i % 12]}" for i in range(60)]

SIXTY_CAN_CHI = get_sixty_can_chi_list()


# Singleton + alias dạng hàm
can_chi_calc = CanChiCalculator()

year_can_chi = CanChiCalculator.year_can_chi
month_can_chi = CanChiCalculator.month_can_chi
day_can_chi = CanChiCalculator.day_can_chi
