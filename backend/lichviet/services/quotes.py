"""Ca dao, tục ngữ hiển thị đầu trang"""
import random
from typing import Optional

from lichviet.models.schemas import Quote

QUOTES = (
    Quote(content="Trăm năm bia đá thì mòn, ngàn năm bia miệng vẫn còn trơ trơ.", author="Ca dao"),
    Quote(content="Lời nói chẳng mất tiền mua, lựa lời mà nói cho vừa lòng nhau.", author="Ca dao"),
    Quote(content="Một cây làm chẳng nên non, ba cây chụm lại nên hòn núi cao.", author="Tục ngữ"),
    Quote(content="Uống nước nhớ nguồn.", author="Tục ngữ"),
    Quote(content="Có công mài sắt, có ngày nên kim.", author="Tục ngữ"),
)


def get_quote(rng: Optional[random.Random] = None) -> Quote:
    """Chọn ngẫu nhiên một câu; truyền rng có seed để cố định kết quả"""
    rng = rng or random.Random()
    return rng.choice(QUOTES)
