"""Lịch Vạn Niên - đổi ngày dương sang âm lịch và chú giải can chi / giờ tốt xấu"""
from lichviet.services.date_info import build_month_calendar, get_full_date_info
from lichviet.services.quotes import get_quote

__version__ = "1.0.0"
