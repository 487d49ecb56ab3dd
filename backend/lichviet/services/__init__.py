# services package - lazy import cho advice (openai chỉ cần khi gọi LLM)
from lichviet.services.date_info import InvalidDateError, build_month_calendar, get_full_date_info
from lichviet.services.quotes import get_quote

advice_service = None

def get_advice_service():
    global advice_service
    if advice_service is None:
        from lichviet.services.advice import advice_service as _service
        advice_service = _service
    return advice_service
