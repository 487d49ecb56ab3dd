"""
AdviceService tests - không gọi mạng
"""
import asyncio
import httpx
import pytest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch, AsyncMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from openai import (
    APIConnectionError,
    APIStatusError,
    AuthenticationError,
    InternalServerError,
    RateLimitError,
)

from lichviet.config import Settings
from lichviet.models.schemas import AdviceCategory, AiAdvice
from lichviet.services.advice import (
    DEFAULT_TEXT,
    FALLBACK_TEXT,
    AdviceService,
    category_for_topic,
)
from lichviet.services.date_info import get_full_date_info


_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _status_error(cls, status_code, message):
    return cls(message, response=httpx.Response(status_code, request=_REQUEST), body=None)


def _response(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=None
    )


def _service_with_client(create: AsyncMock) -> AdviceService:
    service = AdviceService()
    service._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return service


@pytest.fixture
def settings():
    s = Settings(openai_api_key="sk-test", advice_max_retries=2, advice_retry_base_delay=0.0)
    with patch("lichviet.services.advice.get_settings", return_value=s):
        yield s


class TestParsing:
    def test_plain_json(self):
        assert AdviceService()._parse_json('{"text": "a", "category": "love"}') == {"text": "a", "category": "love"}

    def test_fenced_json(self):
        content = '```json\n{"text": "a", "category": "work"}\n```'
        assert AdviceService()._parse_json(content) == {"text": "a", "category": "work"}

    def test_embedded_json(self):
        assert AdviceService()._parse_json('Đây: {"text": "b"} hết')["text"] == "b"

    @pytest.mark.parametrize("content", [None, "", "không phải json", "[1, 2]"])
    def test_unparseable(self, content):
        assert AdviceService()._parse_json(content) is None


class TestBuildResult:
    def test_unknown_category_uses_topic(self):
        result = AdviceService()._build_result({"text": "Nghỉ ngơi.", "category": "finance"}, "sức khỏe")
        assert result == AiAdvice(text="Nghỉ ngơi.", category=AdviceCategory.HEALTH)

    def test_missing_text(self):
        result = AdviceService()._build_result({}, "khác")
        assert result.text == DEFAULT_TEXT
        assert result.category == AdviceCategory.GENERAL

    @pytest.mark.parametrize("topic,expected", [
        ("công việc", AdviceCategory.WORK),
        ("Tình cảm", AdviceCategory.LOVE),
        (" sức khỏe ", AdviceCategory.HEALTH),
        ("tổng quát", AdviceCategory.GENERAL),
        ("du lịch", AdviceCategory.GENERAL),
    ])
    def test_category_for_topic(self, topic, expected):
        assert category_for_topic(topic) == expected


class TestPrompt:
    def test_prompt_contains_date_info(self):
        prompt = AdviceService().build_prompt(get_full_date_info(10, 2, 2024), "tổng quát")
        assert "Thứ Bảy, 10/2/2024" in prompt
        assert "Âm lịch: 1/1/2024" in prompt
        assert "Giáp Thìn" in prompt
        assert "Tết Nguyên Đán" in prompt
        assert "Ngày bình thường" in prompt


class TestDailyAdvice:
    def test_success(self, settings):
        create = AsyncMock(return_value=_response('{"text": "Gặp gỡ bạn bè.", "category": "love"}'))
        service = _service_with_client(create)
        result = asyncio.run(service.get_daily_advice(get_full_date_info(14, 2, 2024), "tình cảm"))
        assert result == AiAdvice(text="Gặp gỡ bạn bè.", category=AdviceCategory.LOVE)
        assert create.await_count == 1
        assert create.await_args.kwargs["response_format"] == {"type": "json_object"}

    def test_retry_after_bad_content(self, settings):
        create = AsyncMock(side_effect=[_response("xin chào"), _response('{"text": "Ổn.", "category": "general"}')])
        service = _service_with_client(create)
        result = asyncio.run(service.get_daily_advice(get_full_date_info(1, 3, 2024), "tổng quát"))
        assert result.text == "Ổn."
        assert create.await_count == 2

    def test_connection_error_retried_then_fallback(self, settings):
        error = APIConnectionError(request=_REQUEST)
        create = AsyncMock(side_effect=error)
        service = _service_with_client(create)
        with patch("lichviet.services.advice.asyncio.sleep", new=AsyncMock()) as sleep:
            result = asyncio.run(service.get_daily_advice(get_full_date_info(1, 3, 2024), "công việc"))
        assert result == AiAdvice(text=FALLBACK_TEXT, category=AdviceCategory.GENERAL)
        # 1 lần gọi đầu + 2 lần thử lại, không chờ sau lần cuối
        assert create.await_count == 3
        assert sleep.await_count == 2

    def test_empty_content_fallback(self, settings):
        create = AsyncMock(return_value=_response(None))
        service = _service_with_client(create)
        result = asyncio.run(service.get_daily_advice(get_full_date_info(1, 3, 2024), "sức khỏe"))
        assert result.category == AdviceCategory.GENERAL
        assert result.text == FALLBACK_TEXT

    def test_missing_api_key_fallback(self):
        with patch("lichviet.services.advice.get_settings", return_value=Settings(openai_api_key="")):
            result = asyncio.run(AdviceService().get_daily_advice(get_full_date_info(1, 3, 2024), "công việc"))
        assert result == AiAdvice(text=FALLBACK_TEXT, category=AdviceCategory.GENERAL)


class TestRetryPolicy:
    """Lỗi nào thử lại, lỗi nào trả fallback ngay"""

    @pytest.mark.parametrize("error", [
        _status_error(AuthenticationError, 401, "Incorrect API key provided"),
        _status_error(APIStatusError, 403, "Country not supported"),
        _status_error(APIStatusError, 404, "The model does not exist"),
        _status_error(RateLimitError, 429, "You exceeded your current quota: insufficient_quota"),
    ], ids=["auth-401", "forbidden-403", "model-404", "insufficient-quota"])
    def test_permanent_error_not_retried(self, settings, error):
        create = AsyncMock(side_effect=error)
        service = _service_with_client(create)
        with patch("lichviet.services.advice.asyncio.sleep", new=AsyncMock()) as sleep:
            result = asyncio.run(service.get_daily_advice(get_full_date_info(1, 3, 2024), "công việc"))
        assert result == AiAdvice(text=FALLBACK_TEXT, category=AdviceCategory.GENERAL)
        assert create.await_count == 1
        sleep.assert_not_awaited()

    def test_server_error_retried_then_success(self, settings):
        create = AsyncMock(side_effect=[
            _status_error(InternalServerError, 500, "The server had an error"),
            _response('{"text": "Làm việc chậm mà chắc.", "category": "work"}'),
        ])
        service = _service_with_client(create)
        with patch("lichviet.services.advice.asyncio.sleep", new=AsyncMock()) as sleep:
            result = asyncio.run(service.get_daily_advice(get_full_date_info(1, 3, 2024), "công việc"))
        assert result == AiAdvice(text="Làm việc chậm mà chắc.", category=AdviceCategory.WORK)
        assert create.await_count == 2
        assert sleep.await_count == 1

    def test_rate_limit_retried_then_fallback(self, settings):
        create = AsyncMock(side_effect=_status_error(RateLimitError, 429, "Rate limit reached for requests"))
        service = _service_with_client(create)
        with patch("lichviet.services.advice.asyncio.sleep", new=AsyncMock()) as sleep:
            result = asyncio.run(service.get_daily_advice(get_full_date_info(1, 3, 2024), "tổng quát"))
        assert result.text == FALLBACK_TEXT
        assert create.await_count == 3
        assert sleep.await_count == 2

    def test_zero_retries(self):
        s = Settings(openai_api_key="sk-test", advice_max_retries=0)
        create = AsyncMock(side_effect=_status_error(InternalServerError, 502, "Bad gateway"))
        service = _service_with_client(create)
        with patch("lichviet.services.advice.get_settings", return_value=s), \
                patch("lichviet.services.advice.asyncio.sleep", new=AsyncMock()) as sleep:
            result = asyncio.run(service.get_daily_advice(get_full_date_info(1, 3, 2024), "tổng quát"))
        assert result.text == FALLBACK_TEXT
        assert create.await_count == 1
        sleep.assert_not_awaited()
