"""
Advice Service - lời khuyên hằng ngày từ LLM
- Chat Completions API (JSON output)
- Retry cho lỗi tạm thời (rate limit / connection / 5xx)
- Mọi lỗi -> log + fallback cố định, category "general"
"""
import asyncio
import json
import logging
import random
import re
from typing import Any, Dict, Optional

import httpx
from openai import APIConnectionError, APIError, AsyncOpenAI, AuthenticationError, RateLimitError

from lichviet.config import get_settings, key_fingerprint, key_tail
from lichviet.models.schemas import AdviceCategory, AiAdvice, DateInfo
from lichviet.services.julian import weekday_label

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "Tâm an vạn sự an. Hãy giữ tinh thần lạc quan cho ngày mới tốt lành."
DEFAULT_TEXT = "Hãy sống vui vẻ và lạc quan."

# Chủ đề trên giao diện -> category
TOPIC_CATEGORIES = {
    "công việc": AdviceCategory.WORK,
    "tình cảm": AdviceCategory.LOVE,
    "sức khỏe": AdviceCategory.HEALTH,
    "tổng quát": AdviceCategory.GENERAL,
}

SYSTEM_PROMPT = """Bạn là một chuyên gia phong thủy và văn hóa Việt Nam uyên bác.
Lời khuyên nên mang tính tích cực, triết lý, dựa trên ngũ hành hoặc văn hóa dân gian nếu phù hợp.
Chỉ trả về JSON thuần túy: { "text": "...", "category": "work|love|health|general" }"""


class AdviceError(Exception):
    """Lỗi không thể lấy lời khuyên từ LLM"""


def category_for_topic(topic: str) -> AdviceCategory:
    return TOPIC_CATEGORIES.get(topic.strip().lower(), AdviceCategory.GENERAL)


def fallback_advice() -> AiAdvice:
    return AiAdvice(text=FALLBACK_TEXT, category=AdviceCategory.GENERAL)


class AdviceService:
    def __init__(self):
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        """Tạo OpenAI client lần đầu dùng"""
        if self._client is None:
            settings = get_settings()
            api_key = settings.clean_openai_api_key
            logger.debug("OpenAI client fp=%s tail=%s", key_fingerprint(api_key), key_tail(api_key))
            self._client = AsyncOpenAI(
                api_key=api_key,
                timeout=httpx.Timeout(float(settings.advice_timeout), connect=10.0),
                max_retries=0
            )
        return self._client

    async def _call_llm_json(self, user_prompt: str) -> Dict[str, Any]:
        settings = get_settings()
        client = self._get_client()
        # lần gọi đầu + advice_max_retries lần thử lại
        attempts = max(0, settings.advice_max_retries) + 1
        last_error: Optional[Exception] = None

        for attempt in range(attempts):
            try:
                logger.info(f"[LLM] Attempt {attempt + 1}/{attempts} | Model: {settings.openai_model}")
                response = await client.chat.completions.create(
                    model=settings.openai_model,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": user_prompt}
                    ],
                    max_tokens=settings.advice_max_output_tokens,
                    temperature=settings.advice_temperature,
                    response_format={"type": "json_object"}
                )

                content = response.choices[0].message.content if response.choices else None
                tokens_used = response.usage.total_tokens if response.usage else 0
                logger.info(f"[LLM] Success | Tokens: {tokens_used}")

                parsed = self._parse_json(content)
                if parsed is not None:
                    return parsed

                logger.warning("[LLM] Empty or non-JSON content, retrying")
                last_error = AdviceError("JSON parsing failed")

            except AuthenticationError as e:
                logger.error(f"[LLM] AUTH_ERROR (401) | {self._extract_error_detail(e)}")
                raise AdviceError("Authentication failed") from e

            except RateLimitError as e:
                if "insufficient_quota" in str(e).lower():
                    logger.error("[LLM] QUOTA_EXHAUSTED")
                    raise AdviceError("API quota exhausted") from e
                last_error = e
                await self._wait(attempt, attempts, "RATE_LIMIT")

            except APIConnectionError as e:
                last_error = e
                await self._wait(attempt, attempts, "CONNECTION_ERROR")

            except APIError as e:
                status_code = getattr(e, "status_code", None) or 0
                if status_code in (401, 403, 404):
                    logger.error(f"[LLM] API_ERROR ({status_code}) | {self._extract_error_detail(e)}")
                    raise AdviceError(f"API error {status_code}") from e
                last_error = e
                await self._wait(attempt, attempts, f"API_ERROR ({status_code})")

        logger.error(f"[LLM] ALL_RETRIES_FAILED | Last error: {type(last_error).__name__}")
        raise AdviceError(f"LLM call failed after {attempts} attempts")

    async def _wait(self, attempt: int, attempts: int, reason: str) -> None:
        # lần cuối: trả fallback ngay, không chờ
        if attempt >= attempts - 1:
            logger.warning(f"[LLM] {reason} | No retries left")
            return
        settings = get_settings()
        delay = min(settings.advice_retry_base_delay * (2 ** attempt), settings.advice_retry_max_delay)
        delay *= random.uniform(0.5, 1.5)
        logger.warning(f"[LLM] {reason} | Waiting {delay:.1f}s")
        await asyncio.sleep(delay)

    def _extract_error_detail(self, error: Exception) -> str:
        message = getattr(error, "message", None)
        return str(message or error)[:200]

    def _parse_json(self, content: Optional[str]) -> Optional[Dict[str, Any]]:
        if not content:
            return None

        text = content.strip()
        if text.startswith("```"):
            lines = text.split("\n")[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines)

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            match = re.search(r"\{[\s\S]*\}", text)
            if not match:
                return None
            try:
                data = json.loads(match.group())
            except json.JSONDecodeError:
                return None

        return data if isinstance(data, dict) else None

    def build_prompt(self, date_info: DateInfo, topic: str) -> str:
        solar = date_info.solar
        lunar = date_info.lunar
        day_kind = "Ngày Hoàng Đạo" if date_info.is_good_day else "Ngày bình thường"
        festival = f"\n- Ngày lễ: {date_info.festival}" if date_info.festival else ""

        return f"""Hãy đưa ra một lời khuyên ngắn gọn (khoảng 50-70 từ) về chủ đề "{topic}" cho ngày hôm nay.

Thông tin ngày:
- Dương lịch: {weekday_label(lunar.jd)}, {solar.day}/{solar.month}/{solar.year}
- Âm lịch: {lunar.day}/{lunar.month}/{lunar.year}
- Ngày Can Chi: {date_info.can_chi_day}, Tháng {date_info.can_chi_month}, Năm {date_info.can_chi_year}
- Trực/Sao: {day_kind} ({", ".join(date_info.stars)}){festival}"""

    def _build_result(self, data: Dict[str, Any], topic: str) -> AiAdvice:
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            text = DEFAULT_TEXT

        try:
            category = AdviceCategory(str(data.get("category", "")).strip().lower())
        except ValueError:
            category = category_for_topic(topic)

        return AiAdvice(text=text.strip(), category=category)

    async def get_daily_advice(self, date_info: DateInfo, topic: str) -> AiAdvice:
        """Không bao giờ raise: lỗi nào cũng trả về fallback"""
        solar = date_info.solar
        label = f"{solar.day:02d}/{solar.month:02d}/{solar.year}"
        try:
            data = await self._call_llm_json(self.build_prompt(date_info, topic))
            result = self._build_result(data, topic)
            logger.info(f"[ADVICE] Success | {label} | topic={topic} | category={result.category.value}")
            return result
        except Exception as e:
            logger.error(f"[ADVICE] Failed | {label} | {type(e).__name__}: {str(e)[:100]}")
            return fallback_advice()


advice_service = AdviceService()
