"""
Lịch Vạn Niên Service Settings
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- OpenAI (lời khuyên hằng ngày)
- Server / CORS
- Múi giờ hiển thị "hôm nay"
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import hashlib
import logging
import re

logger = logging.getLogger(__name__)

# Ký tự vô hình hay lẫn vào khi copy/paste key
_INVISIBLES = ["\u200b", "\ufeff", "\xa0"]  # zero-width, BOM, NBSP


class Settings(BaseSettings):
    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Advice (LLM)
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    advice_timeout: int = 30
    advice_max_retries: int = 2
    advice_retry_base_delay: float = 1.0
    advice_retry_max_delay: float = 8.0
    advice_max_output_tokens: int = 400
    advice_temperature: float = 0.7

    # Việt Nam = UTC+7
    utc_offset_hours: int = 7

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def clean_openai_api_key(self) -> str:
        """
        Chuẩn hoá API key:
        - bỏ dấu nháy, khoảng trắng, xuống dòng, ký tự vô hình
        - bỏ tiền tố "Bearer "
        - key rỗng -> RuntimeError
        """
        k = self.openai_api_key.strip().strip('"').strip("'")
        for ch in _INVISIBLES:
            k = k.replace(ch, "")
        if k.lower().startswith("bearer "):
            k = k[7:]
        k = re.sub(r"\s+", "", k)

        if not k:
            raise RuntimeError("OPENAI_API_KEY is empty")

        if not k.startswith("sk-"):
            logger.warning(
                "OPENAI_API_KEY doesn't start with 'sk-'. fp=%s tail=%s",
                key_fingerprint(k), key_tail(k)
            )
        return k

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


def key_fingerprint(k: str) -> str:
    """Fingerprint 12 ký tự để so khớp key mà không lộ key"""
    if not k:
        return "(empty)"
    return hashlib.sha256(k.encode("utf-8")).hexdigest()[:12]


def key_tail(k: str, n: int = 6) -> str:
    return k[-n:] if k else "(empty)"


_settings: Optional[Settings] = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


