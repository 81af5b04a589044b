from functools import lru_cache
import json
from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="textcraft API", alias="APP_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    api_prefix: str = Field(default="/v1", alias="API_PREFIX")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    redis_url: str = Field(default="", alias="REDIS_URL")
    rate_limit_window_seconds: int = Field(default=60, alias="RATE_LIMIT_WINDOW_SECONDS")
    humanize_rate_limit: int = Field(default=6, alias="HUMANIZE_RATE_LIMIT")
    detect_rate_limit: int = Field(default=30, alias="DETECT_RATE_LIMIT")

    cors_allowed_origins: str = Field(default="http://localhost:3000", alias="CORS_ALLOWED_ORIGINS")
    cors_allow_origin_regex: str = Field(default="", alias="CORS_ALLOW_ORIGIN_REGEX")

    groq_api_key: str = Field(default="", alias="GROQ_API_KEY")
    groq_base_url: str = Field(default="https://api.groq.com/openai/v1", alias="GROQ_BASE_URL")
    groq_model: str = Field(default="llama-3.3-70b-versatile", alias="GROQ_MODEL")
    groq_top_p: float = Field(default=1.0, alias="GROQ_TOP_P")
    groq_max_completion_tokens: int = Field(default=4000, alias="GROQ_MAX_COMPLETION_TOKENS")
    generator_timeout_seconds: float = Field(default=30.0, alias="GENERATOR_TIMEOUT_SECONDS")
    generator_max_concurrency: int = Field(default=4, alias="GENERATOR_MAX_CONCURRENCY")

    detect_min_words: int = Field(default=50, alias="DETECT_MIN_WORDS")
    insights_min_words: int = Field(default=40, alias="INSIGHTS_MIN_WORDS")
    humanizer_max_chars: int = Field(default=5000, alias="HUMANIZER_MAX_CHARS")
    humanizer_max_retries: int = Field(default=3, alias="HUMANIZER_MAX_RETRIES")
    humanizer_ai_threshold: int = Field(default=55, alias="HUMANIZER_AI_THRESHOLD")
    humanizer_force_min_probability: int = Field(default=40, alias="HUMANIZER_FORCE_MIN_PROBABILITY")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")

    @field_validator("humanizer_max_retries", mode="before")
    @classmethod
    def bound_max_retries(cls, value: object) -> object:
        try:
            retries = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 3
        return max(1, min(retries, 5))

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if not isinstance(value, str):
            return "INFO"
        normalized = value.strip().upper()
        if normalized in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            return normalized
        return "INFO"

    @staticmethod
    def _normalize_origin(origin: str) -> str:
        candidate = origin.strip().strip("'\"")
        if not candidate:
            return ""

        if "://" not in candidate:
            candidate = f"https://{candidate}"

        parsed = urlsplit(candidate)
        if not parsed.scheme or not parsed.netloc:
            return ""

        # CORS matching is exact on scheme+host+port; paths must be removed.
        return f"{parsed.scheme}://{parsed.netloc}".rstrip("/")

    @property
    def cors_origins(self) -> list[str]:
        raw = self.cors_allowed_origins.strip()
        if not raw:
            return []

        values: list[str]
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    values = [str(item) for item in parsed]
                else:
                    values = [raw]
            except json.JSONDecodeError:
                values = [raw]
        else:
            values = raw.split(",")

        normalized = [self._normalize_origin(value) for value in values]
        return [origin for origin in normalized if origin]

    @property
    def cors_origin_regex(self) -> str | None:
        value = self.cors_allow_origin_regex.strip()
        return value or None

    @property
    def generator_configured(self) -> bool:
        return bool(self.groq_api_key.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
