"""
Application configuration settings.

Credentials are deliberately absent: they are supplied per session.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=[".env"], case_sensitive=False, extra="ignore", populate_by_name=True
    )

    # Application
    app_name: str = Field("DeckForge API", alias="APP_NAME")
    environment: str = Field("development", alias="ENVIRONMENT")
    debug: bool = Field(False, alias="DEBUG")

    # Server
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")

    # Planning
    max_content_chars: int = Field(500_000, alias="MAX_CONTENT_CHARS")
    max_slide_count: int = Field(99, alias="MAX_SLIDE_COUNT")
    default_provider: str = Field("managed", alias="DEFAULT_PROVIDER")
    # Offline development: every session talks to the canned MockProvider
    use_mock_provider: bool = Field(False, alias="USE_MOCK_PROVIDER")

    # Managed SDK provider
    managed_plan_model: str = Field("gemini-2.5-flash", alias="MANAGED_PLAN_MODEL")
    managed_image_model: str = Field(
        "gemini-3-pro-image-preview", alias="MANAGED_IMAGE_MODEL"
    )
    managed_fallback_image_model: str = Field(
        "gemini-2.5-flash-image", alias="MANAGED_FALLBACK_IMAGE_MODEL"
    )

    # Gateway provider
    gateway_base_url: str = Field("https://zenmux.ai/api", alias="GATEWAY_BASE_URL")
    gateway_plan_model: str = Field(
        "google/gemini-2.5-flash", alias="GATEWAY_PLAN_MODEL"
    )
    gateway_image_model: str = Field(
        "google/gemini-3-pro-image-preview", alias="GATEWAY_IMAGE_MODEL"
    )
    gateway_fallback_image_model: str = Field(
        "google/gemini-2.5-flash-image", alias="GATEWAY_FALLBACK_IMAGE_MODEL"
    )

    # Image rendering
    image_aspect_ratio: str = Field("16:9", alias="IMAGE_ASPECT_RATIO")
    image_size: str = Field("4K", alias="IMAGE_SIZE")
    default_slide_style: str = Field(
        "Modern, Corporate, High-Definition", alias="DEFAULT_SLIDE_STYLE"
    )

    # Transport; None keeps each client's own default timeout
    request_timeout: Optional[float] = Field(None, alias="REQUEST_TIMEOUT")

    # CORS
    cors_origins: str = Field("*", alias="CORS_ORIGINS")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("json", alias="LOG_FORMAT")

    @property
    def gateway_chat_base_url(self) -> str:
        return f"{self.gateway_base_url.rstrip('/')}/v1"

    def gateway_image_url(self, model: str) -> str:
        return f"{self.gateway_base_url.rstrip('/')}/vertex-ai/v1/models/{model}:generateContent"

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]


_settings = None


def get_settings() -> Settings:
    """Get settings instance (useful for dependency injection)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
