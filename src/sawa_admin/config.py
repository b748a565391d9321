from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dashboard settings loaded from environment variables.

    Pydantic Settings reads env vars matching field names (case-insensitive).
    In development, it also reads from .env file if present.
    """

    # Marketplace REST API, every gateway path is relative to this
    api_base_url: str = "https://airbnb-backend.ahmed-albakor.com/api"
    api_timeout: float | None = 30.0  # Seconds per upstream request, None waits forever

    environment: str = "development"  # "production" turns on secure cookies

    # Session cookie holding the bearer token
    token_cookie_name: str = "token"
    token_cookie_days: int = 7

    # List screens
    default_per_page: int = 10
    max_per_page: int = 100

    image_upload_folder: str = "listings"  # Default folder for the image upload endpoint
    toast_limit: int = 1  # Toasts kept visible at once

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("prod", "production")


settings = Settings()
