from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Platform API that owns measurements, profiles and photos
    platform_base_url: str = "http://localhost:3000"
    platform_timeout_s: float = 10.0

    progress_api_key: str | None = None
    default_tz: str = "UTC"
    log_level: str = "INFO"

    # The progress page asks for more than the platform returns (it caps at 100)
    measurement_fetch_limit: int = 120

    # Photo uploads (mirrors platform-side validation)
    max_photo_bytes: int = 5 * 1024 * 1024
    allowed_photo_types: list[str] = ["image/jpeg", "image/png", "image/webp", "image/gif"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
