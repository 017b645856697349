"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    default_tax_year: str = "2025/26"
    auth_username: str = ""
    auth_password: str = ""
    log_level: str = "INFO"

    @property
    def auth_enabled(self) -> bool:
        """Basic auth is only enforced when both credentials are configured."""
        return bool(self.auth_username and self.auth_password)

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
