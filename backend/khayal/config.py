"""Application configuration management."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.debug and self.log_level.upper() != "TRACE":
            self.log_level = "DEBUG"

    # Database
    database_url: str
    auto_create_tables: bool = True

    # Security
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    reset_token_expire_minutes: int = 60
    bcrypt_rounds: int = 10

    # CORS
    cors_origins: str = "http://localhost:5173"

    # Frontend (used to build password reset links)
    frontend_url: str = "http://localhost:5173"

    # Default admin, created on first boot when no admin exists
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"
    default_admin_email: str = "admin@example.com"

    # Email (Resend)
    resend_api_key: str = ""
    resend_base_url: str = "https://api.resend.com"
    email_from: str = "onboarding@resend.dev"
    contact_recipient: str = "contact@example.com"
    site_name: str = "Knights Khayal"
    site_location: str = "Orlando, FL, USA"

    # Uploads
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    upload_reject_silently: bool = False

    # Application
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api"
    port: int = 5000

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
