"""Application configuration."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # so ADMIN_EMAIL works regardless of case
    )

    # Database fields (read from .env)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "inquiry_intake"
    db_user: str = "postgres"
    db_password: str = "postgres"

    # Construct database URL dynamically
    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Business information
    company_name: str = "The IAH Creations"
    business_email: str = "contact@iahcreations.com"
    linktree_url: str = "https://linktr.ee/theiahcreations"
    dashboard_url: str = ""

    # Notifications
    admin_email: str = "admin@iahcreations.com"
    enable_email_notifications: bool = True

    # Mail delivery (SMTP)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout: float = 10.0
    mail_from: str = "contact@iahcreations.com"
    mail_dry_run: bool = False  # log outbound mail instead of sending

    # Triage
    priority_policy: Literal["sequential", "highest"] = "sequential"
    response_id_prefix: str = "IAH-"

    # App
    max_payload_bytes: int = 64_000
    log_level: str = "INFO"


settings = Settings()
