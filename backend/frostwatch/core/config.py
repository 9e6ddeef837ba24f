from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    project_name: str = "frostwatch"
    database_url: str = "sqlite:///./frostwatch.db"

    # When set, POST /api/send-alerts-now requires a matching X-Admin-Key header.
    admin_api_key: str | None = None
    cors_allow_origins: list[str] = ["*"]

    app_base_url: str = "http://localhost:8000"
    from_email: str = "alerts@frostwatch.local"

    email_backend: str = "sendgrid"  # sendgrid/smtp
    sendgrid_api_key: str = ""
    sendgrid_api_url: str = "https://api.sendgrid.com/v3/mail/send"
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""

    zippopotam_base_url: str = "https://api.zippopotam.us/us"
    nws_base_url: str = "https://api.weather.gov"
    nws_user_agent: str = "FrostFreezeChecker/2.0"
    http_timeout_seconds: float = 10.0

    send_rate_per_second: float = 1.0
    display_timezone: str = "America/New_York"

    schedule_hour: int = 8
    schedule_timezone: str = "America/New_York"
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/1"

    log_level: str = "INFO"


settings = Settings()
