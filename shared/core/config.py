import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    APP_NAME: str = "TI Inventory"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:8080"

    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 1440  # 24 hours default

    # Either a full URL or the postgres parts below
    DATABASE_URL: str | None = None
    DB_USER: str | None = None
    DB_PASS: str | None = None
    DB_HOST: str | None = None
    DB_PORT: str | None = "5432"
    DB_NAME: str | None = None

    # Fallback SMTP used when the stored settings carry no SMTP host
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_USE_SSL: bool = False
    EMAIL_SENDER: str = "noreply@ti-inventory.local"

    WEBHOOK_TIMEOUT_SECONDS: float = 5.0

    # Ledger policies
    OVERSELL_POLICY: str = "clamp"          # clamp | reject
    MISSING_ITEM_POLICY: str = "reject"     # reject | record
    ITEM_DELETE_POLICY: str = "forbid"      # forbid | allow

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()


def build_database_url(config: Settings) -> str:
    if config.DATABASE_URL:
        return config.DATABASE_URL
    if config.DB_HOST and config.DB_NAME:
        return (
            f"postgresql+psycopg2://{config.DB_USER}:{config.DB_PASS}@{config.DB_HOST}:{config.DB_PORT}/{config.DB_NAME}"
        )
    return f"sqlite:///{os.path.join(BASE_DIR, 'inventory.db')}"


DATABASE_URL = build_database_url(settings)
