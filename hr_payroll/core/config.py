import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _int_list(raw: str) -> List[int]:
    return [int(part) for part in raw.split(",") if part.strip()]


class PayrollSettings(BaseModel):
    default_work_hours: float = Field(default=float(os.getenv("DEFAULT_WORK_HOURS", "8")))
    # Python weekday numbers (Mon=0). Friday and Saturday by default.
    weekend_days: List[int] = Field(default_factory=lambda: _int_list(os.getenv("WEEKEND_DAYS", "4,5")))


class Config(BaseModel):
    app_name: str = "HR Attendance & Payroll"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./payroll.db")

    payroll: PayrollSettings = PayrollSettings()

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # Comma-separated CORS origins
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )


settings = Config()

_logger = logging.getLogger(__name__)
if settings.environment != "development" and settings.database_url.startswith("sqlite:///./"):
    _logger.warning("⚠ Using the local SQLite file database outside development.")
