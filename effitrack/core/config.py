import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class MailSettings(BaseModel):
    resend_api_key: Optional[str] = Field(default=os.getenv("RESEND_API_KEY"))
    api_url: str = Field(default=os.getenv("RESEND_API_URL", "https://api.resend.com/emails"))
    sender: str = Field(default=os.getenv("MAIL_FROM", "EFFI-TRACK <onboarding@resend.dev>"))
    timeout_seconds: float = Field(default=float(os.getenv("MAIL_TIMEOUT_SECONDS", "10")))
    # 1 means a single attempt (no retry)
    max_attempts: int = Field(default=int(os.getenv("MAIL_MAX_ATTEMPTS", "1")))

class AISettings(BaseModel):
    openrouter_api_key: Optional[str] = Field(default=os.getenv("OPENROUTER_API_KEY"))
    model_name: str = Field(default=os.getenv("AI_MODEL_NAME", "google/gemini-2.0-flash-001"))
    temperature: float = 0.7
    timeout_seconds: float = 30.0

class Config(BaseModel):
    app_name: str = "EFFI-TRACK"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./effitrack.db")

    # Outbound services
    mail: MailSettings = MailSettings()
    ai: AISettings = AISettings()

    # Deadline alerts
    deadline_lookahead_days: int = int(os.getenv("DEADLINE_LOOKAHEAD_DAYS", "3"))

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:5173,http://localhost:8080,"
                "http://127.0.0.1:5173,http://127.0.0.1:8080",
            ).split(",")
            if o.strip()
        ]
    )

    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "30"))

settings = Config()

_logger = logging.getLogger(__name__)
if settings.environment == "production" and not settings.mail.resend_api_key:
    _logger.warning("RESEND_API_KEY is not set; deadline alerts will refuse to run.")
