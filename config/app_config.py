# config/app_config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv
load_dotenv()

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
RECENT_SEARCHES_LIMIT = 5


@dataclass
class AppConfig:
    telegram_token: str
    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    api_timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def load(cls):
        return cls(
            telegram_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            geocoding_url=os.getenv("GEOCODING_URL", GEOCODING_URL),
            forecast_url=os.getenv("FORECAST_URL", FORECAST_URL),
            api_timeout=float(os.getenv("API_TIMEOUT", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO")
        )

    @property
    def request_timeout(self):
        """Таймаут для requests: 0 означает «без таймаута»."""
        return self.api_timeout if self.api_timeout > 0 else None
