import os
import logging
from typing import List, Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# .env at the repository root (local dev)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
load_dotenv(os.path.join(ROOT, ".env"))

DEFAULT_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"
DEFAULT_RELAY_URL = "http://localhost:8000"
DEFAULT_TIMEZONE = "America/Los_Angeles"


class RelaySettings(BaseModel):
    maps_api_key: Optional[str] = Field(default=None, repr=False)
    timeout_sec: float = 60.0
    cors_origins: List[str] = ["*"]


class PlannerSettings(BaseModel):
    relay_url: str = DEFAULT_RELAY_URL
    directions_url: str = DEFAULT_DIRECTIONS_URL
    timeout_sec: float = 60.0
    # wall-clock zone of the form's date and time fields
    timezone: str = DEFAULT_TIMEZONE

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def load_relay_settings() -> RelaySettings:
    origins = os.getenv("RELAY_CORS_ORIGINS", "*")
    return RelaySettings(
        maps_api_key=os.getenv("GOOGLE_MAPS_KEY") or None,
        timeout_sec=float(os.getenv("RELAY_TIMEOUT_SEC", "60")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )


def load_planner_settings() -> PlannerSettings:
    return PlannerSettings(
        relay_url=os.getenv("RELAY_URL", DEFAULT_RELAY_URL).rstrip("/"),
        directions_url=os.getenv("DIRECTIONS_URL", DEFAULT_DIRECTIONS_URL),
        timeout_sec=float(os.getenv("PLANNER_TIMEOUT_SEC", "60")),
        timezone=os.getenv("TRANSIT_TZ", DEFAULT_TIMEZONE),
    )


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    # httpx logs every request URL at INFO, which would include the maps key
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
