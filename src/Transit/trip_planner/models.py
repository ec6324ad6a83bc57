from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ConfigDict

from Transit.trip_planner.errors import TripValidationError
from Transit.trip_planner.markup import plain_text


# ==========================
# REQUEST MODELS
# ==========================

class TimeMode(str, Enum):
    DEPART = "depart"
    ARRIVE = "arrive"


class TripRequest(BaseModel):
    origin: str
    destination: str
    timestamp: datetime = Field(default_factory=datetime.now)
    time_mode: TimeMode = TimeMode.DEPART

    def is_complete(self) -> bool:
        return bool(self.origin.strip()) and bool(self.destination.strip())


# ==========================
# RENDERED ITINERARY
# ==========================

class TransitDetail(BaseModel):
    line: Optional[str] = None
    headsign: Optional[str] = None
    departure_stop: Optional[str] = None
    departure_time: Optional[str] = None
    arrival_stop: Optional[str] = None
    arrival_time: Optional[str] = None


class StepDescriptor(BaseModel):
    instructions_html: str = ""
    transit: Optional[TransitDetail] = None

    @property
    def instructions_text(self) -> str:
        return plain_text(self.instructions_html)


# ==========================
# FORM STATE
# ==========================

class FormState(BaseModel):
    """
    Current values of the trip form plus the outcome of the last submission.

    The record is frozen; every setter returns a new state so a page is always
    rendered from one consistent snapshot.
    """
    model_config = ConfigDict(frozen=True)

    origin: str = ""
    destination: str = ""
    trip_time: datetime = Field(default_factory=datetime.now)
    mode: TimeMode = TimeMode.DEPART
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    def set_origin(self, value: str) -> "FormState":
        return self.model_copy(update={"origin": value})

    def set_destination(self, value: str) -> "FormState":
        return self.model_copy(update={"destination": value})

    def set_mode(self, value: TimeMode | str) -> "FormState":
        try:
            mode = TimeMode(value)
        except ValueError:
            raise TripValidationError(f"Unknown time mode: {value}")
        return self.model_copy(update={"mode": mode})

    def set_date(self, value: date | str) -> "FormState":
        if isinstance(value, str):
            try:
                value = datetime.strptime(value, "%Y-%m-%d").date()
            except ValueError:
                raise TripValidationError(f"Invalid date: {value}")
        trip_time = self.trip_time.replace(year=value.year, month=value.month, day=value.day)
        return self.model_copy(update={"trip_time": trip_time})

    def set_time(self, value: str) -> "FormState":
        try:
            parsed = datetime.strptime(value, "%H:%M")
        except ValueError:
            raise TripValidationError(f"Invalid time: {value}")
        trip_time = self.trip_time.replace(hour=parsed.hour, minute=parsed.minute, second=0, microsecond=0)
        return self.model_copy(update={"trip_time": trip_time})

    def with_result(self, result: Dict[str, Any]) -> "FormState":
        return self.model_copy(update={"result": result, "error": None})

    def with_error(self, message: str) -> "FormState":
        return self.model_copy(update={"result": None, "error": message})

    def to_trip_request(self) -> TripRequest:
        return TripRequest(
            origin=self.origin,
            destination=self.destination,
            timestamp=self.trip_time,
            time_mode=self.mode,
        )
