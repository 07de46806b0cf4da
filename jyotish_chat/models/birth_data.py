"""
Pydantic models for birth details.

BirthData is the canonical, immutable input to every AstrologyAPI facet call.
KundaliRequest is the raw request body for POST /kundali; numeric strings
coming from form fields are coerced by pydantic.
"""
from typing import Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class BirthData(BaseModel):
    """
    Birth moment and place.
    Created once per chart request; never mutated.
    """
    model_config = ConfigDict(frozen=True)

    day: int
    month: int
    year: int
    hour: int                       # 0–23, local time
    minute: int                     # 0–59
    latitude: float
    longitude: float
    timezone_offset: float = 5.5    # hours east of UTC (IST default)

    def to_payload(self) -> Dict:
        """Render the AstrologyAPI request body (minute is sent as `min`)."""
        return {
            "day": self.day,
            "month": self.month,
            "year": self.year,
            "hour": self.hour,
            "min": self.minute,
            "lat": self.latitude,
            "lon": self.longitude,
            "tzone": self.timezone_offset,
        }

    @classmethod
    def from_payload(cls, payload: Dict) -> "BirthData":
        return cls(
            day=payload["day"],
            month=payload["month"],
            year=payload["year"],
            hour=payload["hour"],
            minute=payload["min"],
            latitude=payload["lat"],
            longitude=payload["lon"],
            timezone_offset=payload.get("tzone", 5.5),
        )


class KundaliRequest(BaseModel):
    """Request body for POST /kundali"""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    pob: Optional[str] = None       # place of birth, display only

    day: int
    month: int
    year: int
    hour: int
    minute: int
    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lon: float = Field(validation_alias=AliasChoices("lon", "longitude"))
    tzone: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("tzone", "timezoneOffset", "timezone_offset"),
    )

    @field_validator("tzone", mode="before")
    @classmethod
    def _blank_tzone(cls, v):
        # a cleared form field means "use the default"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_birth_data(self) -> BirthData:
        return BirthData(
            day=self.day,
            month=self.month,
            year=self.year,
            hour=self.hour,
            minute=self.minute,
            latitude=self.lat,
            longitude=self.lon,
            timezone_offset=5.5 if self.tzone is None else self.tzone,
        )

    def display_dob(self) -> str:
        return f"{self.day}/{self.month}/{self.year}"

    def display_tob(self) -> str:
        return f"{self.hour}:{self.minute:02d}"
