from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator


class SubscriptionCreate(BaseModel):
    """Body the UI posts to /api/subscriptions (user_id/email are stamped by the gateway)."""
    origin_id: int
    origin_code: str = Field(..., min_length=1)
    origin: str
    destination_id: int
    destination_code: str = Field(..., min_length=1)
    destination: str
    date_time: str

    @field_validator("date_time")
    @classmethod
    def must_carry_offset(cls, v: str) -> str:
        try:
            parsed = datetime.fromisoformat(v)
        except ValueError as e:
            raise ValueError("date_time must be ISO-8601") from e
        if parsed.tzinfo is None:
            raise ValueError("date_time must carry an explicit UTC offset")
        return v

    @model_validator(mode="after")
    def origin_differs_from_destination(self):
        if self.origin_code == self.destination_code:
            raise ValueError("origin and destination must differ")
        return self


class TripCreate(BaseModel):
    """Body the admin page posts to /api/trips."""
    subscription_id: str = Field(..., min_length=1)
    route_code: str
    route_name: str
    departure_station: str
    arrival_station: str
    departure_time: datetime
    arrival_time: datetime
    travel_time: str
    available_seats: int = Field(30, ge=0)
    price: Decimal = Field(Decimal("250000"), ge=0)

    @model_validator(mode="after")
    def departure_before_arrival(self):
        if self.departure_time.tzinfo is None or self.arrival_time.tzinfo is None:
            raise ValueError("departure_time and arrival_time must carry a UTC offset")
        if self.departure_time >= self.arrival_time:
            raise ValueError("departure_time must be before arrival_time")
        return self
