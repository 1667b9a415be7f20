# models/subscription.py
# Shapes of what the backend returns. The gateway never imports these: it
# relays backend bodies untouched. They exist for clients of the gateway
# (and the tests) to validate what comes back.
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class Trip(BaseModel):
    id: str
    subscription_id: str
    route_code: str
    route_name: str
    departure_station: str
    arrival_station: str
    departure_time: datetime
    arrival_time: datetime
    travel_time: str  # human readable, e.g. "7 giờ"
    available_seats: int = Field(..., ge=0)
    price: Decimal = Field(..., ge=0)
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    @model_validator(mode="after")
    def departure_before_arrival(self):
        if self.departure_time >= self.arrival_time:
            raise ValueError("departure_time must be before arrival_time")
        return self


class Subscription(BaseModel):
    id: str
    user_id: str
    email: Optional[str] = None
    origin_id: int
    origin_code: str
    origin: Optional[str] = None
    destination_id: int
    destination_code: str
    destination: Optional[str] = None
    # "notify for trips departing at or after this instant"
    date_time: datetime
    is_active: bool = True
    trips: List[Trip] = Field(default_factory=list)
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
