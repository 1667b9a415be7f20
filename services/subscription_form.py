"""
Turning what a user picks in the dashboard/admin forms into request bodies
for the gateway, and gateway statuses back into messages for the user.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from models.schemas import SubscriptionCreate, TripCreate
from services.location_service import LocationService
from tools.local_time import encode_local_datetime

logger = logging.getLogger(__name__)

MSG_DUPLICATE_SUBSCRIPTION = "Thông báo với thông tin này đã tồn tại."
MSG_SUBSCRIPTION_FAILED = "Không thể tạo thông báo. Vui lòng thử lại."
MSG_MISSING_FIELDS = "Vui lòng điền đầy đủ thông tin"


class FormError(ValueError):
    pass


class SubscriptionForm(BaseModel):
    origin_id: Optional[int] = None
    destination_id: Optional[int] = None
    date: str = ""
    time: Optional[str] = None

    def to_payload(self, locations: LocationService, tz=None) -> dict:
        """
        Body for POST /api/subscriptions. `tz` defaults to the process-local
        zone; date_time always carries the offset in effect on that date.
        """
        if self.origin_id is None or self.destination_id is None or not self.date:
            raise FormError(MSG_MISSING_FIELDS)

        origin = locations.get(self.origin_id)
        destination = locations.get(self.destination_id)
        for picked, loc in ((self.origin_id, origin), (self.destination_id, destination)):
            if loc is None or not loc.selectable:
                raise FormError(f"location {picked} is not a selectable city")

        try:
            date_time = encode_local_datetime(self.date, self.time, tz=tz)
            body = SubscriptionCreate(
                origin_id=origin.id,
                origin_code=origin.code,
                origin=origin.name,
                destination_id=destination.id,
                destination_code=destination.code,
                destination=destination.name,
                date_time=date_time,
            )
        except ValueError as e:
            raise FormError(str(e)) from e
        return body.model_dump()


def describe_create_failure(status_code: int) -> str:
    """User-facing message for a failed subscription create."""
    if status_code == 409:
        return MSG_DUPLICATE_SUBSCRIPTION
    logger.error("Subscription create failed with status %s", status_code)
    return MSG_SUBSCRIPTION_FAILED


def build_trip_payload(
    subscription_id: str,
    route_code: str,
    route_name: str,
    departure_station: str,
    arrival_station: str,
    departure_time: datetime,
    arrival_time: datetime,
    travel_time: str,
    available_seats: int = 30,
    price: Decimal = Decimal("250000"),
) -> dict:
    """Body for POST /api/trips; times are sent as UTC ISO-8601."""
    try:
        trip = TripCreate(
            subscription_id=subscription_id,
            route_code=route_code,
            route_name=route_name,
            departure_station=departure_station,
            arrival_station=arrival_station,
            departure_time=departure_time,
            arrival_time=arrival_time,
            travel_time=travel_time,
            available_seats=available_seats,
            price=price,
        )
    except ValueError as e:
        raise FormError(str(e)) from e
    return trip.model_dump(mode="json") | {
        "departure_time": _utc_iso(trip.departure_time),
        "arrival_time": _utc_iso(trip.arrival_time),
        "price": float(trip.price),
    }


def _utc_iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
