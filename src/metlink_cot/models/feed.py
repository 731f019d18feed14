"""Pydantic models for the Metlink GTFS-RT vehicle positions feed (JSON flavour).

Metlink serves GTFS-RT as JSON rather than protobuf, with numeric route ids.
Only the fields we read are modelled; everything else is ignored.
"""

from datetime import UTC, datetime
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class OccupancyStatus(IntEnum):
    """Vehicle occupancy level (GTFS-RT standard enum values)."""

    EMPTY = 0
    MANY_SEATS_AVAILABLE = 1
    FEW_SEATS_AVAILABLE = 2
    STANDING_ROOM_ONLY = 3
    CRUSHED_STANDING_ROOM_ONLY = 4
    FULL = 5
    NOT_ACCEPTING_PASSENGERS = 6


OCCUPANCY_LABELS: dict[int, str] = {
    OccupancyStatus.EMPTY: "Empty",
    OccupancyStatus.MANY_SEATS_AVAILABLE: "Many seats available",
    OccupancyStatus.FEW_SEATS_AVAILABLE: "Few seats available",
    OccupancyStatus.STANDING_ROOM_ONLY: "Standing room only",
    OccupancyStatus.CRUSHED_STANDING_ROOM_ONLY: "Crushed standing room only",
    OccupancyStatus.FULL: "Full",
    OccupancyStatus.NOT_ACCEPTING_PASSENGERS: "Not accepting passengers",
}


class TripDescriptor(BaseModel):
    """Identifies the trip a vehicle is serving."""

    model_config = ConfigDict(extra="ignore")

    trip_id: str
    route_id: int | str
    direction_id: int | None = None
    start_time: str | None = None  # HH:MM:SS
    start_date: str | None = None  # YYYYMMDD
    schedule_relationship: int | None = None


class Position(BaseModel):
    """Geographic position of a vehicle."""

    model_config = ConfigDict(extra="ignore")

    latitude: float
    longitude: float
    bearing: float | None = None
    speed: float | None = None  # meters/second


class VehicleDescriptor(BaseModel):
    """Identifies a vehicle."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str


class VehiclePosition(BaseModel):
    """Real-time position of a transit vehicle."""

    model_config = ConfigDict(extra="ignore")

    trip: TripDescriptor
    position: Position
    timestamp: int
    vehicle: VehicleDescriptor
    occupancy_status: int | None = None
    current_stop_sequence: int | None = None
    stop_id: str | None = None
    current_status: int | None = None

    @field_validator("timestamp")
    @classmethod
    def _timestamp_in_range(cls, value: int) -> int:
        # epoch milliseconds or corrupt values would overflow datetime later
        try:
            datetime.fromtimestamp(value, tz=UTC)
        except (ValueError, OverflowError, OSError) as e:
            raise ValueError(f"timestamp {value} is out of range") from e
        return value


class FeedEntity(BaseModel):
    """One vehicle observation from the feed.

    `raw` keeps the entity exactly as received so it can be carried into
    feature metadata untouched.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    vehicle: VehiclePosition
    raw: dict[str, Any] = {}

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "FeedEntity":
        """Validate a raw feed entity, keeping the original dict alongside."""
        return cls.model_validate({**raw, "raw": raw})


class FeedEnvelope(BaseModel):
    """Top-level response from the vehiclepositions endpoint.

    Entities stay as plain dicts here; they are validated one at a time so
    a single malformed record cannot reject the whole batch.
    """

    model_config = ConfigDict(extra="ignore")

    header: dict[str, Any] | None = None
    entity: list[Any]
