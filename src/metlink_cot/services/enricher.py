"""Build CoT features from classified feed records.

Everything here is a pure function of its arguments so each piece of text
can be tested on its own.
"""

import math
from datetime import UTC, datetime
from typing import Any

from metlink_cot.models.features import (
    UNKNOWN,
    Feature,
    FeatureProperties,
    PointGeometry,
)
from metlink_cot.models.feed import OCCUPANCY_LABELS, FeedEntity
from metlink_cot.services.classifier import Classification

UNKNOWN_TEXT = "Unknown"


def occupancy_label(code: int | None) -> str:
    """Translate a GTFS-RT occupancy code to text ("Unknown" if absent or out of range)."""
    if code is None:
        return UNKNOWN_TEXT
    return OCCUPANCY_LABELS.get(code, UNKNOWN_TEXT)


def known_or_unknown(value: float | None) -> float:
    """Map a speed or bearing reading to a CoT kinematic value.

    Metlink reports 0 when a vehicle has no speed/bearing fix, so 0 is
    treated the same as a missing value.
    """
    if value is None or value == 0 or math.isnan(value):
        return UNKNOWN
    return value


def feature_id(network: str, classification: Classification, vehicle_id: str) -> str:
    """Stable feature id, e.g. "WLG-MetlinkBus-3450"."""
    return f"{network}-{classification.style.id_prefix}-{vehicle_id}"


def build_callsign(route_label: int | str, vehicle_type: str, vehicle_id: str) -> str:
    return f"Route {route_label} - {vehicle_type} {vehicle_id}"


def build_remarks(
    vehicle_type: str,
    vehicle_id: str,
    route_label: int | str,
    trip_id: str,
    direction_id: int | None,
    start_time: str | None,
    occupancy_status: int | None = None,
    speed: float | None = None,
) -> str:
    """Build the multi-line remarks block shown in the marker details.

    Occupancy and speed lines are only included when the feed provided them.
    """
    lines = [
        ("Vehicle Type", vehicle_type),
        ("Vehicle ID", vehicle_id),
        ("Route ID", str(route_label)),
        ("Trip ID", trip_id),
        ("Direction", UNKNOWN_TEXT if direction_id is None else str(direction_id)),
        ("Start Time", start_time or UNKNOWN_TEXT),
    ]
    if occupancy_status is not None:
        lines.append(("Occupancy", occupancy_label(occupancy_status)))
    if speed is not None:
        lines.append(("Speed", f"{speed:.1f} m/s"))

    return "\n".join(f"{label}: {value}" for label, value in lines)


def build_metadata(entity: FeedEntity, classification: Classification) -> dict[str, Any]:
    """Structured metadata: the raw entity plus derived, human-friendly fields."""
    vehicle = entity.vehicle
    return {
        **entity.raw,
        "vehicleType": classification.category.value,
        "routeId": classification.route_label,
        "directionId": vehicle.trip.direction_id,
        "vehicleId": vehicle.vehicle.id,
        "occupancy": occupancy_label(vehicle.occupancy_status),
    }


def build_feature(entity: FeedEntity, classification: Classification, network: str) -> Feature:
    """Convert one classified record into a map feature."""
    vehicle = entity.vehicle
    trip = vehicle.trip
    position = vehicle.position
    style = classification.style
    vehicle_type = classification.category.value
    vehicle_id = vehicle.vehicle.id
    observed_at = datetime.fromtimestamp(vehicle.timestamp, tz=UTC)

    properties = FeatureProperties(
        type=style.cot_type,
        callsign=build_callsign(classification.route_label, vehicle_type, vehicle_id),
        time=observed_at,
        start=observed_at,
        speed=known_or_unknown(position.speed),
        course=known_or_unknown(position.bearing),
        marker_color=style.marker_color,
        metadata=build_metadata(entity, classification),
        remarks=build_remarks(
            vehicle_type=vehicle_type,
            vehicle_id=vehicle_id,
            route_label=classification.route_label,
            trip_id=trip.trip_id,
            direction_id=trip.direction_id,
            start_time=trip.start_time,
            occupancy_status=vehicle.occupancy_status,
            speed=position.speed,
        ),
        icon=style.icon,
    )

    return Feature(
        id=feature_id(network, classification, vehicle_id),
        properties=properties,
        geometry=PointGeometry(coordinates=(position.longitude, position.latitude)),
    )
