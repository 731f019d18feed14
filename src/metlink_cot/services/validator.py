"""Per-record validation of feed entities.

Entities without a vehicle or position (or otherwise malformed) are dropped
quietly; the rest of the batch is unaffected.
"""

import logging
from collections.abc import Iterator

from pydantic import ValidationError

from metlink_cot.models.feed import FeedEntity, FeedEnvelope

logger = logging.getLogger(__name__)


def has_vehicle_position(raw: object) -> bool:
    """Check that a raw entity carries both a vehicle and a position sub-record."""
    if not isinstance(raw, dict):
        return False
    vehicle = raw.get("vehicle")
    return isinstance(vehicle, dict) and isinstance(vehicle.get("position"), dict)


def validate_entities(envelope: FeedEnvelope) -> Iterator[FeedEntity]:
    """Yield the entities of an envelope that can be converted, in feed order."""
    skipped = 0
    for raw in envelope.entity:
        if not has_vehicle_position(raw):
            skipped += 1
            continue
        try:
            entity = FeedEntity.from_raw(raw)
        except ValidationError:
            skipped += 1
            continue
        yield entity

    if skipped:
        logger.debug(f"Skipped {skipped} of {len(envelope.entity)} entities")
