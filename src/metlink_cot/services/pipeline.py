"""One conversion run: fetch, validate, classify, deduplicate, enrich, emit.

Errors from the upstream feed never escape `run_pipeline`; an empty
FeatureCollection is submitted instead so the map is never left stale
with a crashed task.
"""

import logging

from metlink_cot.data.config import MetlinkConfig
from metlink_cot.data.metlink_client import MetlinkClient, UpstreamError
from metlink_cot.models.features import FeatureCollection
from metlink_cot.models.feed import FeedEntity, FeedEnvelope
from metlink_cot.services.classifier import Classification, classify
from metlink_cot.services.dedup import deduplicate
from metlink_cot.services.enricher import build_feature, feature_id
from metlink_cot.services.submitter import Submitter
from metlink_cot.services.validator import validate_entities

logger = logging.getLogger(__name__)


async def fetch_envelope(config: MetlinkConfig) -> FeedEnvelope:
    """Fetch the feed envelope once.

    Raises:
        UpstreamError: If the feed is unavailable or malformed.
    """
    async with MetlinkClient(config) as client:
        return await client.fetch_vehicle_positions()


def convert_envelope(envelope: FeedEnvelope, config: MetlinkConfig) -> FeatureCollection:
    """Turn a feed envelope into a deduplicated FeatureCollection."""
    candidates: list[tuple[str, tuple[FeedEntity, Classification]]] = []
    for entity in validate_entities(envelope):
        classification = classify(entity, config.classification_policy)
        if not config.is_category_visible(classification.category):
            continue
        key = feature_id(config.network, classification, entity.vehicle.vehicle.id)
        candidates.append((key, (entity, classification)))

    features = [
        build_feature(entity, classification, config.network)
        for entity, classification in deduplicate(candidates)
    ]
    logger.info(
        f"ok - processed {len(features)} valid vehicles (from {len(envelope.entity)} total)"
    )
    return FeatureCollection(features=features)


async def run_pipeline(config: MetlinkConfig, submitter: Submitter) -> FeatureCollection:
    """Run one conversion and submit the result exactly once.

    Args:
        config: Feed credentials, classification policy and visibility switches.
        submitter: Where the resulting FeatureCollection is sent.

    Returns:
        The FeatureCollection that was submitted (empty on upstream failure).
    """
    try:
        envelope = await fetch_envelope(config)
    except UpstreamError as e:
        logger.error(f"Error fetching Metlink data: {e}")
        collection = FeatureCollection()
    else:
        logger.info(f"ok - Received {len(envelope.entity)} vehicles from API")
        collection = convert_envelope(envelope, config)

    logger.info(f"ok - submitting {len(collection.features)} features")
    await submitter.submit(collection)
    return collection
