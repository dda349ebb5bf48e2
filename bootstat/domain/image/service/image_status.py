"""Build ImageStatus values from stored image metadata."""

import logging
from datetime import datetime
from typing import Any

from pydantic import AwareDatetime, TypeAdapter, ValidationError

from bootstat.domain.image.model.state import (
    LABEL_CREATED,
    ImageState,
    labels_of_config,
    version_for_config,
)
from bootstat.domain.image.model.value import CachedImageStatus, ImageReference, ImageStatus

logger = logging.getLogger(__name__)

# RFC 3339 requires a time and a UTC offset
_timestamp_adapter = TypeAdapter(AwareDatetime)


def try_deserialize_timestamp(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp, returning None (with a warning) if invalid."""
    try:
        return _timestamp_adapter.validate_python(value)
    except ValidationError as e:
        logger.warning("Invalid timestamp in image: %r: %s", value, e)
        return None


def create_image_status(
    image: ImageReference,
    manifest_digest: str,
    config: dict[str, Any] | None,
) -> ImageStatus:
    labels = labels_of_config(config) or {}
    timestamp = None
    if created := labels.get(LABEL_CREATED):
        timestamp = try_deserialize_timestamp(created)
    return ImageStatus(
        image=image,
        version=version_for_config(config),
        timestamp=timestamp,
        image_digest=manifest_digest,
    )


def cached_image_status(image: ImageReference, state: ImageState) -> CachedImageStatus:
    cached_update = None
    if state.cached_update is not None:
        cached_update = create_image_status(
            image,
            state.cached_update.manifest_digest,
            state.cached_update.configuration,
        )
    return CachedImageStatus(
        image=create_image_status(image, state.manifest_digest, state.configuration),
        cached_update=cached_update,
    )
