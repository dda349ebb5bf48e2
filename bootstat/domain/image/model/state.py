"""Image metadata recorded alongside a pulled OSTree commit."""

from typing import Any

from bootstat.domain.shared.model.value import ValueObject

# OCI image config labels
LABEL_CREATED = "org.opencontainers.image.created"
LABEL_VERSION = "org.opencontainers.image.version"
LEGACY_LABEL_VERSION = "version"


class CachedImageUpdate(ValueObject):
    """Manifest and config of an update that was checked but not deployed."""

    manifest_digest: str
    configuration: dict[str, Any] | None = None


class ImageState(ValueObject):
    manifest_digest: str
    configuration: dict[str, Any] | None = None
    cached_update: CachedImageUpdate | None = None


def labels_of_config(config: dict[str, Any] | None) -> dict[str, str] | None:
    if not config:
        return None
    return (config.get("config") or {}).get("Labels")


def version_for_config(config: dict[str, Any] | None) -> str | None:
    labels = labels_of_config(config) or {}
    for key in (LABEL_VERSION, LEGACY_LABEL_VERSION):
        if key in labels:
            return labels[key]
    return None
