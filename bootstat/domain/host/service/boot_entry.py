"""Turn a sysroot deployment into a BootEntry."""

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.deployment.model.origin import ORIGIN_CONTAINER, ORIGIN_GROUP, Origin
from bootstat.domain.host.model.host import BootEntry, BootEntryOstree
from bootstat.domain.image.model.ostree_ref import OstreeImageReference
from bootstat.domain.image.model.value import CachedImageStatus
from bootstat.domain.shared.error import context
from bootstat.domain.storage.model.storage import Storage

# Groups written by rpm-ostree for client-side changes (layered packages,
# overrides, modules) that an image cannot describe.
RPMOSTREE_GROUPS = ("rpmostree", "packages", "overrides", "modules")


def origin_is_incompatible(origin: Origin) -> bool:
    return any(origin.has_group(group) for group in RPMOSTREE_GROUPS)


def get_image_origin(origin: Origin) -> OstreeImageReference | None:
    value = origin.optional_string(ORIGIN_GROUP, ORIGIN_CONTAINER)
    if value is None:
        return None
    with context("Failed to load container image from origin"):
        return OstreeImageReference.parse(value)


@context("Reading deployment metadata")
def boot_entry_from_deployment(storage: Storage, deployment: Deployment) -> BootEntry:
    """Extract image and ostree metadata from a deployment.

    A deployment carrying client-side rpm-ostree changes is reported as
    incompatible with no image, even if its origin names one.
    """
    store = None
    cached = CachedImageStatus()
    incompatible = False

    origin = deployment.origin
    if origin is not None:
        incompatible = origin_is_incompatible(origin)
        if not incompatible and (image := get_image_origin(origin)) is not None:
            image_store = storage.store_for(deployment) or storage.store
            store = image_store.spec()
            cached = image_store.image_status(deployment, image)

    assert deployment.deploy_serial >= 0, f"negative deploy serial: {deployment!r}"
    return BootEntry(
        image=cached.image,
        cached_update=cached.cached_update,
        incompatible=incompatible,
        store=store,
        pinned=deployment.pinned,
        ostree=BootEntryOstree(
            checksum=deployment.checksum,
            deploy_serial=deployment.deploy_serial,
        ),
    )
