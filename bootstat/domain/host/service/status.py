"""StatusService - assembles the host status snapshot."""

import logging
from dataclasses import dataclass

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.deployment.model.value import Deployments
from bootstat.domain.deployment.service.classifier import classify_deployments
from bootstat.domain.host.model.host import BootEntry, Host, HostSpec, HostStatus, HostType
from bootstat.domain.host.service.boot_entry import boot_entry_from_deployment
from bootstat.domain.image.model.state import ImageState
from bootstat.domain.shared.error import context
from bootstat.domain.storage.model.storage import Storage

logger = logging.getLogger(__name__)


@dataclass
class StatusService:
    """Reads the sysroot once and reports staged/booted/rollback entries."""

    storage: Storage

    def _entry(self, deployment: Deployment | None, role: str) -> BootEntry | None:
        if deployment is None:
            return None
        with context(f"{role} deployment"):
            return boot_entry_from_deployment(self.storage, deployment)

    @context("Computing status")
    def get_status(self, booted_deployment: Deployment | None) -> tuple[Deployments, Host]:
        """Classify the sysroot deployments and build the Host snapshot.

        Args:
            booted_deployment: The running deployment, or None when the host
                is not booted from this sysroot.

        Returns:
            The classified deployments and the snapshot built from them.
        """
        classification = classify_deployments(
            self.storage.sysroot.deployments(), booted_deployment
        )
        deployments = classification.deployments

        staged = self._entry(deployments.staged, "Staged")
        booted = self._entry(booted_deployment, "Booted")
        rollback = self._entry(deployments.rollback, "Rollback")

        # The staged image is what the host will run next, so it is the intent.
        image = None
        for entry in (staged, booted):
            if entry is not None and entry.image is not None:
                image = entry.image.image
                break

        # Only a host running a container image is a bootc host.
        ty = None
        if booted is not None and booted.image is not None:
            ty = HostType.BOOTC_HOST

        host = Host(
            spec=HostSpec(image=image, boot_order=classification.boot_order),
            status=HostStatus(
                staged=staged,
                booted=booted,
                rollback=rollback,
                rollback_queued=classification.rollback_queued,
                ty=ty,
            ),
        )
        logger.debug("Host status: type=%s image=%s", ty, image)
        return deployments, host

    def get_status_require_booted(self) -> tuple[Deployment, Deployments, Host]:
        """Like :meth:`get_status`, but fails unless a deployment is booted."""
        booted = self.storage.sysroot.require_booted_deployment()
        deployments, host = self.get_status(booted)
        return booted, deployments, host

    def query_image(self, entry: BootEntry) -> ImageState | None:
        """Image metadata stored for the commit of an image-based entry."""
        if entry.image is None or entry.ostree is None:
            return None
        return self.storage.store.query_image_commit(entry.ostree.checksum)
