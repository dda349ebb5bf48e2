from dataclasses import dataclass, field
from enum import StrEnum

from bootstat.domain.deployment.model.deployment import Deployment


class BootOrder(StrEnum):
    DEFAULT = "default"
    ROLLBACK = "rollback"


@dataclass
class Deployments:
    """Deployments related to the booted one, split by role."""

    staged: Deployment | None = None
    rollback: Deployment | None = None
    other: list[Deployment] = field(default_factory=list)


@dataclass
class Classification:
    deployments: Deployments
    rollback_queued: bool
    boot_order: BootOrder
