from abc import abstractmethod
from typing import Protocol

from bootstat.domain.deployment.model.deployment import Deployment


class Sysroot(Protocol):
    """Point-in-time view of the deployments known to the bootloader."""

    @abstractmethod
    def is_booted(self) -> bool:
        """Whether the running system was booted from an OSTree deployment."""
        ...

    @abstractmethod
    def deployments(self) -> list[Deployment]: ...

    @abstractmethod
    def booted_deployment(self) -> Deployment | None: ...

    @abstractmethod
    def require_booted_deployment(self) -> Deployment:
        """Raises NotBootedError when no deployment is booted."""
        ...
