from dataclasses import dataclass

from bootstat.domain.deployment.model.origin import Origin


@dataclass(frozen=True, eq=False)
class Deployment:
    """One bootable OSTree deployment, as enumerated from the sysroot.

    Instances are handles owned by the sysroot: ``==`` is object identity.
    Use :meth:`equal` to compare two handles for the same on-disk deployment.

    Attributes:
        osname: State-root the deployment belongs to.
        index: Position in the bootloader menu (0 boots by default).
        checksum: OSTree commit checksum.
        deploy_serial: Serial distinguishing deployments of the same commit.
        staged: Prepared to become active on next boot.
        pinned: Protected from garbage collection.
        origin: Parsed origin file, if the deployment has one.
    """

    osname: str
    index: int
    checksum: str
    deploy_serial: int
    staged: bool = False
    pinned: bool = False
    origin: Origin | None = None

    def equal(self, other: "Deployment") -> bool:
        return (
            self.osname == other.osname
            and self.checksum == other.checksum
            and self.deploy_serial == other.deploy_serial
        )

    def __repr__(self) -> str:
        flags = "".join(f" {name}" for name in ("staged", "pinned") if getattr(self, name))
        return (
            f"<Deployment {self.osname} {self.checksum}.{self.deploy_serial} "
            f"index={self.index}{flags}>"
        )
