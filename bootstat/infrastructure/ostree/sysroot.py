"""Enumerate deployments from an OSTree sysroot on disk.

Layout read here::

    ostree/deploy/<osname>/deploy/<checksum>.<serial>/         deployment root
    ostree/deploy/<osname>/deploy/<checksum>.<serial>.origin   origin keyfile
    ostree/boot.N/<osname>/<bootcsum>/<n> -> ../../../deploy/<osname>/deploy/...
    boot/loader/entries/*.conf                                 bootloader entries
    run/ostree-booted                                          booted via ostree
    run/ostree/staged-deployment                               a deployment is staged
"""

import logging
import os
from pathlib import Path

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.deployment.model.origin import Origin
from bootstat.domain.shared.error import NotBootedError, ParseError, context

logger = logging.getLogger(__name__)

BOOTED_MARKER = Path("run/ostree-booted")
STAGED_MARKER = Path("run/ostree/staged-deployment")
LOADER_ENTRIES = Path("boot/loader/entries")
DEPLOY_ROOT = Path("ostree/deploy")
TRANSIENT_GROUP = "libostree-transient"

DeploymentKey = tuple[str, str]  # (osname, "<checksum>.<serial>")


def parse_loader_entry(text: str) -> tuple[int, str] | None:
    """Return ``(version, ostree= path)`` of a BLS entry, None if not ostree's."""
    version = None
    target = None
    for line in text.splitlines():
        # key and value are separated by any run of spaces or tabs
        parts = line.split(None, 1)
        if not parts:
            continue
        key = parts[0]
        value = parts[1] if len(parts) > 1 else ""
        if key == "version":
            version = value.strip()
        elif key == "options":
            for karg in value.split():
                if karg.startswith("ostree="):
                    target = karg.removeprefix("ostree=")
    if target is None:
        return None
    if version is None:
        raise ParseError(f"Bootloader entry for {target} has no version")
    try:
        return int(version), target
    except ValueError:
        raise ParseError(f"Invalid bootloader entry version: {version!r}") from None


def parse_deploy_dir_name(name: str) -> tuple[str, int] | None:
    checksum, sep, serial = name.rpartition(".")
    if not sep or not checksum or not serial.isdigit():
        return None
    return checksum, int(serial)


class FilesystemSysroot:
    """Snapshot of the deployments of a sysroot, read when loaded.

    Args:
        path: Root of the sysroot (``/`` on a booted host).
        running_root: Root filesystem of the running system; the deployment
            whose directory is this same inode is the booted one.
    """

    def __init__(self, path: Path, running_root: Path = Path("/")) -> None:
        self.path = path
        self.running_root = running_root
        self._is_booted = False
        self._deployments: list[Deployment] = []
        self._booted: Deployment | None = None

    @classmethod
    def load(cls, path: Path, running_root: Path = Path("/")) -> "FilesystemSysroot":
        sysroot = cls(path, running_root)
        sysroot.reload()
        return sysroot

    def is_booted(self) -> bool:
        return self._is_booted

    def deployments(self) -> list[Deployment]:
        return list(self._deployments)

    def booted_deployment(self) -> Deployment | None:
        return self._booted

    def require_booted_deployment(self) -> Deployment:
        if self._booted is None:
            raise NotBootedError("Not booted into an OSTree deployment")
        return self._booted

    @context("Loading sysroot")
    def reload(self) -> None:
        self._is_booted = (self.path / BOOTED_MARKER).exists()
        dirs = self._deploy_dirs()
        ordered = self._loader_order(dirs)

        staged_key = None
        if (self.path / STAGED_MARKER).exists():
            unlisted = [key for key in dirs if key not in ordered]
            if unlisted:
                staged_key = unlisted[0]
                ordered.insert(0, staged_key)

        deployments = []
        for index, key in enumerate(ordered):
            deployments.append(self._load_deployment(key, dirs[key], index, key == staged_key))
        self._deployments = deployments
        self._booted = self._find_booted(dirs) if self._is_booted else None
        logger.debug(
            "Loaded %d deployments from %s, booted=%r",
            len(deployments),
            self.path,
            self._booted,
        )

    def _deploy_dirs(self) -> dict[DeploymentKey, Path]:
        dirs: dict[DeploymentKey, Path] = {}
        deploy_root = self.path / DEPLOY_ROOT
        if not deploy_root.is_dir():
            return dirs
        for stateroot in sorted(deploy_root.iterdir()):
            deploy = stateroot / "deploy"
            if not deploy.is_dir():
                continue
            for entry in sorted(deploy.iterdir()):
                if entry.is_dir() and parse_deploy_dir_name(entry.name) is not None:
                    dirs[(stateroot.name, entry.name)] = entry
        return dirs

    def _loader_order(self, dirs: dict[DeploymentKey, Path]) -> list[DeploymentKey]:
        """Deployments with a bootloader entry, first menu entry first."""
        entries_dir = self.path / LOADER_ENTRIES
        if not entries_dir.is_dir():
            return []
        versioned = []
        for conf in sorted(entries_dir.glob("*.conf")):
            parsed = parse_loader_entry(conf.read_text())
            if parsed is None:
                continue
            version, target = parsed
            resolved = Path(os.path.realpath(self.path / target.lstrip("/")))
            key = (resolved.parent.parent.name, resolved.name)
            if key not in dirs:
                logger.warning("Bootloader entry %s points to unknown deployment %s", conf, target)
                continue
            versioned.append((version, key))
        versioned.sort(key=lambda item: item[0], reverse=True)
        return [key for _, key in versioned]

    def _load_deployment(
        self, key: DeploymentKey, path: Path, index: int, staged: bool
    ) -> Deployment:
        osname, name = key
        parsed = parse_deploy_dir_name(name)
        assert parsed is not None
        checksum, serial = parsed

        origin = None
        origin_path = path.with_name(f"{name}.origin")
        if origin_path.exists():
            with context(f"Reading {origin_path}"):
                origin = Origin.parse(origin_path.read_text())
        pinned = bool(origin and origin.optional_bool(TRANSIENT_GROUP, "pinned"))

        return Deployment(
            osname=osname,
            index=index,
            checksum=checksum,
            deploy_serial=serial,
            staged=staged,
            pinned=pinned,
            origin=origin,
        )

    def _find_booted(self, dirs: dict[DeploymentKey, Path]) -> Deployment | None:
        root = self.running_root.stat()
        for deployment in self._deployments:
            if deployment.staged:
                continue
            st = dirs[(deployment.osname, f"{deployment.checksum}.{deployment.deploy_serial}")].stat()
            if (st.st_dev, st.st_ino) == (root.st_dev, root.st_ino):
                return deployment
        return None
