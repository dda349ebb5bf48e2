"""OSTree container image references.

These are the strings stored in deployment origins, e.g.::

    ostree-unverified-registry:quay.io/example/os:latest
    ostree-remote-registry:fedora:quay.io/fedora/fedora-coreos:stable
    ostree-image-signed:docker://quay.io/example/os:latest
    ostree-unverified-image:oci:/var/lib/images/os
"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from bootstat.domain.shared.error import ParseError


class Transport(Enum):
    REGISTRY = "registry"
    OCI_DIR = "oci"
    OCI_ARCHIVE = "oci-archive"
    DOCKER_ARCHIVE = "docker-archive"
    CONTAINER_STORAGE = "containers-storage"
    DIR = "dir"

    @classmethod
    def parse(cls, name: str) -> "Transport":
        if name == "docker":
            return cls.REGISTRY
        try:
            return cls(name)
        except ValueError:
            raise ParseError(f"Unknown transport '{name}'") from None

    def __str__(self) -> str:
        # skopeo does not accept "registry:" yet
        if self is Transport.REGISTRY:
            return "docker://"
        return f"{self.value}:"


@dataclass(frozen=True)
class OstreeRemote:
    """Verify with the GPG/signapi configuration of an ostree remote."""

    remote: str


@dataclass(frozen=True)
class ContainerPolicy:
    """Verify with containers-policy.json."""


@dataclass(frozen=True)
class ContainerPolicyAllowInsecure:
    """No signature verification."""


SignatureSource = OstreeRemote | ContainerPolicy | ContainerPolicyAllowInsecure


@dataclass(frozen=True)
class ContainerImageReference:
    transport: Transport
    name: str

    @classmethod
    def parse(cls, value: str) -> Self:
        transport_name, sep, name = value.partition(":")
        if not sep:
            raise ParseError(f"Missing ':' in {value}")
        transport = Transport.parse(transport_name)
        if not name:
            raise ParseError(f"Invalid empty name in {value}")
        if transport_name == "docker":
            if not name.startswith("//"):
                raise ParseError(f"Missing // in docker:// in {value}")
            name = name[2:]
        return cls(transport=transport, name=name)

    def __str__(self) -> str:
        return f"{self.transport}{self.name}"


@dataclass(frozen=True)
class OstreeImageReference:
    sigverify: SignatureSource
    imgref: ContainerImageReference

    @classmethod
    def parse(cls, value: str) -> Self:
        scheme, sep, rest = value.partition(":")
        if not sep:
            raise ParseError(f"Missing ':' in {value}")

        sigverify: SignatureSource
        match scheme:
            case "ostree-image-signed":
                sigverify = ContainerPolicy()
            case "ostree-unverified-image":
                sigverify = ContainerPolicyAllowInsecure()
            case "ostree-unverified-registry":
                sigverify = ContainerPolicyAllowInsecure()
                rest = f"registry:{rest}"
            case "ostree-remote-registry" | "ostree-remote-image":
                remote, sep, rest = rest.partition(":")
                if not sep:
                    raise ParseError(f"Missing second ':' in {value}")
                if not remote:
                    raise ParseError("Invalid empty remote in ostree image reference")
                sigverify = OstreeRemote(remote)
                if scheme == "ostree-remote-registry":
                    rest = f"registry:{rest}"
            case _:
                raise ParseError(f"Invalid ostree image reference scheme: {scheme}")

        return cls(sigverify=sigverify, imgref=ContainerImageReference.parse(rest))

    def __str__(self) -> str:
        match self.sigverify:
            case ContainerPolicyAllowInsecure() if self.imgref.transport is Transport.REGISTRY:
                # allow-insecure is the effective default, so use the short form
                return f"ostree-unverified-registry:{self.imgref.name}"
            case ContainerPolicyAllowInsecure():
                return f"ostree-unverified-image:{self.imgref}"
            case ContainerPolicy():
                return f"ostree-image-signed:{self.imgref}"
            case OstreeRemote(remote=remote):
                return f"ostree-remote-image:{remote}:{self.imgref}"
        raise AssertionError(f"unhandled signature source {self.sigverify!r}")
