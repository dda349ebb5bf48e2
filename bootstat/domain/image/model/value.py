from datetime import datetime
from enum import StrEnum
from typing import Any, Literal, Self

from pydantic import model_serializer, model_validator

from bootstat.domain.shared.model.value import ValueObject


class SignatureKind(StrEnum):
    OSTREE_REMOTE = "ostreeRemote"
    CONTAINER_POLICY = "containerPolicy"
    INSECURE = "insecure"


class ImageSignature(ValueObject):
    """How the signature of an image is verified.

    Serialized as a tagged union: ``{"ostreeRemote": "<remote>"}``,
    ``"containerPolicy"`` or ``"insecure"``.
    """

    kind: SignatureKind
    remote: str | None = None

    @classmethod
    def ostree_remote(cls, remote: str) -> Self:
        return cls(kind=SignatureKind.OSTREE_REMOTE, remote=remote)

    @classmethod
    def container_policy(cls) -> Self:
        return cls(kind=SignatureKind.CONTAINER_POLICY)

    @classmethod
    def insecure(cls) -> Self:
        return cls(kind=SignatureKind.INSECURE)

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"kind": data}
        if isinstance(data, dict) and list(data) == [SignatureKind.OSTREE_REMOTE.value]:
            return {
                "kind": SignatureKind.OSTREE_REMOTE,
                "remote": data[SignatureKind.OSTREE_REMOTE.value],
            }
        return data

    @model_validator(mode="after")
    def _remote_only_for_ostree(self) -> Self:
        if self.kind is SignatureKind.OSTREE_REMOTE:
            if not self.remote:
                raise ValueError("ostreeRemote signature requires a remote name")
        elif self.remote is not None:
            raise ValueError(f"{self.kind} signature does not take a remote")
        return self

    @model_serializer
    def _to_tagged(self) -> str | dict[str, str]:
        if self.kind is SignatureKind.OSTREE_REMOTE:
            return {self.kind.value: self.remote or ""}
        return self.kind.value

    def __str__(self) -> str:
        if self.kind is SignatureKind.OSTREE_REMOTE:
            return f"ostree-remote:{self.remote}"
        return self.kind.value


ImageTransport = Literal[
    "registry", "oci", "oci-archive", "docker-archive", "containers-storage", "dir"
]


class ImageReference(ValueObject):
    """A container image as addressed by bootstat.

    A missing ``signature`` means signature verification is disabled.
    """

    image: str
    transport: ImageTransport
    signature: ImageSignature | None = None

    def __str__(self) -> str:
        return f"{self.transport}:{self.image}"


class ImageStatus(ValueObject):
    image: ImageReference
    version: str | None = None
    timestamp: datetime | None = None
    image_digest: str


class CachedImageStatus(ValueObject):
    """Image status of a deployment plus a pending update, if one was fetched."""

    image: ImageStatus | None = None
    cached_update: ImageStatus | None = None


class Store(StrEnum):
    OSTREE_CONTAINER = "ostreeContainer"
