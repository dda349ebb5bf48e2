"""Conversion between OSTree image references and bootstat's ImageReference.

The mapping is not perfectly symmetric: an allow-insecure reference reads back
as ``signature=None``, so an explicit ``ImageSignature.insecure()`` does not
survive a round trip through the external form.
"""

from bootstat.domain.image.model.ostree_ref import (
    ContainerImageReference,
    ContainerPolicy,
    ContainerPolicyAllowInsecure,
    OstreeImageReference,
    OstreeRemote,
    SignatureSource,
    Transport,
)
from bootstat.domain.image.model.value import ImageReference, ImageSignature, SignatureKind


def signature_from_source(source: SignatureSource) -> ImageSignature:
    match source:
        case OstreeRemote(remote=remote):
            return ImageSignature.ostree_remote(remote)
        case ContainerPolicy():
            return ImageSignature.container_policy()
        case ContainerPolicyAllowInsecure():
            return ImageSignature.insecure()
    raise AssertionError(f"unhandled signature source {source!r}")


def signature_to_source(signature: ImageSignature) -> SignatureSource:
    match signature.kind:
        case SignatureKind.OSTREE_REMOTE:
            return OstreeRemote(signature.remote or "")
        case SignatureKind.CONTAINER_POLICY:
            return ContainerPolicy()
        case SignatureKind.INSECURE:
            return ContainerPolicyAllowInsecure()
    raise AssertionError(f"unhandled signature {signature!r}")


def transport_to_string(transport: Transport) -> str:
    """Canonical transport name: ``registry``, or the prefix without its ``:``."""
    if transport is Transport.REGISTRY:
        return "registry"
    prefix, _, _ = str(transport).rpartition(":")
    return prefix


def from_external(imgref: OstreeImageReference) -> ImageReference:
    signature = None
    if not isinstance(imgref.sigverify, ContainerPolicyAllowInsecure):
        signature = signature_from_source(imgref.sigverify)
    return ImageReference(
        image=imgref.imgref.name,
        transport=transport_to_string(imgref.imgref.transport),
        signature=signature,
    )


def to_external(image: ImageReference) -> OstreeImageReference:
    """Raises ParseError when ``image.transport`` is not a known transport."""
    sigverify: SignatureSource = ContainerPolicyAllowInsecure()
    if image.signature is not None:
        sigverify = signature_to_source(image.signature)
    return OstreeImageReference(
        sigverify=sigverify,
        imgref=ContainerImageReference(
            transport=Transport.parse(image.transport),
            name=image.image,
        ),
    )
