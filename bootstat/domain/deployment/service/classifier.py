"""Split the sysroot deployment list into staged, rollback and other roles."""

import logging
from collections import deque
from collections.abc import Iterable

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.deployment.model.value import BootOrder, Classification, Deployments

logger = logging.getLogger(__name__)


def classify_deployments(
    deployments: Iterable[Deployment],
    booted: Deployment | None = None,
) -> Classification:
    """Classify deployments relative to the booted one.

    Only deployments in the booted state-root (all of them, when nothing is
    booted) can be staged or rollback. The booted deployment itself is left
    out; the caller reports it separately.

    Args:
        deployments: Deployments in sysroot order.
        booted: The currently booted deployment, if any.

    Returns:
        The classified deployments and whether the rollback will be chosen
        on next boot.
    """
    stateroot = booted.osname if booted is not None else None
    related: deque[Deployment] = deque()
    other_roots: list[Deployment] = []
    for deployment in deployments:
        if stateroot is None or deployment.osname == stateroot:
            related.append(deployment)
        else:
            other_roots.append(deployment)

    # First staged deployment wins; any further ones stay in the queue.
    staged = next((d for d in related if d.staged), None)
    if staged is not None:
        related.remove(staged)
    logger.debug("Staged: %r", staged)

    if booted is not None:
        related = deque(d for d in related if not d.equal(booted))

    rollback = related.popleft() if related else None
    rollback_queued = (
        booted is not None and rollback is not None and rollback.index < booted.index
    )
    boot_order = BootOrder.ROLLBACK if rollback_queued else BootOrder.DEFAULT
    logger.debug("Rollback queued=%s", rollback_queued)

    return Classification(
        deployments=Deployments(
            staged=staged,
            rollback=rollback,
            other=[*related, *other_roots],
        ),
        rollback_queued=rollback_queued,
        boot_order=boot_order,
    )
