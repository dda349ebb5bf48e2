"""Unit tests for deployment classification."""

import itertools
from collections.abc import Callable

import pytest

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.deployment.model.value import BootOrder
from bootstat.domain.deployment.service.classifier import classify_deployments

MakeDeployment = Callable[..., Deployment]


class TestClassifyDeployments:
    def test_staged_booted_rollback(self, make_deployment: MakeDeployment):
        a = make_deployment(index=3, staged=True)
        b = make_deployment(index=4)
        c = make_deployment(index=2)

        result = classify_deployments([a, b, c], booted=b)

        assert result.deployments.staged is a
        assert result.deployments.rollback is c
        assert result.deployments.other == []
        assert result.rollback_queued is True
        assert result.boot_order is BootOrder.ROLLBACK

    def test_rollback_after_booted_is_not_queued(self, make_deployment: MakeDeployment):
        booted = make_deployment(index=0)
        rollback = make_deployment(index=1)

        result = classify_deployments([booted, rollback], booted=booted)

        assert result.deployments.staged is None
        assert result.deployments.rollback is rollback
        assert result.rollback_queued is False
        assert result.boot_order is BootOrder.DEFAULT

    def test_only_booted(self, make_deployment: MakeDeployment):
        booted = make_deployment(index=0)

        result = classify_deployments([booted], booted=booted)

        assert result.deployments.staged is None
        assert result.deployments.rollback is None
        assert result.deployments.other == []
        assert result.rollback_queued is False

    def test_booted_removed_by_equality_not_identity(self, make_deployment: MakeDeployment):
        booted = make_deployment(index=0, checksum="aa" * 32)
        same_on_disk = make_deployment(index=0, checksum="aa" * 32)
        rollback = make_deployment(index=1)

        result = classify_deployments([same_on_disk, rollback], booted=booted)

        assert result.deployments.rollback is rollback
        assert same_on_disk not in result.deployments.other

    def test_other_stateroots_go_to_other(self, make_deployment: MakeDeployment):
        booted = make_deployment(osname="fedora", index=0)
        rhel_staged = make_deployment(osname="rhel", index=1, staged=True)
        rollback = make_deployment(osname="fedora", index=2)
        extra = make_deployment(osname="fedora", index=3)
        rhel = make_deployment(osname="rhel", index=4)

        result = classify_deployments([booted, rhel_staged, rollback, extra, rhel], booted=booted)

        assert result.deployments.staged is None
        assert result.deployments.rollback is rollback
        # related remainder first, then other state-roots, both in input order
        assert result.deployments.other == [extra, rhel_staged, rhel]

    def test_first_staged_wins(self, make_deployment: MakeDeployment):
        booted = make_deployment(index=2)
        first = make_deployment(index=0, staged=True)
        second = make_deployment(index=1, staged=True)

        result = classify_deployments([first, second, booted], booted=booted)

        assert result.deployments.staged is first
        assert result.deployments.rollback is second
        assert result.rollback_queued is True

    def test_no_booted_deployment(self, make_deployment: MakeDeployment):
        staged = make_deployment(osname="fedora", index=0, staged=True)
        older = make_deployment(osname="fedora", index=1)
        rhel = make_deployment(osname="rhel", index=2)

        result = classify_deployments([staged, older, rhel])

        assert result.deployments.staged is staged
        assert result.deployments.rollback is older
        assert result.deployments.other == [rhel]
        assert result.rollback_queued is False
        assert result.boot_order is BootOrder.DEFAULT

    def test_empty(self):
        result = classify_deployments([])

        assert result.deployments.staged is None
        assert result.deployments.rollback is None
        assert result.deployments.other == []
        assert result.rollback_queued is False


class TestClassifierProperties:
    """Properties checked over every ordering of a small deployment set."""

    @pytest.fixture
    def deployments(self, make_deployment: MakeDeployment) -> list[Deployment]:
        return [
            make_deployment(osname="fedora", index=0, staged=True),
            make_deployment(osname="fedora", index=1),
            make_deployment(osname="fedora", index=2, staged=True),
            make_deployment(osname="fedora", index=3),
            make_deployment(osname="rhel", index=4),
        ]

    def test_idempotent(self, deployments: list[Deployment]):
        booted = deployments[3]

        first = classify_deployments(deployments, booted)
        second = classify_deployments(deployments, booted)

        assert first == second

    def test_orderings(self, deployments: list[Deployment]):
        for order in itertools.permutations(deployments):
            for booted in (None, *order):
                if booted is not None and booted.staged:
                    continue
                result = classify_deployments(order, booted)
                classified = result.deployments

                expected_staged = next(
                    (
                        d
                        for d in order
                        if d.staged and (booted is None or d.osname == booted.osname)
                    ),
                    None,
                )
                assert classified.staged is expected_staged
                if expected_staged is not None:
                    assert expected_staged is not classified.rollback
                    assert expected_staged not in classified.other

                if booted is not None:
                    assert classified.rollback is not booted
                    assert booted not in classified.other

                expected_queued = (
                    booted is not None
                    and classified.rollback is not None
                    and classified.rollback.index < booted.index
                )
                assert result.rollback_queued is expected_queued
                assert (result.boot_order is BootOrder.ROLLBACK) is expected_queued

                # every deployment ends up in exactly one role
                roles = [classified.staged, classified.rollback, *classified.other]
                if booted is not None:
                    roles.append(booted)
                assert sorted(id(d) for d in roles if d is not None) == sorted(
                    id(d) for d in order
                )
