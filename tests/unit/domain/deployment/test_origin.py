import pytest

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.deployment.model.origin import ORIGIN_CONTAINER, ORIGIN_GROUP, Origin
from bootstat.domain.shared.error import ParseError

ORIGIN = """\
# written by bootc
[origin]
container-image-reference=ostree-unverified-registry:quay.io/example/os:latest

[libostree-transient]
pinned=true

[bootc]
Backend=ostree-container
"""


class TestOrigin:
    def test_optional_string(self):
        origin = Origin.parse(ORIGIN)

        assert (
            origin.optional_string(ORIGIN_GROUP, ORIGIN_CONTAINER)
            == "ostree-unverified-registry:quay.io/example/os:latest"
        )
        assert origin.optional_string(ORIGIN_GROUP, "refspec") is None
        assert origin.optional_string("rpmostree", "refspec") is None

    def test_keys_are_case_sensitive(self):
        origin = Origin.parse(ORIGIN)

        assert origin.has_key("bootc", "Backend")
        assert not origin.has_key("bootc", "backend")

    def test_groups(self):
        origin = Origin.parse(ORIGIN)

        assert origin.groups() == [ORIGIN_GROUP, "libostree-transient", "bootc"]
        assert origin.has_group("bootc")
        assert not origin.has_group("packages")

    def test_optional_bool(self):
        origin = Origin.parse(ORIGIN)

        assert origin.optional_bool("libostree-transient", "pinned") is True
        assert origin.optional_bool("libostree-transient", "other") is None

    def test_invalid_bool(self):
        origin = Origin.parse("[libostree-transient]\npinned=maybe\n")

        with pytest.raises(ParseError):
            origin.optional_bool("libostree-transient", "pinned")

    @pytest.mark.parametrize(
        "text",
        ["refspec=fedora:fedora/x86_64/coreos/stable\n", "[origin]\n[origin]\n"],
    )
    def test_malformed_keyfile(self, text: str):
        with pytest.raises(ParseError):
            Origin.parse(text)


class TestDeployment:
    def test_equality_is_identity(self):
        a = Deployment(osname="fedora", index=0, checksum="aa", deploy_serial=0)
        b = Deployment(osname="fedora", index=1, checksum="aa", deploy_serial=0)

        assert a != b
        assert a.equal(b)

    def test_equal_compares_serial_and_stateroot(self):
        a = Deployment(osname="fedora", index=0, checksum="aa", deploy_serial=0)

        assert not a.equal(Deployment(osname="fedora", index=0, checksum="aa", deploy_serial=1))
        assert not a.equal(Deployment(osname="rhel", index=0, checksum="aa", deploy_serial=0))
