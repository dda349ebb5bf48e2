"""Deployment origin files.

An origin is a GLib keyfile written next to each deployment, recording how the
deployment was produced::

    [origin]
    container-image-reference=ostree-unverified-registry:quay.io/example/os:latest

    [libostree-transient]
    pinned=true
"""

import configparser
from typing import Self

from bootstat.domain.shared.error import ParseError

ORIGIN_GROUP = "origin"
ORIGIN_CONTAINER = "container-image-reference"


class Origin:
    """Read-only view of a deployment origin keyfile."""

    def __init__(self, parser: configparser.ConfigParser) -> None:
        self._parser = parser

    @classmethod
    def parse(cls, text: str) -> Self:
        parser = configparser.ConfigParser(
            interpolation=None,
            delimiters=("=",),
            comment_prefixes=("#",),
            strict=True,
        )
        # keyfile keys are case sensitive
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        try:
            parser.read_string(text)
        except configparser.Error as e:
            raise ParseError(f"Invalid origin keyfile: {e}") from e
        return cls(parser)

    def groups(self) -> list[str]:
        return self._parser.sections()

    def has_group(self, group: str) -> bool:
        return self._parser.has_section(group)

    def has_key(self, group: str, key: str) -> bool:
        return self._parser.has_option(group, key)

    def optional_string(self, group: str, key: str) -> str | None:
        if not self.has_key(group, key):
            return None
        return self._parser.get(group, key)

    def optional_bool(self, group: str, key: str) -> bool | None:
        value = self.optional_string(group, key)
        if value is None:
            return None
        match value.strip():
            case "true" | "1":
                return True
            case "false" | "0":
                return False
        raise ParseError(f"Invalid boolean '{value}' for {group}.{key}")
