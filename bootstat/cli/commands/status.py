"""Status command: report booted, staged and rollback deployments."""

import asyncio
import logging
import sys
from enum import StrEnum
from typing import Literal

import cyclopts
import yaml

from bootstat.application.di import create_container
from bootstat.cli.console import Console, get_console
from bootstat.config import Config
from bootstat.domain.host.model.host import Host
from bootstat.domain.host.service.status import StatusService
from bootstat.domain.shared.error import (
    BootstatError,
    UnsupportedFormatVersionError,
    context,
    error_chain,
)

logger = logging.getLogger(__name__)

app = cyclopts.App(name="status", help="Display status of the host's deployments")

SUPPORTED_FORMAT_VERSION = 0


class OutputFormat(StrEnum):
    HUMAN_READABLE = "humanreadable"
    YAML = "yaml"
    JSON = "json"


def select_format(
    format: OutputFormat | None, json: bool, is_terminal: bool
) -> OutputFormat:
    """Explicit format wins, then --json, then human-readable on a terminal."""
    if format is not None:
        return format
    if json:
        return OutputFormat.JSON
    if is_terminal:
        return OutputFormat.HUMAN_READABLE
    return OutputFormat.YAML


def render_document(host: Host, format: OutputFormat) -> str:
    """Serialize the host as a JSON or YAML document."""
    if format is OutputFormat.JSON:
        return host.model_dump_json(by_alias=True) + "\n"
    if format is OutputFormat.YAML:
        data = host.model_dump(mode="json", by_alias=True)
        return yaml.safe_dump(data, sort_keys=False)
    raise ValueError(f"{format} is not a document format")


async def load_host(config: Config) -> Host:
    """Compute the host status, or an empty one if not booted via ostree."""
    container = create_container(config)
    try:
        service = await container.get(StatusService)
        sysroot = service.storage.sysroot
        if not sysroot.is_booted():
            logger.info("%s was not booted via ostree, reporting empty status", config.sysroot.path)
            return Host()
        booted = sysroot.booted_deployment()
        _, host = service.get_status(booted)
    finally:
        await container.close()
    return host


async def run_status(
    config: Config,
    console: Console,
    *,
    format: OutputFormat | None = None,
    format_version: int | None = None,
    json: bool = False,
) -> Host:
    with context("Status"):
        version = format_version or 0
        if version != SUPPORTED_FORMAT_VERSION:
            raise UnsupportedFormatVersionError(version)

        host = await load_host(config)

        output = select_format(format, json, console.is_terminal)
        with context("Writing to stdout"):
            if output is OutputFormat.HUMAN_READABLE:
                console.host_status(host)
            else:
                console.write(render_document(host, output))
        return host


@app.default
def status(
    format: Literal["humanreadable", "yaml", "json"] | None = None,
    format_version: int | None = None,
    json: bool = False,
) -> None:
    """Display status of the host's deployments.

    Args:
        format: Output format. Defaults to humanreadable on a terminal, yaml otherwise.
        format_version: Version of the status format; only 0 is supported.
        json: Output JSON (legacy, prefer --format json).
    """
    console = get_console()
    try:
        asyncio.run(
            run_status(
                Config(),
                console,
                format=OutputFormat(format) if format else None,
                format_version=format_version,
                json=json,
            )
        )
    except BootstatError as e:
        console.error_chain(error_chain(e))
        sys.exit(1)
