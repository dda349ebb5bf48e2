"""Main CLI application using Cyclopts."""

import cyclopts

from bootstat.cli.commands import status
from bootstat.config import Config, configure_logging

app = cyclopts.App(
    name="bootstat",
    help="Report the booted, staged and rollback deployments of an OSTree host",
)

app.command(status.app, name="status")


def main() -> None:
    configure_logging(Config().logging)
    app()


if __name__ == "__main__":
    main()
