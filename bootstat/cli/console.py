"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from typing import IO

from rich.console import Console as RichConsole
from rich.text import Text

from bootstat.domain.host.model.host import BootEntry, Host

ROLES = ("staged", "booted", "rollback")


class Console:
    """CLI output manager wrapping rich.

    Status documents (JSON/YAML) are written verbatim; the human-readable
    report and error messages are rendered with rich.
    """

    def __init__(
        self,
        *,
        file: IO[str] | None = None,
        err_file: IO[str] | None = None,
        force_terminal: bool | None = None,
    ) -> None:
        """Initialize the console.

        Args:
            file: Stream for normal output (default: stdout).
            err_file: Stream for errors (default: stderr).
            force_terminal: Force terminal mode (True/False) or auto-detect (None).
        """
        self._console = RichConsole(file=file, force_terminal=force_terminal)
        self._err_console = RichConsole(
            file=err_file,
            stderr=err_file is None,
            force_terminal=force_terminal,
        )

    @property
    def is_terminal(self) -> bool:
        """Check if output is going to a terminal."""
        return self._console.is_terminal

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def error(self, message: str) -> None:
        """Print an error message to stderr."""
        self._err_console.print(Text.assemble(("✗ ", "red"), message), soft_wrap=True)

    def error_chain(self, messages: list[str]) -> None:
        """Print an error with its context chain, outermost first."""
        if not messages:
            return
        self.error(": ".join(messages))

    # -------------------------------------------------------------------------
    # Structured output
    # -------------------------------------------------------------------------

    def write(self, text: str) -> None:
        """Write text as-is, without markup or wrapping."""
        out = self._console.file
        out.write(text)
        out.flush()

    def host_status(self, host: Host) -> None:
        """Print the human-readable host status report."""
        for role in ROLES:
            self._boot_entry(role, getattr(host.status, role))
        if host.status.rollback_queued:
            self._console.print(
                Text("Rollback is queued for the next boot", style="yellow"),
                soft_wrap=True,
            )

    def _boot_entry(self, role: str, entry: BootEntry | None) -> None:
        if entry is None:
            self._console.print(Text(f"No {role} image present", style="dim"), soft_wrap=True)
            return
        if entry.image is None:
            message = f"No image defined for {role} deployment"
            if entry.incompatible:
                message += " (deployment has local modifications)"
            self._console.print(Text(message, style="dim"), soft_wrap=True)
            return

        status = entry.image
        signature = status.image.signature
        fields = [
            ("Image version", status.version or "unknown"),
            ("Image transport", status.image.transport),
            ("Image signature", str(signature) if signature else "insecure"),
            ("Image digest", status.image_digest),
        ]
        self._console.print(
            Text.assemble((f"Current {role} image: ", "bold"), status.image.image),
            soft_wrap=True,
        )
        for label, value in fields:
            self._console.print(Text.assemble(f"    {label}: ", (value, "cyan")), soft_wrap=True)


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
