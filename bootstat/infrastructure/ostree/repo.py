"""Read commit metadata from an OSTree repository via the ``ostree`` CLI."""

import ast
import logging
import subprocess
from pathlib import Path

from bootstat.domain.shared.error import CommandError, ParseError

logger = logging.getLogger(__name__)


def parse_gvariant_string(text: str) -> str:
    """Decode the text form of a GVariant string, e.g. ``'sha256:ab12'``."""
    text = text.strip()
    if text.startswith("@s "):
        text = text[3:]
    try:
        value = ast.literal_eval(text)
    except (ValueError, SyntaxError) as e:
        raise ParseError(f"Invalid GVariant string: {text[:60]!r}") from e
    if not isinstance(value, str):
        raise ParseError(f"Expected a GVariant string, got {text[:60]!r}")
    return value


class OstreeRepo:
    """Thin wrapper around ``ostree show`` for a single repository."""

    def __init__(self, path: Path, binary: str = "ostree") -> None:
        self.path = path
        self.binary = binary

    def _show(self, rev: str, option: str, key: str) -> str | None:
        args = [self.binary, f"--repo={self.path}", "show", f"--{option}={key}", rev]
        logger.debug("Running %s", " ".join(args))
        proc = subprocess.run(args, capture_output=True, text=True, check=False)
        if proc.returncode != 0:
            if "No such" in proc.stderr and "key" in proc.stderr:
                return None
            raise CommandError(
                f"ostree show {rev} failed: {proc.stderr.strip()}",
                returncode=proc.returncode,
            )
        return parse_gvariant_string(proc.stdout)

    def metadata_string(self, rev: str, key: str) -> str | None:
        return self._show(rev, "print-metadata-key", key)

    def detached_metadata_string(self, rev: str, key: str) -> str | None:
        return self._show(rev, "print-detached-metadata-key", key)
