"""Exception types raised by the catalog and clipboard layers."""

from __future__ import annotations

from pathlib import Path


class KbaseError(Exception):
    """Base class for kbase failures."""


class CatalogLoadError(KbaseError):
    """A command catalog could not be read, parsed, or validated."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class CatalogInitError(KbaseError):
    """The default catalog template could not be written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot initialize {self.path}: {reason}")


class ClipboardUnavailable(KbaseError):
    """No clipboard tool accepted the text."""
