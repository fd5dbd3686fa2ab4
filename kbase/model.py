"""Command entry record shared by the catalog loader, filter, and renderer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandEntry:
    """One shell command snippet from the knowledge base.

    ``cmd`` and ``desc`` are always present; the remaining fields may be empty.
    """

    cmd: str
    desc: str
    tags: tuple[str, ...] = ()
    platform: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
