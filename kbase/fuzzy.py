"""Query filtering over the command catalog.

Matching is case-insensitive substring presence against the command text,
the description, or any tag. Results keep catalog order; nothing is ranked.
"""

from __future__ import annotations

from .model import CommandEntry


def command_matches(entry: CommandEntry, query: str) -> bool:
    """Return whether ``query`` occurs in ``entry``'s cmd, desc, or a tag."""
    needle = query.casefold()
    if needle in entry.cmd.casefold():
        return True
    if needle in entry.desc.casefold():
        return True
    return any(needle in tag.casefold() for tag in entry.tags)


def filter_commands(commands: list[CommandEntry], query: str) -> list[CommandEntry]:
    if not query:
        return list(commands)
    return [entry for entry in commands if command_matches(entry, query)]
