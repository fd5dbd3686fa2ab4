"""Closed set of session input actions and the key table that produces them.

The engine only ever sees ``InputAction`` values; raw terminal tokens from
``read_key`` are translated here so the state machine stays encoding-free.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class InputAction(enum.Enum):
    QUIT = "quit"
    CANCEL = "cancel"
    COPY = "copy"
    EDIT = "edit"
    UP = "up"
    DOWN = "down"
    BACKSPACE = "backspace"
    CHAR = "char"


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single input action."""

    combos: tuple[str, ...]
    action: InputAction


class KeyBindings:
    """Small key-dispatch table; unbound printable keys become ``CHAR``."""

    def __init__(self) -> None:
        self._actions: dict[str, InputAction] = {}

    def register_binding(self, binding: KeyBinding) -> KeyBindings:
        """Register one binding, overwriting existing actions for same combos."""
        for combo in binding.combos:
            self._actions[combo] = binding.action
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyBindings:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def resolve(self, key: str) -> tuple[InputAction, str] | None:
        """Translate a key token into ``(action, char)``.

        ``char`` is only meaningful for ``InputAction.CHAR``. Returns ``None``
        for tokens that are neither bound nor a single printable ASCII char.
        """
        action = self._actions.get(key)
        if action is not None:
            return action, ""
        if is_printable_ascii(key):
            return InputAction.CHAR, key
        return None


def is_printable_ascii(key: str) -> bool:
    return len(key) == 1 and 32 <= ord(key) <= 126


def default_key_bindings() -> KeyBindings:
    return KeyBindings().register_bindings(
        KeyBinding(("CTRL_Q",), InputAction.QUIT),
        KeyBinding(("ESC",), InputAction.CANCEL),
        KeyBinding(("CTRL_C",), InputAction.COPY),
        KeyBinding(("e",), InputAction.EDIT),
        KeyBinding(("UP", "k"), InputAction.UP),
        KeyBinding(("DOWN", "j"), InputAction.DOWN),
        KeyBinding(("BACKSPACE",), InputAction.BACKSPACE),
    )
