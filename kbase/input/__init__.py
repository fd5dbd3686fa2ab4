"""Input-layer public API for key decoding and action bindings.

Exports are split between low-level terminal decoding (`read_key`) and the
binding table that maps key tokens onto session input actions.
"""

from .bindings import InputAction, KeyBinding, KeyBindings, default_key_bindings, is_printable_ascii
from .reader import ESC_SEQUENCE_TIMEOUT_MS, UNKNOWN_KEY, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "UNKNOWN_KEY",
    "InputAction",
    "KeyBinding",
    "KeyBindings",
    "default_key_bindings",
    "is_printable_ascii",
]
