"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing and the control keys the session binds.
Unrecognized CSI/SS3 sequences become ``UNKNOWN`` and ESC+key becomes
``ALT_<key>``, so only a lone ESC yields ``ESC``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
CSI_MAX_LENGTH = 16
UNKNOWN_KEY = "UNKNOWN"
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x11": "CTRL_Q",
    b"\x15": "CTRL_U",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"Z": "SHIFT_TAB",
}

_CSI_TILDE_TOKENS: dict[bytes, str] = {
    b"1": "HOME",
    b"2": "INSERT",
    b"3": "DELETE",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}

_SS3_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"P": "F1",
    b"Q": "F2",
    b"R": "F3",
    b"S": "F4",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character that started with ``lead``."""
    first = lead[0]
    if first >= 0xF0:
        missing = 3
    elif first >= 0xE0:
        missing = 2
    elif first >= 0xC0:
        missing = 1
    else:
        missing = 0
    data = lead
    for _ in range(missing):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token, or ``""`` when ``timeout_ms`` elapses first."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    token = _CONTROL_TOKENS.get(ch)
    if token is not None:
        return token

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _read_utf8_tail(fd, ch)
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        return _read_ss3(fd)
    if seq[0] < 32:
        _PENDING_BYTES.append(seq)
        return "ESC"
    if seq[0] <= 126:
        return f"ALT_{seq.decode('ascii')}"
    return UNKNOWN_KEY


def _read_csi(fd: int) -> str:
    """Consume ``ESC [`` parameters through the final byte and name the key."""
    params = b""
    while len(params) < CSI_MAX_LENGTH:
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            return "ALT_[" if not params else UNKNOWN_KEY
        if 0x40 <= nxt[0] <= 0x7E:
            return _csi_token(params, nxt)
        params += nxt
    return UNKNOWN_KEY


def _csi_token(params: bytes, final: bytes) -> str:
    if final == b"~":
        return _CSI_TILDE_TOKENS.get(params, UNKNOWN_KEY)
    if params:
        # Modified keys (Ctrl/Shift/Alt + arrow) are not bound.
        return UNKNOWN_KEY
    return _CSI_FINAL_TOKENS.get(final, UNKNOWN_KEY)


def _read_ss3(fd: int) -> str:
    nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if nxt is None:
        return "ALT_O"
    return _SS3_TOKENS.get(nxt, UNKNOWN_KEY)
