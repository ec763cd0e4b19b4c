"""Shared utility functions."""

from __future__ import annotations

import sys


def lossy_text(value: object) -> str | None:
    """Coerce an OS string to valid text, replacing undecodable bytes with U+FFFD.

    psutil decodes paths and command lines with ``surrogateescape``, so raw
    bytes come back as lone surrogates that cannot be written as UTF-8.
    """
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    text = str(value)
    try:
        text.encode("utf-8")
        return text
    except UnicodeEncodeError:
        pass
    try:
        raw = text.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", errors="surrogatepass")
    return raw.decode("utf-8", errors="replace")


def output_text(data: str) -> None:
    """Write *data* and a trailing newline to stdout."""
    sys.stdout.write(data + "\n")
    sys.stdout.flush()
