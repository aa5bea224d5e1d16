from __future__ import annotations

from .models import UsageError

DEFAULT_PORT = 22


def parse_port(spec: str) -> int:
    """
    Parses a single port argument ("22", " 443 ") into an int in 1-65535.
    Raises UsageError for anything else.
    """
    spec = str(spec).strip()
    if not spec:
        raise UsageError("Empty port")

    # int() alone would also take "2_2" and non-ASCII digits
    if not (spec.isascii() and spec.isdigit()):
        raise UsageError(f"Invalid port: {spec!r}")
    port = int(spec)

    if port < 1 or port > 65535:
        raise UsageError(f"Port out of range (1-65535): {port}")
    return port
