from __future__ import annotations

import os
import sys
from typing import Iterable, Mapping, Optional, TextIO

from .models import ProbeResult

GREEN = "\x1b[1;32m"
RED = "\x1b[1;31m"
RESET = "\x1b[0m"
CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"


def use_color(no_color: bool, stream: TextIO, env: Optional[Mapping[str, str]] = None) -> bool:
    """Colors only on a terminal, and never with --no-color or NO_COLOR set."""
    env = os.environ if env is None else env
    if no_color or "NO_COLOR" in env:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def format_line(r: ProbeResult, color: bool = False) -> str:
    status = "online" if r.online else "offline"
    if color:
        status = f"{GREEN if r.online else RED}{status}{RESET}"
    return f"{r.target} is {status}"


def print_results(
    results: Iterable[ProbeResult],
    color: bool = False,
    clear: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    out = stream if stream is not None else sys.stdout
    if clear:
        out.write(CLEAR_SCREEN)
    for r in results:
        out.write(format_line(r, color) + "\n")
    out.flush()
