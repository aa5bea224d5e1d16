import socket
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UsageError(ValueError):
    """Invalid command line input; reported before any probing."""


class Family(Enum):
    IPV4 = socket.AF_INET
    IPV6 = socket.AF_INET6


@dataclass(frozen=True)
class Target:
    host: str
    port: int

    def __str__(self) -> str:
        # bracket IPv6 literals so the port stays unambiguous
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ProbeResult:
    target: Target
    family: Optional[Family]
    online: bool
