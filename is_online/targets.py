from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, List, Optional, TextIO

from .models import Target, UsageError

logger = logging.getLogger(__name__)


def read_hosts(hosts: Iterable[str], stdin: Optional[TextIO] = None) -> List[str]:
    """
    Returns the hosts given on the command line, or, when there are none,
    the non-blank lines of stdin.
    """
    hosts = list(hosts)
    if hosts or stdin is None:
        names = [h.strip() for h in hosts if h.strip()]
    else:
        try:
            names = [line.strip() for line in stdin if line.strip()]
        except UnicodeDecodeError as e:
            raise UsageError(f"Could not decode hosts from stdin: {e}") from None

    if not names:
        raise UsageError("No hosts given (pass them as arguments or on stdin)")
    return names


def expand_subnets(hosts: Iterable[str]) -> List[str]:
    """
    Supports:
      - Single IP: "172.20.0.10" (kept as is)
      - CIDR: "172.20.0.0/30", "fd00::/126" (expanded to usable hosts)
      - Hostname: "webapp" (kept as is, resolved at probe time)
    """
    expanded: List[str] = []
    for host in hosts:
        try:
            ipaddress.ip_address(host)
            expanded.append(host)
            continue
        except ValueError:
            pass

        try:
            net = ipaddress.ip_network(host, strict=False)
        except ValueError:
            expanded.append(host)
            continue

        # hosts() skips network + broadcast
        addrs = [str(ip) for ip in net.hosts()]
        if not addrs and net.num_addresses == 1:
            addrs = [str(net.network_address)]
        logger.debug("Expanded %s to %d addresses", host, len(addrs))
        expanded.extend(addrs)

    return expanded


def build_targets(hosts: Iterable[str], port: int) -> List[Target]:
    targets = [Target(host=h, port=port) for h in expand_subnets(hosts)]
    if not targets:
        raise UsageError("Host list expanded to nothing")
    return targets
