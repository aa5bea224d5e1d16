from __future__ import annotations

import logging
import os
import socket
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple

from .models import Family, ProbeResult, Target

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 1000
DEFAULT_INTERVAL = 1.0
MAX_WORKERS = 255

SockAddr = Tuple[int, tuple]
Reporter = Callable[[List[ProbeResult]], None]


def resolve(host: str, port: int, family: Optional[Family]) -> List[SockAddr]:
    """
    Returns (address family, sockaddr) pairs for host:port, in resolver order.
    family=None lets the system resolver pick.
    """
    af = family.value if family is not None else socket.AF_UNSPEC
    infos = socket.getaddrinfo(host, port, af, socket.SOCK_STREAM)

    addrs: List[SockAddr] = []
    for info_af, _, _, _, sockaddr in infos:
        pair = (int(info_af), sockaddr)
        if pair not in addrs:
            addrs.append(pair)
    return addrs


def connect_one(af: int, sockaddr: tuple, timeout_s: float) -> bool:
    try:
        with socket.socket(af, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout_s)
            sock.connect(sockaddr)
    except OSError as e:
        # covers socket.timeout, ConnectionRefusedError, unreachable networks
        logger.debug("TCP connect to %s failed: %s", sockaddr[:2], e)
        return False

    logger.debug("TCP connect to %s succeeded", sockaddr[:2])
    return True


def probe_family(target: Target, family: Optional[Family], timeout_s: float) -> ProbeResult:
    """
    Probes one address family of a target. The family is online if any of
    its resolved addresses accepts a connection within timeout_s.
    """
    try:
        addrs = resolve(target.host, target.port, family)
    except (socket.gaierror, UnicodeError) as e:
        logger.debug("Could not resolve %s: %s", target.host, e)
        return ProbeResult(target=target, family=family, online=False)

    if family is None:
        # default resolution: stick to the family of the preferred address
        family = Family(addrs[0][0])
        addrs = [a for a in addrs if a[0] == family.value]

    online = any(connect_one(af, sockaddr, timeout_s) for af, sockaddr in addrs)
    return ProbeResult(target=target, family=family, online=online)


def probe(
    target: Target,
    families: Optional[Sequence[Family]] = None,
    timeout_s: float = DEFAULT_TIMEOUT_MS / 1000,
) -> List[ProbeResult]:
    """
    One ProbeResult per requested family, in request order.
    families=None probes only the family chosen by default resolution.
    """
    if not families:
        return [probe_family(target, None, timeout_s)]
    return [probe_family(target, f, timeout_s) for f in families]


def resolve_workers(workers: int) -> int:
    if workers <= 0:
        return min((os.cpu_count() or 1) * 4, MAX_WORKERS)
    return min(workers, MAX_WORKERS)


def probe_all(
    targets: List[Target],
    families: Optional[Sequence[Family]],
    timeout_s: float,
    workers: int = 0,
) -> List[List[ProbeResult]]:
    """
    Probes all targets concurrently. Returns the results grouped per target,
    in the same order as targets.
    """
    if not targets:
        return []

    threads = min(resolve_workers(workers), len(targets))
    with ThreadPoolExecutor(max_workers=threads) as pool:
        return list(pool.map(lambda t: probe(t, families, timeout_s), targets))


def wait_until_online(
    targets: List[Target],
    families: Optional[Sequence[Family]],
    timeout_s: float,
    interval_s: float = DEFAULT_INTERVAL,
    workers: int = 0,
    report: Optional[Reporter] = None,
) -> List[ProbeResult]:
    """
    Re-probes every target that is not fully online, once per interval_s,
    until none is left. Each round's results are handed to report.
    Returns the last results of every target, in target order.
    """
    final: List[List[ProbeResult]] = [[] for _ in targets]
    pending = list(range(len(targets)))

    while pending:
        rounds = probe_all([targets[i] for i in pending], families, timeout_s, workers)

        still_offline = []
        for i, results in zip(pending, rounds):
            final[i] = results
            if not all(r.online for r in results):
                still_offline.append(i)

        if report is not None:
            report([r for results in rounds for r in results])

        pending = still_offline
        if pending:
            logger.debug("%d target(s) still offline, next probe in %.2fs", len(pending), interval_s)
            time.sleep(interval_s)

    return [r for results in final for r in results]
