from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import List, Optional

from . import __version__
from .logging_setup import setup_logging
from .models import Family, ProbeResult, UsageError
from .output import print_results, use_color
from .ports import DEFAULT_PORT, parse_port
from .prober import DEFAULT_INTERVAL, DEFAULT_TIMEOUT_MS, probe_all, wait_until_online
from .targets import build_targets, read_hosts

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="is-online",
        description="Check if a port on one or many hosts is online.",
    )
    p.add_argument("hosts", nargs="*", help="Hosts, IPs or CIDRs to check (read from stdin when omitted)")
    p.add_argument("-p", "--port", default=str(DEFAULT_PORT), help=f"Port to check (default: {DEFAULT_PORT})")
    p.add_argument(
        "-t", "--timeout", type=int, default=DEFAULT_TIMEOUT_MS,
        help=f"TCP connect timeout in milliseconds (default: {DEFAULT_TIMEOUT_MS})",
    )

    fam = p.add_mutually_exclusive_group()
    fam.add_argument("-4", dest="ipv4_only", action="store_true", help="Limit to IPv4")
    fam.add_argument("-6", dest="ipv6_only", action="store_true", help="Limit to IPv6")
    fam.add_argument("--all", action="store_true", help="Check both IPv4 and IPv6")

    p.add_argument("-w", "--wait", action="store_true", help="Poll until every host is online, then exit")
    p.add_argument(
        "--interval", type=float, default=DEFAULT_INTERVAL,
        help=f"Seconds between polls with --wait (default: {DEFAULT_INTERVAL})",
    )
    p.add_argument("-f", "--fail", action="store_true", help="Exit with 1 if any of the hosts are offline")
    p.add_argument("-q", "--quiet", action="store_true", help="Do not print anything")
    p.add_argument("--no-color", action="store_true", help="Do not print colors")
    p.add_argument("-c", "--clear", action="store_true", help="Clear screen before showing results")
    p.add_argument("--workers", type=int, default=0, help="Probe threads, 0 = 4x CPU count (default: 0)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def select_families(args: argparse.Namespace) -> Optional[List[Family]]:
    if args.all:
        return [Family.IPV4, Family.IPV6]
    if args.ipv4_only:
        return [Family.IPV4]
    if args.ipv6_only:
        return [Family.IPV6]
    return None


def validate(args: argparse.Namespace) -> None:
    if args.timeout < 1:
        raise UsageError("--timeout must be >= 1 millisecond")
    if not math.isfinite(args.interval) or args.interval < 0:
        raise UsageError("--interval must be a finite number >= 0")
    if args.workers < 0:
        raise UsageError("--workers must be >= 0")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        validate(args)
        port = parse_port(args.port)
        targets = build_targets(read_hosts(args.hosts, sys.stdin), port)
    except UsageError as e:
        parser.error(str(e))

    families = select_families(args)
    timeout_s = args.timeout / 1000
    color = use_color(args.no_color, sys.stdout)
    logger.debug("Probing %d target(s) on port %d", len(targets), port)

    def report(results: List[ProbeResult]) -> None:
        if not args.quiet:
            print_results(results, color=color, clear=args.clear)

    try:
        if args.wait:
            results = wait_until_online(
                targets, families, timeout_s,
                interval_s=args.interval, workers=args.workers, report=report,
            )
        else:
            grouped = probe_all(targets, families, timeout_s, workers=args.workers)
            results = [r for group in grouped for r in group]
            report(results)
    except KeyboardInterrupt:
        return 130

    if args.fail and any(not r.online for r in results):
        return 1
    return 0
