import io

import pytest

from is_online.models import Target, UsageError
from is_online.targets import build_targets, expand_subnets, read_hosts


def test_read_hosts_prefers_arguments():
    stdin = io.StringIO("ignored.example\n")
    assert read_hosts(["a.example", "b.example"], stdin) == ["a.example", "b.example"]


def test_read_hosts_from_stdin_skips_blank_lines():
    stdin = io.StringIO("a.example\n\n  b.example  \n\n")
    assert read_hosts([], stdin) == ["a.example", "b.example"]


def test_read_hosts_empty_raises():
    with pytest.raises(UsageError):
        read_hosts([], io.StringIO(""))


def test_read_hosts_no_stdin_raises():
    with pytest.raises(UsageError):
        read_hosts([])


def test_expand_subnets_keeps_names_and_addresses():
    hosts = ["example.com", "10.0.0.1", "::1"]
    assert expand_subnets(hosts) == hosts


def test_expand_subnets_ipv4_skips_network_and_broadcast():
    assert expand_subnets(["192.168.1.0/30"]) == ["192.168.1.1", "192.168.1.2"]


def test_expand_subnets_single_address_network():
    assert expand_subnets(["10.1.2.3/32"]) == ["10.1.2.3"]


def test_expand_subnets_ipv6():
    assert expand_subnets(["fd00::/126"]) == ["fd00::1", "fd00::2", "fd00::3"]


def test_expand_subnets_preserves_order_and_duplicates():
    assert expand_subnets(["b", "10.0.0.0/30", "b"]) == ["b", "10.0.0.1", "10.0.0.2", "b"]


def test_build_targets_applies_port():
    assert build_targets(["a", "b"], 8080) == [Target("a", 8080), Target("b", 8080)]


def test_target_str_brackets_ipv6():
    assert str(Target("::1", 22)) == "[::1]:22"
    assert str(Target("google.ch", 443)) == "google.ch:443"


def test_read_hosts_blank_arguments_do_not_fall_back_to_stdin():
    with pytest.raises(UsageError):
        read_hosts([" ", ""], io.StringIO("a.example\n"))


def test_read_hosts_undecodable_stdin_raises():
    stdin = io.TextIOWrapper(io.BytesIO(b"\xff\xfe\n"), encoding="utf-8")
    with pytest.raises(UsageError):
        read_hosts([], stdin)
