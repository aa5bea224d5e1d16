import pytest

from is_online.models import UsageError
from is_online.ports import parse_port


@pytest.mark.parametrize("spec, expected", [("22", 22), (" 443 ", 443), ("1", 1), ("65535", 65535)])
def test_parse_port_valid(spec, expected):
    assert parse_port(spec) == expected


@pytest.mark.parametrize("spec", ["", "0", "65536", "-1", "+22", "http", "22,80", "1-1024", "2_2", "\uff12\uff12"])
def test_parse_port_invalid(spec):
    with pytest.raises(UsageError):
        parse_port(spec)


def test_usage_error_is_value_error():
    with pytest.raises(ValueError):
        parse_port("abc")
