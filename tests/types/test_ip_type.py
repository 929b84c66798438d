"""Tests for the IP ban type."""

import pytest

from openban.types import CheckResult, IpBanType


@pytest.fixture
def ip_type(storage, clock):
    return IpBanType(storage, clock)


class TestIpItems:

    def test_normalizes_addresses_and_networks(self, ip_type):
        ip_type.set_items(["10.0.0.1", "192.0.2.9/24", "2001:db8::1", "10.0.0.1"])
        assert ip_type.items == ["10.0.0.1/32", "192.0.2.0/24", "2001:db8::1/128"]

    @pytest.mark.parametrize("item", ["300.1.1.1", "not-an-ip", "10.0.0.0/99"])
    def test_invalid_rejected(self, ip_type, item):
        with pytest.raises(ValueError, match="Invalid IP address or network"):
            ip_type.set_items(item)


class TestIpChecks:

    def test_single_address(self, ip_type):
        ip_type.set_items("10.0.0.1").ban()
        assert ip_type.check({"user_ip": "10.0.0.1"}) == CheckResult.BANNED
        assert ip_type.check({"user_ip": "10.0.0.2"}) == CheckResult.NO_RESULT

    def test_network(self, ip_type):
        ip_type.set_items("192.0.2.0/24").ban()
        assert ip_type.check({"user_ip": "192.0.2.200"}) == CheckResult.BANNED
        assert ip_type.check({"user_ip": "192.0.3.1"}) == CheckResult.NO_RESULT

    def test_ipv6(self, ip_type):
        ip_type.set_items("2001:db8::/32").ban()
        assert ip_type.check({"user_ip": "2001:db8:1::5"}) == CheckResult.BANNED
        assert ip_type.check({"user_ip": "10.0.0.1"}) == CheckResult.NO_RESULT

    def test_session_ip_fallback(self, ip_type):
        ip_type.set_items("10.0.0.1").ban()
        assert ip_type.check({"session_ip": "10.0.0.1"}) == CheckResult.BANNED

    def test_unparsable_subject(self, ip_type):
        ip_type.set_items("10.0.0.1").ban()
        assert ip_type.check({"user_ip": "garbage"}) == CheckResult.NO_RESULT
        assert ip_type.check({}) == CheckResult.NO_RESULT

    def test_exclusion_inside_banned_network(self, ip_type):
        ip_type.set_items("192.0.2.0/24").ban()
        ip_type.set_items("192.0.2.10").exclude()

        assert ip_type.check({"user_ip": "192.0.2.10"}) == CheckResult.EXCLUDED
        assert ip_type.check({"user_ip": "192.0.2.11"}) == CheckResult.BANNED
