"""Unit tests for TTLMessageCache.

Expiry is driven by FakeClock, so no test sleeps.
"""

from unittest.mock import Mock

import pytest

from constraint_messages.domain.entities.violation import PathNode, PropertyPath
from constraint_messages.infrastructure.cache.ttl_message_cache import TTLMessageCache
from tests.fakes.violations import NOT_BLANK, POSITIVE

pytestmark = pytest.mark.unit


def _key(*names: str):
    path = PropertyPath.of(
        PathNode.method("create_user", str), *(PathNode.property(n) for n in names)
    )
    return (path, NOT_BLANK)


class TestGetOrCompute:
    def test_second_call_within_ttl_is_a_hit(self, message_cache):
        compute = Mock(return_value="query param name must not be blank")

        first = message_cache.get_or_compute(_key("name"), compute)
        second = message_cache.get_or_compute(_key("name"), compute)

        assert first == second == "query param name must not be blank"
        compute.assert_called_once_with()

    def test_structurally_equal_keys_share_an_entry(self, message_cache):
        compute = Mock(return_value="message")

        message_cache.get_or_compute(_key("name"), compute)
        message_cache.get_or_compute(_key("name"), Mock(side_effect=AssertionError))

        assert compute.call_count == 1

    def test_different_descriptor_is_a_different_key(self, message_cache):
        path, _ = _key("age")
        compute = Mock(side_effect=["must not be blank", "must be positive"])

        assert message_cache.get_or_compute((path, NOT_BLANK), compute) == "must not be blank"
        assert message_cache.get_or_compute((path, POSITIVE), compute) == "must be positive"
        assert compute.call_count == 2

    def test_recomputes_after_ttl(self, message_cache, fake_clock):
        compute = Mock(side_effect=["stale", "fresh"])

        assert message_cache.get_or_compute(_key("name"), compute) == "stale"
        fake_clock.advance(3600)

        assert message_cache.get_or_compute(_key("name"), compute) == "fresh"
        assert compute.call_count == 2

    def test_reads_do_not_extend_lifetime(self, message_cache, fake_clock):
        compute = Mock(side_effect=["first", "second"])

        message_cache.get_or_compute(_key("name"), compute)
        fake_clock.advance(3000)
        assert message_cache.get_or_compute(_key("name"), compute) == "first"
        fake_clock.advance(700)

        assert message_cache.get_or_compute(_key("name"), compute) == "second"

    def test_failed_computation_is_not_cached(self, message_cache):
        failing = Mock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            message_cache.get_or_compute(_key("name"), failing)

        assert message_cache.get_or_compute(_key("name"), lambda: "ok") == "ok"


class TestBounds:
    def test_oldest_write_is_evicted_first(self, fake_clock):
        cache = TTLMessageCache(ttl_seconds=60, max_entries=2, clock=fake_clock)
        cache.put("a", "1")
        cache.put("b", "2")
        cache.get("a")
        cache.put("c", "3")

        assert cache.get("a") is None
        assert cache.get("b") == "2"
        assert cache.get("c") == "3"
        assert len(cache) == 2

    def test_zero_max_entries_means_unbounded(self, fake_clock):
        cache = TTLMessageCache(ttl_seconds=60, max_entries=0, clock=fake_clock)
        for i in range(100):
            cache.put(i, str(i))

        assert len(cache) == 100

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_ttl_must_be_positive(self, ttl):
        with pytest.raises(ValueError, match="ttl_seconds"):
            TTLMessageCache(ttl_seconds=ttl)

    def test_max_entries_must_not_be_negative(self):
        with pytest.raises(ValueError, match="max_entries"):
            TTLMessageCache(max_entries=-1)


class TestMaintenance:
    def test_cleanup_expired(self, message_cache, fake_clock):
        message_cache.put("old", "x")
        fake_clock.advance(1800)
        message_cache.put("new", "y")
        fake_clock.advance(1800)

        removed = message_cache.cleanup_expired()

        assert removed == 1
        assert message_cache.get("new") == "y"
        assert len(message_cache) == 1

    def test_get_stats(self, message_cache, fake_clock):
        message_cache.put("old", "x")
        fake_clock.advance(3600)
        message_cache.put("new", "y")

        assert message_cache.get_stats() == {
            "total_entries": 2,
            "expired_entries": 1,
            "live_entries": 1,
        }
