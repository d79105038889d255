"""Tests for the invitation TTL cache."""

import uuid

import pytest

from app.invitations.cache import InvitationCache, cache_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InvitationCache:
    return InvitationCache(ttl_seconds=60, clock=clock)


def test_cache_key():
    guest_id = uuid.UUID("12345678-1234-5678-1234-567812345678")
    assert cache_key(guest_id) == "invitation:12345678-1234-5678-1234-567812345678"


def test_get_missing(cache: InvitationCache):
    assert cache.get("invitation:none") is None


def test_set_and_get(cache: InvitationCache):
    cache.set("k", "text")
    assert cache.get("k") == "text"
    assert "k" in cache
    assert len(cache) == 1


def test_entry_expires(cache: InvitationCache, clock: FakeClock):
    cache.set("k", "text")
    clock.now += 59
    assert cache.get("k") == "text"
    clock.now += 1
    assert cache.get("k") is None
    assert "k" not in cache


def test_set_restarts_ttl(cache: InvitationCache, clock: FakeClock):
    cache.set("k", "v1")
    clock.now += 50
    cache.set("k", "v2")
    clock.now += 50
    assert cache.get("k") == "v2"


def test_invalidate(cache: InvitationCache):
    cache.set("k", "text")
    cache.invalidate("k")
    cache.invalidate("never-set")
    assert cache.get("k") is None


def test_clear(cache: InvitationCache):
    cache.set("a", "1")
    cache.set("b", "2")
    cache.clear()
    assert len(cache) == 0


def test_purge_expired(cache: InvitationCache, clock: FakeClock):
    cache.set("old", "1")
    clock.now += 30
    cache.set("new", "2")
    clock.now += 31

    assert cache.purge_expired() == 1
    assert len(cache) == 1
    assert cache.get("new") == "2"


def test_invalid_ttl():
    with pytest.raises(ValueError):
        InvitationCache(ttl_seconds=0)
