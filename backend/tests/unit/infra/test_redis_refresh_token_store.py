# tests/unit/infra/test_redis_refresh_token_store.py
"""
Unit tests for RedisRefreshTokenStore using fakeredis.

These tests exercise the main flows:
- register + get
- rotate (success and every refusal)
- mark_revoked
- TTL handling
- WATCH/MULTI retries and concurrent rotation

They use fakeredis.FakeRedis so they run entirely in-memory.
"""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest

from tests.helpers.utils import run_concurrently
from tubehub.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore
from tubehub.services._shared.ports import RotationResult


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def store(fake_redis):
    return RedisRefreshTokenStore(r=fake_redis)


def test_register_and_get(store):
    store.register(1, "rt-a")
    assert store.get(1) == "rt-a"

    store.register(1, "rt-b")
    assert store.get(1) == "rt-b"


def test_get_unknown_account(store):
    assert store.get(404) is None


def test_rotate_success_replaces_token(store):
    store.register(2, "old")

    assert store.rotate(2, "old", "new") is RotationResult.OK
    assert store.get(2) == "new"


def test_rotate_is_single_use(store):
    store.register(3, "old")
    assert store.rotate(3, "old", "new-1") is RotationResult.OK

    assert store.rotate(3, "old", "new-2") is RotationResult.REUSED
    assert store.get(3) == "new-1"


def test_rotate_not_found(store):
    assert store.rotate(4, "whatever", "new") is RotationResult.NOT_FOUND


def test_mark_revoked_then_rotate(store):
    store.register(5, "old")

    assert store.mark_revoked(5) is True
    assert store.get(5) is None
    assert store.rotate(5, "old", "new") is RotationResult.REVOKED
    # Idempotent
    assert store.mark_revoked(5) is True


def test_mark_revoked_unknown_account(store):
    assert store.mark_revoked(6) is False
    assert store.r.exists(store._k(6)) == 0


def test_ttl_applies_and_survives_revocation(fake_redis):
    store = RedisRefreshTokenStore(r=fake_redis, ttl=timedelta(days=10))
    store.register(7, "old")
    ttl = fake_redis.ttl(store._k(7))
    assert 0 < ttl <= int(timedelta(days=10).total_seconds())

    store.mark_revoked(7)
    assert fake_redis.ttl(store._k(7)) > 0


class _InterleavingRedis:
    """Client whose first watched ``GET`` is followed by a write from another connection."""

    def __init__(self, r, value: str) -> None:
        self._r = r
        self._value = value
        self.pipelines = 0

    def pipeline(self):
        self.pipelines += 1
        p = self._r.pipeline()
        if self.pipelines == 1:
            watched_get = p.get

            def get(name):
                current = watched_get(name)
                self._r.set(name, self._value)
                return current

            p.get = get
        return p


def test_rotate_retries_after_watch_error_and_reports_reuse(fake_redis):
    store = RedisRefreshTokenStore(r=fake_redis)
    store.register(8, "old")
    interleaved = RedisRefreshTokenStore(r=_InterleavingRedis(fake_redis, "rotated-elsewhere"))

    assert interleaved.rotate(8, "old", "mine") is RotationResult.REUSED
    assert interleaved.r.pipelines == 2
    assert store.get(8) == "rotated-elsewhere"


def test_concurrent_rotations_have_exactly_one_winner(store):
    store.register(9, "presented")

    results = run_concurrently(lambda n: store.rotate(9, "presented", f"new-{n}"), workers=8)

    assert results.count(RotationResult.OK) == 1
    assert results.count(RotationResult.REUSED) == 7
    assert store.get(9).startswith("new-")
